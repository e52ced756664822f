"""Connection points (handles) that edges may start from or end at."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class HandleInfo:
    label: Optional[str]
    animated: bool


OUTPUT = "output"
INPUT = "input"
IF_TRUE = "ifTrue"
IF_FALSE = "ifFalse"
LOOP_START = "loopStart"
LOOP_END = "loopEnd"

SOURCE_HANDLES: Dict[str, HandleInfo] = {
    IF_TRUE: HandleInfo(label="是", animated=True),
    IF_FALSE: HandleInfo(label="否", animated=True),
    LOOP_START: HandleInfo(label="循环开始", animated=True),
    OUTPUT: HandleInfo(label=None, animated=False),
}

TARGET_HANDLES: Dict[str, HandleInfo] = {
    LOOP_END: HandleInfo(label="循环结束", animated=True),
    INPUT: HandleInfo(label=None, animated=False),
}


def source_handle(name: Optional[str]) -> Optional[HandleInfo]:
    if name is None:
        return None
    return SOURCE_HANDLES.get(name)


def target_handle(name: Optional[str]) -> Optional[HandleInfo]:
    if name is None:
        return None
    return TARGET_HANDLES.get(name)
