"""
Node type registry: default data, display metadata and palette categories.

Every known node type is a member of `NodeType`; each member has exactly one
default-data constructor in `_DEFAULTS`. Anything else is treated as a
generic node whose data is just `{"type": name}`, so graphs that reference
types this editor does not know still load and edit.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional


class NodeType(str, Enum):
    # Basic
    CLICK = "click"
    WAIT = "wait"
    SWIPE = "swipe"
    # Condition
    IF = "if"
    # Vision
    CAPTURE = "capture"
    DETECT = "detect"
    OCR = "ocr"
    # Data
    VARIABLE = "variable"
    FILTER = "filter"
    # Control flow
    LOOP = "loop"
    FALLBACK = "fallback"
    SUBFLOW = "subflow"
    # Composite
    MACRO_1 = "macro_1"
    TEMPLATE_1 = "template_1"
    # Special
    START = "start"
    INPUT = "input"
    END = "end"

    @staticmethod
    def parse(value: Any) -> Optional["NodeType"]:
        """Return the matching member, or None for unknown/generic types."""
        try:
            return NodeType(str(value))
        except ValueError:
            return None


START_KIND_TYPES = frozenset({NodeType.START.value, NodeType.INPUT.value})
END_KIND_TYPES = frozenset({NodeType.END.value})


# ---------------------------------------------------------------------------
# Default data
# ---------------------------------------------------------------------------

DEFAULT_FALLBACK_STRATEGIES: List[Dict[str, str]] = [
    {"target": "back_button", "action": "click", "label": "尝试点击返回"},
    {"target": "close_button", "action": "click", "label": "尝试点击关闭"},
    {"target": "confirm_button", "action": "click", "label": "尝试点击确认"},
]

DEFAULT_DURATION_MS = 1000
DEFAULT_CONFIDENCE = 80
DEFAULT_TIMEOUT_MS = 5000


def _click() -> Dict[str, Any]:
    return {"targetType": "coordinates", "x": 0, "y": 0, "target": ""}


def _wait() -> Dict[str, Any]:
    return {"duration": DEFAULT_DURATION_MS, "randomize": False}


def _swipe() -> Dict[str, Any]:
    return {"startX": 0, "startY": 0, "endX": 0, "endY": 0, "duration": DEFAULT_DURATION_MS}


def _if() -> Dict[str, Any]:
    return {
        "searchType": "image",
        "target": "",
        "confidence": DEFAULT_CONFIDENCE,
        "timeout": DEFAULT_TIMEOUT_MS,
    }


def _capture() -> Dict[str, Any]:
    return {"outputVar": "last_capture"}


def _detect() -> Dict[str, Any]:
    return {"imagePath": "", "confidence": DEFAULT_CONFIDENCE, "resultVar": ""}


def _ocr() -> Dict[str, Any]:
    return {"regionX": None, "regionY": None, "regionW": None, "regionH": None, "resultVar": ""}


def _variable() -> Dict[str, Any]:
    # opType: set | math | string | regex
    return {"varName": "", "opType": "set", "expression": ""}


def _filter() -> Dict[str, Any]:
    # mode: filter | map
    return {"sourceVar": "", "targetVar": "", "mode": "filter", "logic": ""}


def _loop() -> Dict[str, Any]:
    return {"count": 3, "loopType": "count", "breakCondition": ""}


def _fallback() -> Dict[str, Any]:
    return {"maxRetries": 3, "strategies": copy.deepcopy(DEFAULT_FALLBACK_STRATEGIES)}


def _subflow() -> Dict[str, Any]:
    return {"targetTaskId": None, "waitForComplete": True}


def _macro_1() -> Dict[str, Any]:
    return {
        "screenshot": True,
        "detectTarget": "",
        "confidence": DEFAULT_CONFIDENCE,
        "clickType": "coordinates",
        "postProcess": "",
    }


def _bare() -> Dict[str, Any]:
    return {}


_DEFAULTS: Dict[NodeType, Callable[[], Dict[str, Any]]] = {
    NodeType.CLICK: _click,
    NodeType.WAIT: _wait,
    NodeType.SWIPE: _swipe,
    NodeType.IF: _if,
    NodeType.CAPTURE: _capture,
    NodeType.DETECT: _detect,
    NodeType.OCR: _ocr,
    NodeType.VARIABLE: _variable,
    NodeType.FILTER: _filter,
    NodeType.LOOP: _loop,
    NodeType.FALLBACK: _fallback,
    NodeType.SUBFLOW: _subflow,
    NodeType.MACRO_1: _macro_1,
    NodeType.TEMPLATE_1: _bare,
    NodeType.START: _bare,
    NodeType.INPUT: _bare,
    NodeType.END: _bare,
}


def defaults_for(node_type: str) -> Dict[str, Any]:
    """Fresh default data for a node type; unknown types get `{"type": node_type}`."""
    member = NodeType.parse(node_type)
    data: Dict[str, Any] = {"type": node_type}
    if member is not None:
        data.update(_DEFAULTS[member]())
    return data


# ---------------------------------------------------------------------------
# Display metadata
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NodeTypeInfo:
    display: str
    display_cn: str
    category: str
    icon: str
    color: str
    placeholder: str = ""
    description: str = ""
    # Handle used when a new node is chained below this one; None disables chaining.
    chain_out_handle: Optional[str] = "output"


GENERIC_TYPE_INFO = NodeTypeInfo(
    display="Node",
    display_cn="节点",
    category="special",
    icon="box",
    color="bg-neutral",
    placeholder="无描述",
)

NODE_TYPE_INFO: Dict[NodeType, NodeTypeInfo] = {
    NodeType.CLICK: NodeTypeInfo("Click", "点击", "basic", "cursor", "bg-blue-500",
                                 "Set click target...", "Click on a target"),
    NodeType.WAIT: NodeTypeInfo("Wait", "等待", "basic", "clock", "bg-gray-500",
                                "Set wait duration...", "Wait for duration"),
    NodeType.SWIPE: NodeTypeInfo("Swipe", "滑动", "basic", "move", "bg-cyan-500",
                                 "Set swipe gesture...", "Swipe gesture"),
    NodeType.IF: NodeTypeInfo("IF Found", "判断", "condition", "branch", "bg-yellow-500",
                              "Set search target...", "If condition met, then...",
                              chain_out_handle=None),
    NodeType.CAPTURE: NodeTypeInfo("Screenshot", "截图", "vision", "camera", "bg-slate-500",
                                   "Save to variable...", "Capture screen to variable"),
    NodeType.DETECT: NodeTypeInfo("Find Image", "目标检测", "vision", "target", "bg-purple-500",
                                  "Select image...", "Locate image on screen"),
    NodeType.OCR: NodeTypeInfo("OCR", "文字识别", "vision", "type", "bg-violet-500",
                               "Set OCR region...", "Recognize text"),
    NodeType.VARIABLE: NodeTypeInfo("Variable", "变量", "data", "variable", "bg-orange-500",
                                    "Expression...", "Process data / set variable"),
    NodeType.FILTER: NodeTypeInfo("Filter/Map", "数据过滤", "data", "filter", "bg-orange-400",
                                  "Filter or transform...", "Filter or Map array data"),
    NodeType.LOOP: NodeTypeInfo("Loop", "循环", "control", "repeat", "bg-green-500",
                                "Configure loop...", "Repeat N times",
                                chain_out_handle="loopStart"),
    NodeType.FALLBACK: NodeTypeInfo("Fallback", "回调", "control", "alert-triangle", "bg-red-500",
                                    "Fallback actions", "Retry actions when all conditions fail"),
    NodeType.SUBFLOW: NodeTypeInfo("Sub-Flow", "子流程", "control", "git-branch", "bg-pink-500",
                                   "Select sub-flow...", "Call another task's flow"),
    NodeType.MACRO_1: NodeTypeInfo("Smart Click", "宏点击（截图|检测|点击）", "composite", "zap",
                                   "bg-amber-600", "Unified action configuration",
                                   "Unified: Capture -> Detect -> Click"),
    NodeType.TEMPLATE_1: NodeTypeInfo("Vision Loop", "宏模板（循环|截图|检测|点击）", "composite",
                                      "layers", "bg-indigo-600", "",
                                      "Loop -> Screenshot -> Detect -> Click"),
    NodeType.START: NodeTypeInfo("Start", "开始", "special", "play", "bg-emerald-600",
                                 "开始", "Start node"),
    NodeType.INPUT: NodeTypeInfo("Start", "开始", "special", "play", "bg-emerald-600",
                                 "开始", "Start node"),
    NodeType.END: NodeTypeInfo("End", "结束", "special", "square", "bg-rose-600",
                               "结束", "End node", chain_out_handle=None),
}


@dataclass(frozen=True)
class NodeCategory:
    key: str
    label: str
    label_en: str
    types: List[str]


NODE_CATEGORIES: List[NodeCategory] = [
    NodeCategory("basic", "基本", "Basic", ["click", "wait", "swipe"]),
    NodeCategory("condition", "条件逻辑", "Conditions", ["if"]),
    NodeCategory("vision", "视觉", "Vision", ["capture", "detect", "ocr"]),
    NodeCategory("data", "数据处理", "Data", ["variable", "filter"]),
    NodeCategory("control", "控制流", "Control Flow", ["loop", "fallback", "subflow"]),
    NodeCategory("composite", "复合模板", "Composite", ["macro_1", "template_1"]),
]


def type_info(node_type: str) -> NodeTypeInfo:
    member = NodeType.parse(node_type)
    if member is None:
        return GENERIC_TYPE_INFO
    return NODE_TYPE_INFO[member]


def display_name(node_type: str, lang: str = "en") -> str:
    info = type_info(node_type)
    return info.display_cn if lang == "cn" else info.display


def chain_out_handle(node_type: str) -> Optional[str]:
    return type_info(node_type).chain_out_handle


def is_start_kind(node_type: Optional[str]) -> bool:
    return node_type in START_KIND_TYPES


def is_end_kind(node_type: Optional[str]) -> bool:
    return node_type in END_KIND_TYPES


def is_protected(node_type: Optional[str]) -> bool:
    """Start/end nodes can never be deleted."""
    return is_start_kind(node_type) or is_end_kind(node_type)
