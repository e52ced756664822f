"""
Declarative multi-node recipes that the palette can drop as a unit.

Edges reference template nodes by list index; indices are checked when the
template is defined, so expansion never meets a dangling reference.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .handles import IF_TRUE, INPUT, LOOP_END, LOOP_START, OUTPUT


@dataclass(frozen=True)
class TemplateNode:
    type: str
    label: str
    dx: float = 0
    dy: float = 0


@dataclass(frozen=True)
class TemplateEdge:
    source_idx: int
    target_idx: int
    handle: Optional[str] = None
    target_handle: Optional[str] = None

    @property
    def resolved_source_handle(self) -> str:
        return self.handle or OUTPUT

    @property
    def resolved_target_handle(self) -> str:
        return self.target_handle or INPUT


@dataclass(frozen=True)
class NodeTemplate:
    key: str
    display: str
    display_cn: str
    description: str = ""
    nodes: List[TemplateNode] = field(default_factory=list)
    edges: List[TemplateEdge] = field(default_factory=list)

    def __post_init__(self):
        """Reject edge specs that point outside the node list."""
        if not self.nodes:
            raise ValueError(f"Template '{self.key}' has no nodes")
        count = len(self.nodes)
        for position, spec in enumerate(self.edges):
            for idx in (spec.source_idx, spec.target_idx):
                if not 0 <= idx < count:
                    raise ValueError(
                        f"Template '{self.key}' edge #{position} references node index {idx} "
                        f"(template has {count} nodes)"
                    )


NODE_TEMPLATES: Dict[str, NodeTemplate] = {
    "template_1": NodeTemplate(
        key="template_1",
        display="Vision Loop Template",
        display_cn="视觉循环模板",
        description="Loop -> Screenshot -> Detect -> Click",
        nodes=[
            TemplateNode("loop", "循环", 0, 0),
            TemplateNode("screenshot", "截图", 0, 100),
            TemplateNode("detect", "检测", 0, 200),
            TemplateNode("if", "是否成功", 0, 300),
            TemplateNode("click", "点击", 0, 400),
        ],
        edges=[
            TemplateEdge(0, 1, handle=LOOP_START),
            TemplateEdge(1, 2),
            TemplateEdge(2, 3),
            TemplateEdge(3, 4, handle=IF_TRUE),
            # back into the loop
            TemplateEdge(4, 0, target_handle=LOOP_END),
        ],
    ),
}


def get_template(key: str) -> Optional[NodeTemplate]:
    return NODE_TEMPLATES.get(key)


def is_template(key: str) -> bool:
    return key in NODE_TEMPLATES
