"""Cutting tools and the tool library the CLI picks defaults from."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional


class ToolType(Enum):
    FLAT_ENDMILL = "flat_endmill"
    THREAD_MILL = "thread_mill"
    DRILL = "drill"


@dataclass
class Tool:
    """A cutting tool loaded in a changer pocket.

    ``number`` is both the pocket (T word) and the offset register
    (H and D words).  Diameter and feed are in inches.
    """
    number: int
    name: str
    tool_type: ToolType
    diameter: float
    default_rpm: int = 0
    default_feed: float = 0.0

    @property
    def radius(self) -> float:
        return self.diameter / 2.0

    def to_dict(self) -> dict:
        d = asdict(self)
        d["tool_type"] = self.tool_type.value
        return d

    @classmethod
    def from_dict(cls, d: dict) -> Tool:
        d = dict(d)
        d["tool_type"] = ToolType(d["tool_type"])
        return cls(**d)


class ToolLibrary:
    """Tools in the changer, keyed by pocket number.

    A library read with :meth:`from_file` replaces the starter tools
    entirely; :meth:`save` writes the same JSON list back.
    """

    def __init__(self, tools: Iterable[Tool] = ()):
        self._tools: dict[int, Tool] = {}
        for t in tools:
            self.add(t)

    def add(self, tool: Tool) -> None:
        if tool.number <= 0:
            raise ValueError(f"Tool number must be positive, got {tool.number}")
        self._tools[tool.number] = tool

    def get(self, number: int) -> Optional[Tool]:
        return self._tools.get(number)

    def list_tools(self) -> list[Tool]:
        return sorted(self._tools.values(), key=lambda t: t.number)

    def first_of(self, tool_type: ToolType) -> Optional[Tool]:
        """Lowest-numbered tool of *tool_type*."""
        for t in self.list_tools():
            if t.tool_type is tool_type:
                return t
        return None

    @classmethod
    def from_file(cls, path: Path) -> ToolLibrary:
        return cls(Tool.from_dict(d) for d in json.loads(path.read_text()))

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        data = [t.to_dict() for t in self.list_tools()]
        path.write_text(json.dumps(data, indent=2))
