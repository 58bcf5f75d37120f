"""Toolpath planning package."""

from .base import Motion, MoveType, Toolpath, ToolpathSegment
from .passes import PassDescriptor, RadialPlan

__all__ = [
    "Motion", "MoveType", "Toolpath", "ToolpathSegment",
    "PassDescriptor", "RadialPlan",
]
