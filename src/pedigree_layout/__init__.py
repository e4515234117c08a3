"""Deterministic pedigree layout for genealogy graphs."""

from .fan import build_fan_chart_layout
from .layout import build_pedigree_layout
from .models import (
    Block,
    FamilyRoute,
    LayoutFamily,
    LayoutLink,
    LayoutNode,
    LayoutResult,
    LinkType,
    Person,
    Relationship,
    RelationshipType,
)

__all__ = [
    "Block",
    "FamilyRoute",
    "LayoutFamily",
    "LayoutLink",
    "LayoutNode",
    "LayoutResult",
    "LinkType",
    "Person",
    "Relationship",
    "RelationshipType",
    "build_fan_chart_layout",
    "build_pedigree_layout",
]
