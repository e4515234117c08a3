"""Data classes for people, relationships and layout output."""

from dataclasses import dataclass, field
from enum import Enum


class RelationshipType(str, Enum):
    PARENT_CHILD = "parent_child"
    SPOUSE = "spouse"
    PARTNER = "partner"
    SIBLING = "sibling"

    @classmethod
    def parse(cls, value: "str | RelationshipType") -> "RelationshipType":
        """Convert a stored relationship type string into the enum."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown relationship type: {value!r}") from None


class LinkType(str, Enum):
    PARENT = "parent"
    SPOUSE = "spouse"


@dataclass(frozen=True)
class Person:
    id: str
    given_names: str | None = None
    surnames: str | None = None
    is_living: bool = False

    @property
    def display_name(self) -> str:
        name = f"{self.given_names or ''} {self.surnames or ''}".strip()
        return name or "Unknown"

    @property
    def sort_name(self) -> str:
        # surname first, used for deterministic tie-breaking
        return f"{self.surnames or ''} {self.given_names or ''}".strip()


@dataclass(frozen=True)
class Relationship:
    id: str
    type: RelationshipType
    person_id1: str  # parent for PARENT_CHILD
    person_id2: str  # child for PARENT_CHILD


@dataclass
class LayoutNode:
    id: str
    person: Person
    x: float
    y: float
    generation: int


@dataclass
class LayoutLink:
    from_node: LayoutNode
    to_node: LayoutNode
    type: LinkType
    is_highlighted: bool = False


@dataclass
class LayoutFamily:
    id: str
    parents: list[str]
    children: list[str] = field(default_factory=list)


@dataclass
class Block:
    """One or more spouse-linked people of a generation, positioned as a unit."""

    nodes: list[LayoutNode]
    desired_center: float | None
    height: float
    key: str


Point = tuple[float, float]


@dataclass
class FamilyRoute:
    """Connector geometry for one family: parents -> shared gutter -> children."""

    family_id: str
    gutter_x: float
    union_y: float
    parent_paths: list[list[Point]] = field(default_factory=list)
    child_paths: list[list[Point]] = field(default_factory=list)
    is_highlighted: bool = False


@dataclass
class LayoutResult:
    nodes: list[LayoutNode]
    links: list[LayoutLink]
    width: float
    height: float
    families: dict[str, LayoutFamily]
    family_by_child: dict[str, str]
    node_by_id: dict[str, LayoutNode]
    routes: list[FamilyRoute] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.nodes
