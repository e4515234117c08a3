"""Radial fan layout: ancestors on the upper half-circle, descendants on the lower."""

from dataclasses import dataclass, field
from functools import cmp_to_key
import math
from typing import Callable, Sequence

from .graph import index_relationships
from .models import Person, Relationship, RelationshipType

ANCESTOR = "ancestor"
DESCENDANT = "descendant"


@dataclass
class FanTreeNode:
    id: str
    depth: int
    lineage_root_id: str | None
    children: list["FanTreeNode"] = field(default_factory=list)
    leaf_count: int = 1
    angle_start: float = 0.0
    angle_end: float = 0.0


@dataclass
class FanChartNode:
    id: str
    person: Person
    depth: int
    side: str
    angle_start: float
    angle_end: float
    lineage_root_id: str


@dataclass
class FanChartLayout:
    nodes: list[FanChartNode]
    root_person: Person
    max_depth: int
    root_radius: float
    ring_width: float
    lineage_ids: set[str]
    lineage_order: list[str]


def _compare_people(a: str, b: str, people_by_id: dict[str, Person]) -> int:
    """Order by name when both people have one, otherwise by id."""
    left = people_by_id[a].sort_name.casefold() if a in people_by_id else ""
    right = people_by_id[b].sort_name.casefold() if b in people_by_id else ""
    if not (left and right) or left == right:
        left, right = a, b
    return (left > right) - (left < right)


def build_tree(
    root_id: str,
    get_children: Callable[[str], list[str]],
    people_by_id: dict[str, Person],
) -> FanTreeNode:
    """
    Unfold the graph into a tree rooted at `root_id`.

    Depth-first with an explicit stack. Each person appears at most once
    (first visit wins). Children are ordered by name, falling back to id when
    either name is missing or the names match.
    """
    sort_key = cmp_to_key(lambda a, b: _compare_people(a, b, people_by_id))

    def ordered_children(person_id: str):
        return iter(sorted(get_children(person_id), key=sort_key))

    root = FanTreeNode(id=root_id, depth=0, lineage_root_id=None)
    visited = {root_id}
    stack = [(root, ordered_children(root_id))]

    while stack:
        node, pending = stack[-1]
        child_id = next(pending, None)
        if child_id is None:
            stack.pop()
            if node.children:
                node.leaf_count = sum(child.leaf_count for child in node.children)
            continue
        if child_id in visited:
            continue
        visited.add(child_id)

        lineage_root_id = child_id if node.depth == 0 else (node.lineage_root_id or child_id)
        child = FanTreeNode(id=child_id, depth=node.depth + 1, lineage_root_id=lineage_root_id)
        node.children.append(child)
        stack.append((child, ordered_children(child_id)))

    return root


def assign_angles(node: FanTreeNode, start_angle: float, end_angle: float) -> None:
    """Split the angular span among children in proportion to their leaf counts."""
    stack = [(node, start_angle, end_angle)]
    while stack:
        current, start, end = stack.pop()
        current.angle_start = start
        current.angle_end = end

        angle = start
        for child in current.children:
            span = (end - start) * (child.leaf_count / current.leaf_count)
            stack.append((child, angle, angle + span))
            angle += span


def _walk(node: FanTreeNode):
    """Pre-order traversal."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def build_fan_chart_layout(
    people: Sequence[Person],
    relationships: Sequence[Relationship],
    root_person_id: str,
    root_radius: float = 70,
    ring_width: float = 78,
) -> FanChartLayout:
    """
    Build the fan layout around a root person.

    Only parent/child relationships are used.

    Raises:
        ValueError: if the root person is not among `people`
    """
    people_by_id = {person.id: person for person in people}
    root_person = people_by_id.get(root_person_id)
    if root_person is None:
        raise ValueError(f"Root person {root_person_id} not found for fan chart layout")

    index = index_relationships(
        rel for rel in relationships if RelationshipType.parse(rel.type) is RelationshipType.PARENT_CHILD
    )

    ancestor_tree = build_tree(root_person_id, index.parents_of, people_by_id)
    descendant_tree = build_tree(root_person_id, index.children_of, people_by_id)

    assign_angles(ancestor_tree, math.pi, 2 * math.pi)
    assign_angles(descendant_tree, 0.0, math.pi)

    nodes: list[FanChartNode] = []
    for side, tree in ((ANCESTOR, ancestor_tree), (DESCENDANT, descendant_tree)):
        for tree_node in _walk(tree):
            person = people_by_id.get(tree_node.id)
            if tree_node.depth == 0 or person is None:
                continue
            nodes.append(
                FanChartNode(
                    id=tree_node.id,
                    person=person,
                    depth=tree_node.depth,
                    side=side,
                    angle_start=tree_node.angle_start,
                    angle_end=tree_node.angle_end,
                    lineage_root_id=tree_node.lineage_root_id or tree_node.id,
                )
            )

    max_depth = max(n.depth for tree in (ancestor_tree, descendant_tree) for n in _walk(tree))
    lineage_ids = {n.id for tree in (ancestor_tree, descendant_tree) for n in _walk(tree)}
    lineage_order = list(
        dict.fromkeys(
            [child.id for child in ancestor_tree.children]
            + [child.id for child in descendant_tree.children]
        )
    )

    return FanChartLayout(
        nodes=nodes,
        root_person=root_person,
        max_depth=max_depth,
        root_radius=root_radius,
        ring_width=ring_width,
        lineage_ids=lineage_ids,
        lineage_order=lineage_order,
    )


def polar_to_cartesian(cx: float, cy: float, radius: float, angle: float) -> tuple[float, float]:
    return cx + radius * math.cos(angle), cy + radius * math.sin(angle)


def segment_radii(layout: FanChartLayout, depth: int) -> tuple[float, float]:
    """Inner and outer radius of the ring at `depth`."""
    inner = layout.root_radius + (depth - 1) * layout.ring_width
    return inner, inner + layout.ring_width
