"""
Pedigree (column) layout.

Generations become columns from left (oldest) to right (youngest). Within a
column, spouse-linked people form blocks that are stacked vertically in two
sweeps: first pulled toward their already placed children (youngest column
first), then nudged toward their parents (oldest column first).
"""

import logging
from typing import Iterable, Sequence

from .blocks import (
    apply_block_positions,
    block_top,
    calculate_block_tops,
    create_blocks,
    drawn_extent,
    sort_blocks_by_desired_center,
    sort_blocks_by_position,
)
from .generations import assign_generations, normalize_generations
from .graph import RelationshipIndex, group_families, index_relationships
from .links import build_links, route_families
from .models import LayoutNode, LayoutResult, Person, Relationship

logger = logging.getLogger(__name__)

PARTNER_GAP_EXTRA = 12
ROW_GAP = 18
BLEND = 0.65
PADDING = 100


def stable_name(node: LayoutNode) -> str:
    return node.person.sort_name


def _mean_center(
    person_ids: Iterable[str], positioned: dict[str, float], node_height: float
) -> float | None:
    centers = [positioned[pid] + node_height / 2 for pid in person_ids if pid in positioned]
    return sum(centers) / len(centers) if centers else None


def _nodes_by_generation(nodes: Sequence[LayoutNode]) -> dict[int, list[LayoutNode]]:
    grouped: dict[int, list[LayoutNode]] = {}
    for node in nodes:
        grouped.setdefault(node.generation, []).append(node)
    return grouped


def position_by_descendants(
    nodes_by_generation: dict[int, list[LayoutNode]],
    index: RelationshipIndex,
    positioned: dict[str, float],
    node_height: float,
) -> None:
    """
    First sweep, youngest generation first.

    Each person wants to be centered on their already placed children. Blocks
    are ordered by that desired center (blocks without one last, then by
    name) and stacked without overlap.
    """
    partner_gap = node_height + PARTNER_GAP_EXTRA

    for generation in sorted(nodes_by_generation, reverse=True):
        gen_nodes = nodes_by_generation[generation]
        desired = {
            node.id: _mean_center(index.children_of(node.id), positioned, node_height)
            for node in gen_nodes
        }

        blocks = create_blocks(gen_nodes, index.spouses_by_person, desired, node_height, partner_gap)
        sort_blocks_by_desired_center(blocks, stable_name)

        tops = calculate_block_tops(
            blocks,
            ROW_GAP,
            lambda block, _: (
                block.desired_center - drawn_extent(block, node_height, partner_gap) / 2
                if block.desired_center is not None
                else None
            ),
        )
        apply_block_positions(blocks, tops, partner_gap, positioned)


def position_by_ancestors(
    nodes_by_generation: dict[int, list[LayoutNode]],
    index: RelationshipIndex,
    positioned: dict[str, float],
    node_height: float,
) -> None:
    """
    Second sweep, oldest generation first.

    Blocks keep the order established by the first sweep and move part of the
    way (BLEND) toward the center of their placed parents.
    """
    partner_gap = node_height + PARTNER_GAP_EXTRA

    def blended_top(block, _):
        current_top = block_top(block, positioned)
        if block.desired_center is None:
            return current_top
        desired_top = block.desired_center - drawn_extent(block, node_height, partner_gap) / 2
        return current_top + BLEND * (desired_top - current_top)

    for generation in sorted(nodes_by_generation):
        gen_nodes = nodes_by_generation[generation]
        desired = {
            node.id: _mean_center(index.parents_of(node.id), positioned, node_height)
            for node in gen_nodes
        }

        blocks = create_blocks(gen_nodes, index.spouses_by_person, desired, node_height, partner_gap)
        sort_blocks_by_position(blocks, positioned)

        tops = calculate_block_tops(blocks, ROW_GAP, blended_top)
        apply_block_positions(blocks, tops, partner_gap, positioned)


def normalize_positions(
    nodes: Sequence[LayoutNode], node_width: float, node_height: float
) -> tuple[float, float]:
    """
    Move nodes onto a padded, positive canvas.

    Returns:
        (width, height) of the padded bounding box
    """
    min_y = min(node.y for node in nodes)
    if min_y < 0:
        for node in nodes:
            node.y -= min_y

    min_x = min(node.x for node in nodes)
    max_x = max(node.x + node_width for node in nodes)
    min_y = min(node.y for node in nodes)
    max_y = max(node.y + node_height for node in nodes)

    for node in nodes:
        node.x = node.x - min_x + PADDING
        node.y = node.y - min_y + PADDING

    return max_x - min_x + 2 * PADDING, max_y - min_y + 2 * PADDING


def build_pedigree_layout(
    people: Sequence[Person],
    relationships: Sequence[Relationship],
    root_person_id: str,
    node_width: float,
    node_height: float,
    horizontal_gap: float,
) -> LayoutResult:
    """
    Lay out everyone reachable from the root as a pedigree chart.

    Args:
        people: Person records with unique ids
        relationships: Parent/child, spouse, partner and sibling relationships
        root_person_id: The person the chart is centered on
        node_width: Width of one person card
        node_height: Height of one person card
        horizontal_gap: Horizontal space between generation columns

    Returns:
        Positioned nodes, links, family trunk routes and canvas size. If
        nothing can be drawn (no people, or root not among them) the result
        has no nodes or links and a zero size.
    """
    logger.debug(
        "Laying out %d people and %d relationships from root %s",
        len(people),
        len(relationships),
        root_person_id,
    )
    people_by_id = {person.id: person for person in people}

    index = index_relationships(relationships)
    families, family_by_child = group_families(index)
    generation_by_id = normalize_generations(assign_generations(index, root_person_id))

    nodes: list[LayoutNode] = []
    for person_id, generation in generation_by_id.items():
        person = people_by_id.get(person_id)
        if person is None:
            continue
        nodes.append(
            LayoutNode(
                id=person_id,
                person=person,
                x=generation * (node_width + horizontal_gap),
                y=0.0,
                generation=generation,
            )
        )

    if not nodes or root_person_id not in people_by_id:
        logger.debug("Nothing to draw for root %s", root_person_id)
        return LayoutResult(
            nodes=[],
            links=[],
            width=0,
            height=0,
            families=families,
            family_by_child=family_by_child,
            node_by_id={},
        )

    node_by_id = {node.id: node for node in nodes}
    nodes_by_generation = _nodes_by_generation(nodes)

    positioned: dict[str, float] = {}
    position_by_descendants(nodes_by_generation, index, positioned, node_height)
    position_by_ancestors(nodes_by_generation, index, positioned, node_height)

    width, height = normalize_positions(nodes, node_width, node_height)

    links = build_links(relationships, node_by_id, family_by_child, root_person_id)
    routes = route_families(
        links, families, family_by_child, node_by_id, node_width, node_height, horizontal_gap
    )

    return LayoutResult(
        nodes=nodes,
        links=links,
        width=width,
        height=height,
        families=families,
        family_by_child=family_by_child,
        node_by_id=node_by_id,
        routes=routes,
    )
