"""Block building and stacking helpers for the pedigree layout."""

from collections import deque
from typing import Callable, Sequence

from .models import Block, LayoutNode


def create_blocks(
    gen_nodes: Sequence[LayoutNode],
    spouses_by_person: dict[str, list[str]],
    desired_center_by_id: dict[str, float | None],
    node_height: float,
    partner_gap: float,
) -> list[Block]:
    """
    Group the nodes of one generation into blocks of spouse-linked people.

    People connected through any chain of spouse/partner edges inside the
    generation share a block. Blocks and their members follow the encounter
    order of `gen_nodes`.
    """
    order = {node.id: i for i, node in enumerate(gen_nodes)}
    node_by_id = {node.id: node for node in gen_nodes}
    used: set[str] = set()
    blocks: list[Block] = []

    for node in gen_nodes:
        if node.id in used:
            continue

        member_ids = {node.id}
        queue = deque([node.id])
        while queue:
            current = queue.popleft()
            for spouse_id in spouses_by_person.get(current, []):
                if spouse_id in node_by_id and spouse_id not in used and spouse_id not in member_ids:
                    member_ids.add(spouse_id)
                    queue.append(spouse_id)

        used.update(member_ids)
        members = [node_by_id[mid] for mid in sorted(member_ids, key=order.__getitem__)]

        centers = [
            desired_center_by_id[m.id]
            for m in members
            if desired_center_by_id.get(m.id) is not None
        ]
        desired_center = sum(centers) / len(centers) if centers else None

        count = len(members)
        height = count * node_height + (count - 1) * partner_gap
        key = "-".join(m.id for m in members)

        blocks.append(Block(nodes=members, desired_center=desired_center, height=height, key=key))

    return blocks


def sort_blocks_by_desired_center(
    blocks: list[Block], stable_name: Callable[[LayoutNode], str]
) -> None:
    """Sort in place by desired center; blocks without one go last, ties by name then key."""

    def sort_key(block: Block):
        name = stable_name(block.nodes[0])
        center = block.desired_center
        return (center is None, center or 0.0, name.casefold(), name, block.key)

    blocks.sort(key=sort_key)


def block_top(block: Block, positioned: dict[str, float]) -> float:
    return min(positioned.get(node.id, 0.0) for node in block.nodes)


def drawn_extent(block: Block, node_height: float, partner_gap: float) -> float:
    """
    Vertical span actually covered by the member cards.

    Smaller than `block.height` for multi-member blocks: the reserved height
    counts a full card plus `partner_gap` per extra member, while members are
    stacked `partner_gap` apart. Centering uses this span so a couple's cards
    sit symmetrically around their desired center.
    """
    return (len(block.nodes) - 1) * partner_gap + node_height


def sort_blocks_by_position(blocks: list[Block], positioned: dict[str, float]) -> None:
    """Sort in place by current top position, ties by key."""
    blocks.sort(key=lambda block: (block_top(block, positioned), block.key))


def calculate_block_tops(
    blocks: Sequence[Block],
    row_gap: float,
    get_desired_top: Callable[[Block, int], float | None],
) -> list[float]:
    """
    Stack blocks top to bottom.

    Each block sits at its desired top unless that would overlap the block
    above it, in which case it goes directly below with `row_gap` between
    them. A desired top of None also means directly below (0 for the first).
    """
    tops: list[float] = []

    for i, block in enumerate(blocks):
        desired_top = get_desired_top(block, i)
        if i == 0:
            tops.append(desired_top if desired_top is not None else 0.0)
            continue

        min_top = tops[i - 1] + blocks[i - 1].height + row_gap
        if desired_top is None:
            tops.append(min_top)
        else:
            tops.append(max(desired_top, min_top))

    return tops


def apply_block_positions(
    blocks: Sequence[Block],
    tops: Sequence[float],
    partner_gap: float,
    positioned: dict[str, float],
) -> None:
    """Write block tops to member nodes and to the shared position map."""
    for block, top in zip(blocks, tops):
        for i, member in enumerate(block.nodes):
            y = top + i * partner_gap
            member.y = y
            positioned[member.id] = y
