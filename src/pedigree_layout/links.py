"""Parent/child and spouse link building and family trunk routing."""

import logging
from typing import Iterable

from .models import (
    FamilyRoute,
    LayoutFamily,
    LayoutLink,
    LayoutNode,
    LinkType,
    Relationship,
    RelationshipType,
)

logger = logging.getLogger(__name__)


def build_links(
    relationships: Iterable[Relationship],
    node_by_id: dict[str, LayoutNode],
    family_by_child: dict[str, str],
    root_person_id: str,
) -> list[LayoutLink]:
    """
    Build parent and spouse links between positioned nodes.

    Relationships whose endpoints were not positioned are skipped. Duplicate
    parent/child pairs and duplicate spouse pairs produce a single link. When
    any parent link of a family touches the root, every parent link of that
    family is highlighted.
    """
    links: list[LayoutLink] = []
    seen: set[tuple] = set()
    dropped = 0

    for rel in relationships:
        rel_type = RelationshipType.parse(rel.type)
        if rel_type is RelationshipType.PARENT_CHILD:
            key = ("parent", rel.person_id1, rel.person_id2)
            link_type = LinkType.PARENT
        elif rel_type in (RelationshipType.SPOUSE, RelationshipType.PARTNER):
            key = ("spouse", *sorted((rel.person_id1, rel.person_id2)))
            link_type = LinkType.SPOUSE
        else:
            continue

        if key in seen:
            continue
        seen.add(key)

        from_node = node_by_id.get(rel.person_id1)
        to_node = node_by_id.get(rel.person_id2)
        if from_node is None or to_node is None:
            dropped += 1
            continue

        links.append(
            LayoutLink(
                from_node=from_node,
                to_node=to_node,
                type=link_type,
                is_highlighted=root_person_id in (rel.person_id1, rel.person_id2),
            )
        )

    highlighted_families = {
        family_by_child.get(link.to_node.id)
        for link in links
        if link.type is LinkType.PARENT and link.is_highlighted
    }
    highlighted_families.discard(None)
    for link in links:
        if link.type is LinkType.PARENT and family_by_child.get(link.to_node.id) in highlighted_families:
            link.is_highlighted = True

    if dropped:
        logger.debug("Skipped %d links with an endpoint outside the layout", dropped)
    return links


def route_families(
    links: Iterable[LayoutLink],
    families: dict[str, LayoutFamily],
    family_by_child: dict[str, str],
    node_by_id: dict[str, LayoutNode],
    node_width: float,
    node_height: float,
    horizontal_gap: float,
) -> list[FamilyRoute]:
    """
    Route parent links through one shared vertical gutter per family.

    The gutter sits half a horizontal gap to the right of the left-most
    parent. Parents connect from their right edge across to the gutter and
    along it to the union point (mean parent center); children hang from the
    union point along the gutter and across to their left edge.
    """
    links_by_family: dict[str, list[LayoutLink]] = {}
    for link in links:
        if link.type is not LinkType.PARENT:
            continue
        fam_id = family_by_child.get(link.to_node.id)
        if fam_id is None:
            continue
        links_by_family.setdefault(fam_id, []).append(link)

    routes: list[FamilyRoute] = []
    for fam_id, fam_links in links_by_family.items():
        family = families.get(fam_id)
        if family is None:
            continue

        parent_nodes = [node_by_id[pid] for pid in family.parents if pid in node_by_id]
        if not parent_nodes:
            continue

        half = node_height / 2
        union_y = sum(p.y + half for p in parent_nodes) / len(parent_nodes)
        leftmost = min(parent_nodes, key=lambda p: p.x)
        gutter_x = leftmost.x + node_width + horizontal_gap / 2

        route = FamilyRoute(
            family_id=fam_id,
            gutter_x=gutter_x,
            union_y=union_y,
            is_highlighted=any(link.is_highlighted for link in fam_links),
        )
        for parent in parent_nodes:
            from_y = parent.y + half
            route.parent_paths.append(
                [(parent.x + node_width, from_y), (gutter_x, from_y), (gutter_x, union_y)]
            )
        # one link per parent, but one connector per child
        children = {link.to_node.id: link.to_node for link in fam_links}
        for child in children.values():
            to_y = child.y + half
            route.child_paths.append([(gutter_x, union_y), (gutter_x, to_y), (child.x, to_y)])
        routes.append(route)

    return routes
