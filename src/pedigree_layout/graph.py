"""Relationship indexing, family grouping and NetworkX graph operations."""

from dataclasses import dataclass, field
import logging
from typing import Iterable

import networkx as nx

from .models import LayoutFamily, Person, Relationship, RelationshipType

logger = logging.getLogger(__name__)


@dataclass
class RelationshipIndex:
    """Adjacency views over a flat relationship list.

    Lists keep encounter order and are not deduplicated.
    """

    children_by_parent: dict[str, list[str]] = field(default_factory=dict)
    parents_by_child: dict[str, list[str]] = field(default_factory=dict)
    spouses_by_person: dict[str, list[str]] = field(default_factory=dict)
    siblings_by_person: dict[str, list[str]] = field(default_factory=dict)

    def parents_of(self, person_id: str) -> list[str]:
        return self.parents_by_child.get(person_id, [])

    def children_of(self, person_id: str) -> list[str]:
        return self.children_by_parent.get(person_id, [])

    def spouses_of(self, person_id: str) -> list[str]:
        return self.spouses_by_person.get(person_id, [])

    def siblings_of(self, person_id: str) -> list[str]:
        return self.siblings_by_person.get(person_id, [])


def index_relationships(relationships: Iterable[Relationship]) -> RelationshipIndex:
    """
    Build parent/child/spouse (and sibling) adjacency maps in one pass.

    Spouse and partner relationships are merged into one symmetric map.

    Raises:
        ValueError: if a relationship carries a type that is not a RelationshipType
    """
    index = RelationshipIndex()

    for rel in relationships:
        rel_type = RelationshipType.parse(rel.type)
        a, b = rel.person_id1, rel.person_id2

        if rel_type is RelationshipType.PARENT_CHILD:
            index.parents_by_child.setdefault(b, []).append(a)
            index.children_by_parent.setdefault(a, []).append(b)
        elif rel_type in (RelationshipType.SPOUSE, RelationshipType.PARTNER):
            index.spouses_by_person.setdefault(a, []).append(b)
            index.spouses_by_person.setdefault(b, []).append(a)
        elif rel_type is RelationshipType.SIBLING:
            # Recorded for consumers; generation assignment does not follow these.
            index.siblings_by_person.setdefault(a, []).append(b)
            index.siblings_by_person.setdefault(b, []).append(a)
        else:
            raise ValueError(f"Unhandled relationship type: {rel_type!r}")

    return index


def family_id_for(parents: Iterable[str]) -> str:
    """Return the family id for a set of parent ids (order and duplicates ignored)."""
    sorted_parents = sorted(set(parents))
    if len(sorted_parents) == 1:
        return f"single-{sorted_parents[0]}"
    return f"parents-{'-'.join(sorted_parents)}"


def group_families(
    index: RelationshipIndex,
) -> tuple[dict[str, LayoutFamily], dict[str, str]]:
    """
    Cluster children by their parent set.

    Children with an identical parent set always share one family, so they
    can be drawn from a single trunk line. Families with more than two parents
    are kept as-is.

    Returns:
        (families keyed by family id, family id keyed by child id)
    """
    families: dict[str, LayoutFamily] = {}
    family_by_child: dict[str, str] = {}

    for child_id, parents in index.parents_by_child.items():
        if not parents:
            continue

        fam_id = family_id_for(parents)
        if fam_id not in families:
            families[fam_id] = LayoutFamily(id=fam_id, parents=sorted(set(parents)))
        families[fam_id].children.append(child_id)
        family_by_child[child_id] = fam_id

    logger.debug("Grouped %d children into %d families", len(family_by_child), len(families))
    return families, family_by_child


def build_graph(people: Iterable[Person], relationships: Iterable[Relationship]) -> nx.MultiDiGraph:
    """
    Build a NetworkX multigraph of people and their relationships.

    Parent/child edges point parent -> child. Symmetric relationships
    (spouse, partner, sibling) are stored once in the supplied direction.
    Relationship endpoints that are not in `people` still become nodes, with
    no person attribute.
    """
    G = nx.MultiDiGraph()

    for person in people:
        G.add_node(person.id, person=person)

    for rel in relationships:
        rel_type = RelationshipType.parse(rel.type)
        G.add_edge(rel.person_id1, rel.person_id2, key=rel.id, relationship_type=rel_type)

    return G


def get_ego_subgraph(G: nx.MultiDiGraph, center_id: str, radius: int = 2) -> nx.MultiDiGraph:
    """
    Extract a subgraph containing nodes within a given degree of a center node.

    Args:
        G: The full graph
        center_id: The person ID to center the subgraph on
        radius: Maximum distance from center (default 2)

    Returns:
        A subgraph containing only nodes within `radius` edges of `center_id`
    """
    if center_id not in G:
        raise ValueError(f"Person ID {center_id} not found in graph")

    # Use undirected view so parents, children and spouses all count as neighbours
    undirected = G.to_undirected(as_view=True)
    ego = nx.ego_graph(undirected, center_id, radius=radius)

    return G.subgraph(ego.nodes()).copy()


def graph_to_records(G: nx.MultiDiGraph) -> tuple[list[Person], list[Relationship]]:
    """Turn a (sub)graph back into the people and relationship lists the layout consumes."""
    people = [data["person"] for _, data in G.nodes(data=True) if "person" in data]
    relationships = [
        Relationship(
            id=str(key),
            type=data["relationship_type"],
            person_id1=u,
            person_id2=v,
        )
        for u, v, key, data in G.edges(keys=True, data=True)
    ]
    return people, relationships
