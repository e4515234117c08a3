"""Generation assignment by breadth-first traversal from the root person."""

from collections import deque
import logging

from .graph import RelationshipIndex

logger = logging.getLogger(__name__)


def assign_generations(index: RelationshipIndex, root_person_id: str) -> dict[str, int]:
    """
    Assign a generation to every person reachable from the root.

    The root is generation 0, parents are one less, children one more and
    spouses/partners share the generation of the person they were reached
    from. The first assignment wins and a person is never revisited, so cycles
    and reconverging lineages terminate without contradiction. Sibling edges
    are not followed.

    Args:
        index: Relationship adjacency maps
        root_person_id: The person to start from (need not exist in the people list)

    Returns:
        Generation keyed by person id, in visiting order, relative to the root
    """
    generation_by_id: dict[str, int] = {root_person_id: 0}
    queue = deque([root_person_id])

    while queue:
        current_id = queue.popleft()
        generation = generation_by_id[current_id]

        neighbours = (
            [(pid, generation - 1) for pid in index.parents_of(current_id)]
            + [(cid, generation + 1) for cid in index.children_of(current_id)]
            + [(sid, generation) for sid in index.spouses_of(current_id)]
        )
        for person_id, person_generation in neighbours:
            if person_id not in generation_by_id:
                generation_by_id[person_id] = person_generation
                queue.append(person_id)

    logger.debug("Reached %d people from root %s", len(generation_by_id), root_person_id)
    return generation_by_id


def normalize_generations(generation_by_id: dict[str, int]) -> dict[str, int]:
    """Shift generations so the smallest one is 0, keeping their order."""
    if not generation_by_id:
        return {}
    min_generation = min(generation_by_id.values())
    return {pid: gen - min_generation for pid, gen in generation_by_id.items()}
