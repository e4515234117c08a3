"""Shared fixtures for layout tests."""
from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import pytest

from pedigree_layout.models import Person, Relationship, RelationshipType

NODE_WIDTH = 180
NODE_HEIGHT = 80
HORIZONTAL_GAP = 100


def person(pid: str, given: str | None = None, surname: str = "Tester", living: bool = True) -> Person:
    return Person(id=pid, given_names=given or pid.upper(), surnames=surname, is_living=living)


def parent(parent_id: str, child_id: str) -> Relationship:
    return Relationship(
        id=f"pc-{parent_id}-{child_id}",
        type=RelationshipType.PARENT_CHILD,
        person_id1=parent_id,
        person_id2=child_id,
    )


def spouse(a: str, b: str, partner: bool = False) -> Relationship:
    return Relationship(
        id=f"sp-{a}-{b}",
        type=RelationshipType.PARTNER if partner else RelationshipType.SPOUSE,
        person_id1=a,
        person_id2=b,
    )


def sibling(a: str, b: str) -> Relationship:
    return Relationship(id=f"sib-{a}-{b}", type=RelationshipType.SIBLING, person_id1=a, person_id2=b)


@pytest.fixture
def family_scenario():
    """Root r with married parents p1/p2, full sibling s, spouse sp and children c1/c2."""
    people = [
        person("p1", "Paul"),
        person("p2", "Pam"),
        person("r", "Root"),
        person("s", "Sibling"),
        person("sp", "Spouse", surname="Other"),
        person("c1", "Cara"),
        person("c2", "Carl"),
    ]
    relationships = [
        spouse("p1", "p2"),
        parent("p1", "r"),
        parent("p2", "r"),
        parent("p1", "s"),
        parent("p2", "s"),
        sibling("r", "s"),
        spouse("r", "sp"),
        parent("r", "c1"),
        parent("r", "c2"),
    ]
    return people, relationships


@pytest.fixture
def extended_tree():
    """Three generations with a remarriage, a partner and an in-law family."""
    people = [
        person("gf", "George", "Adams"),
        person("gm", "Grace", "Adams"),
        person("ogf", "Oscar", "Brown"),
        person("ogm", "Olive", "Brown"),
        person("dad", "David", "Adams"),
        person("mom", "Mary", "Brown"),
        person("step", "Sue", "Clark"),
        person("aunt", "Alice", "Adams"),
        person("uncle", "Ulric", "Brown"),
        person("me", "Mike", "Adams"),
        person("sis", "Sara", "Adams"),
        person("half", "Hank", "Adams"),
        person("wife", "Wendy", "Dunn"),
        person("kid", "Kim", "Adams"),
    ]
    relationships = [
        spouse("gf", "gm"),
        spouse("ogf", "ogm"),
        parent("gf", "dad"),
        parent("gm", "dad"),
        parent("gf", "aunt"),
        parent("gm", "aunt"),
        parent("ogf", "mom"),
        parent("ogm", "mom"),
        parent("ogf", "uncle"),
        parent("ogm", "uncle"),
        spouse("dad", "mom"),
        spouse("dad", "step", partner=True),
        parent("dad", "me"),
        parent("mom", "me"),
        parent("mom", "sis"),
        parent("dad", "sis"),
        parent("dad", "half"),
        parent("step", "half"),
        spouse("me", "wife"),
        parent("me", "kid"),
        parent("wife", "kid"),
    ]
    return people, relationships
