"""Loading people and relationships from GEDCOM files and JSON exports."""

import json
import logging
from pathlib import Path
from typing import Any

from ged4py import GedcomReader

from .models import Person, Relationship, RelationshipType

logger = logging.getLogger(__name__)


def normalize_xref(xref_id: str) -> str:
    """Strip the '@' delimiters from a GEDCOM xref like '@I12@'."""
    person_id = xref_id.strip().strip("@")
    if not person_id:
        raise ValueError(f"Empty GEDCOM xref: {xref_id!r}")
    return person_id


def extract_name_parts(indi) -> tuple[str | None, str | None]:
    """Extract given names and surname from an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return (None, None)

    name_value = name_rec.value

    # ged4py returns NAME as tuple: (given, surname, suffix)
    if isinstance(name_value, tuple):
        given, surname = name_value[0], name_value[1]
        return (given or None, surname or None)

    # Fallback: string format "Given /Surname/"
    givn = name_rec.sub_tag("GIVN")
    surn = name_rec.sub_tag("SURN")
    if givn or surn:
        return (givn.value if givn else None, surn.value if surn else None)

    raw = str(name_value)
    if "/" in raw:
        given, _, rest = raw.partition("/")
        surname = rest.split("/", 1)[0]
        return (given.strip() or None, surname.strip() or None)
    return (raw.strip() or None, None)


def normalize_gedcom(reader: GedcomReader) -> tuple[list[Person], list[Relationship]]:
    """
    Extract people and relationships from parsed GEDCOM data.

    Every FAM record yields a spouse relationship between HUSB and WIFE (when
    both are present) and a parent/child relationship from each present
    parent to each CHIL. A person without a DEAT record is treated as living.
    """
    people: list[Person] = []
    relationships: list[Relationship] = []

    for rec in reader.records0("INDI"):
        if rec.xref_id is None:
            continue

        given, surname = extract_name_parts(rec)
        people.append(
            Person(
                id=normalize_xref(rec.xref_id),
                given_names=given,
                surnames=surname,
                is_living=rec.sub_tag("DEAT") is None,
            )
        )

    for rec in reader.records0("FAM"):
        if rec.xref_id is None:
            continue
        fam_id = normalize_xref(rec.xref_id)

        parent_ids = [
            normalize_xref(tag.xref_id)
            for tag in (rec.sub_tag("HUSB"), rec.sub_tag("WIFE"))
            if tag is not None and tag.xref_id
        ]
        child_ids = [normalize_xref(c.xref_id) for c in rec.sub_tags("CHIL") if c.xref_id]

        if len(parent_ids) == 2:
            relationships.append(
                Relationship(
                    id=f"{fam_id}-spouse",
                    type=RelationshipType.SPOUSE,
                    person_id1=parent_ids[0],
                    person_id2=parent_ids[1],
                )
            )

        for child_id in child_ids:
            for parent_id in parent_ids:
                relationships.append(
                    Relationship(
                        id=f"{fam_id}-{parent_id}-{child_id}",
                        type=RelationshipType.PARENT_CHILD,
                        person_id1=parent_id,
                        person_id2=child_id,
                    )
                )

    return people, relationships


def load_gedcom(filepath: Path) -> tuple[list[Person], list[Relationship]]:
    """Parse a GEDCOM file into people and relationships."""
    reader = GedcomReader(str(filepath))
    return normalize_gedcom(reader)


def person_from_dict(data: dict[str, Any]) -> Person:
    person_id = data.get("_id", data.get("id"))
    if not person_id:
        raise ValueError(f"Person record without an id: {data!r}")
    return Person(
        id=str(person_id),
        given_names=data.get("givenNames"),
        surnames=data.get("surnames"),
        is_living=bool(data.get("isLiving", False)),
    )


def relationship_from_dict(data: dict[str, Any], position: int) -> Relationship:
    person_id1 = data.get("personId1")
    person_id2 = data.get("personId2")
    if not person_id1 or not person_id2:
        raise ValueError(f"Relationship record missing personId1/personId2: {data!r}")
    return Relationship(
        id=str(data.get("_id", data.get("id", f"rel-{position}"))),
        type=RelationshipType.parse(data.get("type", "")),
        person_id1=str(person_id1),
        person_id2=str(person_id2),
    )


def load_json(filepath: Path) -> tuple[list[Person], list[Relationship]]:
    """
    Load a JSON export of the form
    {"people": [{"_id", "givenNames", "surnames", "isLiving"}, ...],
     "relationships": [{"_id", "type", "personId1", "personId2"}, ...]}.
    """
    data = json.loads(Path(filepath).read_text(encoding="utf-8"))
    people = [person_from_dict(p) for p in data.get("people") or []]
    relationships = [
        relationship_from_dict(r, i) for i, r in enumerate(data.get("relationships") or [])
    ]
    return people, relationships


def load_records(filepath: Path) -> tuple[list[Person], list[Relationship]]:
    """Load people and relationships, choosing the reader by file extension."""
    filepath = Path(filepath)
    suffix = filepath.suffix.lower()
    if suffix == ".ged":
        people, relationships = load_gedcom(filepath)
    elif suffix == ".json":
        people, relationships = load_json(filepath)
    else:
        raise ValueError(f"Unsupported input format: {filepath.suffix or filepath.name}")

    logger.debug("Loaded %d people and %d relationships from %s", len(people), len(relationships), filepath)
    return people, relationships
