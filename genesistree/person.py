"""A person in a family tree."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from genesistree.enums import (
    Gender,
    Relation,
    SiblingType,
    gender_from_string,
    gender_to_string,
)


@dataclass(eq=False)
class Person:
    """A single person; compared and hashed by identity."""

    id: int = 0
    first_name: str = ""
    last_name: str = ""
    gender: Gender = Gender.UNKNOWN
    birth_date: date | None = None

    def __post_init__(self) -> None:
        self.set_gender(self.gender)

    @property
    def name(self) -> str:
        """First and last name joined by a space, or only the first name."""
        if not self.last_name:
            return self.first_name
        return f"{self.first_name} {self.last_name}"

    def set_gender(self, gender: Gender | str) -> None:
        """Set the gender from a Gender or from its display name."""
        if isinstance(gender, str):
            self.gender = gender_from_string(gender)
        else:
            self.gender = Gender(gender)

    @property
    def gender_name(self) -> str:
        return gender_to_string(self.gender)

    def __str__(self) -> str:
        return f"PERSON (ID {self.id})\n\tName: {self.name}\n\n\n"


_RELATION_LABELS = {
    Relation.BIOLOGICAL: "Biological",
    Relation.FOSTER: "Foster",
    Relation.ADOPTIVE: "Adoptive",
}


def relation_label(relation: Relation) -> str:
    """Label of a parent relation; an unknown relation has an empty label."""
    return _RELATION_LABELS.get(relation, "")


def sibling_label(sibling_type: SiblingType) -> str:
    """Label of a sibling relationship."""
    return sibling_type.value