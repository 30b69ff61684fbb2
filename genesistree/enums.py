"""Enumerations shared by people and families."""

from __future__ import annotations

from enum import Enum, IntEnum


class Relation(Enum):
    """How a child is related to a parent."""

    UNKNOWN = "Unknown"
    BIOLOGICAL = "Biological"
    FOSTER = "Foster"
    ADOPTIVE = "Adoptive"


class SiblingType(Enum):
    """Kind of sibling relationship."""

    FULL = "Full"
    HALF = "Half"
    STEP = "Step"


class Gender(IntEnum):
    """Gender of a person; the integer value is its position in a choice list."""

    UNKNOWN = 0
    MALE = 1
    FEMALE = 2


_GENDER_NAMES = {
    Gender.MALE: "Male",
    Gender.FEMALE: "Female",
}


def gender_to_string(gender: Gender) -> str:
    """Return the display name of a gender; anything unrecognised is "Unknown"."""
    return _GENDER_NAMES.get(gender, "Unknown")


def gender_from_string(text: str) -> Gender:
    """Parse a gender name exactly as written; anything else is UNKNOWN."""
    for gender, name in _GENDER_NAMES.items():
        if text == name:
            return gender
    return Gender.UNKNOWN