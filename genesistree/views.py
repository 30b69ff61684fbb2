"""What a person's page shows: their birth family and the families they head."""

from __future__ import annotations

from dataclasses import dataclass, field

from genesistree.enums import Gender, gender_to_string
from genesistree.person import Person
from genesistree.tree import Tree

BIRTH_FAMILY_TITLE = "Birth Family"
MARRIED_FAMILY_TITLE = "Married Family"


@dataclass(frozen=True)
class ViewEntry:
    """One relative shown on a person's page, with the role they play."""

    role: str
    person: Person

    @property
    def person_id(self) -> int:
        return self.person.id

    @property
    def text(self) -> str:
        return f"{self.role}: {self.person.name}"


@dataclass
class FamilySection:
    """A titled list of relatives from one family."""

    title: str
    entries: list[ViewEntry] = field(default_factory=list)

    @property
    def heading(self) -> str:
        return f"{self.title}:"

    def lines(self) -> list[str]:
        return [self.heading, *(f"  {entry.text}" for entry in self.entries)]


def spouse_title(person: Person) -> str:
    """What the partner of this person is called: Wife, Husband or Spouse."""
    if person.gender == Gender.MALE:
        return "Wife"
    if person.gender == Gender.FEMALE:
        return "Husband"
    return "Spouse"


def birth_family_section(tree: Tree, person: Person) -> FamilySection | None:
    """Parents and siblings from the person's birth family, or None."""
    family = tree.birth_family(person.id)
    if family is None:
        return None
    section = FamilySection(BIRTH_FAMILY_TITLE)
    if family.father is not None:
        section.entries.append(ViewEntry("Father", family.father))
    if family.mother is not None:
        section.entries.append(ViewEntry("Mother", family.mother))
    section.entries.extend(
        ViewEntry("Sibling", child) for child in family.children if child is not person
    )
    return section


def married_family_sections(tree: Tree, person: Person) -> list[FamilySection]:
    """One section per family in which the person is a parent."""
    sections = []
    for family in tree.married_families(person.id):
        spouse = family.mother if family.father is person else family.father
        section = FamilySection(MARRIED_FAMILY_TITLE)
        if spouse is not None:
            section.entries.append(ViewEntry(spouse_title(person), spouse))
        section.entries.extend(ViewEntry("Child", child) for child in family.children)
        sections.append(section)
    return sections


def render_person_view(tree: Tree, person: Person) -> str:
    """The person's name followed by their family sections, as text."""
    lines = [person.name]
    birth = birth_family_section(tree, person)
    if birth is not None:
        lines.extend(birth.lines())
    for section in married_family_sections(tree, person):
        lines.extend(section.lines())
    return "\n".join(lines)


def needs_gender_confirmation(
    tree: Tree, person: Person | None, new_gender: Gender | str
) -> bool:
    """Whether changing the gender would drop the person as a parent somewhere."""
    if person is None:
        return False
    new_name = new_gender if isinstance(new_gender, str) else gender_to_string(new_gender)
    if gender_to_string(person.gender) == new_name:
        return False
    return bool(tree.married_families(person.id))