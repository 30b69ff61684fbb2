"""A family: two optional parents and their children."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from genesistree.enums import Relation, SiblingType
from genesistree.person import Person


@dataclass
class ChildRelation:
    """A child of a family and how it relates to each parent."""

    person: Person | None
    father_relation: Relation = Relation.UNKNOWN
    mother_relation: Relation = Relation.UNKNOWN


@dataclass
class FamilyRecord:
    """A person's view of one birth family."""

    father: Person | None = None
    mother: Person | None = None
    father_relation: Relation = Relation.UNKNOWN
    mother_relation: Relation = Relation.UNKNOWN
    siblings: list[Person] = field(default_factory=list)
    sibling_relations: list[SiblingType] = field(default_factory=list)


@dataclass(eq=False)
class Family:
    """A family unit; compared and hashed by identity."""

    id: int = 0
    father: Person | None = None
    mother: Person | None = None
    child_relations: list[ChildRelation] = field(default_factory=list)
    marriage_date: date | None = None

    def add_child(
        self,
        child: Person,
        father_relation: Relation = Relation.UNKNOWN,
        mother_relation: Relation = Relation.UNKNOWN,
    ) -> None:
        """Append a child with its relations to the father and mother."""
        self.child_relations.append(ChildRelation(child, father_relation, mother_relation))

    def remove_child(self, person: Person | None) -> None:
        """Remove the first entry for this exact person, if any."""
        for index, relation in enumerate(self.child_relations):
            if relation.person is person:
                del self.child_relations[index]
                return

    def has_child(self, person_id: int) -> bool:
        return any(r.person.id == person_id for r in self.child_relations)

    def get_child(self, person_id: int) -> Person | None:
        return self.child_relation(person_id).person

    def child_relation(self, person_id: int) -> ChildRelation:
        """The relation entry for a child id; an empty entry if there is none."""
        for relation in self.child_relations:
            if relation.person.id == person_id:
                return relation
        return ChildRelation(None)

    @property
    def children(self) -> list[Person]:
        return [r.person for r in self.child_relations]

    @property
    def label(self) -> str:
        """Parents' names for display, or "[Family]" when neither has a name."""
        father_name = self.father.name if self.father else ""
        mother_name = self.mother.name if self.mother else ""
        if father_name and mother_name:
            return f"{father_name} & {mother_name}"
        return father_name or mother_name or "[Family]"

    def __str__(self) -> str:
        lines = ["FAMILY"]
        if self.father:
            lines.append(f"\tFather: {self.father.name}")
        if self.mother:
            lines.append(f"\tMother: {self.mother.name}")
        lines.extend(f"\tChild: {child.name}" for child in self.children)
        return "\n".join(lines) + "\n\n"