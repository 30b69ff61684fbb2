"""Choosing which people may become a family's father, mother or children."""

from __future__ import annotations

from genesistree.enums import Gender
from genesistree.family import Family
from genesistree.person import Person
from genesistree.tree import Tree


def filter_by_gender(
    people: dict[int, Person], gender: Gender = Gender.UNKNOWN
) -> dict[int, Person]:
    """People whose gender is exactly the given one."""
    return {pid: person for pid, person in people.items() if person.gender == gender}


def filter_already_in_family(
    people: dict[int, Person], family: Family | None
) -> dict[int, Person]:
    """People who are neither a parent nor a child of the family."""
    if family is None:
        return dict(people)
    members = [family.father, family.mother, *family.children]
    return {
        pid: person
        for pid, person in people.items()
        if not any(person is member for member in members)
    }


def filter_children_by_ancestors(
    people: dict[int, Person], tree: Tree, family: Family | None
) -> dict[int, Person]:
    """People who are not an ancestor of either parent of the family."""
    if family is None:
        return dict(people)
    forbidden: set[Person] = set()
    for parent in (family.father, family.mother):
        if parent is not None:
            forbidden |= tree.ancestors(parent.id)
    return {pid: child for pid, child in people.items() if child not in forbidden}


def filter_parents_by_descendants(
    people: dict[int, Person], tree: Tree, family: Family | None
) -> dict[int, Person]:
    """People who are not a descendant of any child of the family."""
    if family is None:
        return dict(people)
    forbidden: set[Person] = set()
    for child in family.children:
        forbidden |= tree.descendants(child.id)
    return {pid: parent for pid, parent in people.items() if parent not in forbidden}


def filter_children_by_birth_family(
    people: dict[int, Person], tree: Tree
) -> dict[int, Person]:
    """People who are not yet a child of any family."""
    return {
        pid: child for pid, child in people.items() if tree.birth_family(child.id) is None
    }


def _parent_candidates(tree: Tree, family: Family | None, gender: Gender) -> dict[int, Person]:
    people = filter_by_gender(tree.people, gender)
    people = filter_already_in_family(people, family)
    return filter_parents_by_descendants(people, tree, family)


def father_candidates(tree: Tree, family: Family | None) -> dict[int, Person]:
    """Men of the tree who may become the family's father."""
    return _parent_candidates(tree, family, Gender.MALE)


def mother_candidates(tree: Tree, family: Family | None) -> dict[int, Person]:
    """Women of the tree who may become the family's mother."""
    return _parent_candidates(tree, family, Gender.FEMALE)


def child_candidates(tree: Tree, family: Family | None) -> dict[int, Person]:
    """People of the tree who may be added as children of the family."""
    people = filter_children_by_birth_family(tree.people, tree)
    people = filter_already_in_family(people, family)
    return filter_children_by_ancestors(people, tree, family)