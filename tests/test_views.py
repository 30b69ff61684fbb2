import pytest

from genesistree.enums import Gender
from genesistree.family import Family
from genesistree.person import Person
from genesistree.tree import Tree
from genesistree.views import (
    FamilySection,
    ViewEntry,
    birth_family_section,
    married_family_sections,
    needs_gender_confirmation,
    render_person_view,
    spouse_title,
)


@pytest.fixture
def household():
    tree = Tree()
    tree.connect(":memory:")
    father = Person(first_name="Adam", last_name="Smith", gender=Gender.MALE)
    mother = Person(first_name="Eve", last_name="Smith", gender=Gender.FEMALE)
    first = Person(first_name="Cain", last_name="Smith", gender=Gender.MALE)
    second = Person(first_name="Abel", last_name="Smith", gender=Gender.MALE)
    loner = Person(first_name="Noah")
    for person in (father, mother, first, second, loner):
        tree.add_person(person)
    family = Family(father=father, mother=mother)
    family.add_child(first)
    family.add_child(second)
    tree.add_family(family)
    yield tree, father, mother, first, second, loner
    tree.close()


def test_spouse_title_by_gender():
    assert spouse_title(Person(gender=Gender.MALE)) == "Wife"
    assert spouse_title(Person(gender=Gender.FEMALE)) == "Husband"
    assert spouse_title(Person()) == "Spouse"


def test_view_entry_text_and_id():
    person = Person(id=7, first_name="Ada", last_name="King")
    entry = ViewEntry("Child", person)
    assert entry.text == "Child: Ada King"
    assert entry.person_id == 7


def test_family_section_lines():
    section = FamilySection("Birth Family", [ViewEntry("Father", Person(first_name="Tom"))])
    assert section.lines() == ["Birth Family:", "  Father: Tom"]


def test_birth_family_section_lists_parents_and_siblings(household):
    tree, father, mother, first, second, _ = household
    section = birth_family_section(tree, first)
    assert section.title == "Birth Family"
    assert [entry.role for entry in section.entries] == ["Father", "Mother", "Sibling"]
    assert [entry.person for entry in section.entries] == [father, mother, second]


def test_birth_family_section_none_without_parents(household):
    tree, father, *_ = household
    assert birth_family_section(tree, father) is None


def test_married_family_sections_for_father(household):
    tree, father, mother, first, second, _ = household
    sections = married_family_sections(tree, father)
    assert len(sections) == 1
    section = sections[0]
    assert section.title == "Married Family"
    assert [(e.role, e.person) for e in section.entries] == [
        ("Wife", mother),
        ("Child", first),
        ("Child", second),
    ]


def test_married_family_sections_for_mother(household):
    tree, father, mother, *_ = household
    section = married_family_sections(tree, mother)[0]
    assert section.entries[0] == ViewEntry("Husband", father)


def test_married_family_without_partner(household):
    tree, *_, loner = household
    child = Person(first_name="Shem")
    tree.add_person(child)
    family = Family(father=loner)
    family.add_child(child)
    tree.add_family(family)
    sections = married_family_sections(tree, loner)
    assert [(e.role, e.person) for e in sections[0].entries] == [("Child", child)]


def test_married_family_sections_empty_for_child(household):
    tree, _, _, first, *_ = household
    assert married_family_sections(tree, first) == []


def test_render_person_view(household):
    tree, father, mother, first, second, _ = household
    lines = render_person_view(tree, first).splitlines()
    assert lines[0] == first.name
    assert "Birth Family:" in lines
    assert f"  Father: {father.name}" in lines
    assert f"  Sibling: {second.name}" in lines
    assert "Married Family:" not in lines


def test_render_person_view_for_parent(household):
    tree, father, mother, first, *_ = household
    lines = render_person_view(tree, father).splitlines()
    assert lines[1] == "Married Family:"
    assert f"  Child: {first.name}" in lines


def test_gender_confirmation_needed_for_parent(household):
    tree, father, *_ = household
    assert needs_gender_confirmation(tree, father, Gender.FEMALE) is True
    assert needs_gender_confirmation(tree, father, "Female") is True


def test_gender_confirmation_not_needed(household):
    tree, father, _, first, _, loner = household
    assert needs_gender_confirmation(tree, father, Gender.MALE) is False
    assert needs_gender_confirmation(tree, first, Gender.FEMALE) is False
    assert needs_gender_confirmation(tree, loner, "Male") is False
    assert needs_gender_confirmation(tree, None, Gender.MALE) is False