import json
import sqlite3
from datetime import date

import pytest

from genesistree.enums import Gender
from genesistree.family import Family
from genesistree.person import Person
from genesistree.tree import DatabaseError, Tree


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "genesis.db"


@pytest.fixture
def tree(db_path):
    t = Tree()
    t.connect(db_path)
    yield t
    t.close()


def _reopen(db_path):
    t = Tree()
    t.connect(db_path)
    t.load()
    return t


def _family(tree):
    father = Person(first_name="John", last_name="Doe", gender=Gender.MALE)
    mother = Person(first_name="Jane", last_name="Doe", gender=Gender.FEMALE)
    child = Person(first_name="Jim", last_name="Doe", gender=Gender.MALE)
    for person in (father, mother, child):
        tree.add_person(person)
    family = Family(father=father, mother=mother)
    family.add_child(child)
    tree.add_family(family)
    return father, mother, child, family


def test_add_person_assigns_id_and_persists(tree, db_path):
    person = Person(first_name="Ada", last_name="Stone", gender=Gender.FEMALE,
                    birth_date=date(1950, 3, 4))
    tree.add_person(person)
    assert person.id > 0
    assert tree.get_person(person.id) is person

    other = _reopen(db_path)
    loaded = other.get_person(person.id)
    assert loaded.name == "Ada Stone"
    assert loaded.gender == Gender.FEMALE
    assert loaded.birth_date == date(1950, 3, 4)
    other.close()


def test_add_person_without_database_raises():
    t = Tree()
    with pytest.raises(DatabaseError):
        t.add_person(Person(first_name="Ada"))
    assert t.is_empty()


def test_relationship_queries(tree):
    father, mother, child, family = _family(tree)
    assert tree.birth_family(child.id) is family
    assert tree.married_families(father.id) == [family]
    assert tree.married_families(mother.id) == [family]
    assert tree.children_of(father.id) == [child]
    assert tree.birth_family(father.id) is None


def test_ancestors_and_descendants(tree):
    father, mother, child, _ = _family(tree)
    grandchild = Person(first_name="Tom")
    tree.add_person(grandchild)
    second = Family(father=child)
    second.add_child(grandchild)
    tree.add_family(second)

    assert tree.ancestors(grandchild.id) == {child, father, mother}
    assert tree.descendants(father.id) == {child, grandchild}
    assert tree.ancestors(father.id) == set()
    assert tree.descendants(999) == set()


def test_delete_person_clears_parent(tree, db_path):
    father, mother, child, family = _family(tree)
    tree.delete_person(father.id)
    assert tree.get_person(father.id) is None
    assert family.father is None
    assert family.mother is mother
    assert family.children == [child]

    other = _reopen(db_path)
    assert other.get_family(family.id).father is None
    other.close()


def test_update_person_gender_removes_as_father(tree):
    father, mother, _, family = _family(tree)
    father.set_gender(Gender.FEMALE)
    tree.update_person(father.id)
    assert family.father is None
    assert family.mother is mother
    assert tree.married_families(father.id) == []


def test_update_family_syncs_children(tree, db_path):
    father, mother, child, family = _family(tree)
    sibling = Person(first_name="Sue")
    tree.add_person(sibling)
    family.add_child(sibling)
    family.remove_child(child)
    tree.update_family(family.id)

    assert tree.birth_family(child.id) is None
    assert tree.birth_family(sibling.id) is family

    other = _reopen(db_path)
    assert [c.id for c in other.get_family(family.id).children] == [sibling.id]
    other.close()


def test_delete_family(tree):
    father, _, child, family = _family(tree)
    tree.delete_family(family.id)
    assert not tree.family_exists(family.id)
    assert tree.birth_family(child.id) is None
    assert tree.married_families(father.id) == []


def test_save_and_load_file_round_trip(tree, tmp_path):
    father, mother, child, family = _family(tree)
    father.birth_date = date(1920, 5, 6)
    path = tmp_path / "tree.json"
    tree.save_file(path)

    other = Tree()
    other.load_file(path)
    assert {p.id: p.name for p in other.people.values()} == {
        p.id: p.name for p in tree.people.values()
    }
    loaded = other.get_family(family.id)
    assert loaded.father.id == father.id
    assert loaded.mother.id == mother.id
    assert [c.id for c in loaded.children] == [child.id]
    assert other.get_person(father.id).birth_date == date(1920, 5, 6)
    assert other.get_person(mother.id).birth_date is None


def test_save_file_format(tmp_path):
    t = Tree()
    t.load_file_path = None
    source = tmp_path / "in.json"
    source.write_text(json.dumps({
        "people": [{"id": 3, "firstName": "Ann", "lastName": "", "gender": "Female",
                    "birthDate": ""}],
        "families": [{"id": 7, "fatherID": 0, "motherID": 3, "children": []}],
    }))
    t.load_file(source)
    out = tmp_path / "out.json"
    t.save_file(out)
    data = json.loads(out.read_text())
    assert data["families"][0]["fatherID"] == 0
    assert data["families"][0]["motherID"] == 3
    assert data["people"][0]["gender"] == "Female"
    assert list(data["people"][0]) == sorted(data["people"][0])


def test_load_file_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Tree().load_file(tmp_path / "missing.json")


def test_load_file_not_object_raises(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]")
    t = Tree()
    with pytest.raises(ValueError):
        t.load_file(path)
    assert t.is_empty()


def test_autosave_writes_loaded_tree(tree, tmp_path):
    father, _, child, family = _family(tree)
    tree.set_home_person(father)
    path = tmp_path / "tree.json"
    tree.save_file(path)

    second_db = tmp_path / "second.db"
    target = Tree()
    target.connect(second_db)
    target.load_file(path)
    target.set_home_person(target.get_person(father.id))
    target.autosave()
    assert target.birth_family(child.id).id == family.id
    target.close()

    reopened = _reopen(second_db)
    assert sorted(reopened.people) == sorted(tree.people)
    reopened.close()

    with sqlite3.connect(second_db) as conn:
        row = conn.execute("SELECT id, homePersonID FROM Tree").fetchone()
    assert row == (1, father.id)


def test_set_home_person_rejects_stranger(tree):
    father, *_ = _family(tree)
    tree.set_home_person(father)
    assert tree.home_person is father
    tree.set_home_person(Person(id=999))
    assert tree.home_person is None


def test_clear_empties_tree(tree):
    father, *_ = _family(tree)
    tree.set_home_person(father)
    assert not tree.is_empty()
    tree.clear()
    assert tree.is_empty()
    assert tree.home_person is None
    assert tree.people == {}