"""A family tree held in memory and kept in an SQLite database."""

from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import suppress
from datetime import date
from os import PathLike
from typing import Any

from genesistree.enums import gender_to_string
from genesistree.family import Family
from genesistree.person import Person

logger = logging.getLogger(__name__)

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS Tree (
        id INTEGER PRIMARY KEY,
        name TEXT,
        homePersonID INTEGER
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS Person (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        treeID INTEGER,
        firstName TEXT,
        lastName TEXT,
        gender TEXT CHECK(gender IN ('Male', 'Female', 'Unknown')),
        birthDate DATE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS Family (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        treeID INTEGER,
        fatherID INTEGER,
        motherID INTEGER,
        FOREIGN KEY(fatherID) REFERENCES Person(id) ON DELETE SET NULL,
        FOREIGN KEY(motherID) REFERENCES Person(id) ON DELETE SET NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS FamilyChild (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        childID INTEGER,
        familyID INTEGER,
        FOREIGN KEY(childID) REFERENCES Person(id) ON DELETE CASCADE,
        FOREIGN KEY(familyID) REFERENCES Family(id) ON DELETE CASCADE
    )
    """,
)


class DatabaseError(Exception):
    """A database operation could not be carried out."""


def _date_to_db(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None


def _date_from_text(value: Any) -> date | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def _json_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def _json_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


class Tree:
    """People and families of one tree, mirrored to an SQLite database."""

    def __init__(self) -> None:
        self.id = 1
        self.name = ""
        self._home_person: Person | None = None
        self._people: dict[int, Person] = {}
        self._families: dict[int, Family] = {}
        self._db: sqlite3.Connection | None = None

    def __enter__(self) -> Tree:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # Database plumbing

    def _execute(self, sql: str, params: Any = ()) -> sqlite3.Cursor:
        if self._db is None:
            raise DatabaseError("no database is connected")
        try:
            return self._db.execute(sql, params)
        except sqlite3.Error as exc:
            raise DatabaseError(str(exc)) from exc

    def _fetch(self, sql: str, params: Any = ()) -> list[tuple]:
        """Rows of a query, or no rows when it cannot run."""
        if self._db is None:
            return []
        try:
            return self._execute(sql, params).fetchall()
        except DatabaseError as exc:
            logger.warning("Query failed: %s", exc)
            return []

    def connect(self, path: str | PathLike[str]) -> None:
        """Open the database at path and make sure its tables exist."""
        self.close()
        try:
            self._db = sqlite3.connect(path, isolation_level=None)
        except sqlite3.Error as exc:
            raise DatabaseError(f"cannot open database: {exc}") from exc
        self._execute("PRAGMA foreign_keys = ON")
        for statement in _SCHEMA:
            try:
                self._execute(statement)
            except DatabaseError as exc:
                logger.warning("Query failed: %s", exc)

    def close(self) -> None:
        """Close the database connection, if one is open."""
        if self._db is not None:
            self._db.close()
            self._db = None

    # Home person

    def set_home_person(self, person: Person | None) -> None:
        """Set the home person; a person not in the tree clears it."""
        if person is None or self.person_exists(person.id):
            self._home_person = person
        else:
            self._home_person = None

    @property
    def home_person(self) -> Person | None:
        return self._home_person

    # People

    def insert_person(self, person: Person) -> None:
        """Write a person to the database and give it the id it was stored under."""
        cursor = self._execute(
            "INSERT INTO Person (id, treeID, firstName, lastName, gender, birthDate) "
            "VALUES (:id, :treeid, :fname, :lname, :gender, :bdate)",
            {
                "id": person.id if person.id > 0 else None,
                "treeid": self.id,
                "fname": person.first_name,
                "lname": person.last_name,
                "gender": gender_to_string(person.gender),
                "bdate": _date_to_db(person.birth_date),
            },
        )
        person.id = cursor.lastrowid
        logger.debug("Person added to database")

    def add_person(self, person: Person | None) -> None:
        """Store a person in the database and then in the tree."""
        if person is None:
            return
        self.insert_person(person)
        self._people[person.id] = person

    def delete_person(self, person_id: int) -> None:
        """Remove a person from the tree and the database, then reload."""
        if not self.person_exists(person_id):
            return
        if self._db is not None:
            try:
                self._execute("DELETE FROM Person WHERE id = :id", {"id": person_id})
                logger.debug("Person %d is removed from database", person_id)
            except DatabaseError as exc:
                logger.warning("Failed to remove person: %s", exc)
        person = self._people.pop(person_id)
        for family in self._families.values():
            family.remove_child(person)
            if family.father is person:
                family.father = None
            if family.mother is person:
                family.mother = None
        if self._home_person is person:
            self._home_person = None
        self.load()

    def get_person(self, person_id: int) -> Person | None:
        return self._people.get(person_id)

    def person_exists(self, person_id: int) -> bool:
        return person_id in self._people

    @property
    def people(self) -> dict[int, Person]:
        """A copy of the people, ordered by id."""
        return dict(sorted(self._people.items()))

    def update_person(self, person_id: int) -> None:
        """Write a person's details back, drop them as a parent of the wrong gender, reload."""
        person = self.get_person(person_id)
        if person is None:
            return
        try:
            self._execute(
                "UPDATE Person SET firstName = :firstName, lastName = :lastName, "
                "gender = :gender, birthDate = :bdate WHERE id = :id",
                {
                    "firstName": person.first_name,
                    "lastName": person.last_name,
                    "gender": gender_to_string(person.gender),
                    "bdate": _date_to_db(person.birth_date),
                    "id": person_id,
                },
            )
            logger.debug("Updated Person %d", person_id)
        except DatabaseError as exc:
            logger.warning("Update failed: %s", exc)

        for sql in (
            "UPDATE Family SET fatherID = NULL WHERE fatherID = :id AND :id IN "
            "(SELECT id FROM Person WHERE id = :id AND gender = 'Female')",
            "UPDATE Family SET motherID = NULL WHERE motherID = :id AND :id IN "
            "(SELECT id FROM Person WHERE id = :id AND gender = 'Male')",
        ):
            try:
                self._execute(sql, {"id": person_id})
            except DatabaseError as exc:
                logger.warning("Query failed: %s", exc)

        self.load()

    # Families

    def insert_family(self, family: Family) -> None:
        """Write a family and its children to the database and give it its id."""
        cursor = self._execute(
            "INSERT INTO Family (id, treeID, fatherID, motherID) "
            "VALUES (:id, :treeid, :fatherID, :motherID)",
            {
                "id": family.id if family.id > 0 else None,
                "treeid": self.id,
                "fatherID": family.father.id if family.father else None,
                "motherID": family.mother.id if family.mother else None,
            },
        )
        family.id = cursor.lastrowid
        for child in family.children:
            with suppress(DatabaseError):
                self._execute(
                    "INSERT INTO FamilyChild (childID, familyID) VALUES (:childID, :familyID)",
                    {"childID": child.id, "familyID": family.id},
                )
        logger.debug("Family successfully inserted")

    def add_family(self, family: Family | None) -> None:
        """Store a family in the database and then in the tree."""
        if family is None:
            return
        self.insert_family(family)
        self._families[family.id] = family

    def delete_family(self, family_id: int) -> None:
        """Remove a family from the tree and the database."""
        if not self.family_exists(family_id):
            return
        del self._families[family_id]
        try:
            self._execute("DELETE FROM Family WHERE id = :id", {"id": family_id})
            logger.debug("Family %d is removed from database", family_id)
        except DatabaseError as exc:
            logger.warning("Failed to remove family: %s", exc)

    def get_family(self, family_id: int) -> Family | None:
        return self._families.get(family_id)

    def family_exists(self, family_id: int) -> bool:
        return family_id in self._families

    @property
    def families(self) -> dict[int, Family]:
        """A copy of the families, ordered by id."""
        return dict(sorted(self._families.items()))

    def update_family(self, family_id: int) -> None:
        """Write a family's parents back and bring its stored children in line."""
        family = self.get_family(family_id)
        if family is None:
            return
        try:
            self._execute(
                "UPDATE Family SET fatherID = :fatherID, motherID = :motherID WHERE id = :id",
                {
                    "fatherID": family.father.id if family.father else None,
                    "motherID": family.mother.id if family.mother else None,
                    "id": family_id,
                },
            )
        except DatabaseError as exc:
            logger.warning("Update failed: %s", exc)
            return

        new_ids = {child.id for child in family.children}
        old_ids = {
            row[0]
            for row in self._fetch(
                "SELECT childID FROM FamilyChild WHERE familyID = :familyID",
                {"familyID": family_id},
            )
        }
        for child_id in sorted(new_ids - old_ids):
            with suppress(DatabaseError):
                self._execute(
                    "INSERT INTO FamilyChild (familyID, childID) VALUES (:familyID, :childID)",
                    {"familyID": family_id, "childID": child_id},
                )
        for child_id in sorted(old_ids - new_ids):
            with suppress(DatabaseError):
                self._execute(
                    "DELETE FROM FamilyChild WHERE familyID = :familyID AND childID = :childID",
                    {"familyID": family_id, "childID": child_id},
                )
        logger.debug("Updated Family %d", family_id)

    # Loading and saving

    def load(self) -> None:
        """Read people, families and children from the database into the tree."""
        if self._db is None:
            return

        for person_id, first, last, gender, birth in self._fetch(
            "SELECT id, firstName, lastName, gender, birthDate FROM Person"
        ):
            person = self._people.get(person_id) or Person()
            person.id = person_id
            person.first_name = first or ""
            person.last_name = last or ""
            person.set_gender(gender or "")
            person.birth_date = _date_from_text(birth)
            self._people[person_id] = person

        for family_id, father_id, mother_id in self._fetch(
            "SELECT id, fatherID, motherID FROM Family"
        ):
            family = self._families.get(family_id) or Family()
            family.id = family_id
            family.father = self.get_person(father_id or 0)
            family.mother = self.get_person(mother_id or 0)
            self._families[family_id] = family

        for child_id, family_id in self._fetch("SELECT childID, familyID FROM FamilyChild"):
            family = self.get_family(family_id)
            if family is None or family.has_child(child_id):
                continue
            child = self.get_person(child_id)
            if child is not None:
                family.add_child(child)

    def autosave(self) -> None:
        """Write the tree record and every person and family to the database."""
        with suppress(DatabaseError):
            self._execute("DELETE FROM Tree WHERE id = :id", {"id": 1})
        try:
            self._execute(
                "INSERT INTO Tree (id, name, homePersonID) VALUES (:id, :name, :homePersonID)",
                {
                    "id": self.id,
                    "name": self.name,
                    "homePersonID": self._home_person.id if self._home_person else None,
                },
            )
            logger.debug("New tree inserted")
        except DatabaseError as exc:
            logger.warning("Failed to insert tree: %s", exc)

        for person in self.people.values():
            try:
                self.insert_person(person)
            except DatabaseError as exc:
                logger.warning("Failed to insert person: %s", exc)
        for family in self.families.values():
            try:
                self.insert_family(family)
            except DatabaseError as exc:
                logger.warning("Failed to insert family: %s", exc)

    def save_file(self, path: str | PathLike[str]) -> None:
        """Write the people and families to a JSON file."""
        people = [
            {
                "id": person_id,
                "firstName": person.first_name,
                "lastName": person.last_name,
                "gender": gender_to_string(person.gender),
                "birthDate": person.birth_date.isoformat() if person.birth_date else "",
            }
            for person_id, person in self.people.items()
        ]
        families = [
            {
                "id": family_id,
                "fatherID": family.father.id if family.father else 0,
                "motherID": family.mother.id if family.mother else 0,
                "children": [child.id for child in family.children],
            }
            for family_id, family in self.families.items()
        ]
        document = {"people": people, "families": families}
        with open(path, "w", encoding="utf-8") as handle:
            handle.write(json.dumps(document, indent=4, sort_keys=True) + "\n")

    def load_file(self, path: str | PathLike[str]) -> None:
        """Merge people and families from a JSON file into the tree."""
        with open(path, "rb") as handle:
            data = handle.read()
        try:
            root = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ValueError(f"not a JSON document: {exc}") from exc
        if not isinstance(root, dict):
            raise ValueError("the JSON document is not an object")

        people = root.get("people")
        families = root.get("families")

        for entry in people if isinstance(people, list) else []:
            obj = entry if isinstance(entry, dict) else {}
            person_id = _json_int(obj.get("id"))
            person = self._people.get(person_id) or Person()
            person.id = person_id
            person.first_name = _json_str(obj.get("firstName"))
            person.last_name = _json_str(obj.get("lastName"))
            person.set_gender(_json_str(obj.get("gender")))
            person.birth_date = _date_from_text(obj.get("birthDate"))
            self._people[person_id] = person

        for entry in families if isinstance(families, list) else []:
            obj = entry if isinstance(entry, dict) else {}
            family_id = _json_int(obj.get("id"))
            family = self._families.get(family_id) or Family()
            family.id = family_id
            father_id = _json_int(obj.get("fatherID"))
            mother_id = _json_int(obj.get("motherID"))
            if self.person_exists(father_id):
                family.father = self.get_person(father_id)
            if self.person_exists(mother_id):
                family.mother = self.get_person(mother_id)
            children = obj.get("children")
            for value in children if isinstance(children, list) else []:
                child = self.get_person(_json_int(value))
                if child is not None:
                    family.add_child(child)
            self._families[family_id] = family

    # Relationships

    def _birth_families(self, person_id: int) -> list[Family]:
        if not self.person_exists(person_id):
            return []
        found = {
            family.id: family
            for (family_id,) in self._fetch(
                "SELECT familyID FROM FamilyChild WHERE childID = :childID",
                {"childID": person_id},
            )
            if (family := self.get_family(family_id)) is not None
        }
        return [found[key] for key in sorted(found)]

    def birth_family(self, person_id: int) -> Family | None:
        """The first family the person is a child of, or None."""
        families = self._birth_families(person_id)
        return families[0] if families else None

    def married_families(self, person_id: int) -> list[Family]:
        """Families in which the person is father or mother, ordered by id."""
        if not self.person_exists(person_id):
            return []
        found = {
            family.id: family
            for (family_id,) in self._fetch(
                "SELECT id FROM Family WHERE fatherID = :personID OR motherID = :personID",
                {"personID": person_id},
            )
            if (family := self.get_family(family_id)) is not None
        }
        return [found[key] for key in sorted(found)]

    def children_of(self, person_id: int) -> list[Person]:
        """Children of every family in which the person is a parent."""
        if not self.person_exists(person_id):
            return []
        children = []
        for family in self.married_families(person_id):
            for (child_id,) in self._fetch(
                "SELECT childID FROM FamilyChild WHERE familyID = :familyID",
                {"familyID": family.id},
            ):
                child = self.get_person(child_id)
                if child is not None:
                    children.append(child)
        return children

    def ancestors(self, person_id: int) -> set[Person]:
        """All parents, grandparents and so on of a person."""
        found: set[Person] = set()
        pending = [person_id]
        visited: set[int] = set()
        while pending:
            current = pending.pop()
            if current in visited:
                continue
            visited.add(current)
            for family in self._birth_families(current):
                for parent in (family.father, family.mother):
                    if parent is not None:
                        found.add(parent)
                        pending.append(parent.id)
        return found

    def descendants(self, person_id: int) -> set[Person]:
        """All children, grandchildren and so on of a person."""
        found: set[Person] = set()
        pending = [person_id]
        visited: set[int] = set()
        while pending:
            current = pending.pop()
            if current in visited:
                continue
            visited.add(current)
            for child in self.children_of(current):
                found.add(child)
                pending.append(child.id)
        return found

    # Whole tree

    def clear(self) -> None:
        """Forget every person and family and the home person."""
        self._people.clear()
        self._families.clear()
        self._home_person = None

    def is_empty(self) -> bool:
        return not self._people and not self._families