"""Command line for keeping a family tree in an SQLite database."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Iterable
from datetime import date

from genesistree.family import Family
from genesistree.filters import child_candidates, father_candidates, mother_candidates
from genesistree.layout import layout_tree
from genesistree.person import Person
from genesistree.tree import DatabaseError, Tree
from genesistree.views import needs_gender_confirmation, render_person_view

DEFAULT_DATABASE = "genesis.db"
GENDER_CHOICES = ("Male", "Female", "Unknown")


class _CommandError(Exception):
    """A command cannot be carried out as asked."""


def _parse_date(text: str) -> date:
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an ISO date: {text!r}") from exc


def _person_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--first", help="first name")
    parser.add_argument("--last", help="last name")
    parser.add_argument("--gender", choices=GENDER_CHOICES)
    parser.add_argument("--born", type=_parse_date, help="birth date, YYYY-MM-DD")


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for every command."""
    parser = argparse.ArgumentParser(
        prog="genesistree", description="Keep a family tree in an SQLite database."
    )
    parser.add_argument("--db", default=DEFAULT_DATABASE, help="database file")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="list people and families")

    add_person = sub.add_parser("add-person", help="add a person")
    _person_options(add_person)

    edit_person = sub.add_parser("edit-person", help="change a person's details")
    edit_person.add_argument("id", type=int)
    _person_options(edit_person)
    edit_person.add_argument(
        "--yes", action="store_true", help="confirm a gender change that drops parenthood"
    )

    remove_person = sub.add_parser("remove-person", help="remove people")
    remove_person.add_argument("ids", type=int, nargs="+")

    add_family = sub.add_parser("add-family", help="add a family")
    add_family.add_argument("--father", type=int)
    add_family.add_argument("--mother", type=int)
    add_family.add_argument("--child", dest="children", type=int, action="append", default=[])

    edit_family = sub.add_parser("edit-family", help="change a family")
    edit_family.add_argument("id", type=int)
    edit_family.add_argument("--father", type=int)
    edit_family.add_argument("--mother", type=int)
    edit_family.add_argument("--add-child", type=int, action="append", default=[])
    edit_family.add_argument("--remove-child", type=int, action="append", default=[])

    remove_family = sub.add_parser("remove-family", help="remove families")
    remove_family.add_argument("ids", type=int, nargs="+")

    show = sub.add_parser("show", help="show a person and their families")
    show.add_argument("id", type=int)

    layout = sub.add_parser("layout", help="print the drawing positions of a tree")
    layout.add_argument("id", type=int, help="root person")

    save = sub.add_parser("save", help="save the tree to a JSON file")
    save.add_argument("path")

    load = sub.add_parser("load", help="replace the tree with a JSON file")
    load.add_argument("path")

    sub.add_parser("autosave", help="write the whole tree to the database")
    return parser


def _require_person(tree: Tree, person_id: int) -> Person:
    person = tree.get_person(person_id)
    if person is None:
        raise _CommandError(f"no person with id {person_id}")
    return person


def _require_family(tree: Tree, family_id: int) -> Family:
    family = tree.get_family(family_id)
    if family is None:
        raise _CommandError(f"no family with id {family_id}")
    return family


def _select(candidates: dict[int, Person], person_id: int, role: str) -> Person:
    person = candidates.get(person_id)
    if person is None:
        raise _CommandError(f"person {person_id} cannot be the {role} of this family")
    return person


def _apply_details(person: Person, args: argparse.Namespace) -> None:
    if args.first is not None:
        person.first_name = args.first
    if args.last is not None:
        person.last_name = args.last
    if args.gender is not None:
        person.set_gender(args.gender)
    if args.born is not None:
        person.birth_date = args.born


def _print_listing(title: str, items: Iterable[tuple[int, str]]) -> None:
    print(f"{title}:")
    for item_id, text in items:
        print(f"  [{item_id}] {text}")


def _cmd_list(tree: Tree, args: argparse.Namespace) -> int:
    _print_listing("People", ((pid, p.name) for pid, p in tree.people.items()))
    _print_listing("Families", ((fid, f.label) for fid, f in tree.families.items()))
    return 0


def _cmd_add_person(tree: Tree, args: argparse.Namespace) -> int:
    person = Person()
    _apply_details(person, args)
    tree.add_person(person)
    print(f"{person.id}\t{person.name}")
    return 0


def _cmd_edit_person(tree: Tree, args: argparse.Namespace) -> int:
    person = _require_person(tree, args.id)
    if (
        args.gender is not None
        and not args.yes
        and needs_gender_confirmation(tree, person, args.gender)
    ):
        raise _CommandError(
            "changing the gender removes the person as a parent in all families; "
            "repeat with --yes to confirm"
        )
    _apply_details(person, args)
    tree.update_person(args.id)
    print(f"{person.id}\t{person.name}")
    return 0


def _cmd_remove_person(tree: Tree, args: argparse.Namespace) -> int:
    for person_id in args.ids:
        _require_person(tree, person_id)
    for person_id in args.ids:
        tree.delete_person(person_id)
    return 0


def _cmd_add_family(tree: Tree, args: argparse.Namespace) -> int:
    family = Family()
    if args.father is not None:
        family.father = _select(father_candidates(tree, family), args.father, "father")
    if args.mother is not None:
        family.mother = _select(mother_candidates(tree, family), args.mother, "mother")
    for child_id in args.children:
        family.add_child(_select(child_candidates(tree, family), child_id, "child"))
    tree.add_family(family)
    print(f"{family.id}\t{family.label}")
    return 0


def _cmd_edit_family(tree: Tree, args: argparse.Namespace) -> int:
    family = _require_family(tree, args.id)
    if args.father is not None:
        family.father = _select(father_candidates(tree, family), args.father, "father")
    if args.mother is not None:
        family.mother = _select(mother_candidates(tree, family), args.mother, "mother")
    for child_id in args.remove_child:
        family.remove_child(family.get_child(child_id))
    for child_id in args.add_child:
        family.add_child(_select(child_candidates(tree, family), child_id, "child"))
    tree.update_family(args.id)
    print(f"{family.id}\t{family.label}")
    return 0


def _cmd_remove_family(tree: Tree, args: argparse.Namespace) -> int:
    for family_id in args.ids:
        _require_family(tree, family_id)
    for family_id in args.ids:
        tree.delete_family(family_id)
    return 0


def _cmd_show(tree: Tree, args: argparse.Namespace) -> int:
    print(render_person_view(tree, _require_person(tree, args.id)))
    return 0


def _cmd_layout(tree: Tree, args: argparse.Namespace) -> int:
    layout = layout_tree(tree, _require_person(tree, args.id))
    for node in layout.nodes.values():
        print(f"{node.x:g}\t{node.y:g}\t{node.person.name}")
    return 0


def _cmd_save(tree: Tree, args: argparse.Namespace) -> int:
    tree.save_file(args.path)
    print("Family tree saved successfully.")
    return 0


def _cmd_load(tree: Tree, args: argparse.Namespace) -> int:
    tree.clear()
    tree.load_file(args.path)
    tree.autosave()
    print("Family tree loaded successfully.")
    return 0


def _cmd_autosave(tree: Tree, args: argparse.Namespace) -> int:
    tree.autosave()
    return 0


_COMMANDS: dict[str, Callable[[Tree, argparse.Namespace], int]] = {
    "list": _cmd_list,
    "add-person": _cmd_add_person,
    "edit-person": _cmd_edit_person,
    "remove-person": _cmd_remove_person,
    "add-family": _cmd_add_family,
    "edit-family": _cmd_edit_family,
    "remove-family": _cmd_remove_family,
    "show": _cmd_show,
    "layout": _cmd_layout,
    "save": _cmd_save,
    "load": _cmd_load,
    "autosave": _cmd_autosave,
}


def main(argv: list[str] | None = None) -> int:
    """Run one command against the tree database; return the exit status."""
    args = build_parser().parse_args(argv)
    try:
        with Tree() as tree:
            tree.connect(args.db)
            tree.load()
            return _COMMANDS[args.command](tree, args)
    except (_CommandError, DatabaseError, ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())