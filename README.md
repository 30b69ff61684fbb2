# genesistree

Keep a family tree of people and the families that join them. The tree
is kept in an SQLite database and can be written to, and read back
from, a JSON file. On top of the data the package works out ancestors,
descendants, birth and married families, the people who may fill a
parent or child place in a family without creating a loop, and the
positions of boxes and lines for drawing a person's descendants.

## Installing

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Command line

The package installs one command, `genesistree`. Every call opens the
database named by `--db` (default `genesis.db`, created when missing),
loads the tree from it and runs one subcommand:

- `list` – people and families with their ids.
- `add-person [--first NAME] [--last NAME] [--gender Male|Female|Unknown] [--born YYYY-MM-DD]`
- `edit-person ID [same options] [--yes]` – a gender change that would
  drop the person as a parent in a family needs `--yes`.
- `remove-person ID...`
- `add-family [--father ID] [--mother ID] [--child ID]...` – only
  people allowed in that place are accepted (right gender, not already
  in the family, no loops between ancestors and descendants, children
  without another birth family).
- `edit-family ID [--father ID] [--mother ID] [--add-child ID]... [--remove-child ID]...`
- `remove-family ID...`
- `show ID` – the person's name, birth family and married families.
- `layout ID` – x, y and name of every box in the drawing rooted at the
  person.
- `save PATH` – write the tree to a JSON file.
- `load PATH` – replace the tree in memory with a JSON file and write it
  to the database.
- `autosave` – write the tree record and every person and family to the
  database.

`genesistree --help` and `genesistree COMMAND --help` describe the
options. Errors are printed to standard error and give exit status 1.

## Library

- `genesistree.tree.Tree` holds the people and families. `connect(path)`
  opens the database and creates its tables, `load()` reads it,
  `close()` closes it; a `Tree` is also a context manager. It has
  `add_person`, `update_person`, `delete_person`, `add_family`,
  `update_family`, `delete_family`, the `people` and `families`
  properties (copies ordered by id), `ancestors`, `descendants`,
  `children_of`, `birth_family`, `married_families`, `save_file`,
  `load_file`, `autosave`, `clear` and `is_empty`. Database failures
  raise `genesistree.tree.DatabaseError`.
- `genesistree.enums` – `Gender`, `Relation`, `SiblingType`,
  `gender_to_string` and `gender_from_string`.
- `genesistree.person` – `Person`, `relation_label`, `sibling_label`.
- `genesistree.family` – `Family`, `ChildRelation`, `FamilyRecord`.
- `genesistree.filters` – `father_candidates`, `mother_candidates`,
  `child_candidates` and the filters they are built from.
- `genesistree.layout` – `layout_tree` returns a `TreeLayout` of `Node`
  boxes and `Line` segments; `node_color`, `birth_year_label` and
  `person_details` give what each box shows.
- `genesistree.views` – `render_person_view`, `birth_family_section`,
  `married_family_sections`, `spouse_title` and
  `needs_gender_confirmation`.

## What it does not do

There is no graphical window: the package works from the command line
and as a library. `layout_tree` and the `layout` command only compute
positions and lines; nothing is drawn on screen or written as an image.