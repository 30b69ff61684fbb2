"""Placing the people of a tree on a plane for drawing."""

from __future__ import annotations

from dataclasses import dataclass, field

from genesistree.enums import Gender, gender_to_string
from genesistree.family import Family
from genesistree.person import Person
from genesistree.tree import Tree

NODE_WIDTH = 150.0
NODE_HEIGHT = 60.0
HORIZONTAL_SPACING = 80.0
VERTICAL_SPACING = 120.0
PARTNER_SPACING = 100.0

BOX_WIDTH = 150.0
BOX_HEIGHT = 50.0

MALE_COLOR = (173, 216, 230)
FEMALE_COLOR = (255, 182, 193)
UNKNOWN_COLOR = (160, 160, 164)
LINE_COLOR = "darkGray"


def node_color(person: Person) -> tuple[int, int, int]:
    """Fill colour of a person's box, chosen by gender."""
    if person.gender == Gender.MALE:
        return MALE_COLOR
    if person.gender == Gender.FEMALE:
        return FEMALE_COLOR
    return UNKNOWN_COLOR


def birth_year_label(person: Person) -> str:
    """The birth year, or "?" when the birth date is not known."""
    return str(person.birth_date.year) if person.birth_date else "?"


def person_details(person: Person) -> str:
    """Rich-text summary shown when a person's box is clicked."""
    born = person.birth_date.strftime("%Y-%m-%d") if person.birth_date else ""
    return (
        f"<b>{person.name}</b><br>Gender: {gender_to_string(person.gender)}"
        f"<br>Born: {born}"
    )


@dataclass
class Node:
    """A person's box at a position."""

    person: Person
    x: float
    y: float
    width: float = BOX_WIDTH
    height: float = BOX_HEIGHT

    @property
    def color(self) -> tuple[int, int, int]:
        return node_color(self.person)

    @property
    def birth_year(self) -> str:
        return birth_year_label(self.person)


@dataclass(frozen=True)
class Line:
    """A connecting line segment."""

    x1: float
    y1: float
    x2: float
    y2: float
    width: int = 1
    color: str = LINE_COLOR


@dataclass
class TreeLayout:
    """Boxes and lines of a drawn tree."""

    root: Person | None
    nodes: dict[Person, Node] = field(default_factory=dict)
    lines: list[Line] = field(default_factory=list)

    def position(self, person: Person) -> tuple[float, float] | None:
        node = self.nodes.get(person)
        return (node.x, node.y) if node else None

    @property
    def center(self) -> tuple[float, float] | None:
        """Where the view is centred: the root person's box."""
        return self.position(self.root) if self.root is not None else None


class _Builder:
    def __init__(self, tree: Tree, root: Person) -> None:
        self.tree = tree
        self.root = root
        self.layout = TreeLayout(root)

    def _place(self, person: Person, x: float, y: float) -> None:
        self.layout.nodes[person] = Node(person, x, y)

    def _placed(self, person: Person) -> bool:
        return person in self.layout.nodes

    def person(self, person: Person, x: float, y: float) -> tuple[tuple[float, float], float]:
        if self._placed(person):
            node = self.layout.nodes[person]
            return (node.x, node.y), 0.0
        self._place(person, x, y)
        total_width = NODE_WIDTH
        current_x = x
        for family in self.tree.married_families(person.id):
            width = self.family(family, current_x, y)
            total_width += width + HORIZONTAL_SPACING
            current_x += width + HORIZONTAL_SPACING
        return (x, y), total_width

    def family(self, family: Family, x: float, y: float) -> float:
        partner = family.mother if family.father is self.root else family.father
        if partner is not None and not self._placed(partner):
            self._place(partner, x + NODE_WIDTH + PARTNER_SPACING, y)
            self._partner_lines(self.root, [family])

        child_y = y + VERTICAL_SPACING + NODE_HEIGHT
        child_x = x
        max_child_width = 0.0
        for child in family.children:
            (pos_x, _), width = self.person(child, child_x, child_y)
            self._child_lines(x + NODE_WIDTH / 2, y + NODE_HEIGHT, pos_x + NODE_WIDTH / 2, child_y)
            child_x += width + HORIZONTAL_SPACING
            max_child_width = max(max_child_width, width)
        return max_child_width

    def _partner_lines(self, person: Person, families: list[Family]) -> None:
        own = self.layout.nodes.get(person)
        px, py = (own.x, own.y) if own else (0.0, 0.0)
        for family in families:
            partner = family.mother if family.father is person else family.father
            if partner is None or not self._placed(partner):
                continue
            other = self.layout.nodes[partner]
            self.layout.lines.append(
                Line(px + NODE_WIDTH, py + NODE_HEIGHT / 2, other.x, other.y + NODE_HEIGHT / 2, 2)
            )

    def _child_lines(self, parent_x: float, parent_y: float, child_x: float, child_y: float) -> None:
        bar_y = child_y - 20
        self.layout.lines.extend(
            (
                Line(parent_x, parent_y, parent_x, bar_y),
                Line(parent_x, bar_y, child_x, bar_y),
                Line(child_x, bar_y, child_x, child_y),
            )
        )


def layout_tree(tree: Tree, root_person: Person | None) -> TreeLayout:
    """Lay out the root person, their partners and descendants."""
    if root_person is None:
        return TreeLayout(None)
    builder = _Builder(tree, root_person)
    builder.person(root_person, 0.0, 0.0)
    return builder.layout