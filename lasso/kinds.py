"""Shape categories and their colour-combination rules.

There are three primary kinds. Any two distinct primaries combine into a
secondary kind, and each primary's complement is the secondary made from
the other two primaries. A primary with its complement, or all three
primaries together, produce the terminal WHITE kind.

    RED + GREEN  -> YELLOW        RED   + CYAN   -> WHITE
    RED + BLUE   -> PURPLE        GREEN + PURPLE -> WHITE
    GREEN + BLUE -> CYAN          BLUE  + YELLOW -> WHITE
    RED + GREEN + BLUE -> WHITE

All lookups are symmetric. Any pair not listed (identical kinds included)
does not combine.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional

__all__ = [
    "ShapeKind",
    "PRIMARY_KINDS",
    "TERMINAL_KIND",
    "pair_combine",
    "complement",
    "is_primary",
    "is_terminal",
]


class ShapeKind(Enum):
    """Category of a shape on the field."""

    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    PURPLE = "purple"
    YELLOW = "yellow"
    CYAN = "cyan"
    WHITE = "white"


PRIMARY_KINDS: FrozenSet[ShapeKind] = frozenset({ShapeKind.RED, ShapeKind.GREEN, ShapeKind.BLUE})
TERMINAL_KIND = ShapeKind.WHITE

_COMPLEMENTS: Dict[ShapeKind, ShapeKind] = {
    ShapeKind.RED: ShapeKind.CYAN,
    ShapeKind.GREEN: ShapeKind.PURPLE,
    ShapeKind.BLUE: ShapeKind.YELLOW,
    ShapeKind.CYAN: ShapeKind.RED,
    ShapeKind.PURPLE: ShapeKind.GREEN,
    ShapeKind.YELLOW: ShapeKind.BLUE,
}

_PAIR_RESULTS: Dict[FrozenSet[ShapeKind], ShapeKind] = {
    frozenset({ShapeKind.RED, ShapeKind.GREEN}): ShapeKind.YELLOW,
    frozenset({ShapeKind.RED, ShapeKind.BLUE}): ShapeKind.PURPLE,
    frozenset({ShapeKind.GREEN, ShapeKind.BLUE}): ShapeKind.CYAN,
}
_PAIR_RESULTS.update(
    {frozenset({kind, other}): TERMINAL_KIND for kind, other in _COMPLEMENTS.items()}
)


def pair_combine(first: ShapeKind, second: ShapeKind) -> Optional[ShapeKind]:
    """Return the kind two shapes fuse into, or None if they don't combine."""
    if first is second:
        return None
    return _PAIR_RESULTS.get(frozenset({first, second}))


def complement(kind: ShapeKind) -> Optional[ShapeKind]:
    """Return the complementary kind, or None for the terminal kind."""
    return _COMPLEMENTS.get(kind)


def is_primary(kind: ShapeKind) -> bool:
    return kind in PRIMARY_KINDS


def is_terminal(kind: ShapeKind) -> bool:
    return kind is TERMINAL_KIND
