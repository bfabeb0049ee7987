"""Fusion resolver: decides what a capture turns into.

Given the shapes caught by one loop, the resolver partitions them into
combine groups (2 or 3 shapes that fuse into one) and an explode set
(shapes that could not be paired and are ejected instead).

Group formation, repeated until the pool is empty:

1. Pop the most recently enumerated shape ``e`` from the pool.
2. Complement rule: if the pool holds ``e``'s complement, remove it and
   form a pair that fuses into the terminal kind.
3. Triple-primary rule: otherwise, if ``e`` is primary, look for the two
   other primaries. Both found: a triple fusing into the terminal kind.
   One found: a pair fusing into their secondary. None found: ``e`` explodes.
4. A non-primary ``e`` without its complement explodes.

Tie-break contract: the pool is popped from the end and every partner
search also scans from the end, so when several pairings are possible the
most recently captured shapes are resolved together first.

The resolver never fails on gameplay input; an unpairable shape is routed
to the explode set. A hole in the category table raises SimulationError.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Sequence, Tuple

from lasso.containment import CapturedEntity
from lasso.exceptions import SimulationError
from lasso.kinds import (
    PRIMARY_KINDS,
    TERMINAL_KIND,
    ShapeKind,
    complement,
    is_primary,
    pair_combine,
)
from lasso.math_utils import Vector2, mean_vector


class CaptureVerdict(Enum):
    """Count-based dispatch of a capture."""

    EMPTY = auto()  # Nothing caught: restore a remainder or stop drawing
    SINGLE = auto()  # One shape is not a valid capture: stop drawing
    RESOLVE = auto()  # Two or more: run group formation


def classify_capture(count: int) -> CaptureVerdict:
    if count == 0:
        return CaptureVerdict.EMPTY
    if count == 1:
        return CaptureVerdict.SINGLE
    return CaptureVerdict.RESOLVE


@dataclass(frozen=True)
class CombineGroup:
    """Shapes that fuse into a single shape of ``result_kind``."""

    members: Tuple[CapturedEntity, ...]
    result_kind: ShapeKind
    velocity: Vector2

    @property
    def member_ids(self) -> Tuple[int, ...]:
        return tuple(member.shape_id for member in self.members)

    @property
    def is_terminal(self) -> bool:
        return self.result_kind is TERMINAL_KIND


@dataclass(frozen=True)
class FusionResult:
    """Complete partition of one capture."""

    groups: Tuple[CombineGroup, ...]
    explode: Tuple[CapturedEntity, ...]

    @property
    def involved(self) -> Tuple[CapturedEntity, ...]:
        """Every captured shape: group members in group order, then the explode set."""
        members = tuple(member for group in self.groups for member in group.members)
        return members + self.explode

    @property
    def produces_terminal(self) -> bool:
        return any(group.is_terminal for group in self.groups)


def _take_last(pool: List[CapturedEntity], kind: Optional[ShapeKind]) -> Optional[CapturedEntity]:
    """Remove and return the last pool entry of ``kind``, if any."""
    if kind is None:
        return None
    for index in range(len(pool) - 1, -1, -1):
        if pool[index].kind is kind:
            return pool.pop(index)
    return None


def _group(members: Sequence[CapturedEntity], result_kind: ShapeKind) -> CombineGroup:
    return CombineGroup(
        members=tuple(members),
        result_kind=result_kind,
        velocity=mean_vector(member.velocity for member in members),
    )


def resolve_fusion(captured: Sequence[CapturedEntity]) -> FusionResult:
    """Partition captured shapes into combine groups and an explode set.

    Every input shape ends up in exactly one group or in the explode set.
    """
    pool = list(captured)
    groups: List[CombineGroup] = []
    explode: List[CapturedEntity] = []

    while pool:
        entity = pool.pop()

        partner = _take_last(pool, complement(entity.kind))
        if partner is not None:
            groups.append(_group((entity, partner), TERMINAL_KIND))
            continue

        if not is_primary(entity.kind):
            explode.append(entity)
            continue

        # Search order is fixed by the enum so the result is deterministic
        others = [kind for kind in ShapeKind if kind in PRIMARY_KINDS and kind is not entity.kind]
        found = [_take_last(pool, kind) for kind in others]
        partners = [member for member in found if member is not None]

        if len(partners) == 2:
            groups.append(_group((entity, *partners), TERMINAL_KIND))
        elif len(partners) == 1:
            result_kind = pair_combine(entity.kind, partners[0].kind)
            if result_kind is None:
                raise SimulationError(
                    f"No pair rule for primaries {entity.kind.value} and {partners[0].kind.value}"
                )
            groups.append(_group((entity, partners[0]), result_kind))
        else:
            explode.append(entity)

    return FusionResult(groups=tuple(groups), explode=tuple(explode))
