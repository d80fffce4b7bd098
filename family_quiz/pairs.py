"""Pair Selector / Session Tracker

Picks the two members a question is about while avoiding pairs that were
already asked in the session. The used-pair set is passed in and a new one
is returned; nothing is mutated.
"""

import random
import logging
from dataclasses import dataclass
from typing import AbstractSet, FrozenSet, Optional, Sequence

from family_quiz.relations import FamilyMember

PAIR_RETRY_BUDGET = 20


@dataclass(frozen=True)
class PairSelection:
    member_a: FamilyMember
    member_b: FamilyMember
    used_pairs: FrozenSet[str]
    reset: bool = False  # True when the used pairs ran out and were cleared

    @property
    def key(self) -> str:
        return pair_key(self.member_a.id, self.member_b.id)


def _escape_id(member_id: str) -> str:
    # dashes inside ids must not look like the separator
    return member_id.replace("\\", "\\\\").replace("-", "\\-")


def pair_key(id_a: str, id_b: str) -> str:
    """Unordered identity of two members: pair_key(a, b) == pair_key(b, a)"""
    return "-".join(_escape_id(member_id) for member_id in sorted([str(id_a), str(id_b)]))


def select_pair(members: Sequence[FamilyMember],
                used_pairs: AbstractSet[str] = frozenset(),
                rng: Optional[random.Random] = None,
                retry_budget: int = PAIR_RETRY_BUDGET) -> Optional[PairSelection]:
    """
    Select two distinct members that have not been asked about yet.

    Args:
        members: Current member snapshot
        used_pairs: Pair keys already asked this session
        rng: Random source; a fresh unseeded one when omitted
        retry_budget: Draws to try before giving up on unused pairs

    Returns:
        PairSelection with the updated used-pair set, or None when there are
        fewer than two members
    """
    if len(members) < 2:
        return None
    if rng is None:
        rng = random.Random()

    attempts = 0
    while True:
        member_a, member_b = rng.sample(list(members), 2)
        key = pair_key(member_a.id, member_b.id)
        attempts += 1
        if key not in used_pairs or attempts >= retry_budget:
            break

    reset = key in used_pairs
    if reset:
        logging.warning(f"No unused member pair found after {attempts} draws; "
                        f"resetting {len(used_pairs)} used pairs")
        updated = frozenset([key])
    else:
        updated = frozenset(used_pairs) | {key}

    return PairSelection(member_a=member_a, member_b=member_b, used_pairs=updated, reset=reset)
