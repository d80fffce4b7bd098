"""Question Builder

Assembles a quiz question from a member list: pick a pair, compose their
relationship, add distractors.
"""

import random
from dataclasses import dataclass
from typing import AbstractSet, FrozenSet, Optional, Sequence, Tuple

from family_quiz.composition import compose
from family_quiz.distractors import generate_options
from family_quiz.pairs import PAIR_RETRY_BUDGET, pair_key, select_pair
from family_quiz.relations import FamilyMember, normalize


@dataclass(frozen=True)
class QuizQuestion:
    member_a: FamilyMember
    member_b: FamilyMember
    correct_relation: str
    options: Tuple[str, ...]

    @property
    def pair_key(self) -> str:
        return pair_key(self.member_a.id, self.member_b.id)

    @property
    def answer_index(self) -> int:
        return self.options.index(self.correct_relation)

    def is_correct(self, option: str) -> bool:
        return option == self.correct_relation

    def to_dict(self):
        return {
            "member_a": self.member_a.to_dict(),
            "member_b": self.member_b.to_dict(),
            "correct_relation": self.correct_relation,
            "options": list(self.options),
        }


def question_for_pair(member_a: FamilyMember, member_b: FamilyMember,
                      rng: Optional[random.Random] = None) -> QuizQuestion:
    """Build the question for an already chosen pair"""
    relationship = compose(
        normalize(member_a.relation_to_ego),
        normalize(member_b.relation_to_ego),
        member_a.name,
        member_b.name,
    )
    options = generate_options(
        relationship.phrase,
        relationship.subject,
        relationship.object,
        rng=rng,
        exclude=relationship.also_true,
    )
    return QuizQuestion(
        member_a=member_a,
        member_b=member_b,
        correct_relation=relationship.phrase,
        options=tuple(options),
    )


def build_question(members: Sequence[FamilyMember],
                   used_pairs: AbstractSet[str] = frozenset(),
                   rng: Optional[random.Random] = None,
                   retry_budget: int = PAIR_RETRY_BUDGET) -> Optional[Tuple[QuizQuestion, FrozenSet[str]]]:
    """
    Build the next quiz question.

    Args:
        members: Current member snapshot
        used_pairs: Pair keys already asked this session
        rng: Random source shared by pair selection and option shuffling
        retry_budget: Pair draws to try before the used pairs are reset

    Returns:
        (question, updated used pairs), or None when there are fewer than two
        members to ask about
    """
    if rng is None:
        rng = random.Random()

    selection = select_pair(members, used_pairs, rng=rng, retry_budget=retry_budget)
    if selection is None:
        return None

    question = question_for_pair(selection.member_a, selection.member_b, rng=rng)
    return question, selection.used_pairs
