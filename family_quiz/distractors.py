"""Distractor Generator

Builds the answer options of a quiz question: the correct phrase plus wrong
phrases written with the same templates, so every option reads alike.
"""

import random
import functools
from typing import Iterable, List, Optional

from family_quiz.composition import ARE_TEMPLATE, IS_TEMPLATE

NUM_OPTIONS = 4


@functools.lru_cache(None)
def get_distractor_roles():
    return (
        "Father", "Mother", "Son", "Daughter",
        "Husband", "Wife", "Brother", "Sister",
        "Grandfather", "Grandmother", "Grandson", "Granddaughter",
        "Uncle", "Aunt", "Nephew", "Niece", "Cousin",
        "Father-in-law", "Mother-in-law", "Son-in-law", "Daughter-in-law",
        "Brother-in-law", "Sister-in-law",
    )


@functools.lru_cache(None)
def get_distractor_plurals():
    return ("Siblings", "Brothers", "Sisters", "Cousins")


def candidate_pool(name_a: str, name_b: str) -> List[str]:
    pool = [IS_TEMPLATE.format(subject=name_a, object=name_b, role=role) for role in get_distractor_roles()]
    pool += [ARE_TEMPLATE.format(first=name_a, second=name_b, role=plural) for plural in get_distractor_plurals()]
    return pool


def generate_options(correct: str, name_a: str, name_b: str,
                     rng: Optional[random.Random] = None,
                     exclude: Iterable[str] = ()) -> List[str]:
    """
    Generate the shuffled answer options for a question.

    Args:
        correct: The correct relationship phrase
        name_a: Name used as the subject of the wrong phrases
        name_b: Name used as the object of the wrong phrases
        rng: Random source; a fresh unseeded one when omitted
        exclude: Phrases that must not be offered as wrong answers because
            they are also true

    Returns:
        NUM_OPTIONS distinct strings containing `correct` exactly once
    """
    if rng is None:
        rng = random.Random()

    excluded = set(exclude)
    excluded.add(correct)
    wrong_options = []
    for candidate in candidate_pool(name_a, name_b):
        if candidate not in excluded and candidate not in wrong_options:
            wrong_options.append(candidate)

    num_wrong_needed = NUM_OPTIONS - 1
    rng.shuffle(wrong_options)
    all_options = [correct] + wrong_options[:num_wrong_needed]
    rng.shuffle(all_options)
    return all_options
