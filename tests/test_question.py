import random

import pytest

from family_quiz.question import build_question, question_for_pair
from tests.conftest import make_member


def test_insufficient_members_returns_none(rng):
    assert build_question([], frozenset(), rng) is None
    assert build_question([make_member("1", "Raj", "Father")], frozenset(), rng) is None


def test_question_shape(family, rng):
    question, used_pairs = build_question(family, frozenset(), rng)
    assert question.member_a.id != question.member_b.id
    assert len(question.options) == 4
    assert len(set(question.options)) == 4
    assert question.options.count(question.correct_relation) == 1
    assert question.options[question.answer_index] == question.correct_relation
    assert used_pairs == frozenset({question.pair_key})


def test_parents_question():
    raj = make_member("1", "Raj", "Father")
    lakshmi = make_member("2", "Lakshmi", "Mother")
    question = question_for_pair(raj, lakshmi, random.Random(5))
    assert question.correct_relation == "Raj is Lakshmi's Husband"
    assert "Raj is Lakshmi's Spouse" not in question.options


def test_distractors_follow_the_subject_of_the_correct_phrase():
    son = make_member("1", "Kiran", "Son")
    dad = make_member("2", "Raj", "Dad")
    for seed in range(20):
        question = question_for_pair(son, dad, random.Random(seed))
        assert question.correct_relation == "Raj is Kiran's Grandfather"
        for option in question.options:
            assert option.startswith("Raj ")


def test_no_option_is_also_true_for_siblings():
    raj = make_member("1", "Raj", "Brother")
    deepa = make_member("2", "Deepa", "Sister")
    for seed in range(50):
        question = question_for_pair(raj, deepa, random.Random(seed))
        assert question.correct_relation == "Raj and Deepa are Siblings"
        assert "Raj is Deepa's Brother" not in question.options


def test_fallback_question():
    anu = make_member("1", "Anu", "Neighbor")
    ravi = make_member("2", "Ravi", "Father")
    question = question_for_pair(anu, ravi, random.Random(0))
    assert question.correct_relation == "Anu (your Neighbor) & Ravi (your Father)"
    assert len(set(question.options)) == 4


def test_used_pairs_thread_through(family):
    rng = random.Random(9)
    used = frozenset()
    keys = []
    for _ in range(5):
        question, used = build_question(family, used, rng)
        keys.append(question.pair_key)
    assert len(set(keys)) == 5
    assert used == frozenset(keys)


def test_question_is_frozen(family, rng):
    question, _ = build_question(family, frozenset(), rng)
    with pytest.raises(AttributeError):
        question.correct_relation = "changed"
