import random

import pytest

from family_quiz.relations import FamilyMember


def make_member(member_id, name, relation, side=None):
    return FamilyMember.from_dict({"id": member_id, "name": name, "relationToEgo": relation, "side": side})


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def family():
    return [
        make_member("1", "Raj", "Father"),
        make_member("2", "Lakshmi", "Mother"),
        make_member("3", "Deepa", "Sister"),
        make_member("4", "Arjun", "Brother"),
        make_member("5", "Meena", "Grandma"),
        make_member("6", "Anu", "Neighbor"),
    ]
