import itertools

import pytest

from family_quiz.composition import RoleRule, SpouseRule, compose, get_composition_table, relate, symmetric_pairs
from family_quiz.relations import Gender, RelationInfo, RelationType, normalize

GENDERS = [Gender.MALE, Gender.FEMALE, None]


def info(relation_type, gender=None):
    return RelationInfo(type=relation_type, gender=gender, text=relation_type.value)


def test_parents_are_husband_and_wife():
    assert relate(normalize("Father"), normalize("Mother"), "Raj", "Lakshmi") == "Raj is Lakshmi's Husband"
    assert relate(normalize("Mother"), normalize("Father"), "Lakshmi", "Raj") == "Lakshmi is Raj's Wife"


def test_brother_and_sister_are_siblings():
    assert relate(normalize("Brother"), normalize("Sister"), "Raj", "Deepa") == "Raj and Deepa are Siblings"


def test_same_gender_siblings():
    assert relate(normalize("Brother"), normalize("bro"), "Raj", "Arjun") == "Raj and Arjun are Brothers"
    assert relate(normalize("Sister"), normalize("sis"), "Deepa", "Uma") == "Deepa and Uma are Sisters"


def test_unmapped_relation_falls_back_to_generic_phrase():
    phrase = relate(normalize("Neighbor"), normalize("Father"), "Anu", "Ravi")
    assert phrase == "Anu (your Neighbor) & Ravi (your Father)"


def test_child_and_parent_is_grandparent():
    assert relate(normalize("Son"), normalize("Dad"), "Kiran", "Raj") == "Raj is Kiran's Grandfather"
    assert relate(normalize("Dad"), normalize("Daughter"), "Raj", "Kavya") == "Kavya is Raj's Granddaughter"


def test_grandparents_children_follow_the_fathers_side():
    assert relate(normalize("Grandma"), normalize("Father"), "Meena", "Raj") == "Raj is Meena's Son"
    assert relate(normalize("Grandpa"), normalize("Mother"), "Krishnan", "Lakshmi") == "Lakshmi is Krishnan's Daughter-in-law"


def test_in_law_rules():
    assert relate(normalize("Wife"), normalize("Father"), "Priya", "Raj") == "Raj is Priya's Father-in-law"
    assert relate(normalize("Mother"), normalize("Husband"), "Lakshmi", "Vikram") == "Vikram is Lakshmi's Son-in-law"
    assert relate(normalize("Husband"), normalize("Sister"), "Vikram", "Deepa") == "Deepa is Vikram's Sister-in-law"


def test_neutral_gender_gives_neutral_role():
    assert relate(info(RelationType.CHILD), info(RelationType.PARENT), "A", "B") == "B is A's Grandparent"
    assert relate(normalize("Grandparent"), normalize("Son"), "A", "B") == "B is A's Great-grandson"


def test_spouse_rule_with_unknown_gender_says_spouse():
    assert relate(normalize("Aunt/Uncle"), normalize("aunt"), "A", "B") == "A is B's Spouse"


def test_same_gender_couple_rule_declines():
    relationship = compose(normalize("Uncle"), normalize("Uncle"), "Mohan", "Suresh")
    assert relationship.is_fallback
    assert relationship.phrase == "Mohan (your Uncle) & Suresh (your Uncle)"


def test_uncle_and_parent_are_siblings():
    assert relate(normalize("Uncle"), normalize("Dad"), "Mohan", "Raj") == "Mohan and Raj are Brothers"
    assert relate(normalize("Mom"), normalize("Uncle"), "Lakshmi", "Mohan") == "Lakshmi and Mohan are Siblings"


def test_cousins():
    assert relate(normalize("Cousin"), normalize("cousin sister"), "A", "B") == "A and B are Cousins"


def test_symmetric_rules_come_in_matching_pairs():
    table = get_composition_table()
    for a_type, b_type in symmetric_pairs():
        assert (b_type, a_type) in table
        assert table[(b_type, a_type)].symmetric


@pytest.mark.parametrize("key", sorted(symmetric_pairs(), key=lambda k: (k[0].value, k[1].value)))
def test_symmetric_rules_commute(key):
    a_type, b_type = key
    for a_gender, b_gender in itertools.product(GENDERS, GENDERS):
        forward = compose(info(a_type, a_gender), info(b_type, b_gender), "X", "Y")
        backward = compose(info(b_type, b_gender), info(a_type, a_gender), "Y", "X")
        assert forward.symmetric and backward.symmetric
        assert forward.role == backward.role


def test_directional_rules_do_not_commute():
    for key, rule in get_composition_table().items():
        if rule.symmetric:
            continue
        a_type, b_type = key
        forward = compose(info(a_type, Gender.MALE), info(b_type, Gender.FEMALE), "X", "Y")
        backward = compose(info(b_type, Gender.FEMALE), info(a_type, Gender.MALE), "Y", "X")
        assert not forward.symmetric
        assert forward.phrase != backward.phrase


def test_every_gender_combination_produces_a_phrase():
    for (a_type, b_type), _ in get_composition_table().items():
        for a_gender, b_gender in itertools.product(GENDERS, GENDERS):
            phrase = relate(info(a_type, a_gender), info(b_type, b_gender), "X", "Y")
            assert phrase
            assert "X" in phrase and "Y" in phrase


def expected_role(rule, a_gender, b_gender):
    if isinstance(rule, RoleRule):
        gender = a_gender if rule.subject == "a" else b_gender
        return {Gender.MALE: rule.male, Gender.FEMALE: rule.female, None: rule.neutral}[gender]
    if isinstance(rule, SpouseRule):
        if a_gender and b_gender:
            return None if a_gender == b_gender else {Gender.MALE: "Husband", Gender.FEMALE: "Wife"}[a_gender]
        return "Spouse"
    male, female, neutral = rule.plurals
    if a_gender and a_gender == b_gender:
        return male if a_gender == Gender.MALE else female
    return neutral


def test_gender_picks_the_matching_role():
    for (a_type, b_type), rule in get_composition_table().items():
        for a_gender, b_gender in itertools.product(GENDERS, GENDERS):
            relationship = compose(info(a_type, a_gender), info(b_type, b_gender), "X", "Y")
            assert relationship.role == expected_role(rule, a_gender, b_gender), (a_type, b_type, a_gender, b_gender)


def test_role_rules_distinguish_all_three_genders():
    for rule in get_composition_table().values():
        if isinstance(rule, RoleRule):
            assert len({rule.male, rule.female, rule.neutral}) == 3


def test_uncovered_pairs_use_fallback():
    table = get_composition_table()
    for a_type, b_type in itertools.product(RelationType, RelationType):
        if (a_type, b_type) in table:
            continue
        phrase = relate(info(a_type, Gender.MALE), info(b_type, Gender.FEMALE), "X", "Y")
        assert phrase == f"X (your {a_type.value}) & Y (your {b_type.value})"


def test_fallback_never_empty_for_blank_relations():
    phrase = relate(normalize(""), normalize("   "), "X", "Y")
    assert phrase == "X (your relative) & Y (your relative)"


def test_also_true_phrasings_for_siblings():
    relationship = compose(normalize("Brother"), normalize("Sister"), "Raj", "Deepa")
    assert "Raj is Deepa's Brother" in relationship.also_true
    assert "Raj is Deepa's Sibling" in relationship.also_true
    assert "Raj and Deepa are Brothers" not in relationship.also_true
    assert relationship.phrase not in relationship.also_true


def test_also_true_phrasings_for_unknown_gender_role():
    relationship = compose(info(RelationType.CHILD), info(RelationType.PARENT), "A", "B")
    assert set(relationship.also_true) == {"B is A's Grandfather", "B is A's Grandmother"}
