"""Kinship Composition Table

Derives how two family members relate to each other from their separate
relations to the user. The table is keyed by the ordered pair of relation
types; each rule either names a role ("Raj is Lakshmi's Husband") or a
shared relation ("Raj and Deepa are Siblings"). Pairs with no rule get a
generic phrase that quotes both relations to the user.
"""

import functools
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Set, Tuple

from family_quiz.relations import Gender, RelationInfo, RelationType

IS_TEMPLATE = "{subject} is {object}'s {role}"
ARE_TEMPLATE = "{first} and {second} are {role}"
FALLBACK_TEMPLATE = "{name_a} (your {relation_a}) & {name_b} (your {relation_b})"


@dataclass(frozen=True)
class Relationship:
    """Composed relationship between two members"""
    phrase: str
    subject: str
    object: str
    role: Optional[str] = None  # None for the generic fallback
    symmetric: bool = False
    also_true: Tuple[str, ...] = ()

    @property
    def is_fallback(self) -> bool:
        return self.role is None


def _pick(gender: Optional[Gender], male: str, female: str, neutral: str) -> str:
    if gender == Gender.MALE:
        return male
    if gender == Gender.FEMALE:
        return female
    return neutral


def _possible(gender: Optional[Gender]) -> Set[Gender]:
    return {gender} if gender else {Gender.MALE, Gender.FEMALE}


@dataclass(frozen=True)
class RoleRule:
    """
    "{subject} is {object}'s {role}" with the role picked by the subject's
    gender. `subject` is "a" or "b".
    """
    subject: str
    male: str
    female: str
    neutral: str
    symmetric = False

    def apply(self, a: RelationInfo, b: RelationInfo, name_a: str, name_b: str) -> Optional[Relationship]:
        if self.subject == "a":
            subject, obj, gender = name_a, name_b, a.gender
        else:
            subject, obj, gender = name_b, name_a, b.gender

        role = _pick(gender, self.male, self.female, self.neutral)
        if gender is None:
            alternatives = [self.male, self.female]
        else:
            alternatives = [self.neutral]

        phrase = IS_TEMPLATE.format(subject=subject, object=obj, role=role)
        also_true = tuple(
            IS_TEMPLATE.format(subject=subject, object=obj, role=alt)
            for alt in alternatives if alt != role
        )
        return Relationship(phrase=phrase, subject=subject, object=obj, role=role,
                            symmetric=False, also_true=also_true)


@dataclass(frozen=True)
class SpouseRule:
    """
    "A is B's Husband/Wife". Declines when both genders are known and equal;
    says "Spouse" when either gender is unknown.
    """
    symmetric = False

    def apply(self, a: RelationInfo, b: RelationInfo, name_a: str, name_b: str) -> Optional[Relationship]:
        if a.gender and b.gender and a.gender == b.gender:
            return None

        if a.gender and b.gender:
            role = _pick(a.gender, "Husband", "Wife", "Spouse")
            alternatives = ["Spouse"]
        else:
            role = "Spouse"
            alternatives = [_pick(g, "Husband", "Wife", "Spouse") for g in sorted(_possible(a.gender), key=lambda g: g.value)]

        phrase = IS_TEMPLATE.format(subject=name_a, object=name_b, role=role)
        also_true = tuple(
            IS_TEMPLATE.format(subject=name_a, object=name_b, role=alt)
            for alt in alternatives if alt != role
        )
        return Relationship(phrase=phrase, subject=name_a, object=name_b, role=role,
                            symmetric=False, also_true=also_true)


@dataclass(frozen=True)
class GroupRule:
    """
    "A and B are {plural}". The plural is gendered only when both genders are
    known and agree, so the result is the same whichever member comes first.
    """
    plurals: Tuple[str, str, str]  # male, female, neutral
    singulars: Tuple[str, str, str]
    symmetric = True

    def apply(self, a: RelationInfo, b: RelationInfo, name_a: str, name_b: str) -> Optional[Relationship]:
        male_plural, female_plural, neutral_plural = self.plurals
        if a.gender and a.gender == b.gender:
            role = _pick(a.gender, male_plural, female_plural, neutral_plural)
        else:
            role = neutral_plural

        together = _possible(a.gender) & _possible(b.gender)
        true_plurals = [neutral_plural] + [_pick(g, male_plural, female_plural, neutral_plural) for g in together]
        true_singulars = [self.singulars[2]] + [_pick(g, *self.singulars) for g in _possible(a.gender)]

        phrase = ARE_TEMPLATE.format(first=name_a, second=name_b, role=role)
        also_true = []
        for plural in true_plurals:
            candidate = ARE_TEMPLATE.format(first=name_a, second=name_b, role=plural)
            if candidate != phrase and candidate not in also_true:
                also_true.append(candidate)
        for singular in true_singulars:
            candidate = IS_TEMPLATE.format(subject=name_a, object=name_b, role=singular)
            if candidate not in also_true:
                also_true.append(candidate)

        return Relationship(phrase=phrase, subject=name_a, object=name_b, role=role,
                            symmetric=True, also_true=tuple(also_true))


SIBLINGS = GroupRule(plurals=("Brothers", "Sisters", "Siblings"), singulars=("Brother", "Sister", "Sibling"))
COUSINS = GroupRule(plurals=("Cousins", "Cousins", "Cousins"), singulars=("Cousin", "Cousin", "Cousin"))
SPOUSES = SpouseRule()


@functools.lru_cache(None)
def get_composition_table() -> Dict[Tuple[RelationType, RelationType], object]:
    T = RelationType
    return {
        # === Couples ===
        (T.PARENT, T.PARENT): SPOUSES,
        (T.GRANDPARENT, T.GRANDPARENT): SPOUSES,
        (T.UNCLE_AUNT, T.UNCLE_AUNT): SPOUSES,
        (T.PARENT_IN_LAW, T.PARENT_IN_LAW): SPOUSES,

        # === Two generations apart ===
        (T.PARENT, T.CHILD): RoleRule("b", "Grandson", "Granddaughter", "Grandchild"),
        (T.CHILD, T.PARENT): RoleRule("b", "Grandfather", "Grandmother", "Grandparent"),
        (T.GRANDPARENT, T.SIBLING): RoleRule("b", "Grandson", "Granddaughter", "Grandchild"),
        (T.SIBLING, T.GRANDPARENT): RoleRule("b", "Grandfather", "Grandmother", "Grandparent"),
        (T.SPOUSE, T.GRANDCHILD): RoleRule("b", "Grandson", "Granddaughter", "Grandchild"),
        (T.GRANDCHILD, T.SPOUSE): RoleRule("b", "Grandfather", "Grandmother", "Grandparent"),

        # === Three generations apart ===
        (T.GRANDPARENT, T.CHILD): RoleRule("b", "Great-grandson", "Great-granddaughter", "Great-grandchild"),
        (T.CHILD, T.GRANDPARENT): RoleRule("b", "Great-grandfather", "Great-grandmother", "Great-grandparent"),
        (T.PARENT, T.GRANDCHILD): RoleRule("b", "Great-grandson", "Great-granddaughter", "Great-grandchild"),
        (T.GRANDCHILD, T.PARENT): RoleRule("b", "Great-grandfather", "Great-grandmother", "Great-grandparent"),

        # === One generation apart ===
        # a grandparent is taken to be on the father's side
        (T.GRANDPARENT, T.PARENT): RoleRule("b", "Son", "Daughter-in-law", "Child"),
        (T.PARENT, T.SIBLING): RoleRule("b", "Son", "Daughter", "Child"),
        (T.SIBLING, T.PARENT): RoleRule("b", "Father", "Mother", "Parent"),
        (T.SPOUSE, T.CHILD): RoleRule("b", "Son", "Daughter", "Child"),
        (T.CHILD, T.SPOUSE): RoleRule("b", "Father", "Mother", "Parent"),
        (T.SPOUSE, T.PARENT_IN_LAW): RoleRule("b", "Father", "Mother", "Parent"),
        (T.PARENT_IN_LAW, T.SPOUSE): RoleRule("b", "Son", "Daughter", "Child"),

        # === In-laws ===
        (T.SPOUSE, T.PARENT): RoleRule("b", "Father-in-law", "Mother-in-law", "Parent-in-law"),
        (T.PARENT, T.SPOUSE): RoleRule("b", "Son-in-law", "Daughter-in-law", "Child-in-law"),
        (T.SPOUSE, T.CHILD_IN_LAW): RoleRule("b", "Son-in-law", "Daughter-in-law", "Child-in-law"),
        (T.CHILD_IN_LAW, T.SPOUSE): RoleRule("b", "Father-in-law", "Mother-in-law", "Parent-in-law"),
        (T.SPOUSE, T.SIBLING): RoleRule("b", "Brother-in-law", "Sister-in-law", "Sibling-in-law"),
        (T.SIBLING, T.SPOUSE): RoleRule("b", "Brother-in-law", "Sister-in-law", "Sibling-in-law"),

        # === Same generation ===
        (T.SIBLING, T.SIBLING): SIBLINGS,
        (T.CHILD, T.CHILD): SIBLINGS,
        (T.UNCLE_AUNT, T.PARENT): SIBLINGS,
        (T.PARENT, T.UNCLE_AUNT): SIBLINGS,
        (T.COUSIN, T.COUSIN): COUSINS,
    }


def symmetric_pairs() -> FrozenSet[Tuple[RelationType, RelationType]]:
    return frozenset(key for key, rule in get_composition_table().items() if rule.symmetric)


def fallback_phrase(a: RelationInfo, b: RelationInfo, name_a: str, name_b: str) -> str:
    return FALLBACK_TEMPLATE.format(
        name_a=name_a,
        relation_a=a.text or "relative",
        name_b=name_b,
        relation_b=b.text or "relative",
    )


def compose(a: RelationInfo, b: RelationInfo, name_a: str, name_b: str) -> Relationship:
    """
    Compose two relations to the user into a relationship between the members.

    Args:
        a: Normalized relation of the first member
        b: Normalized relation of the second member
        name_a: Display name of the first member
        name_b: Display name of the second member

    Returns:
        Relationship; the generic fallback when no rule covers (a.type, b.type)
        or the matching rule declines
    """
    rule = get_composition_table().get((a.type, b.type))
    relationship = rule.apply(a, b, name_a, name_b) if rule else None
    if relationship is None:
        relationship = Relationship(phrase=fallback_phrase(a, b, name_a, name_b),
                                    subject=name_a, object=name_b)
    return relationship


def relate(a: RelationInfo, b: RelationInfo, name_a: str, name_b: str) -> str:
    """Sentence describing how member A and member B are related"""
    return compose(a, b, name_a, name_b).phrase
