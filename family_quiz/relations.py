"""Relation Normalizer

Maps the free-text relation a user typed for a family member ("Grandma",
"son-in-law", "Dad") to a canonical relation type and, where the word
carries one, a gender.
"""

import re
import functools
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class RelationType(Enum):
    PARENT = "parent"
    CHILD = "child"
    SPOUSE = "spouse"
    SIBLING = "sibling"
    GRANDPARENT = "grandparent"
    GRANDCHILD = "grandchild"
    UNCLE_AUNT = "uncleAunt"
    NEPHEW_NIECE = "nephewNiece"
    COUSIN = "cousin"
    PARENT_IN_LAW = "parentInLaw"
    CHILD_IN_LAW = "childInLaw"
    SIBLING_IN_LAW = "siblingInLaw"
    FRIEND = "friend"
    OTHER = "other"


class Gender(Enum):
    MALE = "male"
    FEMALE = "female"


class Side(Enum):
    PATERNAL = "paternal"
    MATERNAL = "maternal"
    SELF = "self"
    FRIEND = "friend"


@dataclass(frozen=True)
class RelationInfo:
    """Normalized relation of one member to the user"""
    type: RelationType
    gender: Optional[Gender] = None
    text: str = ""


@dataclass(frozen=True)
class FamilyMember:
    """A family member record as supplied by the family-tree store"""
    id: str
    name: str
    relation_to_ego: str
    side: Optional[Side] = None

    @classmethod
    def from_dict(cls, record: Dict) -> "FamilyMember":
        """
        Build a member from a store record.

        Args:
            record: Mapping with an id, a name and the relation to the user
                under any of the keys the app has used for it

        Returns:
            FamilyMember

        Raises:
            ValueError: If the record has no id or no name
        """
        member_id = record.get("id")
        name = record.get("name")
        if member_id is None or str(member_id).strip() == "":
            raise ValueError(f"Family member record has no id: {record}")
        if not name or not str(name).strip():
            raise ValueError(f"Family member {member_id} has no name")

        relation = ""
        for key in ("relationToEgo", "relation_to_ego", "relation", "relationship"):
            if record.get(key):
                relation = str(record[key])
                break

        side = None
        raw_side = record.get("side")
        if raw_side:
            try:
                side = Side(str(raw_side).strip().lower())
            except ValueError:
                side = None

        return cls(id=str(member_id), name=str(name).strip(), relation_to_ego=relation, side=side)

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "name": self.name,
            "relationToEgo": self.relation_to_ego,
            "side": self.side.value if self.side else None,
        }


@functools.lru_cache(None)
def get_relation_vocabulary() -> Dict[str, Tuple[RelationType, Optional[Gender]]]:
    M, F = Gender.MALE, Gender.FEMALE
    return {
        # === Parents ===
        "father": (RelationType.PARENT, M),
        "dad": (RelationType.PARENT, M),
        "daddy": (RelationType.PARENT, M),
        "papa": (RelationType.PARENT, M),
        "pa": (RelationType.PARENT, M),
        "mother": (RelationType.PARENT, F),
        "mom": (RelationType.PARENT, F),
        "mommy": (RelationType.PARENT, F),
        "mum": (RelationType.PARENT, F),
        "mummy": (RelationType.PARENT, F),
        "ma": (RelationType.PARENT, F),

        # === Children ===
        "son": (RelationType.CHILD, M),
        "daughter": (RelationType.CHILD, F),
        "child": (RelationType.CHILD, None),

        # === Spouse ===
        "husband": (RelationType.SPOUSE, M),
        "wife": (RelationType.SPOUSE, F),
        "spouse": (RelationType.SPOUSE, None),
        "partner": (RelationType.SPOUSE, None),

        # === Siblings ===
        "brother": (RelationType.SIBLING, M),
        "bro": (RelationType.SIBLING, M),
        "sister": (RelationType.SIBLING, F),
        "sis": (RelationType.SIBLING, F),
        "sibling": (RelationType.SIBLING, None),

        # === Grandparents ===
        "grandfather": (RelationType.GRANDPARENT, M),
        "grandpa": (RelationType.GRANDPARENT, M),
        "granddad": (RelationType.GRANDPARENT, M),
        "grandad": (RelationType.GRANDPARENT, M),
        "gramps": (RelationType.GRANDPARENT, M),
        "grandmother": (RelationType.GRANDPARENT, F),
        "grandma": (RelationType.GRANDPARENT, F),
        "granny": (RelationType.GRANDPARENT, F),
        "grandparent": (RelationType.GRANDPARENT, None),

        # === Grandchildren ===
        "grandson": (RelationType.GRANDCHILD, M),
        "granddaughter": (RelationType.GRANDCHILD, F),
        "grandchild": (RelationType.GRANDCHILD, None),
        "grandkid": (RelationType.GRANDCHILD, None),

        # === Uncles / aunts ===
        "uncle": (RelationType.UNCLE_AUNT, M),
        "aunt": (RelationType.UNCLE_AUNT, F),
        "auntie": (RelationType.UNCLE_AUNT, F),
        "aunty": (RelationType.UNCLE_AUNT, F),
        "aunt/uncle": (RelationType.UNCLE_AUNT, None),
        "uncle/aunt": (RelationType.UNCLE_AUNT, None),

        # === Nephews / nieces ===
        "nephew": (RelationType.NEPHEW_NIECE, M),
        "niece": (RelationType.NEPHEW_NIECE, F),

        # === Cousins ===
        "cousin": (RelationType.COUSIN, None),
        "cousin brother": (RelationType.COUSIN, M),
        "cousin sister": (RelationType.COUSIN, F),

        # === In-laws ===
        "father-in-law": (RelationType.PARENT_IN_LAW, M),
        "mother-in-law": (RelationType.PARENT_IN_LAW, F),
        "parent-in-law": (RelationType.PARENT_IN_LAW, None),
        "son-in-law": (RelationType.CHILD_IN_LAW, M),
        "daughter-in-law": (RelationType.CHILD_IN_LAW, F),
        "child-in-law": (RelationType.CHILD_IN_LAW, None),
        "brother-in-law": (RelationType.SIBLING_IN_LAW, M),
        "sister-in-law": (RelationType.SIBLING_IN_LAW, F),
        "sibling-in-law": (RelationType.SIBLING_IN_LAW, None),

        # === Friends ===
        "friend": (RelationType.FRIEND, None),
        "best friend": (RelationType.FRIEND, None),
        "close friend": (RelationType.FRIEND, None),
    }


def _canonical_key(text: str) -> str:
    key = text.strip().casefold().replace("_", " ")
    key = re.sub(r"\s+", " ", key)
    # "son in law" and "son - in - law" spell the same term
    key = re.sub(r"\s*-\s*", "-", key)
    key = re.sub(r" in law$", "-in-law", key)
    return key


def normalize(relation_to_ego: Optional[str]) -> RelationInfo:
    """
    Normalize a relation-to-user string.

    Args:
        relation_to_ego: Free text entered for the member, may be blank or None

    Returns:
        RelationInfo; unrecognized text gives RelationType.OTHER with no gender
    """
    text = (relation_to_ego or "").strip()
    match = get_relation_vocabulary().get(_canonical_key(text))
    if match is None:
        return RelationInfo(type=RelationType.OTHER, gender=None, text=text)
    relation_type, gender = match
    return RelationInfo(type=relation_type, gender=gender, text=text)
