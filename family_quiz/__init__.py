from family_quiz.relations import FamilyMember, Gender, RelationInfo, RelationType, Side, normalize
from family_quiz.composition import Relationship, compose, relate
from family_quiz.distractors import generate_options
from family_quiz.pairs import PairSelection, pair_key, select_pair
from family_quiz.question import QuizQuestion, build_question
from family_quiz.session import QuizSession, QuizState
from family_quiz.config import QuizConfig

__all__ = [
    "FamilyMember", "Gender", "RelationInfo", "RelationType", "Side", "normalize",
    "Relationship", "compose", "relate",
    "generate_options",
    "PairSelection", "pair_key", "select_pair",
    "QuizQuestion", "build_question",
    "QuizSession", "QuizState",
    "QuizConfig",
]
