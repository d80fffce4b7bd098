"""Quiz Session

Game loop around the question builder for one player: question counter,
score, streak and the session's used member pairs.

    ready -> playing -> answered -> playing ... -> round_complete -> game_over
"""

import random
import logging
from enum import Enum
from typing import FrozenSet, List, Optional, Sequence

from family_quiz.config import QuizConfig
from family_quiz.question import QuizQuestion, build_question
from family_quiz.relations import FamilyMember


class QuizState(Enum):
    READY = "ready"
    PLAYING = "playing"
    ANSWERED = "answered"
    ROUND_COMPLETE = "round_complete"
    GAME_OVER = "game_over"


class QuizSession:
    """One player's Family Quiz session"""

    def __init__(self, members: Sequence[FamilyMember],
                 rng: Optional[random.Random] = None,
                 config: Optional[QuizConfig] = None):
        self.config = config or QuizConfig()
        if rng is None:
            rng = random.Random(self.config.seed)
        self.rng = rng
        self.members: List[FamilyMember] = list(members)
        self.used_pairs: FrozenSet[str] = frozenset()
        self.state = QuizState.READY
        self.current_question: Optional[QuizQuestion] = None
        self.question_number = 0
        self.score = 0
        self.streak = 0
        self.best_streak = 0
        self.correct_answers = 0

    def update_members(self, members: Sequence[FamilyMember]):
        """Replace the member snapshot used for the following questions"""
        self.members = list(members)

    def next_question(self) -> Optional[QuizQuestion]:
        """
        Move on to the next question.

        Returns:
            The new question, or None when the quiz cannot continue (fewer
            than two members, or the round is over)
        """
        if self.state == QuizState.PLAYING:
            return self.current_question
        if self.state in (QuizState.ROUND_COMPLETE, QuizState.GAME_OVER):
            self.state = QuizState.GAME_OVER
            self.current_question = None
            return None

        result = build_question(self.members, self.used_pairs, rng=self.rng,
                                retry_budget=self.config.pair_retry_budget)
        if result is None:
            logging.warning(f"Family quiz needs at least 2 members, have {len(self.members)}")
            self.state = QuizState.READY
            self.current_question = None
            return None

        self.current_question, self.used_pairs = result
        self.question_number += 1
        self.state = QuizState.PLAYING
        return self.current_question

    def answer(self, option: str) -> bool:
        """
        Answer the current question.

        Args:
            option: One of the current question's options

        Returns:
            True if the answer was correct

        Raises:
            RuntimeError: If no question is waiting for an answer
            ValueError: If the option is not one of the question's options
        """
        if self.state != QuizState.PLAYING or self.current_question is None:
            raise RuntimeError(f"No question to answer in state '{self.state.value}'")
        if option not in self.current_question.options:
            raise ValueError(f"'{option}' is not an option of the current question")

        is_correct = self.current_question.is_correct(option)
        if is_correct:
            self.score += self.config.points_per_correct
            self.correct_answers += 1
            self.streak += 1
            self.best_streak = max(self.best_streak, self.streak)
        else:
            self.streak = 0

        if self.question_number >= self.config.questions_per_round:
            self.state = QuizState.ROUND_COMPLETE
        else:
            self.state = QuizState.ANSWERED
        return is_correct

    def play_again(self) -> Optional[QuizQuestion]:
        """Start a new round from scratch"""
        self.used_pairs = frozenset()
        self.state = QuizState.READY
        self.current_question = None
        self.question_number = 0
        self.score = 0
        self.streak = 0
        self.best_streak = 0
        self.correct_answers = 0
        return self.next_question()

    @property
    def is_over(self) -> bool:
        return self.state == QuizState.GAME_OVER

    def summary(self):
        return {
            "questions": self.question_number,
            "correct": self.correct_answers,
            "score": self.score,
            "best_streak": self.best_streak,
        }
