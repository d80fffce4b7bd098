import os
import logging
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from family_quiz.pairs import PAIR_RETRY_BUDGET


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass
class QuizConfig:
    """Settings for a quiz session"""
    questions_per_round: int = 10
    points_per_correct: int = 10
    pair_retry_budget: int = PAIR_RETRY_BUDGET
    seed: Optional[int] = None
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "QuizConfig":
        """Read settings from the environment, loading a .env file first"""
        load_dotenv(dotenv_path)

        config = cls(
            questions_per_round=_env_int("FAMILY_QUIZ_QUESTIONS_PER_ROUND", 10),
            points_per_correct=_env_int("FAMILY_QUIZ_POINTS_PER_CORRECT", 10),
            pair_retry_budget=_env_int("FAMILY_QUIZ_PAIR_RETRY_BUDGET", PAIR_RETRY_BUDGET),
            seed=_env_int("FAMILY_QUIZ_SEED", None),
            log_level=os.environ.get("FAMILY_QUIZ_LOG_LEVEL", "WARNING").strip().upper(),
        )
        if config.questions_per_round < 1:
            raise ValueError("FAMILY_QUIZ_QUESTIONS_PER_ROUND must be at least 1")
        if config.pair_retry_budget < 1:
            raise ValueError("FAMILY_QUIZ_PAIR_RETRY_BUDGET must be at least 1")
        return config


def setup_logging(level: str = "WARNING"):
    logging.basicConfig(level=getattr(logging, level, logging.WARNING),
                        format='[%(levelname)s] %(message)s')
