# practice_mocktest/core/utils.py
import math
import random
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, List, Optional, Sequence, TypeVar
from datetime import datetime, timezone

from bson import ObjectId
from bson.errors import InvalidId

from .config import config

T = TypeVar("T")

DIFFICULTIES = ("easy", "medium", "hard")
SELECTION_DIFFICULTIES = DIFFICULTIES + ("mixed",)


class ValidationUtils:
    """Utility functions for data validation"""

    @staticmethod
    def validate_question_index(question_index: Any, total_questions: int) -> bool:
        """Validate zero-based question index"""
        if isinstance(question_index, bool) or not isinstance(question_index, int):
            return False
        return 0 <= question_index < total_questions

    @staticmethod
    def validate_answer(answer: Any) -> bool:
        """Answers are option indexes 0-3"""
        if isinstance(answer, bool) or not isinstance(answer, int):
            return False
        return 0 <= answer <= 3

    @staticmethod
    def validate_difficulty(difficulty: str, allow_mixed: bool = False) -> bool:
        allowed = SELECTION_DIFFICULTIES if allow_mixed else DIFFICULTIES
        return difficulty in allowed

    @staticmethod
    def validate_extension_minutes(minutes: Any) -> bool:
        return minutes in config.ALLOWED_EXTENSION_MINUTES and not isinstance(minutes, bool)


class DateTimeUtils:
    """Utility functions for date/time operations"""

    @staticmethod
    def now() -> datetime:
        """Current time, timezone-aware UTC"""
        return datetime.now(timezone.utc)

    @staticmethod
    def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
        """MongoDB hands back naive UTC datetimes unless the client is tz_aware"""
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @staticmethod
    def elapsed_seconds(start: datetime, end: Optional[datetime] = None) -> int:
        """Whole seconds between start and end (default: now), never negative"""
        end = end or DateTimeUtils.now()
        delta = DateTimeUtils.ensure_utc(end) - DateTimeUtils.ensure_utc(start)
        return max(0, math.floor(delta.total_seconds()))

    @staticmethod
    def format_time(seconds: int) -> str:
        """Format seconds as HH:MM:SS"""
        seconds = max(0, int(seconds))
        hours = seconds // 3600
        minutes = (seconds % 3600) // 60
        secs = seconds % 60
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"

    @staticmethod
    def to_iso(value: Optional[datetime]) -> Optional[str]:
        if value is None:
            return None
        return DateTimeUtils.ensure_utc(value).isoformat()


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Convert a string id to ObjectId, None when malformed"""
    if isinstance(value, ObjectId):
        return value
    if value is None:
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def shuffle(items: Sequence[T]) -> List[T]:
    """Uniform shuffle into a new list; the input is left untouched"""
    return random.sample(list(items), len(items))


def round2(value: float) -> float:
    """Round half-up to two decimal places"""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def calculate_test_duration(question_count: int) -> int:
    """Test duration in minutes: ceil(question_count * MINUTES_PER_QUESTION)"""
    # Round first so 5 * 1.2 = 6.000000000000001 does not become 7
    return math.ceil(round(question_count * config.MINUTES_PER_QUESTION, 6))
