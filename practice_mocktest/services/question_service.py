# practice_mocktest/services/question_service.py
import logging
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional, Sequence, Set, Tuple

from pymongo.errors import PyMongoError

from ..core.config import config
from ..core.database import DatabaseManager, get_db_manager
from ..core.errors import AppError, DatabaseError, InsufficientQuestions, ValidationError
from ..core.models import Difficulty, Question
from ..core.utils import ValidationUtils, shuffle, to_object_id

logger = logging.getLogger(__name__)

MIXED = "mixed"


@dataclass
class TestConfig:
    """Requested shape of a test"""

    topics: List[str]
    difficulty: str = MIXED
    question_count: int = 10
    subtopics: List[str] = field(default_factory=list)

    def validate(self):
        fields = {}
        if not self.topics:
            fields["topics"] = "At least one topic is required"
        elif len(self.topics) > config.MAX_TOPICS:
            fields["topics"] = f"Maximum {config.MAX_TOPICS} topics allowed"
        elif any(not isinstance(topic, str) or not topic.strip() for topic in self.topics):
            fields["topics"] = "Topic cannot be empty"
        if any(not isinstance(subtopic, str) or not subtopic.strip() for subtopic in self.subtopics or []):
            fields["subtopics"] = "Subtopic cannot be empty"
        if not ValidationUtils.validate_difficulty(self.difficulty, allow_mixed=True):
            fields["difficulty"] = "Difficulty must be 'easy', 'medium', 'hard', or 'mixed'"
        if (isinstance(self.question_count, bool) or not isinstance(self.question_count, int)
                or not config.MIN_QUESTIONS <= self.question_count <= config.MAX_QUESTIONS):
            fields["questionCount"] = (
                f"Question count must be between {config.MIN_QUESTIONS} and {config.MAX_QUESTIONS}"
            )
        if fields:
            raise ValidationError("Invalid configuration", fields)


def build_question_query(topics: Optional[Sequence[str]] = None,
                         subtopics: Optional[Sequence[str]] = None,
                         difficulty: Optional[str] = None) -> Dict[str, Any]:
    """MongoDB filter for topic/subtopic/difficulty; 'mixed' means any difficulty"""
    query: Dict[str, Any] = {}
    if topics:
        query["topic"] = {"$in": list(topics)}
    if subtopics:
        query["subtopic"] = {"$in": list(subtopics)}
    if difficulty and difficulty != MIXED:
        query["difficulty"] = difficulty
    return query


def mixed_bucket_sizes(question_count: int) -> Tuple[int, int, int]:
    """Split a count into easy/medium/hard buckets; the remainder goes to the earlier buckets"""
    base, remainder = divmod(question_count, 3)
    return (
        base + (1 if remainder >= 1 else 0),
        base + (1 if remainder >= 2 else 0),
        base,
    )


def prioritize_unattempted(questions: Sequence[Question], count: int,
                           attempted_ids: Set[str]) -> List[Question]:
    """Shuffled unseen questions first, then shuffled repeats, truncated to count"""
    not_attempted = [q for q in questions if q.id not in attempted_ids]
    attempted = [q for q in questions if q.id in attempted_ids]
    combined = shuffle(not_attempted) + shuffle(attempted)
    return combined[:count]


class QuestionService:
    """Read-side access to the question bank and the test question selector"""

    def __init__(self, db_manager: Optional[DatabaseManager] = None):
        self.db_manager = db_manager or get_db_manager()

    def count_matching(self, topics: Sequence[str], subtopics: Optional[Sequence[str]] = None,
                       difficulty: str = MIXED) -> int:
        """Number of questions satisfying the filter"""
        try:
            return self.db_manager.count_questions(build_question_query(topics, subtopics, difficulty))
        except PyMongoError as e:
            logger.error(f"❌ Question count failed: {e}")
            raise DatabaseError("Failed to count questions")

    def select_for_test(self, test_config: TestConfig, user_id: str) -> List[Question]:
        """Pick a fresh, balanced, shuffled question set for a new test"""
        test_config.validate()

        try:
            query = build_question_query(test_config.topics, test_config.subtopics, test_config.difficulty)
            available = [Question.from_document(doc) for doc in self.db_manager.find_questions(query)]

            requested = test_config.question_count
            if len(available) < requested:
                raise InsufficientQuestions(len(available), requested)

            attempted_ids = set(self.db_manager.attempted_question_ids(user_id))

            if test_config.difficulty == MIXED:
                selected = self._select_mixed(available, requested, attempted_ids)
            else:
                selected = prioritize_unattempted(available, requested, attempted_ids)

            logger.info(
                f"🎯 Selected {len(selected)}/{requested} questions for {user_id} "
                f"({test_config.difficulty}, {len(available)} available, {len(attempted_ids)} seen before)"
            )

            # Final shuffle hides bucket and novelty ordering
            return shuffle(selected)

        except AppError:
            raise
        except PyMongoError as e:
            logger.error(f"❌ Question selection failed: {e}")
            raise DatabaseError("Failed to select questions for test")

    def _select_mixed(self, available: List[Question], requested: int,
                      attempted_ids: Set[str]) -> List[Question]:
        selected: List[Question] = []
        bucket_sizes = mixed_bucket_sizes(requested)

        for difficulty, size in zip(Difficulty, bucket_sizes):
            bucket = [q for q in available if q.difficulty == difficulty]
            picked = prioritize_unattempted(bucket, size, attempted_ids)
            if len(picked) < size:
                logger.info(f"⚠️ Only {len(picked)}/{size} {difficulty.value} questions available")
            selected.extend(picked)

        # An under-populated bucket is topped up from whatever is left
        if len(selected) < requested:
            selected_ids = {q.id for q in selected}
            remaining = [q for q in available if q.id not in selected_ids]
            needed = requested - len(selected)
            selected.extend(shuffle(remaining)[:needed])
            logger.info(f"🔄 Filled {needed} questions from the remaining pool")

        return selected

    def get_questions_by_ids(self, question_ids: Sequence[str]) -> Tuple[List[Question], List[str]]:
        """Resolve ids in the given order; returns (questions, missing ids)"""
        object_ids = [to_object_id(qid) for qid in question_ids]
        lookup = [oid for oid in object_ids if oid is not None]

        try:
            docs = self.db_manager.find_questions({"_id": {"$in": lookup}}) if lookup else []
        except PyMongoError as e:
            logger.error(f"❌ Question lookup failed: {e}")
            raise DatabaseError("Failed to fetch questions")

        by_id = {str(doc["_id"]): Question.from_document(doc) for doc in docs}
        questions = [by_id[str(qid)] for qid in question_ids if str(qid) in by_id]
        missing = [str(qid) for qid in question_ids if str(qid) not in by_id]
        return questions, missing

    def get_available_topics(self) -> Dict[str, Any]:
        """Sorted topics with their sorted subtopics"""
        try:
            topics = sorted(t for t in self.db_manager.distinct_questions("topic") if t)
            subtopics_by_topic = {
                topic: sorted(s for s in self.db_manager.distinct_questions("subtopic", {"topic": topic}) if s)
                for topic in topics
            }
            return {"topics": topics, "subtopics_by_topic": subtopics_by_topic}
        except PyMongoError as e:
            logger.error(f"❌ Topic discovery failed: {e}")
            raise DatabaseError("Failed to fetch available topics")


# Singleton pattern for question service
_question_service = None

def get_question_service() -> QuestionService:
    """Get question service instance (singleton)"""
    global _question_service
    if _question_service is None:
        _question_service = QuestionService()
    return _question_service
