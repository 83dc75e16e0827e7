# practice_mocktest/core/models.py
"""
Domain models for questions, in-progress sessions and completed tests.

Documents in MongoDB use snake_case keys and ObjectId references; ``to_dict``
produces the camelCase shape returned by the API.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Dict, Any, Optional

from .errors import ValidationError
from .utils import DateTimeUtils, ValidationUtils, to_object_id

OPTIONS_PER_QUESTION = 4


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


def _id_list(values: List[Any]) -> List[Any]:
    """Store references as ObjectId where the id is a valid one"""
    return [to_object_id(value) or value for value in values]


@dataclass
class Question:
    topic: str
    subtopic: str
    question: str
    options: List[str]
    correct_answer: int
    difficulty: Difficulty
    explanation: str = ""
    tags: List[str] = field(default_factory=list)
    pyq_year: Optional[int] = None
    id: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.difficulty, Difficulty):
            if not ValidationUtils.validate_difficulty(self.difficulty):
                raise ValidationError(
                    "Difficulty must be 'easy', 'medium', or 'hard'",
                    {"difficulty": f"Invalid value: {self.difficulty!r}"}
                )
            self.difficulty = Difficulty(self.difficulty)
        self.validate()

    def validate(self):
        """Exactly four options and a correct answer that indexes into them"""
        fields = {}
        if not self.topic or not self.topic.strip():
            fields["topic"] = "Topic is required"
        if not self.subtopic or not self.subtopic.strip():
            fields["subtopic"] = "Subtopic is required"
        if not self.question or not self.question.strip():
            fields["question"] = "Question text is required"
        if not isinstance(self.options, list) or len(self.options) != OPTIONS_PER_QUESTION:
            fields["options"] = f"Exactly {OPTIONS_PER_QUESTION} options are required"
        elif any(not isinstance(option, str) or not option.strip() for option in self.options):
            fields["options"] = "Options cannot be empty"
        if not ValidationUtils.validate_answer(self.correct_answer):
            fields["correctAnswer"] = "Correct answer must be between 0 and 3"
        if fields:
            raise ValidationError("Invalid question data", fields)

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> 'Question':
        return cls(
            id=str(doc["_id"]) if doc.get("_id") is not None else None,
            topic=doc.get("topic", ""),
            subtopic=doc.get("subtopic", ""),
            question=doc.get("question", ""),
            options=list(doc.get("options", [])),
            correct_answer=doc.get("correct_answer"),
            difficulty=doc.get("difficulty"),
            explanation=doc.get("explanation", "") or "",
            tags=list(doc.get("tags", []) or []),
            pyq_year=doc.get("pyq_year"),
        )

    def to_document(self) -> Dict[str, Any]:
        doc = {
            "topic": self.topic.strip(),
            "subtopic": self.subtopic.strip(),
            "question": self.question,
            "options": list(self.options),
            "correct_answer": self.correct_answer,
            "difficulty": self.difficulty.value,
            "explanation": self.explanation,
            "tags": list(self.tags),
        }
        if self.pyq_year is not None:
            doc["pyq_year"] = self.pyq_year
        if self.id is not None:
            doc["_id"] = to_object_id(self.id) or self.id
        return doc

    def snapshot(self) -> Dict[str, Any]:
        """Denormalized copy kept on a Test so history survives question deletion"""
        doc = self.to_document()
        doc["question_id"] = self.id
        doc.pop("_id", None)
        return doc

    def to_dict(self, include_answer: bool = False) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "topic": self.topic,
            "subtopic": self.subtopic,
            "question": self.question,
            "options": list(self.options),
            "difficulty": self.difficulty.value,
            "tags": list(self.tags),
            "pyqYear": self.pyq_year,
        }
        if include_answer:
            data["correctAnswer"] = self.correct_answer
            data["explanation"] = self.explanation
        return data


@dataclass
class TestSession:
    user_id: str
    question_ids: List[str]
    answers: List[Optional[int]]
    marked_for_review: List[bool]
    remaining_time: int
    started_at: datetime
    expires_at: datetime
    time_extensions: int = 0
    id: Optional[str] = None

    def __post_init__(self):
        count = len(self.question_ids)
        if len(self.answers) != count or len(self.marked_for_review) != count:
            raise ValueError(
                f"Session arrays out of step: {count} questions, "
                f"{len(self.answers)} answers, {len(self.marked_for_review)} marks"
            )

    @classmethod
    def start(cls, user_id: str, question_ids: List[str], duration_minutes: int,
              now: Optional[datetime] = None) -> 'TestSession':
        now = now or DateTimeUtils.now()
        duration_seconds = duration_minutes * 60
        return cls(
            user_id=user_id,
            question_ids=list(question_ids),
            answers=[None] * len(question_ids),
            marked_for_review=[False] * len(question_ids),
            remaining_time=duration_seconds,
            started_at=now,
            expires_at=now + timedelta(seconds=duration_seconds),
        )

    @property
    def total_questions(self) -> int:
        return len(self.question_ids)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or DateTimeUtils.now()
        return DateTimeUtils.ensure_utc(now) > DateTimeUtils.ensure_utc(self.expires_at)

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> 'TestSession':
        return cls(
            id=str(doc["_id"]),
            user_id=doc["user_id"],
            question_ids=[str(qid) for qid in doc.get("question_ids", [])],
            answers=list(doc.get("answers", [])),
            marked_for_review=[bool(mark) for mark in doc.get("marked_for_review", [])],
            remaining_time=int(doc.get("remaining_time", 0)),
            time_extensions=int(doc.get("time_extensions", 0)),
            started_at=DateTimeUtils.ensure_utc(doc["started_at"]),
            expires_at=DateTimeUtils.ensure_utc(doc["expires_at"]),
        )

    def to_document(self) -> Dict[str, Any]:
        doc = {
            "user_id": self.user_id,
            "question_ids": _id_list(self.question_ids),
            "answers": list(self.answers),
            "marked_for_review": list(self.marked_for_review),
            "remaining_time": self.remaining_time,
            "time_extensions": self.time_extensions,
            "started_at": self.started_at,
            "expires_at": self.expires_at,
        }
        if self.id is not None:
            doc["_id"] = to_object_id(self.id) or self.id
        return doc


@dataclass
class TopicPerformance:
    topic: str
    correct: int
    total: int
    accuracy: float

    def to_dict(self) -> Dict[str, Any]:
        return {"topic": self.topic, "correct": self.correct, "total": self.total, "accuracy": self.accuracy}


@dataclass
class DifficultyPerformance:
    difficulty: str
    correct: int
    total: int
    accuracy: float

    def to_dict(self) -> Dict[str, Any]:
        return {"difficulty": self.difficulty, "correct": self.correct, "total": self.total, "accuracy": self.accuracy}


@dataclass
class TestResults:
    score: int
    total_questions: int
    correct_answers: int
    incorrect_answers: int
    unanswered_questions: int
    percentage: float
    topic_wise_performance: List[TopicPerformance] = field(default_factory=list)
    difficulty_wise_performance: List[DifficultyPerformance] = field(default_factory=list)


@dataclass
class TestRecord:
    """Immutable record of a submitted attempt"""

    user_id: str
    question_ids: List[str]
    answers: List[Optional[int]]
    marked_for_review: List[bool]
    score: int
    total_questions: int
    correct_answers: int
    incorrect_answers: int
    unanswered_questions: int
    percentage: float
    time_taken: int
    time_extensions: int
    started_at: datetime
    submitted_at: datetime
    topic_wise_performance: List[TopicPerformance] = field(default_factory=list)
    difficulty_wise_performance: List[DifficultyPerformance] = field(default_factory=list)
    question_snapshots: List[Dict[str, Any]] = field(default_factory=list)
    id: Optional[str] = None

    @classmethod
    def from_session(cls, session: TestSession, results: TestResults, questions: List[Question],
                     submitted_at: datetime) -> 'TestRecord':
        return cls(
            user_id=session.user_id,
            question_ids=list(session.question_ids),
            answers=list(session.answers),
            marked_for_review=list(session.marked_for_review),
            score=results.score,
            total_questions=results.total_questions,
            correct_answers=results.correct_answers,
            incorrect_answers=results.incorrect_answers,
            unanswered_questions=results.unanswered_questions,
            percentage=results.percentage,
            time_taken=DateTimeUtils.elapsed_seconds(session.started_at, submitted_at),
            time_extensions=session.time_extensions,
            started_at=session.started_at,
            submitted_at=submitted_at,
            topic_wise_performance=list(results.topic_wise_performance),
            difficulty_wise_performance=list(results.difficulty_wise_performance),
            question_snapshots=[question.snapshot() for question in questions],
        )

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> 'TestRecord':
        return cls(
            id=str(doc["_id"]),
            user_id=doc["user_id"],
            question_ids=[str(qid) for qid in doc.get("question_ids", [])],
            answers=list(doc.get("answers", [])),
            marked_for_review=list(doc.get("marked_for_review", [])),
            score=doc.get("score", 0),
            total_questions=doc.get("total_questions", 0),
            correct_answers=doc.get("correct_answers", 0),
            incorrect_answers=doc.get("incorrect_answers", 0),
            unanswered_questions=doc.get("unanswered_questions", 0),
            percentage=doc.get("percentage", 0.0),
            time_taken=doc.get("time_taken", 0),
            time_extensions=doc.get("time_extensions", 0),
            started_at=DateTimeUtils.ensure_utc(doc.get("started_at")),
            submitted_at=DateTimeUtils.ensure_utc(doc.get("submitted_at")),
            topic_wise_performance=[
                TopicPerformance(**perf) for perf in doc.get("topic_wise_performance", [])
            ],
            difficulty_wise_performance=[
                DifficultyPerformance(**perf) for perf in doc.get("difficulty_wise_performance", [])
            ],
            question_snapshots=list(doc.get("question_snapshots", [])),
        )

    def to_document(self) -> Dict[str, Any]:
        doc = {
            "user_id": self.user_id,
            "question_ids": _id_list(self.question_ids),
            "answers": list(self.answers),
            "marked_for_review": list(self.marked_for_review),
            "score": self.score,
            "total_questions": self.total_questions,
            "correct_answers": self.correct_answers,
            "incorrect_answers": self.incorrect_answers,
            "unanswered_questions": self.unanswered_questions,
            "percentage": self.percentage,
            "time_taken": self.time_taken,
            "time_extensions": self.time_extensions,
            "started_at": self.started_at,
            "submitted_at": self.submitted_at,
            "topic_wise_performance": [vars(perf).copy() for perf in self.topic_wise_performance],
            "difficulty_wise_performance": [vars(perf).copy() for perf in self.difficulty_wise_performance],
            "question_snapshots": [dict(snapshot) for snapshot in self.question_snapshots],
        }
        if self.id is not None:
            doc["_id"] = to_object_id(self.id) or self.id
        return doc

    def to_summary(self) -> Dict[str, Any]:
        """History row: everything except the per-question review data"""
        return {
            "id": self.id,
            "score": self.score,
            "totalQuestions": self.total_questions,
            "correctAnswers": self.correct_answers,
            "incorrectAnswers": self.incorrect_answers,
            "unansweredQuestions": self.unanswered_questions,
            "percentage": self.percentage,
            "timeTaken": self.time_taken,
            "timeExtensions": self.time_extensions,
            "startedAt": DateTimeUtils.to_iso(self.started_at),
            "submittedAt": DateTimeUtils.to_iso(self.submitted_at),
            "topicWisePerformance": [perf.to_dict() for perf in self.topic_wise_performance],
            "difficultyWisePerformance": [perf.to_dict() for perf in self.difficulty_wise_performance],
        }
