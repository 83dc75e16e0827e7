"""Pytest configuration and shared fixtures."""

from typing import Any, Dict, List, Optional

import mongomock
import pytest

from practice_mocktest.core.database import DatabaseManager
from practice_mocktest.core.models import Question
from practice_mocktest.services.question_service import QuestionService
from practice_mocktest.services.test_service import TestService


@pytest.fixture
def db_manager() -> DatabaseManager:
    """Database manager backed by an in-memory MongoDB"""
    return DatabaseManager(client=mongomock.MongoClient())


@pytest.fixture
def question_service(db_manager: DatabaseManager) -> QuestionService:
    return QuestionService(db_manager)


@pytest.fixture
def lifecycle_service(db_manager: DatabaseManager, question_service: QuestionService) -> TestService:
    return TestService(db_manager, question_service, enforce_expiry=False)


@pytest.fixture
def add_questions(db_manager: DatabaseManager):
    """Insert ``count`` questions matching the given attributes; returns Question objects"""
    counter = {"n": 0}

    def _add(count: int, topic: str = "History", subtopic: str = "Ancient India",
             difficulty: str = "easy", correct_answer: int = 0,
             tags: Optional[List[str]] = None) -> List[Question]:
        created = []
        for _ in range(count):
            counter["n"] += 1
            question = Question(
                topic=topic,
                subtopic=subtopic,
                question=f"{topic} / {subtopic} question number {counter['n']}?",
                options=["Option A", "Option B", "Option C", "Option D"],
                correct_answer=correct_answer,
                difficulty=difficulty,
                explanation=f"Explanation for question {counter['n']}",
                tags=tags or [],
            )
            inserted = db_manager.questions_collection.insert_one(question.to_document())
            question.id = str(inserted.inserted_id)
            created.append(question)
        return created

    return _add


@pytest.fixture
def record_attempt(db_manager: DatabaseManager):
    """Store a minimal completed test so its questions count as already seen"""

    def _record(user_id: str, questions: List[Question]) -> Dict[str, Any]:
        doc = {
            "user_id": user_id,
            "question_ids": [q.id for q in questions],
            "answers": [None] * len(questions),
        }
        db_manager.tests_collection.insert_one(doc)
        return doc

    return _record
