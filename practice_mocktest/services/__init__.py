"""
Business logic services for question selection, test sessions and scoring
"""

from .question_service import get_question_service, QuestionService, TestConfig
from .test_service import get_test_service, TestService
from .scoring import calculate_results

__all__ = [
    "get_question_service",
    "QuestionService",
    "TestConfig",
    "get_test_service",
    "TestService",
    "calculate_results"
]
