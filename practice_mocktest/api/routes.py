# practice_mocktest/api/routes.py
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Query

from ..core.config import config
from ..core.errors import InsufficientQuestions
from ..core.utils import DateTimeUtils, calculate_test_duration
from ..services.question_service import QuestionService, TestConfig
from ..services.test_service import TestService
from .dependencies import (
    CurrentUser, admin_user, current_user, provide_question_service, provide_test_service
)
from .schemas import (
    AnswerRequest, MarkForReviewRequest, SubmitRequest, TestConfigRequest, TimeExtensionRequest
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_test_config(payload: TestConfigRequest) -> TestConfig:
    return TestConfig(
        topics=list(payload.topics),
        subtopics=list(payload.subtopics or []),
        difficulty=payload.difficulty,
        question_count=payload.questionCount,
    )


def _ok(data: Any = None, message: str = None) -> Dict[str, Any]:
    body = {"success": True, "data": data}
    if message:
        body["message"] = message
    return body


@router.get("/")
async def home():
    """Home endpoint"""
    return {
        "service": config.API_TITLE,
        "version": config.API_VERSION,
        "status": "operational"
    }


@router.get("/api/tests/topics")
def get_topics(user: CurrentUser = Depends(current_user),
               question_service: QuestionService = Depends(provide_question_service)):
    """Available topics and their subtopics"""
    topics = question_service.get_available_topics()
    return _ok({
        "topics": topics["topics"],
        "subtopicsByTopic": topics["subtopics_by_topic"],
    })


@router.post("/api/tests/configure")
def validate_config(payload: TestConfigRequest,
                    user: CurrentUser = Depends(current_user),
                    question_service: QuestionService = Depends(provide_question_service)):
    """Check question availability for a configuration before starting"""
    test_config = _to_test_config(payload)
    test_config.validate()

    available_count = question_service.count_matching(
        test_config.topics, test_config.subtopics, test_config.difficulty
    )
    if available_count < test_config.question_count:
        raise InsufficientQuestions(available_count, test_config.question_count)

    return _ok({
        "availableCount": available_count,
        "durationMinutes": calculate_test_duration(test_config.question_count),
        "config": payload.model_dump(),
    })


@router.post("/api/tests/start", status_code=201)
def start_test(payload: TestConfigRequest,
               user: CurrentUser = Depends(current_user),
               question_service: QuestionService = Depends(provide_question_service),
               test_service: TestService = Depends(provide_test_service)):
    """Select questions and open a timed session"""
    questions = question_service.select_for_test(_to_test_config(payload), user.id)
    session = test_service.create_session(user.id, questions)

    return _ok({
        "sessionId": session.id,
        "questionCount": session.total_questions,
        "durationMinutes": calculate_test_duration(session.total_questions),
    }, "Test started successfully")


@router.get("/api/tests/session")
def get_active_session(user: CurrentUser = Depends(current_user),
                       test_service: TestService = Depends(provide_test_service)):
    """Current session for the user, or null"""
    active = test_service.get_session(user.id)
    if active is None:
        return _ok(None)

    session, questions = active
    return _ok({
        "sessionId": session.id,
        "questions": [question.to_dict() if question is not None else None for question in questions],
        "missingQuestionIds": [
            question_id for question_id, question in zip(session.question_ids, questions) if question is None
        ],
        "answers": session.answers,
        "markedForReview": session.marked_for_review,
        "totalQuestions": session.total_questions,
        "remainingTime": session.remaining_time,
        "remainingTimeDisplay": DateTimeUtils.format_time(session.remaining_time),
        "timeExtensions": session.time_extensions,
        "maxTimeExtensions": config.MAX_TIME_EXTENSIONS,
        "startedAt": DateTimeUtils.to_iso(session.started_at),
        "expiresAt": DateTimeUtils.to_iso(session.expires_at),
        "isExpired": session.is_expired(),
    })


@router.put("/api/tests/session/answer")
def save_answer(payload: AnswerRequest,
                user: CurrentUser = Depends(current_user),
                test_service: TestService = Depends(provide_test_service)):
    test_service.save_answer(payload.sessionId, payload.questionIndex, payload.answer, user_id=user.id)
    return _ok(None, "Answer saved successfully")


@router.put("/api/tests/session/mark-review")
def toggle_mark_for_review(payload: MarkForReviewRequest,
                           user: CurrentUser = Depends(current_user),
                           test_service: TestService = Depends(provide_test_service)):
    marked = test_service.toggle_mark_for_review(payload.sessionId, payload.questionIndex, user_id=user.id)
    return _ok({"markedForReview": marked}, "Review mark updated")


@router.post("/api/tests/session/extend-time")
def extend_time(payload: TimeExtensionRequest,
                user: CurrentUser = Depends(current_user),
                test_service: TestService = Depends(provide_test_service)):
    remaining_time, time_extensions = test_service.extend_time(
        payload.sessionId, payload.minutes, user_id=user.id
    )
    return _ok({
        "remainingTime": remaining_time,
        "timeExtensions": time_extensions,
    }, f"Time extended by {payload.minutes} minutes")


@router.post("/api/tests/session/abandon")
def abandon_session(user: CurrentUser = Depends(current_user),
                    test_service: TestService = Depends(provide_test_service)):
    test_service.abandon_session(user.id)
    return _ok(None, "Test session abandoned")


@router.post("/api/tests/submit")
def submit_test(payload: SubmitRequest,
                user: CurrentUser = Depends(current_user),
                test_service: TestService = Depends(provide_test_service)):
    """Score the session and record the finished test"""
    record = test_service.submit_test(payload.sessionId, user_id=user.id)
    return _ok({
        "testId": record.id,
        "score": record.score,
        "totalQuestions": record.total_questions,
        "percentage": record.percentage,
    }, "Test submitted successfully")


@router.get("/api/tests/history")
def get_test_history(limit: int = Query(default=config.HISTORY_DEFAULT_LIMIT),
                     skip: int = Query(default=0),
                     user: CurrentUser = Depends(current_user),
                     test_service: TestService = Depends(provide_test_service)):
    return _ok(test_service.get_test_history(user.id, limit, skip))


@router.get("/api/admin/users/{user_id}/tests")
def get_user_tests(user_id: str,
                   limit: int = Query(default=config.HISTORY_DEFAULT_LIMIT),
                   skip: int = Query(default=0),
                   admin: CurrentUser = Depends(admin_user),
                   test_service: TestService = Depends(provide_test_service)):
    """Test history of any user (admin only)"""
    logger.info(f"🔍 Admin {admin.id} viewing tests of {user_id}")
    return _ok(test_service.get_test_history(user_id, limit, skip))


@router.get("/api/tests/{test_id}")
def get_test(test_id: str,
             user: CurrentUser = Depends(current_user),
             test_service: TestService = Depends(provide_test_service)):
    """Completed test with per-question review"""
    return _ok(test_service.get_test(test_id, user_id=user.id, is_admin=user.is_admin))
