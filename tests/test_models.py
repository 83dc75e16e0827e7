from datetime import datetime, timedelta, timezone

import pytest

from practice_mocktest.api.schemas import TestConfigRequest
from practice_mocktest.core.dummy_data import DUMMY_QUESTIONS, get_dummy_questions, seed_questions
from practice_mocktest.core.errors import ValidationError
from practice_mocktest.core.models import Difficulty, Question, TestRecord, TestResults, TestSession
from practice_mocktest.core.utils import (
    DateTimeUtils, calculate_test_duration, round2, shuffle, to_object_id
)
from practice_mocktest.services.question_service import TestConfig
from practice_mocktest.services.test_service import TestService


def _question_kwargs(**overrides):
    data = {
        "topic": "Polity",
        "subtopic": "Constitution",
        "question": "Which Article abolishes untouchability?",
        "options": ["14", "15", "17", "21"],
        "correct_answer": 2,
        "difficulty": "easy",
    }
    data.update(overrides)
    return data


class QuestionTests:
    def test_valid_question_normalizes_difficulty(self):
        question = Question(**_question_kwargs())
        assert question.difficulty is Difficulty.EASY

    def test_requires_exactly_four_options(self):
        with pytest.raises(ValidationError) as exc_info:
            Question(**_question_kwargs(options=["a", "b", "c"]))
        assert "options" in exc_info.value.fields

    def test_correct_answer_must_index_options(self):
        with pytest.raises(ValidationError) as exc_info:
            Question(**_question_kwargs(correct_answer=4))
        assert "correctAnswer" in exc_info.value.fields

    def test_mixed_is_not_a_stored_difficulty(self):
        with pytest.raises(ValidationError):
            Question(**_question_kwargs(difficulty="mixed"))

    def test_document_round_trip_keeps_id(self):
        question = Question(**_question_kwargs(id="65a1b2c3d4e5f60718293a4b", pyq_year=2019))
        restored = Question.from_document(question.to_document())
        assert restored == question

    def test_public_dict_hides_answer(self):
        data = Question(**_question_kwargs()).to_dict()
        assert "correctAnswer" not in data
        assert "explanation" not in data

    def test_snapshot_drops_mongo_id(self):
        snapshot = Question(**_question_kwargs(id="65a1b2c3d4e5f60718293a4b")).snapshot()
        assert "_id" not in snapshot
        assert snapshot["question_id"] == "65a1b2c3d4e5f60718293a4b"
        assert snapshot["correct_answer"] == 2


class SessionModelTests:
    def test_start_initializes_parallel_arrays(self):
        now = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
        session = TestSession.start("user-1", ["a", "b", "c"], duration_minutes=4, now=now)

        assert session.answers == [None, None, None]
        assert session.marked_for_review == [False, False, False]
        assert session.remaining_time == 240
        assert session.expires_at == now + timedelta(minutes=4)
        assert session.time_extensions == 0

    def test_arrays_must_stay_in_step(self):
        now = DateTimeUtils.now()
        with pytest.raises(ValueError):
            TestSession(user_id="u", question_ids=["a", "b"], answers=[None], marked_for_review=[False, False],
                        remaining_time=60, started_at=now, expires_at=now)

    def test_expiry_handles_naive_datetimes(self):
        past = datetime.now(timezone.utc).replace(tzinfo=None) - timedelta(minutes=1)
        session = TestSession(user_id="u", question_ids=[], answers=[], marked_for_review=[],
                              remaining_time=0, started_at=past, expires_at=past)
        assert session.is_expired()


class UtilsTests:
    @pytest.mark.parametrize("count,minutes", [(1, 2), (5, 6), (10, 12), (50, 60), (200, 240), (3, 4)])
    def test_duration_is_ceiling_of_count_times_1_2(self, count, minutes):
        assert calculate_test_duration(count) == minutes

    def test_round2(self):
        assert round2(40.0) == 40.0
        assert round2(100 / 3) == 33.33
        assert round2(0.125) == 0.13

    def test_format_time(self):
        assert DateTimeUtils.format_time(3725) == "01:02:05"
        assert DateTimeUtils.format_time(-5) == "00:00:00"

    def test_shuffle_is_a_permutation_and_copies(self):
        items = list(range(50))
        shuffled = shuffle(items)
        assert sorted(shuffled) == items
        assert items == list(range(50))

    def test_shuffle_accepts_any_sequence(self):
        assert sorted(shuffle(("b", "a", "c"))) == ["a", "b", "c"]
        assert shuffle([]) == []

    def test_to_object_id_rejects_garbage(self):
        assert to_object_id("not-an-id") is None
        assert to_object_id(None) is None
        assert str(to_object_id("65a1b2c3d4e5f60718293a4b")) == "65a1b2c3d4e5f60718293a4b"


class DummyDataTests:
    def test_sample_bank_is_valid_and_balanced(self):
        questions = get_dummy_questions()
        assert len(questions) == len(DUMMY_QUESTIONS)
        for difficulty in Difficulty:
            assert sum(1 for q in questions if q.difficulty == difficulty) >= 4

    def test_seed_only_fills_empty_collection(self, db_manager):
        assert seed_questions(db_manager.questions_collection) == len(DUMMY_QUESTIONS)
        assert seed_questions(db_manager.questions_collection) == 0
        assert db_manager.questions_collection.count_documents({}) == len(DUMMY_QUESTIONS)


@pytest.mark.parametrize("cls", [TestSession, TestRecord, TestResults, TestConfig, TestService, TestConfigRequest])
def test_domain_classes_carry_no_collection_markers(cls):
    assert "__test__" not in vars(cls)
