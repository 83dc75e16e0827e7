import pytest
from fastapi.testclient import TestClient

from practice_mocktest.api.dependencies import provide_question_service, provide_test_service
from practice_mocktest.main import app

USER = {"X-User-Id": "user-1"}
OTHER_USER = {"X-User-Id": "user-2"}
ADMIN = {"X-User-Id": "admin-1", "X-User-Role": "admin"}


@pytest.fixture
def client(question_service, lifecycle_service):
    app.dependency_overrides[provide_question_service] = lambda: question_service
    app.dependency_overrides[provide_test_service] = lambda: lifecycle_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def bank(add_questions):
    picked = add_questions(4, topic="History", subtopic="Ancient India", difficulty="easy", correct_answer=0)
    picked += add_questions(3, topic="History", subtopic="Modern India", difficulty="medium", correct_answer=1)
    picked += add_questions(3, topic="Geography", subtopic="Rivers", difficulty="hard", correct_answer=2)
    return picked


def _start(client, headers=USER, **overrides):
    body = {"topics": ["History", "Geography"], "difficulty": "mixed", "questionCount": 5}
    body.update(overrides)
    return client.post("/api/tests/start", json=body, headers=headers)


def test_home(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "operational"


def test_missing_identity_is_401(client):
    response = client.get("/api/tests/session")
    assert response.status_code == 401
    assert response.json()["type"] == "authentication_error"


def test_topics(client, bank):
    response = client.get("/api/tests/topics", headers=USER)

    data = response.json()["data"]
    assert data["topics"] == ["Geography", "History"]
    assert data["subtopicsByTopic"]["History"] == ["Ancient India", "Modern India"]


def test_configure_reports_availability(client, bank):
    response = client.post("/api/tests/configure", headers=USER,
                           json={"topics": ["History"], "difficulty": "mixed", "questionCount": 5})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["availableCount"] == 7
    assert data["durationMinutes"] == 6


def test_insufficient_questions_is_422(client, bank):
    response = _start(client, topics=["Geography"], difficulty="hard", questionCount=5)

    assert response.status_code == 422
    body = response.json()
    assert body["type"] == "insufficient_questions"
    assert body["availableCount"] == 3
    assert body["requestedCount"] == 5


@pytest.mark.parametrize("body", [
    {"topics": [], "difficulty": "mixed", "questionCount": 5},
    {"topics": ["History"], "difficulty": "expert", "questionCount": 5},
    {"topics": ["History"], "difficulty": "easy", "questionCount": 0},
    {"topics": ["History"], "difficulty": "easy", "questionCount": 201},
])
def test_bad_configuration_is_400(client, bank, body):
    response = client.post("/api/tests/start", json=body, headers=USER)

    assert response.status_code == 400
    assert response.json()["type"] == "validation_error"
    assert response.json()["fields"]


def test_full_test_flow(client, bank):
    started = _start(client)
    assert started.status_code == 201
    session_id = started.json()["data"]["sessionId"]
    assert started.json()["data"]["durationMinutes"] == 6

    active = client.get("/api/tests/session", headers=USER).json()["data"]
    assert active["sessionId"] == session_id
    assert active["remainingTime"] == 360
    assert active["remainingTimeDisplay"] == "00:06:00"
    assert all("correctAnswer" not in q for q in active["questions"])

    correct = {q.id: q.correct_answer for q in bank}
    first_question = active["questions"][0]["id"]
    answer = client.put("/api/tests/session/answer", headers=USER, json={
        "sessionId": session_id, "questionIndex": 0, "answer": correct[first_question],
    })
    assert answer.status_code == 200

    marked = client.put("/api/tests/session/mark-review", headers=USER,
                        json={"sessionId": session_id, "questionIndex": 1})
    assert marked.json()["data"]["markedForReview"] is True

    extended = client.post("/api/tests/session/extend-time", headers=USER,
                           json={"sessionId": session_id, "minutes": 10})
    assert extended.json()["data"] == {"remainingTime": 960, "timeExtensions": 1}

    submitted = client.post("/api/tests/submit", headers=USER, json={"sessionId": session_id})
    assert submitted.status_code == 200
    result = submitted.json()["data"]
    assert result["score"] == 1
    assert result["totalQuestions"] == 5
    assert result["percentage"] == 20.0

    assert client.get("/api/tests/session", headers=USER).json()["data"] is None

    history = client.get("/api/tests/history", headers=USER).json()["data"]
    assert [row["id"] for row in history] == [result["testId"]]

    detail = client.get(f"/api/tests/{result['testId']}", headers=USER).json()["data"]
    assert detail["questions"][0]["isCorrect"] is True
    assert detail["questions"][1]["markedForReview"] is True
    assert detail["timeExtensions"] == 1


def test_session_snapshot_stays_aligned_after_question_removal(client, bank, db_manager):
    session_id = _start(client).json()["data"]["sessionId"]
    client.put("/api/tests/session/answer", headers=USER,
               json={"sessionId": session_id, "questionIndex": 1, "answer": 2})
    stored = db_manager.sessions_collection.find_one({"user_id": "user-1"})
    removed_id = stored["question_ids"][0]
    db_manager.questions_collection.delete_one({"_id": removed_id})

    active = client.get("/api/tests/session", headers=USER).json()["data"]

    assert len(active["questions"]) == len(active["answers"]) == len(active["markedForReview"]) == 5
    assert active["questions"][0] is None
    assert active["questions"][1]["id"] == str(stored["question_ids"][1])
    assert active["answers"][1] == 2
    assert active["missingQuestionIds"] == [str(removed_id)]


def test_duplicate_start_is_rejected(client, bank):
    assert _start(client).status_code == 201

    response = _start(client)

    assert response.status_code == 422
    assert response.json()["type"] == "session_already_active"


def test_third_extension_is_rejected(client, bank):
    session_id = _start(client).json()["data"]["sessionId"]
    for _ in range(2):
        client.post("/api/tests/session/extend-time", headers=USER, json={"sessionId": session_id, "minutes": 5})

    response = client.post("/api/tests/session/extend-time", headers=USER,
                           json={"sessionId": session_id, "minutes": 5})

    assert response.status_code == 422
    assert response.json()["type"] == "extension_limit_reached"


def test_extension_minutes_validated(client, bank):
    session_id = _start(client).json()["data"]["sessionId"]

    response = client.post("/api/tests/session/extend-time", headers=USER,
                           json={"sessionId": session_id, "minutes": 7})

    assert response.status_code == 400


def test_answer_out_of_range_is_400(client, bank):
    session_id = _start(client).json()["data"]["sessionId"]

    response = client.put("/api/tests/session/answer", headers=USER,
                          json={"sessionId": session_id, "questionIndex": 0, "answer": 4})

    assert response.status_code == 400


def test_answer_index_past_end_is_422(client, bank):
    session_id = _start(client).json()["data"]["sessionId"]

    response = client.put("/api/tests/session/answer", headers=USER,
                          json={"sessionId": session_id, "questionIndex": 5, "answer": 1})

    assert response.status_code == 422
    assert response.json()["type"] == "invalid_question_index"


def test_unknown_session_is_404(client, bank):
    response = client.post("/api/tests/submit", headers=USER, json={"sessionId": "65a1b2c3d4e5f60718293a4b"})
    assert response.status_code == 404


def test_abandon_then_restart(client, bank):
    _start(client)

    assert client.post("/api/tests/session/abandon", headers=USER).status_code == 200
    assert client.get("/api/tests/session", headers=USER).json()["data"] is None
    assert _start(client).status_code == 201
    assert client.get("/api/tests/history", headers=USER).json()["data"] == []


def test_test_access_rules(client, bank):
    session_id = _start(client).json()["data"]["sessionId"]
    test_id = client.post("/api/tests/submit", headers=USER, json={"sessionId": session_id}).json()["data"]["testId"]

    assert client.get(f"/api/tests/{test_id}", headers=OTHER_USER).status_code == 403
    assert client.get(f"/api/tests/{test_id}", headers=ADMIN).status_code == 200
    assert client.get("/api/tests/not-a-test", headers=USER).status_code == 404


def test_admin_history_requires_admin(client, bank):
    session_id = _start(client).json()["data"]["sessionId"]
    client.post("/api/tests/submit", headers=USER, json={"sessionId": session_id})

    assert client.get("/api/admin/users/user-1/tests", headers=OTHER_USER).status_code == 403

    response = client.get("/api/admin/users/user-1/tests", headers=ADMIN)
    assert response.status_code == 200
    assert len(response.json()["data"]) == 1


def test_history_limit_validated(client):
    response = client.get("/api/tests/history?limit=500", headers=USER)
    assert response.status_code == 400
