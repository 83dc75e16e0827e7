from practice_mocktest.core.config import config


def test_one_session_per_user_index(db_manager):
    indexes = db_manager.sessions_collection.index_information()

    assert indexes["uniq_session_user"]["unique"] is True
    assert [field for field, _ in indexes["uniq_session_user"]["key"]] == ["user_id"]


def test_abandoned_sessions_expire_after_retention_window(db_manager):
    indexes = db_manager.sessions_collection.index_information()

    assert config.SESSION_RETENTION_SECONDS == 86400
    assert [field for field, _ in indexes["ttl_session_expiry"]["key"]] == ["expires_at"]
    assert indexes["ttl_session_expiry"]["expireAfterSeconds"] == 86400


def test_history_sorted_newest_first_by_index(db_manager):
    indexes = db_manager.tests_collection.index_information()

    assert indexes["test_history"]["key"] == [("user_id", 1), ("submitted_at", -1)]
