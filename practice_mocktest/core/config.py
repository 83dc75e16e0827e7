# practice_mocktest/core/config.py
import os
import logging
from typing import Dict, Any, List, Tuple
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Centralized configuration management"""

    # ==================== API Configuration ====================
    API_TITLE = "Practice Mock Test API"
    API_DESCRIPTION = "Topic-wise MCQ practice tests with timed sessions and scored analytics"
    API_VERSION = "1.0.0"

    API_HOST = os.getenv("API_HOST", "0.0.0.0")
    API_PORT = int(os.getenv("API_PORT", "8070"))
    DEBUG_MODE = os.getenv("DEBUG_MODE", "false").lower() == "true"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    CORS_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
        if origin.strip()
    ]

    # ==================== Database Configuration ====================
    MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "practice_mocktest")
    MONGO_TIMEOUT_MS = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))
    MONGO_MAX_POOL_SIZE = int(os.getenv("MONGO_MAX_POOL_SIZE", "10"))

    # Collections
    QUESTIONS_COLLECTION = os.getenv("QUESTIONS_COLLECTION", "questions")
    SESSIONS_COLLECTION = os.getenv("SESSIONS_COLLECTION", "test_sessions")
    TESTS_COLLECTION = os.getenv("TESTS_COLLECTION", "tests")

    # ==================== Development Settings ====================
    USE_DUMMY_DATA = os.getenv("USE_DUMMY_DATA", "false").lower() == "true"

    # ==================== Test Configuration ====================
    MIN_QUESTIONS = 1
    MAX_QUESTIONS = int(os.getenv("MAX_QUESTIONS", "200"))
    MAX_TOPICS = int(os.getenv("MAX_TOPICS", "10"))

    # Duration is ceil(question_count * MINUTES_PER_QUESTION) minutes
    MINUTES_PER_QUESTION = float(os.getenv("MINUTES_PER_QUESTION", "1.2"))

    # Time extensions
    MAX_TIME_EXTENSIONS = int(os.getenv("MAX_TIME_EXTENSIONS", "2"))
    ALLOWED_EXTENSION_MINUTES: Tuple[int, ...] = (5, 10)

    # Abandoned sessions are swept by a TTL index this long after expiry
    SESSION_RETENTION_SECONDS = int(os.getenv("SESSION_RETENTION_SECONDS", "86400"))

    # Reject answer/mark writes once expires_at has passed
    ENFORCE_SESSION_EXPIRY = os.getenv("ENFORCE_SESSION_EXPIRY", "false").lower() == "true"

    MARK_TOGGLE_RETRIES = int(os.getenv("MARK_TOGGLE_RETRIES", "5"))

    # History pagination
    HISTORY_DEFAULT_LIMIT = int(os.getenv("HISTORY_DEFAULT_LIMIT", "20"))
    HISTORY_MAX_LIMIT = int(os.getenv("HISTORY_MAX_LIMIT", "100"))

    # ==================== Environment Overrides ====================
    @classmethod
    def from_env(cls) -> 'Config':
        """Create config with environment variable overrides"""
        return cls()

    # ==================== Validation ====================
    def validate(self) -> Dict[str, Any]:
        """Validate configuration and return status"""
        issues = []

        if self.MAX_QUESTIONS < self.MIN_QUESTIONS:
            issues.append("MAX_QUESTIONS must be at least MIN_QUESTIONS")

        if self.MAX_TOPICS < 1:
            issues.append("MAX_TOPICS must be at least 1")

        if self.MINUTES_PER_QUESTION <= 0:
            issues.append("MINUTES_PER_QUESTION must be positive")

        if self.MAX_TIME_EXTENSIONS < 0:
            issues.append("MAX_TIME_EXTENSIONS cannot be negative")

        if self.SESSION_RETENTION_SECONDS < 0:
            issues.append("SESSION_RETENTION_SECONDS cannot be negative")

        if not (0 < self.HISTORY_DEFAULT_LIMIT <= self.HISTORY_MAX_LIMIT):
            issues.append("HISTORY_DEFAULT_LIMIT must be between 1 and HISTORY_MAX_LIMIT")

        if not self.MONGO_URI.startswith(("mongodb://", "mongodb+srv://")):
            issues.append("MONGO_URI must be a mongodb:// or mongodb+srv:// URI")

        return {
            "valid": len(issues) == 0,
            "issues": issues,
            "config_loaded": True,
            "using_dummy_data": self.USE_DUMMY_DATA,
            "enforce_session_expiry": self.ENFORCE_SESSION_EXPIRY
        }

# Global configuration instance
config = Config.from_env()

# Validate on import
validation_result = config.validate()
if not validation_result["valid"]:
    logger = logging.getLogger(__name__)
    logger.warning(f"Configuration issues: {validation_result['issues']}")
