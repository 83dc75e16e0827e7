# practice_mocktest/core/database.py
import logging
from typing import List, Dict, Any, Optional

import pymongo
from pymongo import MongoClient, ReturnDocument
from pymongo.errors import PyMongoError

from .config import config
from .errors import DatabaseError

logger = logging.getLogger(__name__)

class DatabaseManager:
    """MongoDB access for the question bank, active sessions and completed tests"""

    def __init__(self, client: Optional[MongoClient] = None):
        """Initialize database connection; pass ``client`` to reuse an existing one"""
        logger.info("🔄 Initializing Database Manager")

        self.mongo_client = client
        self.db = None
        self.questions_collection = None
        self.sessions_collection = None
        self.tests_collection = None

        self._init_mongodb()

    def _init_mongodb(self):
        """Initialize MongoDB connection and collections"""
        try:
            if self.mongo_client is None:
                self.mongo_client = pymongo.MongoClient(
                    config.MONGO_URI,
                    serverSelectionTimeoutMS=config.MONGO_TIMEOUT_MS,
                    maxPoolSize=config.MONGO_MAX_POOL_SIZE,
                    minPoolSize=1,
                    maxIdleTimeMS=30000,
                    waitQueueTimeoutMS=config.MONGO_TIMEOUT_MS,
                    tz_aware=True
                )

                # Test connection
                self.mongo_client.admin.command('ping')

            self.db = self.mongo_client[config.MONGO_DB_NAME]
            self.questions_collection = self.db[config.QUESTIONS_COLLECTION]
            self.sessions_collection = self.db[config.SESSIONS_COLLECTION]
            self.tests_collection = self.db[config.TESTS_COLLECTION]

            self._create_indexes()

            logger.info(f"✅ MongoDB ready: database '{config.MONGO_DB_NAME}'")

        except PyMongoError as e:
            logger.error(f"❌ MongoDB connection failed: {e}")
            raise DatabaseError(f"MongoDB connection failure: {e}")

    def _create_indexes(self):
        """Create indexes; the unique session index is required, the rest are best effort"""
        # One active session per user. Enforced here, not by a read-then-write check.
        self.sessions_collection.create_index(
            [("user_id", pymongo.ASCENDING)], unique=True, name="uniq_session_user"
        )

        try:
            # Sessions never finalized are swept after the retention window
            self.sessions_collection.create_index(
                [("expires_at", pymongo.ASCENDING)],
                expireAfterSeconds=config.SESSION_RETENTION_SECONDS,
                name="ttl_session_expiry"
            )
            self.questions_collection.create_index(
                [("topic", pymongo.ASCENDING), ("subtopic", pymongo.ASCENDING),
                 ("difficulty", pymongo.ASCENDING)],
                name="question_filter"
            )
            self.tests_collection.create_index(
                [("user_id", pymongo.ASCENDING), ("submitted_at", pymongo.DESCENDING)],
                name="test_history"
            )
            logger.info("📊 Database indexes created")
        except PyMongoError as idx_error:
            logger.warning(f"⚠️ Index creation failed: {idx_error}")

    # ==================== Question repository ====================

    def find_questions(self, query: Dict[str, Any]) -> List[Dict[str, Any]]:
        return list(self.questions_collection.find(query))

    def distinct_questions(self, field: str, query: Optional[Dict[str, Any]] = None) -> List[Any]:
        return self.questions_collection.distinct(field, query or {})

    def count_questions(self, query: Dict[str, Any]) -> int:
        return self.questions_collection.count_documents(query)

    # ==================== Session store ====================

    def insert_session(self, document: Dict[str, Any]) -> Any:
        """Insert a session; raises DuplicateKeyError when the user already has one"""
        return self.sessions_collection.insert_one(document).inserted_id

    def find_session(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self.sessions_collection.find_one(query)

    def update_session(self, query: Dict[str, Any], update: Dict[str, Any]) -> int:
        """Apply an update; returns the matched count"""
        return self.sessions_collection.update_one(query, update).matched_count

    def find_and_update_session(self, query: Dict[str, Any],
                                update: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self.sessions_collection.find_one_and_update(
            query, update, return_document=ReturnDocument.AFTER
        )

    def delete_session(self, query: Dict[str, Any]) -> int:
        return self.sessions_collection.delete_one(query).deleted_count

    def claim_session(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Atomically remove and return a session so only one caller can finalize it"""
        return self.sessions_collection.find_one_and_delete(query)

    # ==================== Test record store ====================

    def insert_test(self, document: Dict[str, Any]) -> Any:
        result = self.tests_collection.insert_one(document)
        if not result.inserted_id:
            raise DatabaseError("MongoDB save operation failed")
        return result.inserted_id

    def find_test(self, query: Dict[str, Any],
                  projection: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        return self.tests_collection.find_one(query, projection)

    def find_tests(self, query: Dict[str, Any], projection: Optional[Dict[str, Any]] = None,
                   limit: int = 0, skip: int = 0) -> List[Dict[str, Any]]:
        cursor = self.tests_collection.find(query, projection).sort(
            "submitted_at", pymongo.DESCENDING
        )
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return list(cursor)

    def attempted_question_ids(self, user_id: str) -> List[str]:
        """Ids of every question served to the user in any submitted test"""
        seen = set()
        for doc in self.tests_collection.find({"user_id": user_id}, {"question_ids": 1}):
            seen.update(str(qid) for qid in doc.get("question_ids", []))
        return list(seen)

    # ==================== Health ====================

    def validate_connection(self) -> Dict[str, Any]:
        """Validate database connection"""
        status = {
            "mongodb": False,
            "collections_accessible": False,
            "overall": False
        }

        try:
            self.mongo_client.admin.command('ping')
            status["mongodb"] = True

            question_count = self.questions_collection.count_documents({})
            status["collections_accessible"] = True
            status["question_count"] = question_count
            status["active_sessions"] = self.sessions_collection.count_documents({})
            logger.info(f"✅ MongoDB accessible with {question_count} questions")

        except PyMongoError as e:
            logger.error(f"❌ MongoDB validation failed: {e}")

        status["overall"] = status["mongodb"] and status["collections_accessible"]

        return status

    def close(self):
        """Close database connections"""
        if self.mongo_client:
            self.mongo_client.close()
            logger.info("✅ Database connections closed")

# Singleton pattern for database manager
_db_manager = None

def get_db_manager() -> DatabaseManager:
    """Get database manager instance (singleton)"""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager

def close_db_manager():
    """Close database manager instance"""
    global _db_manager
    if _db_manager:
        _db_manager.close()
        _db_manager = None
