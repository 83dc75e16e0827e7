# practice_mocktest/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError

from .core.config import config
from .core.database import get_db_manager, close_db_manager
from .core.dummy_data import seed_questions
from .core.errors import AppError, DatabaseError, ValidationError
from .core.utils import DateTimeUtils
from .api.routes import router

# Setup logging
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    logger.info("🚀 Practice Mock Test API starting...")

    try:
        # Validate configuration
        validation = config.validate()
        if not validation["valid"]:
            raise ValidationError(f"Configuration invalid: {validation['issues']}")

        logger.info("✅ Configuration validated")

        # Initialize database manager
        logger.info("🔄 Initializing database...")
        db_manager = get_db_manager()
        db_health = db_manager.validate_connection()

        if not db_health["overall"]:
            raise DatabaseError(f"Database validation failed: {db_health}")

        logger.info("✅ Database connected and validated")

        if config.USE_DUMMY_DATA:
            seed_questions(db_manager.questions_collection)

        logger.info("✅ All systems operational")
        logger.info(f"⏱️ Timing: {config.MINUTES_PER_QUESTION} min/question, "
                    f"{config.MAX_TIME_EXTENSIONS} extensions max")
        logger.info(f"🔒 Strict expiry: {config.ENFORCE_SESSION_EXPIRY}")

    except AppError as e:
        logger.error(f"❌ Startup failed: {e}")
        raise

    yield

    # Cleanup on shutdown
    logger.info("👋 Shutting down...")
    close_db_manager()
    logger.info("✅ Graceful shutdown completed")

# Create FastAPI application
app = FastAPI(
    title=config.API_TITLE,
    description=config.API_DESCRIPTION,
    version=config.API_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(router)

# Exception handlers
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Domain errors carry their own status and payload"""
    if exc.is_operational:
        logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    else:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Reshape request body errors into field messages"""
    fields = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
        fields[".".join(location) or "body"] = error.get("msg", "Invalid value")

    logger.warning(f"Validation error on {request.url.path}: {fields}")
    return JSONResponse(status_code=400, content=ValidationError("Invalid input", fields).to_dict())

@app.exception_handler(DuplicateKeyError)
async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
    logger.warning(f"Duplicate key on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=409,
        content={
            "success": False,
            "error": "Duplicate entry - resource already exists",
            "type": "conflict_error",
            "statusCode": 409,
            "timestamp": DateTimeUtils.to_iso(DateTimeUtils.now())
        }
    )

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "An unexpected error occurred",
            "type": "server_error",
            "statusCode": 500,
            "timestamp": DateTimeUtils.to_iso(DateTimeUtils.now())
        }
    )

# Health check endpoints
@app.get("/health")
async def health_check():
    """Comprehensive health check"""
    health_status = {
        "status": "healthy",
        "service": "practice_mocktest_api",
        "version": config.API_VERSION,
        "timestamp": DateTimeUtils.to_iso(DateTimeUtils.now())
    }

    try:
        from .services.test_service import get_test_service
        test_health = get_test_service().health_check()
        health_status["database"] = test_health["status"]
        health_status["active_sessions"] = test_health.get("active_sessions", 0)
        health_status["question_count"] = test_health.get("question_count", 0)
    except AppError as e:
        health_status["database"] = "error"
        logger.warning(f"Database health check failed: {e}")

    if health_status.get("database") != "healthy":
        health_status["status"] = "degraded"
        return JSONResponse(status_code=503, content=health_status)

    return health_status

@app.get("/info")
async def api_info():
    """API information and capabilities"""
    return {
        "name": config.API_TITLE,
        "version": config.API_VERSION,
        "description": config.API_DESCRIPTION,
        "configuration": {
            "min_questions": config.MIN_QUESTIONS,
            "max_questions": config.MAX_QUESTIONS,
            "max_topics": config.MAX_TOPICS,
            "minutes_per_question": config.MINUTES_PER_QUESTION,
            "max_time_extensions": config.MAX_TIME_EXTENSIONS,
            "allowed_extension_minutes": list(config.ALLOWED_EXTENSION_MINUTES),
            "enforce_session_expiry": config.ENFORCE_SESSION_EXPIRY
        },
        "endpoints": {
            "topics": "GET /api/tests/topics",
            "configure": "POST /api/tests/configure",
            "start_test": "POST /api/tests/start",
            "active_session": "GET /api/tests/session",
            "save_answer": "PUT /api/tests/session/answer",
            "mark_review": "PUT /api/tests/session/mark-review",
            "extend_time": "POST /api/tests/session/extend-time",
            "abandon": "POST /api/tests/session/abandon",
            "submit": "POST /api/tests/submit",
            "history": "GET /api/tests/history",
            "test": "GET /api/tests/{test_id}",
            "admin_user_tests": "GET /api/admin/users/{user_id}/tests",
            "health": "GET /health",
            "docs": "GET /docs"
        }
    }

if __name__ == "__main__":
    import uvicorn

    logger.info("🚀 Starting Practice Mock Test API")
    logger.info(f"🌐 Server: http://{config.API_HOST}:{config.API_PORT}")
    logger.info(f"📚 Docs: http://{config.API_HOST}:{config.API_PORT}/docs")

    uvicorn.run(
        "practice_mocktest.main:app",
        host=config.API_HOST,
        port=config.API_PORT,
        reload=config.DEBUG_MODE,
        log_level=config.LOG_LEVEL.lower(),
        access_log=config.DEBUG_MODE
    )
