# practice_mocktest/api/schemas.py
"""
Pydantic request models for the test API
"""

from typing import List, Optional, Literal

from pydantic import BaseModel, Field, constr

from ..core.config import config

NonEmptyStr = constr(strip_whitespace=True, min_length=1)


class TestConfigRequest(BaseModel):
    topics: List[NonEmptyStr] = Field(min_length=1, max_length=config.MAX_TOPICS)
    subtopics: Optional[List[NonEmptyStr]] = None
    difficulty: Literal["easy", "medium", "hard", "mixed"]
    questionCount: int = Field(ge=config.MIN_QUESTIONS, le=config.MAX_QUESTIONS)


class AnswerRequest(BaseModel):
    sessionId: NonEmptyStr
    questionIndex: int = Field(ge=0)
    answer: int = Field(ge=0, le=3)


class MarkForReviewRequest(BaseModel):
    sessionId: NonEmptyStr
    questionIndex: int = Field(ge=0)


class TimeExtensionRequest(BaseModel):
    sessionId: NonEmptyStr
    minutes: Literal[5, 10]


class SubmitRequest(BaseModel):
    sessionId: NonEmptyStr
