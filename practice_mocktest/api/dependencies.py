# practice_mocktest/api/dependencies.py
from dataclasses import dataclass
from typing import Optional

from fastapi import Header

from ..core.errors import AuthenticationError, AuthorizationError
from ..services.question_service import QuestionService, get_question_service
from ..services.test_service import TestService, get_test_service

ADMIN_ROLE = "admin"


@dataclass
class CurrentUser:
    """Identity handed over by the upstream auth layer"""

    id: str
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


def current_user(x_user_id: Optional[str] = Header(default=None),
                 x_user_role: Optional[str] = Header(default=None)) -> CurrentUser:
    """Trust the authenticated user id and role supplied by the gateway"""
    if not x_user_id or not x_user_id.strip():
        raise AuthenticationError()
    return CurrentUser(id=x_user_id.strip(), role=(x_user_role or "user").strip().lower())


def admin_user(x_user_id: Optional[str] = Header(default=None),
               x_user_role: Optional[str] = Header(default=None)) -> CurrentUser:
    user = current_user(x_user_id, x_user_role)
    if not user.is_admin:
        raise AuthorizationError("Admin access required")
    return user


def provide_question_service() -> QuestionService:
    return get_question_service()


def provide_test_service() -> TestService:
    return get_test_service()
