from typing import Optional

from fastapi import Header, Request

from quiz_api.core.config import Settings
from quiz_api.core.errors import AuthenticationError
from quiz_api.services.feedback import FeedbackService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> int:
    """
    Resolve the caller's user id from the X-User-Id header.

    Authentication happens upstream; this only checks that an identity was
    forwarded and that it is a positive integer.
    """
    if x_user_id is None or not x_user_id.strip():
        raise AuthenticationError("User not authenticated or user id missing.")
    try:
        user_id = int(x_user_id.strip())
    except ValueError:
        raise AuthenticationError("User id must be a number.")
    if user_id <= 0:
        raise AuthenticationError("User id must be a positive number.")
    return user_id


def get_feedback_service(request: Request) -> FeedbackService:
    return request.app.state.feedback_service
