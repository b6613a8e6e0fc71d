# app/core/errors.py
from fastapi import status


class SignupError(Exception):
    """Base error of the signup flow. Carries the HTTP status it maps to."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ValidationError(SignupError):
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(SignupError):
    status_code = status.HTTP_409_CONFLICT


class NotFoundError(SignupError):
    status_code = status.HTTP_404_NOT_FOUND


class DownstreamError(SignupError):
    """A store or the mail server failed. Details are logged, never returned."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
