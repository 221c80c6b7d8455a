from __future__ import annotations


class JobBoardError(Exception):
    """Base for errors that map onto an HTTP status and a short message."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(JobBoardError):
    status_code = 400


class UnauthorizedError(JobBoardError):
    status_code = 401


class ForbiddenError(JobBoardError):
    status_code = 403


class NotFoundError(JobBoardError):
    status_code = 404


class ConflictError(JobBoardError):
    status_code = 409


class InternalError(JobBoardError):
    status_code = 500


class ServiceUnavailableError(JobBoardError):
    status_code = 503
