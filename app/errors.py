from typing import Dict, List, Optional


class ReportError(Exception):
    """Base error for the reports API. Carries the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str, errors: Optional[Dict[str, List[str]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(ReportError):
    status_code = 422

    def __init__(self, errors: Dict[str, List[str]], message: str = "validation error"):
        super().__init__(message, errors)


class NotFoundError(ReportError):
    status_code = 404


class AuthorizationError(ReportError):
    status_code = 401


class PersistenceError(ReportError):
    status_code = 500
