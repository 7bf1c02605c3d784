"""Persistence errors raised by the result store."""

from typing import Optional

from .base import DefectInsightError


class PersistenceError(DefectInsightError):
    """Raised when a result cannot be written to or read from the store."""

    def __init__(self, operation: str, reason: str, user_id: Optional[str] = None):
        details = {"operation": operation, "reason": reason}
        if user_id:
            details["user_id"] = user_id
        super().__init__(f"Result store {operation} failed", details=details)
        self.operation = operation
        self.reason = reason
        self.user_id = user_id
