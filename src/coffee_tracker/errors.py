from abc import ABC
from datetime import datetime
from typing import Any


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class BusinessRuleError(UserError):
    """Raised when a well-formed request breaks a tracking rule.

    Carries the rule name and the numeric context needed to explain the rejection.
    """

    def __init__(self, rule_name: str, message: str) -> None:
        super().__init__(message)
        self.rule_name = rule_name

    def details(self) -> dict[str, Any]:
        """Extra fields exposed next to the message in error responses."""
        return {}


class InvalidTimestampError(BusinessRuleError):
    """Raised when an entry is dated in the future."""

    def __init__(self, timestamp: datetime) -> None:
        super().__init__(
            "InvalidTimestamp", f"Invalid timestamp provided: {timestamp.isoformat()}. Future dates are not allowed."
        )
        self.timestamp = timestamp

    def details(self) -> dict[str, Any]:
        return {"timestamp": self.timestamp.isoformat()}


class DailyEntryLimitExceededError(BusinessRuleError):
    """Raised when the session already logged the maximum number of entries for the day."""

    def __init__(self, current: int, max_allowed: int) -> None:
        super().__init__("DailyEntryLimit", f"Daily entry limit exceeded. Current: {current}, Maximum allowed: {max_allowed}")
        self.current = current
        self.max_allowed = max_allowed

    def details(self) -> dict[str, Any]:
        return {"current": self.current, "max": self.max_allowed}


class DailyCaffeineLimitExceededError(BusinessRuleError):
    """Raised when the new entry would push the day's caffeine total over the limit."""

    def __init__(self, current: int, adding: int, max_allowed: int) -> None:
        super().__init__(
            "DailyCaffeineLimit",
            f"Daily caffeine limit would be exceeded. Current: {current}mg, Adding: {adding}mg, Maximum allowed: {max_allowed}mg",
        )
        self.current = current
        self.adding = adding
        self.max_allowed = max_allowed

    def details(self) -> dict[str, Any]:
        return {"current": self.current, "adding": self.adding, "max": self.max_allowed}
