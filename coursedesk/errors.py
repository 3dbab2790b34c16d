"""Error codes and the ``Result`` type returned by every service call.

Services never raise for rule violations. They hand back a ``Result`` and the
caller (an HTTP route, a CLI command, a test) decides how to surface it. The
``category`` mirrors Flask's flash categories so a page can show it directly.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    ASSIGNMENT_NOT_FOUND = "AssignmentNotFound"
    NOT_IN_GROUP = "NotInGroup"
    NOT_GROUP_LEADER = "NotGroupLeader"
    ALREADY_ACKNOWLEDGED = "AlreadyAcknowledged"
    FORBIDDEN = "Forbidden"
    GROUP_FULL = "GroupFull"
    GROUP_NOT_FOUND = "GroupNotFound"
    ALREADY_GROUPED = "AlreadyGrouped"
    COURSE_NOT_FOUND = "CourseNotFound"
    INVALID_REQUEST = "InvalidRequest"
    INVALID_CREDENTIALS = "InvalidCredentials"


# Already-satisfied conditions: informational, not failures.
SOFT_ERRORS = frozenset({ErrorCode.ALREADY_ACKNOWLEDGED})

DEFAULT_MESSAGES = {
    ErrorCode.ASSIGNMENT_NOT_FOUND: "Assignment not found.",
    ErrorCode.NOT_IN_GROUP: "Not in a group for this assignment.",
    ErrorCode.NOT_GROUP_LEADER: "Only the group leader can submit.",
    ErrorCode.ALREADY_ACKNOWLEDGED: "This submission was already acknowledged.",
    ErrorCode.FORBIDDEN: "You are not allowed to do that.",
    ErrorCode.GROUP_FULL: "That group is already full.",
    ErrorCode.GROUP_NOT_FOUND: "Group not found.",
    ErrorCode.ALREADY_GROUPED: "You already belong to a group in this course.",
    ErrorCode.COURSE_NOT_FOUND: "Course not found.",
    ErrorCode.INVALID_REQUEST: "Invalid request.",
    ErrorCode.INVALID_CREDENTIALS: "Invalid credentials.",
}

HTTP_STATUS = {
    ErrorCode.ASSIGNMENT_NOT_FOUND: 404,
    ErrorCode.GROUP_NOT_FOUND: 404,
    ErrorCode.COURSE_NOT_FOUND: 404,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_IN_GROUP: 409,
    ErrorCode.NOT_GROUP_LEADER: 409,
    ErrorCode.GROUP_FULL: 409,
    ErrorCode.ALREADY_GROUPED: 409,
    ErrorCode.ALREADY_ACKNOWLEDGED: 200,
    ErrorCode.INVALID_REQUEST: 400,
    ErrorCode.INVALID_CREDENTIALS: 401,
}


@dataclass
class Result:
    value: Any = None
    error: Optional[ErrorCode] = None
    message: str = ""

    @classmethod
    def success(cls, value=None, message=""):
        return cls(value=value, message=message)

    @classmethod
    def failure(cls, error: ErrorCode, message: str = "", value=None):
        return cls(value=value, error=error, message=message or DEFAULT_MESSAGES[error])

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def soft(self) -> bool:
        return self.error in SOFT_ERRORS

    @property
    def category(self) -> str:
        if self.ok:
            return "success"
        return "info" if self.soft else "error"

    @property
    def status_code(self) -> int:
        return 200 if self.ok else HTTP_STATUS.get(self.error, 400)

    def to_dict(self):
        value = self.value.to_dict() if hasattr(self.value, "to_dict") else self.value
        return {
            "ok": self.ok,
            "error": self.error.value if self.error else None,
            "message": self.message,
            "category": self.category,
            "data": value,
        }
