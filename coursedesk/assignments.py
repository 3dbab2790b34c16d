import logging
from datetime import datetime, timezone

from sqlalchemy import func

from .errors import ErrorCode, Result
from .models import Assignments, Acknowledgments, SUBMISSION_TYPES, SUBMISSION_INDIVIDUAL, generate_id

log = logging.getLogger(__name__)

EDITABLE_FIELDS = ("course_id", "title", "description", "deadline", "submission_type", "one_drive_link")


def parse_deadline(value):
    """Accept a datetime or an ISO-8601 string (a trailing ``Z`` is UTC)."""
    if value is None or isinstance(value, datetime):
        return value
    raw = str(value).strip()
    if not raw:
        return None
    if raw.endswith("Z"):
        raw = raw[:-1]
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is not None:
        # stored naive, in UTC like every other timestamp
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


class AssignmentService:
    def __init__(self, store, session, clock=datetime.utcnow):
        self.store = store
        self.session = session
        self.clock = clock

    def _check_professor(self, course, acting_user):
        if acting_user is None:
            return None
        if not acting_user.is_professor or course.professor_id != acting_user.id:
            log.info("forbidden: %s is not the professor of %s", acting_user.id, course.id)
            return Result.failure(ErrorCode.FORBIDDEN, "Only the course professor can manage its assignments.")
        return None

    def create_or_update(self, data, acting_user=None) -> Result:
        existing = self.store.find_assignment(data.get("id"))
        course_id = data.get("course_id") or (existing.course_id if existing else None)
        course = self.store.find_course_by_id(course_id)
        if course is None:
            return Result.failure(ErrorCode.COURSE_NOT_FOUND)
        denied = self._check_professor(course, acting_user)
        if denied:
            return denied
        if existing is not None and existing.course_id != course.id:
            # acknowledgments and groups are scoped to the owning course
            log.info("update rejected: %s belongs to %s, not %s", existing.id, existing.course_id, course.id)
            return Result.failure(ErrorCode.INVALID_REQUEST, "An assignment cannot be moved to another course.")

        title = (data.get("title") or "").strip()
        if not title:
            return Result.failure(ErrorCode.INVALID_REQUEST, "Title is required.")
        submission_type = data.get("submission_type") or SUBMISSION_INDIVIDUAL
        if submission_type not in SUBMISSION_TYPES:
            return Result.failure(ErrorCode.INVALID_REQUEST,
                                  f"Submission type must be one of {', '.join(SUBMISSION_TYPES)}.")
        try:
            deadline = parse_deadline(data.get("deadline"))
        except ValueError:
            return Result.failure(ErrorCode.INVALID_REQUEST, "Deadline is not a valid date.")

        values = {
            "course_id": course.id,
            "title": title,
            "description": (data.get("description") or "").strip() or None,
            "deadline": deadline,
            "submission_type": submission_type,
            "one_drive_link": (data.get("one_drive_link") or "").strip() or None,
        }

        if existing is not None:
            # id and created_at survive an edit
            for name in EDITABLE_FIELDS:
                setattr(existing, name, values[name])
            self.session.commit()
            log.info("assignment %s updated", existing.id)
            return Result.success(existing, f'Assignment "{existing.title}" updated.')

        last = self.session.query(func.max(Assignments.position)).scalar() or 0
        a = Assignments(id=generate_id(), created_at=self.clock(), position=last + 1, **values)
        self.session.add(a)
        self.session.commit()
        log.info("assignment %s created in %s", a.id, a.course_id)
        return Result.success(a, f'Assignment "{a.title}" created!')

    def delete(self, assignment_id, acting_user=None) -> Result:
        a = self.store.find_assignment(assignment_id)
        if a is None:
            return Result.failure(ErrorCode.ASSIGNMENT_NOT_FOUND)
        denied = self._check_professor(a.course, acting_user)
        if denied:
            return denied

        # acknowledgments go with their assignment
        removed = (self.session.query(Acknowledgments)
                   .filter_by(assignment_id=a.id)
                   .delete(synchronize_session="fetch"))
        self.session.delete(a)
        self.session.commit()
        log.info("assignment %s deleted (%d acknowledgments removed)", assignment_id, removed)
        return Result.success(None, "Assignment deleted.")
