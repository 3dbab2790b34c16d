import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .errors import ErrorCode, Result
from .models import Acknowledgments, generate_id

log = logging.getLogger(__name__)


@dataclass
class AcknowledgmentStatus:
    acknowledged: bool = False
    timestamp: Optional[datetime] = None

    def to_dict(self):
        return {"acknowledged": self.acknowledged,
                "timestamp": self.timestamp.isoformat() if self.timestamp else None}


class AcknowledgmentService:
    def __init__(self, store, groups, session, clock=datetime.utcnow):
        self.store = store
        self.groups = groups
        self.session = session
        self.clock = clock

    def acknowledge(self, assignment_id, course_id, acting_user) -> Result:
        """Record that ``acting_user`` (or their group) handed in the assignment.

        Individual assignments are acknowledged by the student; Group ones by
        the group leader on behalf of the group. A repeated call returns the
        stored acknowledgment with ``AlreadyAcknowledged``.
        """
        if acting_user is None or not acting_user.is_student:
            return Result.failure(ErrorCode.FORBIDDEN, "Only students can acknowledge submissions.")

        assignment = self.store.find_assignment(assignment_id)
        if assignment is None or assignment.course_id != course_id:
            return Result.failure(ErrorCode.ASSIGNMENT_NOT_FOUND)

        submitter_id = acting_user.id
        if assignment.is_group:
            status = self.groups.status_for(course_id, acting_user.id)
            if not status.group_id:
                log.info("ack rejected: %s has no group in %s", acting_user.id, course_id)
                return Result.failure(ErrorCode.NOT_IN_GROUP)
            if not status.is_leader:
                log.info("ack rejected: %s is not leader of %s", acting_user.id, status.group_id)
                return Result.failure(ErrorCode.NOT_GROUP_LEADER)
            submitter_id = status.group_id

        existing = self.store.find_acknowledgment(assignment.id, submitter_id)
        if existing is not None:
            log.info("%s already acknowledged for %s", assignment.id, submitter_id)
            return Result.failure(ErrorCode.ALREADY_ACKNOWLEDGED, value=existing)

        ack = Acknowledgments(
            id=generate_id(),
            assignment_id=assignment.id,
            submitter_id=submitter_id,
            acknowledged=True,
            timestamp=self.clock(),
        )
        self.session.add(ack)
        self.session.commit()
        log.info("acknowledged %s for %s by %s", assignment.id, submitter_id, acting_user.id)
        return Result.success(ack, "Submission acknowledged successfully!")

    def _submitter_for(self, assignment, student_id):
        if not assignment.is_group:
            return student_id
        return self.groups.status_for(assignment.course_id, student_id).group_id

    def status_for(self, assignment, student_id) -> AcknowledgmentStatus:
        submitter_id = self._submitter_for(assignment, student_id)
        if submitter_id is None:
            return AcknowledgmentStatus()
        ack = self.store.find_acknowledgment(assignment.id, submitter_id)
        if ack is None:
            return AcknowledgmentStatus()
        return AcknowledgmentStatus(acknowledged=True, timestamp=ack.timestamp)

    def submission_state(self, assignment, student_id):
        """What a student can do with an assignment right now."""
        status = self.status_for(assignment, student_id)
        needs_group = needs_leader = False
        if assignment.is_group:
            group = self.groups.status_for(assignment.course_id, student_id)
            needs_group = not group.in_group
            needs_leader = group.in_group and not group.is_leader
        return {
            "acknowledged": status.acknowledged,
            "timestamp": status.to_dict()["timestamp"],
            "needs_to_join_group": needs_group,
            "needs_leader_ack": needs_leader,
            "can_acknowledge": not (status.acknowledged or needs_group or needs_leader),
        }
