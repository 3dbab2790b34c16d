import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import ErrorCode, Result
from .models import Groups, GroupMembers, generate_id

log = logging.getLogger(__name__)

ACTION_CREATE, ACTION_JOIN = "create", "join"


@dataclass
class GroupStatus:
    in_group: bool = False
    is_leader: bool = False
    group_id: Optional[str] = None
    member_ids: List[str] = field(default_factory=list)

    def to_dict(self):
        return {"in_group": self.in_group, "is_leader": self.is_leader,
                "group_id": self.group_id, "member_ids": list(self.member_ids)}


class GroupMembershipService:
    """Create-or-join for student groups. A student holds at most one group per course."""

    def __init__(self, store, session, max_size=5):
        self.store = store
        self.session = session
        self.max_size = max_size

    def status_for(self, course_id, student_id) -> GroupStatus:
        group = self.store.group_for_student(course_id, student_id)
        if group is None:
            return GroupStatus()
        return GroupStatus(
            in_group=True,
            is_leader=group.leader_id == student_id,
            group_id=group.id,
            member_ids=group.member_ids,
        )

    def available_groups(self, course_id):
        """Groups of the course that still have room."""
        return [g for g in self.store.groups_for_course(course_id)
                if len(g.members) < self.max_size]

    def create_or_join(self, course_id, student_id, action, target_group_id=None) -> Result:
        student = self.store.find_user_by_id(student_id)
        if student is None or not student.is_student:
            return Result.failure(ErrorCode.FORBIDDEN, "Only students can manage groups.")
        course = self.store.find_course_by_id(course_id)
        if course is None:
            return Result.failure(ErrorCode.COURSE_NOT_FOUND)
        if student_id not in course.student_ids:
            log.info("group action rejected: %s is not enrolled in %s", student_id, course_id)
            return Result.failure(ErrorCode.FORBIDDEN, "You are not enrolled in this course.")

        if action == ACTION_CREATE:
            return self._create(course_id, student_id)
        if action == ACTION_JOIN:
            if not target_group_id:
                return Result.failure(ErrorCode.INVALID_REQUEST, "Please select a group to join.")
            return self._join(course_id, student_id, target_group_id)
        return Result.failure(ErrorCode.INVALID_REQUEST, f"Unknown group action: {action!r}.")

    def _create(self, course_id, student_id) -> Result:
        current = self.store.group_for_student(course_id, student_id)
        if current is not None:
            log.info("create rejected: %s already in group %s (course %s)",
                     student_id, current.id, course_id)
            return Result.failure(ErrorCode.ALREADY_GROUPED, value=current)

        g = Groups(id=generate_id(), course_id=course_id, leader_id=student_id)
        g.members.append(GroupMembers(user_id=student_id))
        self.session.add(g)
        self.session.commit()
        log.info("group %s created in %s by %s", g.id, course_id, student_id)
        return Result.success(g, "Group created. You are the group leader.")

    def _join(self, course_id, student_id, group_id) -> Result:
        g = self.store.find_group(group_id)
        if g is None or g.course_id != course_id:
            return Result.failure(ErrorCode.GROUP_NOT_FOUND)
        if student_id in g.member_ids:
            return Result.failure(ErrorCode.ALREADY_GROUPED, "You are already in this group.", value=g)
        if len(g.members) >= self.max_size:
            log.info("join rejected: group %s is full", g.id)
            return Result.failure(ErrorCode.GROUP_FULL, value=g)
        current = self.store.group_for_student(course_id, student_id)
        if current is not None:
            return Result.failure(ErrorCode.ALREADY_GROUPED, value=current)

        g.members.append(GroupMembers(user_id=student_id))
        self.session.commit()
        log.info("%s joined group %s (%d/%d)", student_id, g.id, len(g.members), self.max_size)
        return Result.success(g, "Joined the group.")
