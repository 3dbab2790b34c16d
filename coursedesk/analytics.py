"""Submission progress projections.

Everything here is recomputed from the store on every call. Nothing is cached,
so a read always reflects the acknowledgments written before it.
"""
import math
from dataclasses import dataclass
from typing import FrozenSet


@dataclass(frozen=True)
class Roster:
    student_ids: FrozenSet[str] = frozenset()
    group_ids: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class Progress:
    submitted_count: int = 0
    total_submittable: int = 0
    percentage: int = 0

    def to_dict(self):
        return {"submitted_count": self.submitted_count,
                "total_submittable": self.total_submittable,
                "percentage": self.percentage}


def percent(part, whole) -> int:
    """Whole-number percentage, halves rounded up; 0 when ``whole`` is 0."""
    if whole <= 0:
        return 0
    return int(math.floor(100 * part / whole + 0.5))


def progress_from(assignment, roster, acknowledgments) -> Progress:
    eligible = roster.group_ids if assignment.is_group else roster.student_ids
    submitted = {a.submitter_id for a in acknowledgments
                 if a.assignment_id == assignment.id and a.submitter_id in eligible}
    return Progress(len(submitted), len(eligible), percent(len(submitted), len(eligible)))


class AnalyticsProjector:
    def __init__(self, store):
        self.store = store

    def roster_for(self, course_id) -> Roster:
        students = frozenset(s.id for s in self.store.students_in_course(course_id))
        groups = frozenset(g.id for g in self.store.groups_for_course(course_id))
        return Roster(student_ids=students, group_ids=groups)

    def compute_progress(self, assignment, roster=None) -> Progress:
        if roster is None:
            roster = self.roster_for(assignment.course_id)
        return progress_from(assignment, roster,
                             self.store.acknowledgments_for_assignment(assignment.id))

    def course_assignments(self, course_id):
        """Assignments of a course with their progress, newest first."""
        roster = self.roster_for(course_id)
        rows = []
        for a in self.store.assignments_for_course(course_id):
            row = a.to_dict()
            row["progress"] = self.compute_progress(a, roster).to_dict()
            rows.append((a.created_at, a.position, row))
        rows.sort(key=lambda r: (r[0], r[1]), reverse=True)
        return [row for _, _, row in rows]

    def submission_review(self, assignment_id):
        a = self.store.find_assignment(assignment_id)
        if a is None:
            return None
        submitted = {ack.submitter_id: ack for ack in self.store.acknowledgments_for_assignment(a.id)}

        def _row(entity_id, **extra):
            ack = submitted.get(entity_id)
            row = {"id": entity_id, "is_submitted": ack is not None,
                   "status_text": "Submitted" if ack else "Pending",
                   "timestamp": ack.timestamp.isoformat() if ack else None}
            row.update(extra)
            return row

        if a.is_group:
            entries = [_row(g.id, name=f"Group {g.id}", leader_id=g.leader_id, member_ids=g.member_ids)
                       for g in self.store.groups_for_course(a.course_id)]
        else:
            entries = [_row(s.id, name=s.name) for s in self.store.students_in_course(a.course_id)]

        return {
            "assignment": a.to_dict(),
            "entries": entries,
            "progress": self.compute_progress(a).to_dict(),
        }

    def _acknowledged_by(self, assignment, student_id) -> bool:
        if assignment.is_group:
            group = self.store.group_for_student(assignment.course_id, student_id)
            submitter_id = group.id if group else None
        else:
            submitter_id = student_id
        return bool(submitter_id) and \
            self.store.find_acknowledgment(assignment.id, submitter_id) is not None

    def student_overview(self, student):
        courses = []
        total = completed = 0
        for c in self.store.courses_for_user(student):
            assignments = self.store.assignments_for_course(c.id)
            done = sum(1 for a in assignments if self._acknowledged_by(a, student.id))
            courses.append({
                "id": c.id,
                "name": c.name,
                "professor_name": self.store.professor_name_for(c.professor_id),
                "total": len(assignments),
                "acknowledged": done,
                "percentage": percent(done, len(assignments)),
            })
            total += len(assignments)
            completed += done
        return {
            "total_assignments": total,
            "completed_assignments": completed,
            "pending_assignments": total - completed,
            "progress_percentage": percent(completed, total),
            "courses": courses,
        }

    def professor_overview(self, professor):
        courses = self.store.courses_for_user(professor)
        students = set()
        for c in courses:
            students.update(s.id for s in self.store.students_in_course(c.id))
        assignments = self.store.assignments_for_courses([c.id for c in courses])
        return {
            "active_courses": len(courses),
            "total_students": len(students),
            "total_assignments": len(assignments),
            "courses": [dict(c.to_dict(), assignment_count=len(c.assignments)) for c in courses],
        }
