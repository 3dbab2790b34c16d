"""Read accessors over the in-memory collections. No validation happens here."""
from .models import (
    Users, Courses, Enrollments, Assignments, Groups, GroupMembers, Acknowledgments,
    ROLE_PROFESSOR, ROLE_STUDENT,
)

UNKNOWN_PROFESSOR = "Professor Unknown"


class EntityStore:
    def __init__(self, session):
        self.session = session

    # ----------------- Users / Courses -----------------
    def find_user_by_id(self, user_id):
        if not user_id:
            return None
        return self.session.get(Users, user_id)

    def find_user_by_username(self, username):
        return self.session.query(Users).filter_by(username=username).first()

    def find_course_by_id(self, course_id):
        if not course_id:
            return None
        return self.session.get(Courses, course_id)

    def professor_name_for(self, professor_id) -> str:
        professor = self.find_user_by_id(professor_id)
        if professor is None or professor.role != ROLE_PROFESSOR:
            return UNKNOWN_PROFESSOR
        return professor.name

    def courses_for_user(self, user):
        if user is None:
            return []
        ids = user.course_ids
        if not ids:
            return []
        return (self.session.query(Courses)
                .filter(Courses.id.in_(ids))
                .order_by(Courses.id.asc())
                .all())

    def students_in_course(self, course_id):
        return (self.session.query(Users)
                .join(Enrollments, Enrollments.user_id == Users.id)
                .filter(Enrollments.course_id == course_id, Users.role == ROLE_STUDENT)
                .order_by(Enrollments.id.asc())
                .all())

    # ----------------- Assignments -----------------
    def find_assignment(self, assignment_id):
        if not assignment_id:
            return None
        return self.session.get(Assignments, assignment_id)

    def assignments_for_course(self, course_id):
        return (self.session.query(Assignments)
                .filter_by(course_id=course_id)
                .order_by(Assignments.position.asc())
                .all())

    def assignments_for_courses(self, course_ids):
        if not course_ids:
            return []
        return (self.session.query(Assignments)
                .filter(Assignments.course_id.in_(course_ids))
                .order_by(Assignments.position.asc())
                .all())

    # ----------------- Groups -----------------
    def find_group(self, group_id):
        if not group_id:
            return None
        return self.session.get(Groups, group_id)

    def groups_for_course(self, course_id):
        return (self.session.query(Groups)
                .filter_by(course_id=course_id)
                .order_by(Groups.created_at.asc(), Groups.id.asc())
                .all())

    def group_for_student(self, course_id, student_id):
        return (self.session.query(Groups)
                .join(GroupMembers, GroupMembers.group_id == Groups.id)
                .filter(Groups.course_id == course_id, GroupMembers.user_id == student_id)
                .order_by(Groups.created_at.asc())
                .first())

    # ----------------- Acknowledgments -----------------
    def acknowledgments_for_assignment(self, assignment_id):
        return (self.session.query(Acknowledgments)
                .filter_by(assignment_id=assignment_id)
                .order_by(Acknowledgments.timestamp.asc())
                .all())

    def find_acknowledgment(self, assignment_id, submitter_id):
        return (self.session.query(Acknowledgments)
                .filter_by(assignment_id=assignment_id, submitter_id=submitter_id)
                .first())
