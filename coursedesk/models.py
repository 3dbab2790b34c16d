import uuid
from datetime import datetime
from typing import Optional
from flask_login import UserMixin
from sqlalchemy.orm import backref

from . import db, login_manager
from werkzeug.security import generate_password_hash, check_password_hash

ROLE_PROFESSOR, ROLE_STUDENT = "Professor", "Student"
SUBMISSION_INDIVIDUAL, SUBMISSION_GROUP = "Individual", "Group"
SUBMISSION_TYPES = (SUBMISSION_INDIVIDUAL, SUBMISSION_GROUP)

def generate_id() -> str:
    """Short, non-secure identifier for runtime-created records."""
    return uuid.uuid4().hex[:7]

def _iso(value):
    return value.isoformat() if value else None

class Users(UserMixin, db.Model):
    __tablename__ = "users"
    id = db.Column(db.String(32), primary_key=True, default=generate_id)
    username = db.Column(db.String(64), unique=True, nullable=False)
    name = db.Column(db.String(100), nullable=False)
    role = db.Column(db.String(16), nullable=False, default=ROLE_STUDENT)
    hashed_pw = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    courses_taught = db.relationship("Courses", backref="professor", lazy=True,
                                     order_by="Courses.id")
    def set_password(self, raw): self.hashed_pw = generate_password_hash(raw)
    def check_password(self, raw): return check_password_hash(self.hashed_pw, raw)
    def get_id(self): return str(self.id)

    @property
    def is_professor(self) -> bool:
        return self.role == ROLE_PROFESSOR

    @property
    def is_student(self) -> bool:
        return self.role == ROLE_STUDENT

    @property
    def course_ids(self):
        if self.is_professor:
            return [c.id for c in self.courses_taught]
        return [e.course_id for e in self.enrollments]

    def to_dict(self):
        return {"id": self.id, "username": self.username, "name": self.name,
                "role": self.role, "course_ids": self.course_ids}

@login_manager.user_loader
def load_user(user_id: str) -> Optional["Users"]:
    return db.session.get(Users, user_id)

class Courses(db.Model):
    __tablename__ = "courses"
    id = db.Column(db.String(32), primary_key=True, default=generate_id)
    name = db.Column(db.String(160), nullable=False)
    professor_id = db.Column(db.String(32), db.ForeignKey("users.id"), nullable=False)
    enrollments = db.relationship(
        "Enrollments",
        backref=backref("course"),
        cascade="all, delete-orphan",
        order_by="Enrollments.id",
    )

    @property
    def student_ids(self):
        return [e.user_id for e in self.enrollments]

    def to_dict(self):
        return {"id": self.id, "name": self.name,
                "professor_id": self.professor_id, "student_ids": self.student_ids}

class Enrollments(db.Model):
    __tablename__ = "enrollments"
    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.String(32), db.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False)
    user_id = db.Column(db.String(32), db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    enrolled_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    __table_args__ = (db.UniqueConstraint("course_id", "user_id", name="uq_enrollments_course_user"),)

    user = db.relationship("Users", backref=backref("enrollments", lazy="select",
                                                    order_by="Enrollments.id"))

class Assignments(db.Model):
    __tablename__ = "assignments"
    id = db.Column(db.String(32), primary_key=True, default=generate_id)
    course_id = db.Column(db.String(32), db.ForeignKey("courses.id", ondelete="CASCADE"),
                          index=True, nullable=False)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    deadline = db.Column(db.DateTime)
    submission_type = db.Column(db.String(16), nullable=False, default=SUBMISSION_INDIVIDUAL)
    one_drive_link = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    position = db.Column(db.Integer, nullable=False, default=0)   # insertion order

    course = db.relationship("Courses", backref=backref("assignments", lazy="select",
                                                        order_by="Assignments.position"))

    @property
    def is_group(self) -> bool:
        return self.submission_type == SUBMISSION_GROUP

    def to_dict(self):
        return {
            "id": self.id,
            "course_id": self.course_id,
            "title": self.title,
            "description": self.description,
            "deadline": _iso(self.deadline),
            "submission_type": self.submission_type,
            "one_drive_link": self.one_drive_link,
            "created_at": _iso(self.created_at),
        }

class Groups(db.Model):
    __tablename__ = "groups"
    id = db.Column(db.String(32), primary_key=True, default=generate_id)
    course_id = db.Column(db.String(32), db.ForeignKey("courses.id", ondelete="CASCADE"),
                          index=True, nullable=False)
    leader_id = db.Column(db.String(32), db.ForeignKey("users.id"), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    # leader first, then in join order
    members = db.relationship(
        "GroupMembers",
        backref=backref("group"),
        cascade="all, delete-orphan",
        order_by="GroupMembers.id",
        lazy="joined",
    )

    @property
    def member_ids(self):
        return [m.user_id for m in self.members]

    @property
    def students(self):
        """Users of the group, in membership order."""
        return [m.user for m in self.members]

    def to_dict(self):
        return {"id": self.id, "course_id": self.course_id,
                "leader_id": self.leader_id, "member_ids": self.member_ids}

class GroupMembers(db.Model):
    __tablename__ = "group_members"
    id = db.Column(db.Integer, primary_key=True)
    group_id = db.Column(db.String(32), db.ForeignKey("groups.id", ondelete="CASCADE"), nullable=False)
    user_id = db.Column(db.String(32), db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    __table_args__ = (db.UniqueConstraint("group_id", "user_id", name="uq_group_member"),)

    user = db.relationship("Users", backref=backref("group_memberships", lazy="select"))

class Acknowledgments(db.Model):
    __tablename__ = "acknowledgments"
    id = db.Column(db.String(32), primary_key=True, default=generate_id)
    assignment_id = db.Column(db.String(32), db.ForeignKey("assignments.id", ondelete="CASCADE"),
                              index=True, nullable=False)
    # a user id for Individual assignments, a group id for Group ones
    submitter_id = db.Column(db.String(32), nullable=False)
    acknowledged = db.Column(db.Boolean, nullable=False, default=True)
    timestamp = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    __table_args__ = (db.UniqueConstraint("assignment_id", "submitter_id", name="uq_ack_assignment_submitter"),)

    def to_dict(self):
        return {"id": self.id, "assignment_id": self.assignment_id,
                "submitter_id": self.submitter_id, "acknowledged": self.acknowledged,
                "timestamp": _iso(self.timestamp)}
