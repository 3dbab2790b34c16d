from datetime import datetime, timedelta
from . import db
from .models import (
    Users, Courses, Enrollments, Assignments, Groups, GroupMembers, Acknowledgments,
    ROLE_PROFESSOR, ROLE_STUDENT, SUBMISSION_GROUP, SUBMISSION_INDIVIDUAL,
)

DEMO_PASSWORD = "password"

USERS = [
    ("p101", ROLE_PROFESSOR, "Prof. Priya Sharma"),
    ("p102", ROLE_PROFESSOR, "Prof. Anand Varma"),
    ("s201", ROLE_STUDENT, "Aarav Joshi"),
    ("s202", ROLE_STUDENT, "Bhavik Patel"),
    ("s203", ROLE_STUDENT, "Chaitra Rao"),
    ("s204", ROLE_STUDENT, "Divya Menon"),
]

# id, name, professor, roster
COURSES = [
    ("c101", "Advanced React Development", "p101", ["s201", "s202", "s203", "s204"]),
    ("c102", "Data Structures & Algorithms", "p101", ["s203"]),
    ("c103", "UI/UX Design Principles", "p102", ["s201", "s203", "s204"]),
]

def ensure_user(user_id, role, name):
    if db.session.get(Users, user_id):
        return
    u = Users(id=user_id, username=user_id, role=role, name=name)
    u.set_password(DEMO_PASSWORD)
    db.session.add(u)

def run_seed(include_acknowledgments=True):
    now = datetime.utcnow()

    for user_id, role, name in USERS:
        ensure_user(user_id, role, name)
    db.session.flush()

    for course_id, name, professor_id, roster in COURSES:
        if db.session.get(Courses, course_id):
            continue
        c = Courses(id=course_id, name=name, professor_id=professor_id)
        c.enrollments = [Enrollments(user_id=sid) for sid in roster]
        db.session.add(c)

    if not db.session.get(Assignments, "a301"):
        db.session.add(Assignments(
            id="a301", course_id="c101", position=1,
            title="Component Architecture Design",
            description="Design a scalable component library.",
            deadline=now + timedelta(days=7),
            submission_type=SUBMISSION_GROUP,
            one_drive_link="https://onedrive.link/a301",
            created_at=now - timedelta(hours=2),
        ))
    if not db.session.get(Assignments, "a302"):
        db.session.add(Assignments(
            id="a302", course_id="c101", position=2,
            title="Individual Project Setup",
            description="Set up your personal development environment.",
            deadline=now + timedelta(days=3),
            submission_type=SUBMISSION_INDIVIDUAL,
            one_drive_link="https://onedrive.link/a302",
            created_at=now - timedelta(hours=1),
        ))

    if not db.session.get(Groups, "g401"):
        g = Groups(id="g401", course_id="c101", leader_id="s201", created_at=now - timedelta(hours=2))
        g.members = [GroupMembers(user_id="s201"), GroupMembers(user_id="s202")]
        db.session.add(g)

    db.session.commit()

    if include_acknowledgments:
        for ack_id, assignment_id, submitter_id in (("k501", "a302", "s203"), ("k502", "a301", "g401")):
            if not Acknowledgments.query.filter_by(assignment_id=assignment_id,
                                                   submitter_id=submitter_id).first():
                db.session.add(Acknowledgments(id=ack_id, assignment_id=assignment_id,
                                               submitter_id=submitter_id, timestamp=now))
        db.session.commit()
