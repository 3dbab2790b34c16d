from types import SimpleNamespace

from coursedesk import db
from coursedesk.analytics import Roster, percent, progress_from
from coursedesk.models import Acknowledgments, Enrollments


def _ack(assignment_id, submitter_id):
    return SimpleNamespace(assignment_id=assignment_id, submitter_id=submitter_id)


def test_percent_rounds_halves_up():
    assert percent(0, 0) == 0
    assert percent(1, 8) == 13
    assert percent(1, 3) == 33
    assert percent(2, 3) == 67
    assert percent(4, 4) == 100


def test_progress_from_counts_only_roster_submitters():
    assignment = SimpleNamespace(id="a1", is_group=False)
    roster = Roster(student_ids=frozenset({"s1", "s2", "s3"}), group_ids=frozenset({"g1"}))
    acks = [_ack("a1", "s1"), _ack("a1", "outsider"), _ack("a2", "s2"), _ack("a1", "g1")]
    p = progress_from(assignment, roster, acks)
    assert (p.submitted_count, p.total_submittable, p.percentage) == (1, 3, 33)

    group_assignment = SimpleNamespace(id="a1", is_group=True)
    p = progress_from(group_assignment, roster, acks)
    assert (p.submitted_count, p.total_submittable, p.percentage) == (1, 1, 100)

    empty = progress_from(group_assignment, Roster(), acks)
    assert (empty.submitted_count, empty.total_submittable, empty.percentage) == (0, 0, 0)


def test_individual_total_ignores_acknowledgments(services, user):
    a302 = services.store.find_assignment("a302")
    assert services.analytics.compute_progress(a302).total_submittable == 4
    for sid in ("s201", "s203"):
        services.acknowledgments.acknowledge("a302", "c101", user(sid))
    p = services.analytics.compute_progress(a302)
    assert (p.submitted_count, p.total_submittable, p.percentage) == (2, 4, 50)


def test_group_progress_follows_group_count(services, user):
    a301 = services.store.find_assignment("a301")
    assert services.analytics.compute_progress(a301).to_dict() == {
        "submitted_count": 0, "total_submittable": 1, "percentage": 0}

    services.acknowledgments.acknowledge("a301", "c101", user("s201"))
    assert services.analytics.compute_progress(a301).percentage == 100

    services.groups.create_or_join("c101", "s204", "create")
    p = services.analytics.compute_progress(a301)
    assert (p.submitted_count, p.total_submittable, p.percentage) == (1, 2, 50)


def test_group_submissions_never_exceed_group_count(services, user):
    db.session.add(Acknowledgments(assignment_id="a301", submitter_id="g-unknown"))
    db.session.add(Acknowledgments(assignment_id="a301", submitter_id="s201"))
    db.session.commit()
    services.acknowledgments.acknowledge("a301", "c101", user("s201"))
    p = services.analytics.compute_progress(services.store.find_assignment("a301"))
    assert p.submitted_count == 1
    assert p.submitted_count <= len(services.store.groups_for_course("c101"))


def test_course_assignments_newest_first(services):
    rows = services.analytics.course_assignments("c101")
    assert [r["id"] for r in rows] == ["a302", "a301"]
    assert rows[0]["progress"] == {"submitted_count": 0, "total_submittable": 4, "percentage": 0}

    created = services.assignments.create_or_update({
        "course_id": "c101", "title": "Testing Hooks", "deadline": "2030-01-01T00:00:00",
    }).value
    assert services.analytics.course_assignments("c101")[0]["id"] == created.id


def test_submission_review(services, user):
    services.acknowledgments.acknowledge("a302", "c101", user("s202"))
    review = services.analytics.submission_review("a302")
    status = {e["id"]: e["status_text"] for e in review["entries"]}
    assert status == {"s201": "Pending", "s202": "Submitted", "s203": "Pending", "s204": "Pending"}
    assert review["progress"]["percentage"] == 25

    group_review = services.analytics.submission_review("a301")
    assert [e["id"] for e in group_review["entries"]] == ["g401"]
    assert group_review["entries"][0]["member_ids"] == ["s201", "s202"]
    assert not group_review["entries"][0]["is_submitted"]

    assert services.analytics.submission_review("a999") is None


def test_student_overview_counts_group_submissions_for_members(services, user):
    overview = services.analytics.student_overview(user("s202"))
    assert (overview["total_assignments"], overview["completed_assignments"]) == (2, 0)

    services.acknowledgments.acknowledge("a301", "c101", user("s201"))
    overview = services.analytics.student_overview(user("s202"))
    assert overview["completed_assignments"] == 1
    assert overview["pending_assignments"] == 1
    assert overview["progress_percentage"] == 50
    c101 = overview["courses"][0]
    assert c101["professor_name"] == "Prof. Priya Sharma"
    assert c101["percentage"] == 50


def test_professor_overview(services, user):
    overview = services.analytics.professor_overview(user("p101"))
    assert overview["active_courses"] == 2
    assert overview["total_students"] == 4
    assert overview["total_assignments"] == 2

    other = services.analytics.professor_overview(user("p102"))
    assert (other["active_courses"], other["total_students"], other["total_assignments"]) == (1, 3, 0)


def test_enrolled_professor_is_not_counted_as_a_student(services):
    db.session.add(Enrollments(course_id="c101", user_id="p102"))
    db.session.commit()

    a302 = services.store.find_assignment("a302")
    review = services.analytics.submission_review("a302")
    assert services.analytics.compute_progress(a302).total_submittable == 4
    assert len(review["entries"]) == review["progress"]["total_submittable"] == 4
    assert "p102" not in {e["id"] for e in review["entries"]}
    assert services.analytics.professor_overview(services.store.find_user_by_id("p101"))["total_students"] == 4
