from coursedesk.store import UNKNOWN_PROFESSOR


def test_find_user_and_course(services):
    store = services.store
    assert store.find_user_by_id("s201").name == "Aarav Joshi"
    assert store.find_user_by_id("nobody") is None
    assert store.find_user_by_id(None) is None

    course = store.find_course_by_id("c101")
    assert course.name == "Advanced React Development"
    assert course.professor_id == "p101"
    assert course.student_ids == ["s201", "s202", "s203", "s204"]
    assert store.find_course_by_id("c999") is None


def test_assignments_for_course_keeps_insertion_order(services):
    store = services.store
    assert [a.id for a in store.assignments_for_course("c101")] == ["a301", "a302"]
    assert store.assignments_for_course("c103") == []

    created = services.assignments.create_or_update({
        "course_id": "c101", "title": "Hooks Deep Dive", "deadline": "2030-01-01T00:00:00Z",
    }).value
    assert [a.id for a in store.assignments_for_course("c101")] == ["a301", "a302", created.id]


def test_professor_name_falls_back_to_sentinel(services):
    store = services.store
    assert store.professor_name_for("p101") == "Prof. Priya Sharma"
    assert store.professor_name_for("s201") == UNKNOWN_PROFESSOR
    assert store.professor_name_for("p999") == UNKNOWN_PROFESSOR


def test_courses_for_user(services, user):
    store = services.store
    assert [c.id for c in store.courses_for_user(user("p101"))] == ["c101", "c102"]
    assert [c.id for c in store.courses_for_user(user("p102"))] == ["c103"]
    assert [c.id for c in store.courses_for_user(user("s201"))] == ["c101", "c103"]
    assert store.courses_for_user(None) == []


def test_group_lookups(services):
    store = services.store
    g = store.group_for_student("c101", "s202")
    assert g.id == "g401"
    assert g.member_ids == ["s201", "s202"]
    assert store.group_for_student("c101", "s204") is None
    assert store.group_for_student("c103", "s201") is None
    assert [x.id for x in store.groups_for_course("c101")] == ["g401"]


def test_students_in_course(services):
    assert [s.id for s in services.store.students_in_course("c103")] == ["s201", "s203", "s204"]
