from coursedesk.errors import ErrorCode


def test_status_for_leader_member_and_loner(services):
    groups = services.groups
    leader = groups.status_for("c101", "s201")
    assert leader.in_group and leader.is_leader
    assert leader.group_id == "g401"
    assert leader.member_ids == ["s201", "s202"]

    member = groups.status_for("c101", "s202")
    assert member.in_group and not member.is_leader

    loner = groups.status_for("c101", "s204")
    assert not loner.in_group and not loner.is_leader
    assert loner.group_id is None and loner.member_ids == []


def test_create_makes_student_the_leader(services):
    result = services.groups.create_or_join("c101", "s204", "create")
    assert result.ok
    g = result.value
    assert g.course_id == "c101"
    assert g.leader_id == "s204"
    assert g.member_ids == ["s204"]
    assert services.groups.status_for("c101", "s204").is_leader


def test_create_when_already_grouped_is_rejected(services):
    before = len(services.store.groups_for_course("c101"))
    result = services.groups.create_or_join("c101", "s202", "create")
    assert result.error is ErrorCode.ALREADY_GROUPED
    assert result.value.id == "g401"
    assert len(services.store.groups_for_course("c101")) == before


def test_group_in_another_course_does_not_block_create(services):
    result = services.groups.create_or_join("c103", "s201", "create")
    assert result.ok
    assert services.groups.status_for("c101", "s201").group_id == "g401"


def test_join_appends_member(services):
    result = services.groups.create_or_join("c101", "s204", "join", "g401")
    assert result.ok
    assert services.store.find_group("g401").member_ids == ["s201", "s202", "s204"]


def test_join_full_group_leaves_members_unchanged(services, make_student):
    for sid in ("s901", "s902", "s903"):
        make_student(sid, "c101")
    for sid in ("s204", "s901", "s902"):
        assert services.groups.create_or_join("c101", sid, "join", "g401").ok
    members = services.store.find_group("g401").member_ids
    assert len(members) == 5

    result = services.groups.create_or_join("c101", "s903", "join", "g401")
    assert result.error is ErrorCode.GROUP_FULL
    assert services.store.find_group("g401").member_ids == members
    assert not services.groups.status_for("c101", "s903").in_group


def test_join_unknown_or_foreign_group(services):
    assert services.groups.create_or_join("c101", "s204", "join", "nope").error is ErrorCode.GROUP_NOT_FOUND
    # g401 belongs to c101
    result = services.groups.create_or_join("c103", "s204", "join", "g401")
    assert result.error is ErrorCode.GROUP_NOT_FOUND
    assert "s204" not in services.store.find_group("g401").member_ids


def test_join_own_group_again(services):
    result = services.groups.create_or_join("c101", "s202", "join", "g401")
    assert result.error is ErrorCode.ALREADY_GROUPED
    assert services.store.find_group("g401").member_ids == ["s201", "s202"]


def test_join_while_holding_another_group(services):
    own = services.groups.create_or_join("c101", "s204", "create").value
    result = services.groups.create_or_join("c101", "s204", "join", "g401")
    assert result.error is ErrorCode.ALREADY_GROUPED
    assert result.value.id == own.id
    assert "s204" not in services.store.find_group("g401").member_ids


def test_only_students_manage_groups(services):
    assert services.groups.create_or_join("c101", "p101", "create").error is ErrorCode.FORBIDDEN
    assert services.groups.create_or_join("c101", "ghost", "create").error is ErrorCode.FORBIDDEN


def test_bad_requests(services):
    assert services.groups.create_or_join("c101", "s204", "join").error is ErrorCode.INVALID_REQUEST
    assert services.groups.create_or_join("c101", "s204", "leave").error is ErrorCode.INVALID_REQUEST


def test_available_groups_skip_full_ones(services, make_student):
    assert [g.id for g in services.groups.available_groups("c101")] == ["g401"]
    for sid in ("s901", "s902", "s903"):
        make_student(sid, "c101")
        services.groups.create_or_join("c101", sid, "join", "g401")
    assert len(services.store.find_group("g401").members) == 5
    assert services.groups.available_groups("c101") == []


def test_course_must_exist_and_enrol_the_student(services):
    groups = services.groups
    assert groups.create_or_join("c999", "s202", "create").error is ErrorCode.COURSE_NOT_FOUND
    assert services.store.groups_for_course("c999") == []

    # s202 only takes c101
    assert groups.create_or_join("c103", "s202", "create").error is ErrorCode.FORBIDDEN
    own = groups.create_or_join("c103", "s201", "create").value
    assert groups.create_or_join("c103", "s202", "join", own.id).error is ErrorCode.FORBIDDEN
    assert [g.id for g in services.store.groups_for_course("c103")] == [own.id]
    assert services.store.find_group(own.id).member_ids == ["s201"]
