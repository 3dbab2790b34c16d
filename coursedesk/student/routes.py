from flask import Blueprint, abort, jsonify
from flask_login import login_required, current_user

from ..api import form_errors, result_response, role_required
from ..forms import GroupActionForm
from ..models import ROLE_STUDENT
from ..services import get_services

student_bp = Blueprint("student", __name__)

student_required = role_required(ROLE_STUDENT)


def _enrolled_course_or_404(course_id):
    course = get_services().store.find_course_by_id(course_id)
    if course is None or current_user.id not in course.student_ids:
        abort(404)
    return course


@student_bp.route("/dashboard", endpoint="dashboard")
@login_required
@student_required
def dashboard():
    """Totals across every course the student is enrolled in."""
    overview = get_services().analytics.student_overview(current_user)
    return jsonify(user=current_user.to_dict(), **overview)


@student_bp.get("/courses/<course_id>/assignments")
@login_required
@student_required
def course_assignments(course_id):
    svc = get_services()
    course = _enrolled_course_or_404(course_id)
    group = svc.groups.status_for(course.id, current_user.id)
    items = []
    for a in svc.store.assignments_for_course(course.id):
        row = a.to_dict()
        row["state"] = svc.acknowledgments.submission_state(a, current_user.id)
        items.append(row)
    return jsonify(
        course=course.to_dict(),
        professor_name=svc.store.professor_name_for(course.professor_id),
        group=group.to_dict(),
        assignments=items,
    )


@student_bp.post("/courses/<course_id>/assignments/<assignment_id>/acknowledge")
@login_required
@student_required
def acknowledge(course_id, assignment_id):
    _enrolled_course_or_404(course_id)
    result = get_services().acknowledgments.acknowledge(assignment_id, course_id, current_user)
    return result_response(result)


@student_bp.get("/courses/<course_id>/group")
@login_required
@student_required
def group_status(course_id):
    svc = get_services()
    course = _enrolled_course_or_404(course_id)
    return jsonify(
        status=svc.groups.status_for(course.id, current_user.id).to_dict(),
        available_groups=[g.to_dict() for g in svc.groups.available_groups(course.id)],
        max_size=svc.groups.max_size,
    )


@student_bp.post("/courses/<course_id>/group")
@login_required
@student_required
def manage_group(course_id):
    _enrolled_course_or_404(course_id)
    form = GroupActionForm()
    if not form.validate_on_submit():
        return form_errors(form)
    result = get_services().groups.create_or_join(
        course_id, current_user.id, form.action.data, form.group_id.data or None
    )
    return result_response(result)
