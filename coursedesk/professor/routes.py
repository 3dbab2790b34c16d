from flask import Blueprint, abort, jsonify
from flask_login import login_required, current_user

from ..api import form_errors, result_response, role_required
from ..forms import AssignmentForm
from ..models import ROLE_PROFESSOR
from ..services import get_services

professor_bp = Blueprint("professor", __name__)

professor_required = role_required(ROLE_PROFESSOR)


def _own_course_or_404(course_id):
    course = get_services().store.find_course_by_id(course_id)
    if course is None:
        abort(404)
    if course.professor_id != current_user.id:
        abort(403)
    return course


@professor_bp.route("/dashboard", endpoint="dashboard")
@login_required
@professor_required
def dashboard():
    overview = get_services().analytics.professor_overview(current_user)
    return jsonify(user=current_user.to_dict(), **overview)


# ----------------- Assignments -----------------
@professor_bp.get("/courses/<course_id>/assignments")
@login_required
@professor_required
def course_assignments(course_id):
    course = _own_course_or_404(course_id)
    return jsonify(course=course.to_dict(),
                   assignments=get_services().analytics.course_assignments(course.id))


@professor_bp.post("/courses/<course_id>/assignments")
@login_required
@professor_required
def assignment_save(course_id):
    """Create an assignment, or update it when the body carries an existing id."""
    course = _own_course_or_404(course_id)
    form = AssignmentForm()
    if not form.validate_on_submit():
        return form_errors(form)
    svc = get_services()
    is_new = svc.store.find_assignment(form.id.data) is None
    result = svc.assignments.create_or_update(form.to_data(course.id), current_user)
    body, status = result_response(result)
    return body, (201 if result.ok and is_new else status)


@professor_bp.post("/assignments/<assignment_id>/delete")
@login_required
@professor_required
def assignment_delete(assignment_id):
    result = get_services().assignments.delete(assignment_id, current_user)
    return result_response(result)


@professor_bp.get("/assignments/<assignment_id>/review")
@login_required
@professor_required
def assignment_review(assignment_id):
    svc = get_services()
    a = svc.store.find_assignment(assignment_id)
    if a is None:
        abort(404)
    _own_course_or_404(a.course_id)
    return jsonify(svc.analytics.submission_review(a.id))
