from flask import jsonify, url_for
from flask_login import login_user, logout_user, current_user
from flask_jwt_extended import create_access_token, jwt_required, get_jwt_identity, get_jwt
from flask_wtf.csrf import generate_csrf
from . import auth_bp
from .. import csrf
from ..api import form_errors, result_response
from ..forms import LoginForm
from ..models import ROLE_PROFESSOR
from ..services import get_services

def _dashboard_for(user):
    if user.role == ROLE_PROFESSOR:
        return url_for("professor.dashboard")
    return url_for("student.dashboard")

@auth_bp.get("/csrf-token")
def csrf_token():
    return jsonify(csrf_token=generate_csrf())

@auth_bp.post("/login")
def login():
    if current_user.is_authenticated:
        return jsonify(ok=True, role=current_user.role, redirect=_dashboard_for(current_user))

    form = LoginForm()
    if not form.validate_on_submit():
        return form_errors(form)

    result = get_services().accounts.login(form.username.data, form.password.data)
    if not result.ok:
        return result_response(result)

    user = result.value
    login_user(user, remember=bool(form.remember.data))
    return jsonify(ok=True, role=user.role, message=result.message,
                   user=user.to_dict(), redirect=_dashboard_for(user))

@auth_bp.post("/logout")
def logout():
    if current_user.is_authenticated:
        logout_user()
    return jsonify(ok=True, message="Logged out.", category="info")

@auth_bp.route("/api/login", methods=["POST"])
@csrf.exempt
def api_login():
    form = LoginForm(meta={"csrf": False})
    if not form.validate_on_submit():
        return form_errors(form)
    result = get_services().accounts.login(form.username.data, form.password.data)
    if not result.ok:
        return jsonify({"msg": "invalid credentials"}), 401

    user = result.value
    token = create_access_token(
        identity=str(user.id),
        additional_claims={"role": user.role, "name": user.name}
    )
    return jsonify(access_token=token)

@auth_bp.route("/api/me")
@csrf.exempt
@jwt_required()
def api_me():
    claims = get_jwt()
    return jsonify(id=get_jwt_identity(), role=claims.get("role"), name=claims.get("name"))
