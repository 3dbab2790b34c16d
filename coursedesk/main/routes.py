from flask import jsonify
from flask_login import current_user
from . import main_bp

@main_bp.route("/")
def index():
    user = current_user.to_dict() if current_user.is_authenticated else None
    return jsonify(message="Welcome to coursedesk", user=user)

@main_bp.route("/health")
def health():
    return {"ok": True}
