from functools import wraps

from flask import abort, jsonify
from flask_login import current_user


def role_required(role):
    """Reject the request unless the logged-in user has ``role``."""
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(*args, **kwargs):
            if not current_user.is_authenticated:
                return abort(401)
            if current_user.role != role:
                return abort(403)
            return view_func(*args, **kwargs)
        return wrapper
    return decorator


def result_response(result):
    return jsonify(result.to_dict()), result.status_code


def form_errors(form):
    return jsonify(ok=False, error="InvalidRequest", category="error",
                   message="Please correct the highlighted fields.",
                   fields=form.errors), 400
