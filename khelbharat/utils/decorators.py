# khelbharat/utils/decorators.py
from functools import wraps
from flask import current_app, flash, jsonify, redirect, request, url_for


def get_registry():
    return current_app.extensions["athlete_registry"]


def get_theme_storage():
    return current_app.extensions["theme_storage"]


def with_registry(view_func):
    """
    A decorator to look up the athlete registry and pass it to the view
    as the ``registry`` keyword argument.
    """
    @wraps(view_func)
    def wrapper(*args, **kwargs):
        kwargs['registry'] = get_registry()
        return view_func(*args, **kwargs)
    return wrapper


def wants_json():
    return request.is_json or request.accept_mimetypes.best == "application/json"


def form_data():
    """Submitted fields, from a JSON body or a regular form post."""
    if request.is_json:
        return request.get_json(silent=True) or {}
    return request.form.to_dict()


def respond(msg, status=200, **payload):
    """JSON for API callers; flash + redirect back to the dashboard for form posts."""
    if wants_json():
        return jsonify({"msg": msg, **payload}), status
    flash(msg, "success" if status < 400 else "error")
    return redirect(url_for("home.index"))
