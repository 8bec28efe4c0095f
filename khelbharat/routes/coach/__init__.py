from flask import Blueprint

coach_bp = Blueprint('coach', __name__)

from . import manage_athlete  # noqa: E402,F401
