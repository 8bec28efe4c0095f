# khelbharat/routes/athlete/__init__.py
from flask import Blueprint

# Athlete-facing panel: the "logged in" athlete's own profile
athlete_bp = Blueprint("athlete", __name__)

from . import profile  # noqa: E402,F401
