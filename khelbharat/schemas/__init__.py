from .forms import (
    REQUIRED_MESSAGE,
    admin_athlete_form,
    injury_form,
    performance_form,
    profile_form,
    select_athlete_form,
)

__all__ = [
    "REQUIRED_MESSAGE", "admin_athlete_form", "injury_form",
    "performance_form", "profile_form", "select_athlete_form",
]
