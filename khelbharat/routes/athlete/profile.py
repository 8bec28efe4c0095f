import base64

from flask import current_app, request

from khelbharat.schemas import profile_form, select_athlete_form
from khelbharat.services.dashboard import athlete_detail
from khelbharat.utils.decorators import form_data, respond, with_registry
from . import athlete_bp


@athlete_bp.route("/select", methods=["POST"])
@with_registry
def select_athlete(registry):
    data = select_athlete_form.load(form_data())
    current_id = registry.set_current(data["athlete_id"])
    return respond("Switched athlete", currentId=current_id)


@athlete_bp.route("/profile", methods=["POST"])
@with_registry
def update_profile(registry):
    if registry.current is None:
        return respond("No athlete selected", 404)

    data = profile_form.load(form_data())
    athlete = registry.update(registry.current_id, data)
    return respond("Profile updated", athlete=athlete_detail(athlete))


@athlete_bp.route("/avatar", methods=["POST"])
@with_registry
def upload_avatar(registry):
    if registry.current is None:
        return respond("No athlete selected", 404)

    file = request.files.get("avatar")
    if file is None or not file.filename:
        return respond("No image uploaded", 400)
    if not (file.mimetype or "").startswith("image/"):
        return respond("Please select an image file.", 400)

    encoded = base64.b64encode(file.read()).decode("ascii")
    registry.set_avatar(registry.current_id, f"data:{file.mimetype};base64,{encoded}")
    current_app.logger.info(f"Avatar updated for athlete {registry.current_id}")
    return respond("Profile photo updated", athleteId=registry.current_id)
