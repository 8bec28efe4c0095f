from flask import current_app, jsonify, request

from khelbharat.schemas import admin_athlete_form
from khelbharat.services.dashboard import (
    DashboardFilters,
    admin_rows,
    admin_summary,
    athlete_detail,
)
from khelbharat.utils.decorators import form_data, respond, with_registry
from . import admin_bp


######### Athlete Management Routes #########
@admin_bp.route("/athletes", methods=["GET"])
@with_registry
def list_athletes(registry):
    filters = DashboardFilters.from_args(request.args)
    return jsonify(admin_rows(registry, filters))


@admin_bp.route("/athletes", methods=["POST"])
@with_registry
def add_athlete(registry):
    data = admin_athlete_form.load(form_data())
    athlete = registry.create(data)
    current_app.logger.info(f"Admin added athlete {athlete.id} ({athlete.name})")
    return respond("Athlete added", 201, athlete=athlete_detail(athlete))


@admin_bp.route("/athletes/<int:athlete_id>", methods=["DELETE"])
@admin_bp.route("/athletes/<int:athlete_id>/delete", methods=["POST"])
@with_registry
def delete_athlete(athlete_id, registry):
    if registry.find(athlete_id) is None:
        return respond("Athlete not found", 404)

    # DeleteActiveSelectionError is answered by the app-level handler
    registry.delete(athlete_id)
    current_app.logger.info(f"Admin deleted athlete {athlete_id}")
    return respond("Athlete deleted", athleteId=athlete_id)


##### totals & gender stats #####
@admin_bp.route("/summary", methods=["GET"])
@with_registry
def summary(registry):
    return jsonify(admin_summary(registry))
