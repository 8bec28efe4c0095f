# ================================
# Coach: rankings, performance updates, injury log
# ================================

from flask import jsonify, request

from khelbharat.schemas import injury_form, performance_form
from khelbharat.services.dashboard import (
    DashboardFilters,
    coach_ranking,
    injury_item,
    performance_item,
)
from khelbharat.utils.decorators import form_data, respond, with_registry
from domain.athletes.derivations import recent_performance
from . import coach_bp


# ================================
# Ranking (search + sport filter)
# ================================
@coach_bp.route("/ranking", methods=["GET"])
@with_registry
def ranking(registry):
    filters = DashboardFilters.from_args(request.args)
    return jsonify(coach_ranking(registry, filters))


# ================================
# Points + performance history
# ================================
@coach_bp.route("/performance", methods=["POST"])
@with_registry
def update_performance(registry):
    data = performance_form.load(form_data())
    athlete = registry.record_coach_update(
        data["athlete_id"],
        points=data["points"],
        metric=data["metric"],
        date=data["date"],
        notes=data["notes"],
    )
    if athlete is None:
        return respond("Athlete not found", 404)
    return respond(
        "Performance updated",
        athleteId=athlete.id,
        points=athlete.points,
        performance=[performance_item(p) for p in recent_performance(athlete)],
    )


@coach_bp.route("/athletes/<int:athlete_id>/performance", methods=["GET"])
@with_registry
def performance_history(athlete_id, registry):
    athlete = registry.find(athlete_id)
    if athlete is None:
        return jsonify({"msg": "Athlete not found"}), 404
    return jsonify([performance_item(p) for p in recent_performance(athlete)])


# ================================
# Injuries
# ================================
@coach_bp.route("/injuries", methods=["POST"])
@with_registry
def add_injury(registry):
    data = injury_form.load(form_data())
    athlete_id = data.pop("athlete_id")
    injury = registry.add_injury(athlete_id, data)
    if injury is None:
        return respond("Athlete not found", 404)
    return respond("Injury added", 201, athleteId=athlete_id, injury=injury_item(injury))


@coach_bp.route("/athletes/<int:athlete_id>/injuries", methods=["GET"])
@with_registry
def injuries(athlete_id, registry):
    athlete = registry.find(athlete_id)
    if athlete is None:
        return jsonify({"msg": "Athlete not found"}), 404
    return jsonify([injury_item(i) for i in athlete.injuries])
