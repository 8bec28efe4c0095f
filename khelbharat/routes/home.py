from flask import Blueprint, jsonify, render_template, request

from domain.athletes.compare import compare_athletes
from domain.athletes.models import GENDERS, INJURY_SEVERITIES, INJURY_STATUSES
from khelbharat.services.dashboard import DashboardFilters, athlete_detail, build_dashboard
from khelbharat.utils.decorators import get_theme_storage, respond, with_registry

home_bp = Blueprint('home', __name__)


def _theme():
    storage = get_theme_storage()
    return storage.current or storage.load()


@home_bp.route('/')
@with_registry
def index(registry):
    filters = DashboardFilters.from_args(request.args)
    return render_template(
        'dashboard.html',
        dashboard=build_dashboard(registry, filters, theme=_theme()),
        genders=GENDERS,
        injury_statuses=INJURY_STATUSES,
        injury_severities=INJURY_SEVERITIES,
    )


@home_bp.route('/api/state')
@with_registry
def state(registry):
    filters = DashboardFilters.from_args(request.args)
    return jsonify(build_dashboard(registry, filters, theme=_theme()))


@home_bp.route('/theme', methods=['POST'])
def toggle_theme():
    theme = get_theme_storage().toggle()
    return respond(f"Switched to {theme} theme", theme=theme)


##### detail drawer #####
@home_bp.route('/api/athletes/<int:athlete_id>')
@with_registry
def athlete(athlete_id, registry):
    found = registry.find(athlete_id)
    if found is None:
        return jsonify({"msg": "Athlete not found"}), 404
    return jsonify(athlete_detail(found))


##### compare #####
@home_bp.route('/api/compare')
@with_registry
def compare(registry):
    id_a = request.args.get('a', type=int)
    id_b = request.args.get('b', type=int)
    if not id_a or not id_b:
        return jsonify({"msg": "Select two athletes to compare."}), 400
    if id_a == id_b:
        return jsonify({"msg": "Please select two different athletes."}), 400

    a, b = registry.find(id_a), registry.find(id_b)
    if a is None or b is None:
        return jsonify({"msg": "Athlete not found"}), 404

    result = compare_athletes(a, b)
    return jsonify({"left": result.left, "right": result.right, "summary": result.summary})
