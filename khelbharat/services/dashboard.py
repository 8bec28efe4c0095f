"""
View model for the single-page dashboard.

Every panel (Athlete, Coach, Admin) is rebuilt from the registry on each
request, so a mutation is visible everywhere on the next render.
"""
from dataclasses import asdict, dataclass
from typing import Optional

from domain.athletes.compare import format_inr
from domain.athletes.derivations import (
    filter_by_gender,
    filter_by_search_query,
    filter_by_sport_substring,
    format_performance_entry,
    gender_distribution,
    initials,
    injury_summary,
    last_performance_summary,
    monthly_support,
    prevention_notes,
    profile_completion_percent,
    ranking_percentages,
    recent_performance,
    sorted_by_points_descending,
    total_monthly_support,
)
from domain.athletes.models import ALL_GENDERS, NOT_SET


def _int_arg(args, name) -> Optional[int]:
    try:
        return int(args.get(name))
    except (TypeError, ValueError):
        return None


@dataclass
class DashboardFilters:
    search: str = ""
    coach_sport: str = ""
    admin_sport: str = ""
    admin_gender: str = ALL_GENDERS
    coach_athlete_id: Optional[int] = None
    coach_injury_athlete_id: Optional[int] = None

    @classmethod
    def from_args(cls, args):
        return cls(
            search=(args.get("q") or "").strip(),
            coach_sport=(args.get("coachSport") or "").strip().lower(),
            admin_sport=(args.get("adminSport") or "").strip().lower(),
            admin_gender=args.get("gender") or ALL_GENDERS,
            coach_athlete_id=_int_arg(args, "coachAthlete"),
            coach_injury_athlete_id=_int_arg(args, "coachInjuryAthlete"),
        )


# ============================================================
# Per-athlete blocks
# ============================================================

def injury_item(injury):
    return {
        "id": injury.id,
        "type": injury.type,
        "severity": injury.severity,
        "status": injury.status,
        "startDate": injury.start_date,
        "notes": injury.notes,
    }


def performance_item(entry):
    return {
        "date": entry.date or "N/A",
        "metric": entry.metric,
        "notes": entry.notes,
        "pointsSnapshot": entry.points_snapshot,
        "text": format_performance_entry(entry),
    }


def athlete_detail(athlete):
    """Everything the detail drawer shows for one athlete."""
    stipend = athlete.finance.stipend or 0
    sponsorship = athlete.finance.sponsorship or 0
    return {
        "id": athlete.id,
        "name": athlete.name,
        "sport": athlete.sport,
        "country": athlete.country,
        "age": athlete.age,
        "gender": athlete.gender or NOT_SET,
        "points": athlete.points,
        "careerLevel": athlete.career.level or NOT_SET,
        "nextGoal": athlete.career.next_goal or "-",
        "stipend": format_inr(stipend),
        "sponsorship": format_inr(sponsorship),
        "totalSupport": format_inr(stipend + sponsorship),
        "injuries": [injury_item(i) for i in athlete.injuries],
        "recentPerformance": [performance_item(p) for p in recent_performance(athlete)],
    }


def profile_panel(athlete):
    if athlete is None:
        return None
    return {
        "id": athlete.id,
        "name": athlete.name,
        "age": athlete.age,
        "sport": athlete.sport,
        "country": athlete.country,
        "gender": athlete.gender,
        "avatar": athlete.avatar,
        "initials": initials(athlete.name),
        "completion": profile_completion_percent(athlete),
        "injuries": [injury_item(i) for i in athlete.injuries],
        "preventionNotes": prevention_notes(athlete),
        "careerLevel": athlete.career.level or NOT_SET,
        "nextGoal": athlete.career.next_goal or "Add your next career goal with admin/coach.",
        "stipend": format_inr(athlete.finance.stipend),
        "sponsorship": format_inr(athlete.finance.sponsorship),
        "totalSupport": format_inr(monthly_support(athlete)),
    }


# ============================================================
# Tables
# ============================================================

def ranking_rows(athletes, current_id=None):
    return [
        {
            "rank": index,
            "id": a.id,
            "name": a.name,
            "sport": a.sport,
            "country": a.country,
            "points": a.points,
            "percent": percent,
            "highlight": a.id == current_id,
        }
        for index, (a, percent) in enumerate(ranking_percentages(athletes), start=1)
    ]


def athlete_ranking(registry, filters):
    ranked = filter_by_search_query(sorted_by_points_descending(registry), filters.search)
    return ranking_rows(ranked, registry.current_id)


def coach_ranking(registry, filters):
    ranked = filter_by_search_query(sorted_by_points_descending(registry), filters.search)
    return ranking_rows(filter_by_sport_substring(ranked, filters.coach_sport))


def admin_rows(registry, filters):
    listed = filter_by_search_query(registry, filters.search)
    listed = filter_by_sport_substring(listed, filters.admin_sport)
    listed = filter_by_gender(listed, filters.admin_gender)
    return [
        {
            "index": index,
            "id": a.id,
            "name": a.name,
            "sport": a.sport,
            "country": a.country,
            "gender": a.gender or "-",
            "points": a.points,
            "careerLevel": a.career.level or "-",
            "injurySummary": injury_summary(a),
            "monthlySupport": format_inr(monthly_support(a)),
            "isCurrent": a.id == registry.current_id,
        }
        for index, a in enumerate(listed, start=1)
    ]


def admin_summary(registry):
    return {
        "totalSupport": format_inr(total_monthly_support(registry)),
        "totalSupportAmount": total_monthly_support(registry),
        "genderStats": gender_distribution(registry),
        "count": len(registry),
    }


def _chosen(registry, athlete_id):
    return registry.find(athlete_id) or (registry.athletes[0] if len(registry) else None)


def coach_lists(registry, filters):
    perf_athlete = _chosen(registry, filters.coach_athlete_id)
    injury_athlete = _chosen(registry, filters.coach_injury_athlete_id)
    return {
        "performanceAthleteId": perf_athlete.id if perf_athlete else None,
        "performance": [performance_item(p) for p in recent_performance(perf_athlete)] if perf_athlete else [],
        "injuryAthleteId": injury_athlete.id if injury_athlete else None,
        "injuries": [injury_item(i) for i in injury_athlete.injuries] if injury_athlete else [],
    }


def build_dashboard(registry, filters=None, theme="light"):
    filters = filters or DashboardFilters()
    return {
        "theme": theme,
        "filters": asdict(filters),
        "currentId": registry.current_id,
        "options": [{"id": a.id, "name": a.name} for a in registry],
        "profile": profile_panel(registry.current),
        "athleteRanking": athlete_ranking(registry, filters),
        "coachRanking": coach_ranking(registry, filters),
        "coachLists": coach_lists(registry, filters),
        "adminTable": admin_rows(registry, filters),
        "adminSummary": admin_summary(registry),
        "lastPerformance": {a.id: last_performance_summary(a) for a in registry},
    }
