"""
Pure functions computing view-ready values from the roster.

Nothing here mutates an athlete; every view recomputes from the registry
after each change.
"""
import math
from typing import Dict, Iterable, List, Sequence, Tuple

from .models import ALL_GENDERS, GENDERS, NOT_SET, Athlete, PerformanceEntry

NO_INJURIES = "No current injuries"
ALL_CLEARED = "All injuries cleared"
NO_PERFORMANCE = "No performance logged"
PROFILE_FIELDS = 7


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ============================================================
# Ordering & filters
# ============================================================

def sorted_by_points_descending(athletes: Iterable[Athlete]) -> List[Athlete]:
    # sorted() is stable, so tied athletes keep their roster order
    return sorted(athletes, key=lambda a: a.points, reverse=True)


def filter_by_search_query(athletes: Iterable[Athlete], query: str) -> List[Athlete]:
    q = (query or "").strip().lower()
    if not q:
        return list(athletes)
    return [
        a for a in athletes
        if q in a.name.lower() or q in a.sport.lower() or q in a.country.lower()
    ]


def filter_by_sport_substring(athletes: Iterable[Athlete], substring: str) -> List[Athlete]:
    s = (substring or "").strip().lower()
    if not s:
        return list(athletes)
    return [a for a in athletes if s in a.sport.lower()]


def filter_by_gender(athletes: Iterable[Athlete], gender: str) -> List[Athlete]:
    if not gender or gender == ALL_GENDERS:
        return list(athletes)
    return [a for a in athletes if (a.gender or "") == gender]


# ============================================================
# Per-athlete summaries
# ============================================================

def injury_summary(athlete: Athlete) -> str:
    if not athlete.injuries:
        return NO_INJURIES
    active = [i for i in athlete.injuries if not i.is_cleared]
    if not active:
        return ALL_CLEARED
    last = active[-1]
    return f"{last.type} ({last.status})"


def monthly_support(athlete: Athlete) -> float:
    return (athlete.finance.stipend or 0) + (athlete.finance.sponsorship or 0)


def format_performance_entry(entry: PerformanceEntry) -> str:
    text = f"{entry.date or 'N/A'} – {entry.metric} ({entry.points_snapshot} pts"
    if entry.notes:
        text += f" – {entry.notes}"
    return text + ")"


def last_performance_summary(athlete: Athlete) -> str:
    if not athlete.performance_history:
        return NO_PERFORMANCE
    return format_performance_entry(athlete.performance_history[-1])


def recent_performance(athlete: Athlete, limit: int = 5) -> List[PerformanceEntry]:
    """Latest ``limit`` entries, newest first."""
    return list(reversed(athlete.performance_history[-limit:])) if limit > 0 else []


def profile_completion_percent(athlete: Athlete) -> int:
    filled = sum(
        bool(field)
        for field in (
            athlete.name,
            athlete.age,
            athlete.sport,
            athlete.country,
            athlete.gender,
            athlete.avatar,
            athlete.career.level and athlete.career.level != NOT_SET,
        )
    )
    return round_half_up(filled / PROFILE_FIELDS * 100)


def initials(name: str) -> str:
    letters = "".join(part[0] for part in (name or "").split() if part)
    return letters[:2].upper() or "A"


def prevention_notes(athlete: Athlete) -> str:
    if not athlete.injuries:
        return "Maintain proper warm-up, cool-down, and recovery sessions."
    return (
        "Follow your rehab plan carefully, avoid overloading injured areas, "
        "and report pain early to your coach/physio."
    )


# ============================================================
# Roster aggregates
# ============================================================

def gender_distribution(athletes: Iterable[Athlete]) -> Dict[str, int]:
    counts = {gender: 0 for gender in GENDERS}
    for a in athletes:
        if a.gender in counts:
            counts[a.gender] += 1
    return counts


def total_monthly_support(athletes: Iterable[Athlete]) -> float:
    return sum(monthly_support(a) for a in athletes)


def ranking_percentages(athletes: Sequence[Athlete]) -> List[Tuple[Athlete, int]]:
    """Pair each athlete with a 0-100 bar width relative to the list's top score."""
    max_points = max((a.points for a in athletes), default=0)
    if not max_points:
        return [(a, 0) for a in athletes]
    return [(a, round_half_up(a.points / max_points * 100)) for a in athletes]
