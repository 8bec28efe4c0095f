from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict

from .derivations import injury_summary, last_performance_summary, monthly_support
from .models import NOT_SET, Athlete

PAISE = Decimal("0.01")


def format_inr(amount) -> str:
    """
    Rupee amount with Indian digit grouping: 140000 -> ₹1,40,000.
    """
    # rounded before splitting: 1.999 -> ₹2
    value = Decimal(str(amount or 0)).quantize(PAISE, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    value = abs(value)
    whole = int(value)
    paise = int((value - whole) * 100)

    digits = str(whole)
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    grouped = ",".join(groups + [tail])

    if paise:
        grouped += f".{paise:02d}".rstrip("0")
    return f"{sign}₹{grouped}"


@dataclass
class Comparison:
    left: Dict[str, object] = field(default_factory=dict)
    right: Dict[str, object] = field(default_factory=dict)
    summary: str = ""


def side_summary(athlete: Athlete) -> Dict[str, object]:
    return {
        "id": athlete.id,
        "name": athlete.name,
        "sport": athlete.sport,
        "country": athlete.country,
        "age": athlete.age,
        "gender": athlete.gender or "-",
        "points": athlete.points,
        "careerLevel": athlete.career.level or NOT_SET,
        "totalSupport": format_inr(monthly_support(athlete)),
        "injurySummary": injury_summary(athlete),
        "lastPerformance": last_performance_summary(athlete),
    }


def compare_athletes(a: Athlete, b: Athlete) -> Comparison:
    total_a, total_b = monthly_support(a), monthly_support(b)

    if a.points > b.points:
        summary = f"{a.name} currently has higher points than {b.name}. "
    elif b.points > a.points:
        summary = f"{b.name} currently has higher points than {a.name}. "
    else:
        summary = f"{a.name} and {b.name} are tied on points. "

    if total_a > total_b:
        summary += (
            f"{a.name} receives higher monthly support "
            f"({format_inr(total_a)} vs {format_inr(total_b)}). "
        )
    elif total_b > total_a:
        summary += (
            f"{b.name} receives higher monthly support "
            f"({format_inr(total_b)} vs {format_inr(total_a)}). "
        )

    return Comparison(left=side_summary(a), right=side_summary(b), summary=summary.strip())
