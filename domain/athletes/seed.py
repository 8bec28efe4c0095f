import copy
from typing import List

from .models import Athlete

DEFAULT_ATHLETES = [
    {
        "id": 1,
        "name": "Rahul Sharma",
        "age": 22,
        "sport": "100m Sprint",
        "country": "India",
        "gender": "Male",
        "points": 95,
        "avatar": None,
        "injuries": [
            {
                "id": 1,
                "type": "Ankle strain",
                "severity": "Minor",
                "status": "Rehab",
                "startDate": "2025-10-05",
                "notes": "Avoid hard landings",
            }
        ],
        "performanceHistory": [
            {
                "date": "2025-11-10",
                "metric": "100m - 10.55s",
                "notes": "Season best",
                "pointsSnapshot": 95,
            }
        ],
        "career": {"level": "National", "nextGoal": "Qualify for Asian Games trials"},
        "finance": {"stipend": 25000, "sponsorship": 15000},
    },
    {
        "id": 2,
        "name": "Emily Carter",
        "age": 24,
        "sport": "Long Jump",
        "country": "USA",
        "gender": "Female",
        "points": 88,
        "avatar": None,
        "injuries": [],
        "performanceHistory": [],
        "career": {"level": "International", "nextGoal": "Maintain top-10 world ranking"},
        "finance": {"stipend": 40000, "sponsorship": 60000},
    },
    {
        "id": 3,
        "name": "Kaito Tanaka",
        "age": 21,
        "sport": "High Jump",
        "country": "Japan",
        "gender": "Male",
        "points": 92,
        "avatar": None,
        "injuries": [],
        "performanceHistory": [],
        "career": {"level": "National", "nextGoal": "Clear 2.30m in competition"},
        "finance": {"stipend": 30000, "sponsorship": 20000},
    },
]


def seed_athletes() -> List[Athlete]:
    """Fresh copy of the default roster; callers may mutate it freely."""
    return [Athlete.from_stored(copy.deepcopy(raw)) for raw in DEFAULT_ATHLETES]
