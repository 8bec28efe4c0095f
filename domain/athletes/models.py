import copy
from collections.abc import Mapping
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Number = Union[int, float]

GENDERS = ("Male", "Female", "Other")
ALL_GENDERS = "All"
NOT_SET = "Not set"
CLEARED = "Cleared"
INJURY_STATUSES = ("Active", "Rehab", CLEARED)
INJURY_SEVERITIES = ("Minor", "Moderate", "Severe")


class StoredModel(BaseModel):
    # Stored records use camelCase keys; unknown keys from older or newer
    # payloads are carried through untouched.
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_stored(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


def _as_text(value):
    # stored text fields may hold numbers (a country saved as 91)
    if value is None:
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    return value


class Career(StoredModel):
    level: str = NOT_SET
    next_goal: str = Field("", alias="nextGoal")

    @field_validator("level", mode="before")
    @classmethod
    def _level(cls, value):
        return NOT_SET if value in (None, "") else _as_text(value)

    @field_validator("next_goal", mode="before")
    @classmethod
    def _next_goal(cls, value):
        return _as_text(value)


class Finance(StoredModel):
    stipend: Number = 0
    sponsorship: Number = 0

    @field_validator("stipend", "sponsorship", mode="before")
    @classmethod
    def _zero_if_missing(cls, value):
        return 0 if value in (None, "") else value


class Injury(StoredModel):
    id: int
    type: str = ""
    severity: str = ""
    status: str = ""
    start_date: str = Field("", alias="startDate")
    notes: str = ""

    @field_validator("type", "severity", "status", "start_date", "notes", mode="before")
    @classmethod
    def _strings(cls, value):
        return _as_text(value)

    @property
    def is_cleared(self) -> bool:
        return self.status == CLEARED


class PerformanceEntry(StoredModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    date: str = "N/A"
    metric: str = "Performance recorded"
    notes: str = ""
    points_snapshot: Optional[Number] = Field(None, alias="pointsSnapshot")

    @field_validator("notes", mode="before")
    @classmethod
    def _notes(cls, value):
        return _as_text(value)


class Athlete(StoredModel):
    id: int
    name: str = ""
    age: Optional[int] = None
    sport: str = ""
    country: str = ""
    gender: str = ""
    points: Number = 0
    avatar: Optional[str] = None
    injuries: List[Injury] = Field(default_factory=list)
    performance_history: List[PerformanceEntry] = Field(
        default_factory=list, alias="performanceHistory"
    )
    career: Career = Field(default_factory=Career)
    finance: Finance = Field(default_factory=Finance)

    @field_validator("name", "sport", "country", "gender", mode="before")
    @classmethod
    def _strings(cls, value):
        return _as_text(value)

    @field_validator("age", mode="before")
    @classmethod
    def _age(cls, value):
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value

    @field_validator("points", mode="before")
    @classmethod
    def _points(cls, value):
        return 0 if value is None else value

    @classmethod
    def from_stored(cls, raw) -> "Athlete":
        return cls.model_validate(normalize_record(raw))


def default_record() -> dict:
    return {
        "gender": "",
        "avatar": None,
        "injuries": [],
        "performanceHistory": [],
        "career": {"level": NOT_SET, "nextGoal": ""},
        "finance": {"stipend": 0, "sponsorship": 0},
    }


def normalize_record(raw) -> dict:
    """
    Backfill fields that older stored records may lack.

    Defaults are laid down first and every stored key is overlaid on top, so
    stored values always win and nothing stored is dropped. ``career`` and
    ``finance`` are merged key by key. Normalizing twice gives the same record.
    """
    if not isinstance(raw, Mapping):
        raise TypeError(f"athlete record must be a mapping, got {type(raw).__name__}")

    raw = copy.deepcopy(dict(raw))
    defaults = default_record()

    record = dict(defaults)
    record.update(raw)
    record["career"] = {**defaults["career"], **(raw.get("career") or {})}
    record["finance"] = {**defaults["finance"], **(raw.get("finance") or {})}
    return record
