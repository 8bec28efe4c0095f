import logging
import math
from collections.abc import Mapping
from typing import Iterator, List, Optional

from pydantic import ValidationError as PydanticValidationError

from .errors import DeleteActiveSelectionError, NotFoundError, ValidationError
from .models import (
    GENDERS,
    NOT_SET,
    Athlete,
    Career,
    Finance,
    Injury,
    PerformanceEntry,
    StoredModel,
)

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "age", "sport", "country", "gender")
REQUIRED_TEXT = ("name", "sport", "country", "gender")


def as_number(value):
    """
    Coerce form input to an int or float, or return None when it is not numeric.

    Integral floats come back as ints so stored scores read ``95`` not ``95.0``.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            value = float(value)
        except ValueError:
            return None
    if not isinstance(value, (int, float)) or math.isnan(value) or math.isinf(value):
        return None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _pick(fields, *names, default=None):
    for name in names:
        if name in fields and fields[name] is not None:
            return fields[name]
    return default


def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ("" if value is None else str(value))


def _as_mapping(record) -> Mapping:
    return record.to_stored() if isinstance(record, StoredModel) else record


def _merged(model: StoredModel, patch: Mapping) -> StoredModel:
    # patch keys may use either the Python field name or the stored alias
    aliases = {info.alias: name for name, info in type(model).model_fields.items() if info.alias}
    data = model.model_dump()
    for key, value in patch.items():
        data[aliases.get(key, key)] = value
    return type(model).model_validate(data)


class AthleteRegistry:
    """
    The authoritative in-memory roster plus the active selection.

    Every successful mutation is followed by exactly one ``storage.save``.
    Operations that name an unknown athlete are logged and ignored.
    """

    def __init__(self, storage, athletes: Optional[List[Athlete]] = None):
        self.storage = storage
        self._athletes: List[Athlete] = list(athletes) if athletes is not None else storage.load()
        self.current_id: Optional[int] = self._athletes[0].id if self._athletes else None

    # ------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------

    @property
    def athletes(self) -> List[Athlete]:
        return list(self._athletes)

    @property
    def current(self) -> Optional[Athlete]:
        return self.find(self.current_id) if self.current_id is not None else None

    def __len__(self) -> int:
        return len(self._athletes)

    def __iter__(self) -> Iterator[Athlete]:
        return iter(list(self._athletes))

    def find(self, athlete_id) -> Optional[Athlete]:
        return next((a for a in self._athletes if a.id == athlete_id), None)

    def get(self, athlete_id) -> Athlete:
        athlete = self.find(athlete_id)
        if athlete is None:
            raise NotFoundError(athlete_id)
        return athlete

    def next_id(self) -> int:
        return max((a.id for a in self._athletes), default=0) + 1

    # ------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------

    def create(self, fields: Mapping) -> Athlete:
        age = as_number(fields.get("age"))
        points = as_number(fields.get("points"))

        invalid = [name for name in REQUIRED_TEXT if not _text(fields.get(name))]
        if age is None or age < 0 or isinstance(age, float):
            invalid.append("age")
        if points is None:
            invalid.append("points")
        gender = _text(fields.get("gender"))
        if gender and gender not in GENDERS:
            invalid.append("gender")
        if invalid:
            raise ValidationError("Please fill all required fields correctly.", fields=invalid)

        career_level = _text(_pick(fields, "career_level", "careerLevel", default=""))
        next_goal = _text(_pick(fields, "next_goal", "nextGoal", default=""))
        athlete = Athlete(
            id=self.next_id(),
            name=_text(fields["name"]),
            age=int(age),
            sport=_text(fields["sport"]),
            country=_text(fields["country"]),
            gender=gender,
            points=points,
            career=Career(level=career_level or NOT_SET, next_goal=next_goal),
            finance=Finance(
                stipend=as_number(fields.get("stipend")) or 0,
                sponsorship=as_number(fields.get("sponsorship")) or 0,
            ),
        )
        self._athletes.append(athlete)
        if self.current_id is None:
            self.current_id = athlete.id
        logger.debug(f"Created athlete {athlete.id} ({athlete.name})")
        self._persist()
        return athlete

    def update(self, athlete_id, patch: Mapping) -> Optional[Athlete]:
        athlete = self.find(athlete_id)
        if athlete is None:
            logger.info(f"Ignoring update for unknown athlete {athlete_id}")
            return None

        changes = {}
        invalid = []
        for name in PROFILE_FIELDS:
            if name not in patch:
                continue
            if name == "age":
                age = as_number(patch["age"])
                if age is None or age < 0 or isinstance(age, float):
                    invalid.append("age")
                else:
                    changes["age"] = int(age)
            elif name == "gender":
                gender = _text(patch["gender"])
                if gender and gender not in GENDERS:
                    invalid.append("gender")
                else:
                    changes["gender"] = gender
            else:
                changes[name] = _text(patch[name])
        if "points" in patch:
            points = as_number(patch["points"])
            if points is None:
                invalid.append("points")
            else:
                changes["points"] = points
        try:
            if patch.get("career"):
                changes["career"] = _merged(athlete.career, patch["career"])
            if patch.get("finance"):
                changes["finance"] = _merged(athlete.finance, patch["finance"])
            entries = [
                e if isinstance(e, PerformanceEntry) else PerformanceEntry.model_validate(e)
                for e in _pick(patch, "performance_history", "performanceHistory", default=[])
            ]
        except PydanticValidationError as e:
            invalid.extend(str(err["loc"][0]) for err in e.errors() if err["loc"])
            entries = []
        injuries = list(_pick(patch, "injuries", default=[]))
        if any(not _text(_as_mapping(i).get("type")) for i in injuries):
            invalid.append("injuries")
        if invalid:
            raise ValidationError("Please fill all required fields correctly.", fields=invalid)

        for name, value in changes.items():
            setattr(athlete, name, value)
        if "avatar" in patch:
            athlete.avatar = patch["avatar"] or None
        for injury in injuries:
            self._append_injury(athlete, injury)
        athlete.performance_history.extend(entries)

        logger.debug(f"Updated athlete {athlete.id}: {sorted(patch)}")
        self._persist()
        return athlete

    def delete(self, athlete_id) -> None:
        if athlete_id == self.current_id:
            raise DeleteActiveSelectionError(athlete_id)
        athlete = self.find(athlete_id)
        if athlete is None:
            logger.info(f"Ignoring delete for unknown athlete {athlete_id}")
            return
        self._athletes.remove(athlete)
        logger.debug(f"Deleted athlete {athlete_id}")
        self._persist()

    def set_current(self, athlete_id) -> Optional[int]:
        if not self._athletes:
            self.current_id = None
        elif self.find(athlete_id) is not None:
            self.current_id = athlete_id
        else:
            logger.info(f"Unknown athlete {athlete_id} selected, falling back to the first athlete")
            self.current_id = self._athletes[0].id
        return self.current_id

    def add_injury(self, athlete_id, injury: Mapping) -> Optional[Injury]:
        athlete = self.find(athlete_id)
        if athlete is None:
            logger.info(f"Ignoring injury for unknown athlete {athlete_id}")
            return None
        added = self._append_injury(athlete, injury)
        self._persist()
        return added

    def add_performance_entry(self, athlete_id, entry) -> Optional[PerformanceEntry]:
        athlete = self.find(athlete_id)
        if athlete is None:
            logger.info(f"Ignoring performance entry for unknown athlete {athlete_id}")
            return None
        if not isinstance(entry, PerformanceEntry):
            entry = PerformanceEntry.model_validate(entry)
        athlete.performance_history.append(entry)
        self._persist()
        return entry

    def record_coach_update(self, athlete_id, points=None, metric="", date="", notes="") -> Optional[Athlete]:
        """
        Apply one coach form submission.

        Submitted points replace the athlete's score. A history entry is added
        when anything was submitted; it snapshots the submitted points, or the
        athlete's existing points when none were given.
        """
        athlete = self.find(athlete_id)
        if athlete is None:
            logger.info(f"Ignoring coach update for unknown athlete {athlete_id}")
            return None

        new_points = as_number(points)
        if points not in (None, "") and new_points is None:
            raise ValidationError("Points must be a number.", fields=["points"])
        metric, date, notes = _text(metric), _text(date), _text(notes)

        if new_points is not None:
            athlete.points = new_points
        if metric or date or notes or new_points is not None:
            athlete.performance_history.append(
                PerformanceEntry(
                    date=date or "N/A",
                    metric=metric or "Performance recorded",
                    notes=notes,
                    points_snapshot=new_points if new_points is not None else athlete.points,
                )
            )
        self._persist()
        return athlete

    def set_avatar(self, athlete_id, data_uri: str) -> Optional[Athlete]:
        return self.update(athlete_id, {"avatar": data_uri})

    # ------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------

    def _append_injury(self, athlete: Athlete, injury) -> Injury:
        injury = _as_mapping(injury)
        injury_type = _text(injury.get("type"))
        if not injury_type:
            raise ValidationError("Injury type is required.", fields=["type"])
        new_id = max((i.id for i in athlete.injuries), default=0) + 1
        added = Injury(
            id=new_id,
            type=injury_type,
            severity=_text(injury.get("severity")),
            status=_text(injury.get("status")),
            start_date=_text(_pick(injury, "start_date", "startDate", default="")),
            notes=_text(injury.get("notes")),
        )
        athlete.injuries.append(added)
        return added

    def _persist(self) -> None:
        self.storage.save(self._athletes)
