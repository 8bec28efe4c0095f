import pytest

from domain.athletes.models import NOT_SET, Athlete, default_record, normalize_record
from domain.athletes.seed import DEFAULT_ATHLETES, seed_athletes

LEGACY = {"id": 5, "name": "Old Timer", "age": 30, "sport": "Shot Put", "country": "India", "points": 50}


def test_normalize_backfills_missing_fields():
    record = normalize_record(LEGACY)

    assert record["gender"] == ""
    assert record["avatar"] is None
    assert record["injuries"] == []
    assert record["performanceHistory"] == []
    assert record["career"] == {"level": NOT_SET, "nextGoal": ""}
    assert record["finance"] == {"stipend": 0, "sponsorship": 0}
    assert record["name"] == "Old Timer"


def test_normalize_keeps_stored_values_and_merges_sub_structures():
    raw = dict(LEGACY, gender="Male", career={"level": "National"}, finance={"sponsorship": 500})
    record = normalize_record(raw)

    assert record["gender"] == "Male"
    assert record["career"] == {"level": "National", "nextGoal": ""}
    assert record["finance"] == {"stipend": 0, "sponsorship": 500}


def test_normalize_keeps_unknown_fields():
    raw = dict(LEGACY, coachNotes="watch the takeoff")

    assert normalize_record(raw)["coachNotes"] == "watch the takeoff"
    assert Athlete.from_stored(raw).to_stored()["coachNotes"] == "watch the takeoff"


def test_normalize_null_sub_structures_become_defaults():
    record = normalize_record(dict(LEGACY, career=None, finance=None))

    assert record["career"] == default_record()["career"]
    assert record["finance"] == default_record()["finance"]


def test_normalize_is_idempotent():
    for raw in [LEGACY, dict(LEGACY, career={"level": "Club"}), *DEFAULT_ATHLETES]:
        once = normalize_record(raw)
        assert normalize_record(once) == once


def test_normalize_does_not_mutate_input():
    raw = dict(LEGACY, career={"level": "Club"})
    normalize_record(raw)

    assert raw == dict(LEGACY, career={"level": "Club"})


def test_normalize_rejects_non_mapping():
    with pytest.raises(TypeError):
        normalize_record(["not", "a", "record"])


def test_from_stored_treats_missing_amounts_as_zero():
    athlete = Athlete.from_stored(dict(LEGACY, finance={"stipend": None, "sponsorship": 1000}))

    assert athlete.finance.stipend == 0
    assert athlete.finance.sponsorship == 1000


def test_seed_serializes_back_to_the_stored_format():
    assert [a.to_stored() for a in seed_athletes()] == DEFAULT_ATHLETES


def test_seed_returns_independent_copies():
    first = seed_athletes()
    first[0].points = 1
    first[0].injuries.clear()

    second = seed_athletes()
    assert second[0].points == 95
    assert len(second[0].injuries) == 1
