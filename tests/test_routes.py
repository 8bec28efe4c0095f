import io
import json

from infrastructure.key_value import InMemoryKeyValueStore
from khelbharat import create_app
from khelbharat.extensions import db
from khelbharat.models import StorageSlot

NEW_ATHLETE = {
    "name": "Neeraj Verma",
    "age": "25",
    "sport": "Javelin",
    "country": "India",
    "gender": "Male",
    "points": "89",
    "careerLevel": "National",
    "stipend": "10000",
}


def names(rows):
    return [row["name"] for row in rows]


# ============================================================
# Dashboard
# ============================================================

def test_index_renders_all_panels(client):
    res = client.get("/")
    body = res.get_data(as_text=True)

    assert res.status_code == 200
    for name in ("Rahul Sharma", "Emily Carter", "Kaito Tanaka"):
        assert name in body
    assert "₹1,90,000" in body
    assert "Gender distribution – Male: 2, Female: 1, Other: 0" in body
    assert "86% of your profile is complete." in body


def test_state_reflects_seed(client):
    state = client.get("/api/state").get_json()

    assert state["currentId"] == 1
    assert state["theme"] == "light"
    assert names(state["athleteRanking"]) == ["Rahul Sharma", "Kaito Tanaka", "Emily Carter"]
    assert [row["percent"] for row in state["athleteRanking"]] == [100, 97, 93]
    assert state["athleteRanking"][0]["highlight"] is True
    assert state["adminSummary"]["totalSupport"] == "₹1,90,000"
    assert state["adminSummary"]["genderStats"] == {"Male": 2, "Female": 1, "Other": 0}
    assert state["profile"]["completion"] == 86


def test_state_filters(client):
    state = client.get("/api/state?coachSport=jump&gender=Female&q=a").get_json()

    assert names(state["coachRanking"]) == ["Kaito Tanaka", "Emily Carter"]
    assert names(state["adminTable"]) == ["Emily Carter"]


def test_search_filters_ranking(client):
    state = client.get("/api/state?q=ka").get_json()

    assert names(state["athleteRanking"]) == ["Kaito Tanaka"]
    assert state["adminSummary"]["count"] == 3


def test_theme_toggle_persists(app, client, json_headers):
    res = client.post("/theme", headers=json_headers)

    assert res.get_json()["theme"] == "dark"
    assert 'class="dark"' in client.get("/").get_data(as_text=True)
    with app.app_context():
        assert db.session.get(StorageSlot, "khelbharatTheme").value == "dark"


def test_athlete_detail(client):
    detail = client.get("/api/athletes/1").get_json()

    assert detail["totalSupport"] == "₹40,000"
    assert detail["injuries"][0]["type"] == "Ankle strain"
    assert detail["recentPerformance"][0]["text"] == "2025-11-10 – 100m - 10.55s (95 pts – Season best)"
    assert client.get("/api/athletes/99").status_code == 404


def test_compare(client):
    res = client.get("/api/compare?a=1&b=2")

    assert res.status_code == 200
    assert res.get_json()["summary"].startswith("Rahul Sharma currently has higher points than Emily Carter.")


def test_compare_rejects_bad_selection(client):
    assert client.get("/api/compare?a=1").get_json()["msg"] == "Select two athletes to compare."
    assert client.get("/api/compare?a=2&b=2").get_json()["msg"] == "Please select two different athletes."
    assert client.get("/api/compare?a=1&b=99").status_code == 404


# ============================================================
# Admin
# ============================================================

def test_admin_creates_athlete(app, client):
    res = client.post("/admin/athletes", json=NEW_ATHLETE)

    assert res.status_code == 201
    athlete = res.get_json()["athlete"]
    assert athlete["id"] == 4
    assert athlete["careerLevel"] == "National"
    assert athlete["totalSupport"] == "₹10,000"
    with app.app_context():
        stored = json.loads(db.session.get(StorageSlot, "khelbharatAthletes").value)
    assert stored[-1]["name"] == "Neeraj Verma"
    assert stored[-1]["points"] == 89


def test_admin_create_requires_fields(client, app_registry):
    res = client.post("/admin/athletes", json=dict(NEW_ATHLETE, sport="  ", points="fast"))

    assert res.status_code == 400
    body = res.get_json()
    assert body["msg"] == "Please fill all required fields correctly."
    assert set(body["errors"]) == {"sport", "points"}
    assert len(app_registry) == 3


def test_admin_create_from_form_redirects_with_message(client):
    res = client.post("/admin/athletes", data=NEW_ATHLETE, follow_redirects=True)
    body = res.get_data(as_text=True)

    assert res.status_code == 200
    assert "Athlete added" in body
    assert "Neeraj Verma" in body


def test_admin_delete(client, app_registry, json_headers):
    res = client.delete("/admin/athletes/1", headers=json_headers)
    assert res.status_code == 409
    assert res.get_json()["msg"] == "You cannot delete the currently logged-in athlete."

    assert client.delete("/admin/athletes/2", headers=json_headers).status_code == 200
    assert client.delete("/admin/athletes/99", headers=json_headers).status_code == 404
    assert [a.id for a in app_registry] == [1, 3]


def test_admin_delete_from_form(client):
    res = client.post("/admin/athletes/3/delete", follow_redirects=True)
    body = res.get_data(as_text=True)

    assert "Athlete deleted" in body
    assert "Kaito Tanaka" not in body


def test_admin_list_and_summary(client):
    rows = client.get("/admin/athletes?adminSport=JUMP").get_json()
    assert names(rows) == ["Emily Carter", "Kaito Tanaka"]
    assert rows[0]["monthlySupport"] == "₹1,00,000"

    summary = client.get("/admin/summary").get_json()
    assert summary["totalSupportAmount"] == 190000


# ============================================================
# Coach
# ============================================================

def test_coach_ranking(client):
    rows = client.get("/coach/ranking?coachSport=jump").get_json()

    assert names(rows) == ["Kaito Tanaka", "Emily Carter"]
    assert [row["rank"] for row in rows] == [1, 2]


def test_coach_performance_update(client, app_registry):
    res = client.post("/coach/performance", json={"athleteId": 2, "points": "90", "metric": "Long Jump - 7.01m"})
    body = res.get_json()

    assert res.status_code == 200
    assert body["points"] == 90
    assert body["performance"][0]["pointsSnapshot"] == 90
    assert body["performance"][0]["date"] == "N/A"
    assert app_registry.find(2).points == 90

    history = client.get("/coach/athletes/2/performance").get_json()
    assert [p["metric"] for p in history] == ["Long Jump - 7.01m"]


def test_coach_performance_reorders_ranking(client):
    client.post("/coach/performance", json={"athleteId": 2, "points": 99})

    state = client.get("/api/state").get_json()
    assert names(state["athleteRanking"])[0] == "Emily Carter"


def test_coach_performance_rejects_bad_points(client, app_registry):
    res = client.post("/coach/performance", json={"athleteId": 2, "points": "fast"})

    assert res.status_code == 400
    assert app_registry.find(2).points == 88


def test_coach_adds_injury(client):
    res = client.post(
        "/coach/injuries",
        json={"athleteId": 1, "type": "Hamstring", "severity": "Moderate", "status": "Active", "startDate": "2025-12-01"},
    )

    assert res.status_code == 201
    assert res.get_json()["injury"]["id"] == 2

    injuries = client.get("/coach/athletes/1/injuries").get_json()
    assert [i["type"] for i in injuries] == ["Ankle strain", "Hamstring"]
    assert client.get("/api/athletes/1").get_json()["injuries"][-1]["startDate"] == "2025-12-01"


def test_coach_injury_requires_type(client):
    res = client.post("/coach/injuries", json={"athleteId": 2, "type": " "})

    assert res.status_code == 400
    assert client.get("/coach/athletes/2/injuries").get_json() == []


def test_coach_unknown_athlete(client):
    assert client.post("/coach/injuries", json={"athleteId": 99, "type": "Knee"}).status_code == 404
    assert client.get("/coach/athletes/99/performance").status_code == 404


# ============================================================
# Athlete
# ============================================================

def test_select_athlete(client):
    assert client.post("/athlete/select", json={"athleteId": 3}).get_json()["currentId"] == 3
    assert client.get("/api/state").get_json()["profile"]["name"] == "Kaito Tanaka"

    # unknown ids fall back to the first athlete
    assert client.post("/athlete/select", json={"athleteId": 42}).get_json()["currentId"] == 1


def test_selected_athlete_can_delete_previous(client, json_headers):
    client.post("/athlete/select", json={"athleteId": 3})

    assert client.delete("/admin/athletes/1", headers=json_headers).status_code == 200


def test_update_profile(client, app_registry):
    res = client.post("/athlete/profile", json={"name": "Rahul S.", "age": 23, "country": "IN"})

    assert res.status_code == 200
    rahul = app_registry.find(1)
    assert (rahul.name, rahul.age, rahul.country, rahul.sport) == ("Rahul S.", 23, "IN", "100m Sprint")


def test_update_profile_rejects_negative_age(client, app_registry):
    res = client.post("/athlete/profile", json={"name": "Rahul", "age": -3})

    assert res.status_code == 400
    assert app_registry.find(1).age == 22


def test_avatar_upload(client, app_registry, json_headers):
    data = {"avatar": (io.BytesIO(b"\x89PNG fake"), "me.png", "image/png")}
    res = client.post("/athlete/avatar", data=data, headers=json_headers, content_type="multipart/form-data")

    assert res.status_code == 200
    assert app_registry.find(1).avatar.startswith("data:image/png;base64,")
    assert '<img class="avatar" src="data:image/png;base64,' in client.get("/").get_data(as_text=True)
    assert client.get("/api/state").get_json()["profile"]["completion"] == 100


def test_avatar_upload_rejects_non_images(client, app_registry, json_headers):
    data = {"avatar": (io.BytesIO(b"hello"), "notes.txt", "text/plain")}
    res = client.post("/athlete/avatar", data=data, headers=json_headers, content_type="multipart/form-data")

    assert res.status_code == 400
    assert res.get_json()["msg"] == "Please select an image file."
    assert app_registry.find(1).avatar is None


def test_avatar_upload_requires_file(client, json_headers):
    res = client.post("/athlete/avatar", data={}, headers=json_headers, content_type="multipart/form-data")

    assert res.get_json()["msg"] == "No image uploaded"


# ============================================================
# Storage wiring
# ============================================================

def test_roster_survives_restart_on_shared_store():
    store = InMemoryKeyValueStore()
    create_app("testing", store=store).test_client().post("/admin/athletes", json=NEW_ATHLETE)

    restarted = create_app("testing", store=store)

    assert [a.name for a in restarted.extensions["athlete_registry"]][-1] == "Neeraj Verma"


def test_app_runs_on_broken_storage(broken_store):
    app = create_app("testing", store=broken_store)
    client = app.test_client()

    assert client.get("/").status_code == 200
    assert client.post("/admin/athletes", json=NEW_ATHLETE).status_code == 201
    assert client.post("/theme", headers={"Accept": "application/json"}).get_json()["theme"] == "dark"
