from boardeval.extensions import db
from boardeval.models import CohortSettings, Rating
from conftest import items_for, login, make_user


def _payload(cohort, phase, value):
    return {"items": [{"item_id": i, "score": value} for i in items_for(cohort, phase)]}


def test_index_reports_active_cohort(client, cohort):
    data = client.get("/").get_json()
    assert data["active_cohort"]["term"] == "Fall"


def test_login_and_me(client, member):
    resp = login(client, member)
    assert resp.get_json()["is_admin"] is False
    me = client.get("/auth/me").get_json()
    assert me["email"] == member.email
    assert me["name"] == "Mia Member"


def test_bad_credentials(client, member):
    resp = client.post("/auth/login", json={"email": member.email, "password": "wrong"})
    assert resp.status_code == 401


def test_login_form_errors(client, app):
    resp = client.post("/auth/login", json={"email": "not-an-email", "password": ""})
    assert resp.status_code == 400
    assert "email" in resp.get_json()["fields"]


def test_anonymous_gets_401_json(client, cohort, candidates):
    resp = client.post(f"/vote/{candidates[0].id}/application", json={"items": []})
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Unauthorized"


def test_vote_hub_shows_rated_flags(client, cohort, candidates, member):
    login(client, member)
    client.post(f"/vote/{candidates[0].id}/interview", json=_payload(cohort, "interview", 6))

    data = client.get("/vote").get_json()
    assert [c["candidate_number"] for c in data["candidates"]] == [1, 2, 3]
    assert data["candidates"][0]["rated"] == {"application": False, "interview": True, "character": False}


def test_submit_then_replace_ballot(client, cohort, candidates, member):
    login(client, member)
    url = f"/vote/{candidates[0].id}/application"

    first = client.post(url, json=_payload(cohort, "application", 7))
    assert first.status_code == 201
    assert first.get_json()["created"] is True

    second = client.post(url, json=_payload(cohort, "application", 9))
    assert second.status_code == 200
    assert second.get_json()["rating_id"] == first.get_json()["rating_id"]

    ballot = client.get(url).get_json()
    assert ballot["voting_open"] is True
    assert [i["score"] for i in ballot["ballot"]["items"]] == [9.0, 9.0]
    # display-only questions are shown but not scorable
    assert [i["scorable"] for i in ballot["items"]] == [True, True, False]


def test_abstain_over_http(client, cohort, candidates, member):
    login(client, member)
    resp = client.post(f"/vote/{candidates[1].id}/character", json={"items": []})
    assert resp.status_code == 201
    assert resp.get_json()["score_count"] == 0


def test_closed_phase_rejects_ballot(client, cohort, candidates, member):
    cohort.interview_open = False
    db.session.commit()
    login(client, member)

    resp = client.post(f"/vote/{candidates[0].id}/interview", json=_payload(cohort, "interview", 5))

    assert resp.status_code == 409
    assert resp.get_json()["error"] == "VotingClosed"
    assert Rating.query.count() == 0


def test_deactivated_candidate_is_off_the_ballot(client, cohort, candidates, member):
    candidates[0].is_active = False
    db.session.commit()
    login(client, member)

    resp = client.post(f"/vote/{candidates[0].id}/application", json=_payload(cohort, "application", 5))

    assert resp.status_code == 404
    assert resp.get_json()["error"] == "CandidateNotFound"
    assert client.get(f"/vote/{candidates[0].id}/application").status_code == 404
    assert Rating.query.count() == 0


def test_malformed_payload(client, cohort, candidates, member):
    login(client, member)
    url = f"/vote/{candidates[0].id}/application"
    assert client.post(url, json={"items": "nope"}).status_code == 400
    assert client.post(url, json={"items": [{"item_id": 1, "score": "x"}]}).status_code == 400


def test_unknown_item_and_phase(client, cohort, candidates, member):
    login(client, member)
    resp = client.post(f"/vote/{candidates[0].id}/application", json={"items": [{"item_id": 9999, "score": 5}]})
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "ItemNotFound"
    assert client.get(f"/vote/{candidates[0].id}/lunch").status_code == 404


def test_results_require_admin(client, cohort, member):
    login(client, member)
    assert client.get(f"/results/{cohort.id}").status_code == 403


def test_admin_results_and_search(client, cohort, candidates, member, admin):
    login(client, member)
    for phase, v in (("application", 8), ("interview", 6), ("character", 7)):
        client.post(f"/vote/{candidates[1].id}/{phase}", json=_payload(cohort, phase, v))
    client.post("/auth/logout")

    login(client, admin)
    data = client.get(f"/results/{cohort.id}").get_json()
    assert data["candidates"][0]["first_name"] == "Grace"
    assert data["candidates"][0]["composite"] == 7.1
    assert data["settings"]["top_n"] == 10

    found = client.get(f"/results/{cohort.id}?q=tur").get_json()["candidates"]
    assert [(c["first_name"], c["rank"]) for c in found] == [("Alan", 3)]

    detail = client.get(f"/results/{cohort.id}/candidates/{candidates[1].id}").get_json()
    assert detail["has_scores"] is True

    progress = client.get(f"/results/{cohort.id}/progress").get_json()
    assert progress["members"][0]["phases"]["character"]["count"] == 1


def test_export_download(client, cohort, candidates, admin):
    login(client, admin)
    resp = client.get(f"/results/{cohort.id}/export.csv")
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert 'filename="Fall_2026_Results.csv"' in resp.headers["Content-Disposition"]
    assert resp.get_data(as_text=True).count("\n") == 4


def test_results_for_unknown_cohort(client, admin):
    login(client, admin)
    resp = client.get("/results/999")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "CohortNotFound"


def test_weights_default_then_saved(client, cohort, admin):
    login(client, admin)
    url = f"/settings/{cohort.id}/weights"

    data = client.get(url).get_json()
    assert data["is_default"] is True
    assert CohortSettings.query.count() == 0

    resp = client.post(url, json={
        "application_weight": 0.5, "interview_weight": 0.5, "character_weight": 0,
        "outlier_std_devs": 1.5, "top_n_display": 3,
    })
    assert resp.status_code == 200, resp.get_json()
    assert client.get(url).get_json()["is_default"] is False


def test_weights_must_total_one(client, cohort, admin):
    login(client, admin)
    resp = client.post(f"/settings/{cohort.id}/weights", json={
        "application_weight": 0.5, "interview_weight": 0.5, "character_weight": 0.5,
        "outlier_std_devs": 2, "top_n_display": 10,
    })
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "InvalidWeights"


def test_cohort_lifecycle_over_http(client, cohort, admin):
    login(client, admin)
    created = client.post("/cohorts", json={"term": "Spring", "year": 2027})
    assert created.status_code == 201
    new_id = created.get_json()["id"]

    assert client.post("/cohorts", json={"term": "Spring", "year": 2027}).status_code == 409
    assert client.post(f"/cohorts/{new_id}/phases/application", json={"open": True}).status_code == 409

    assert client.post(f"/cohorts/{new_id}/activate").get_json()["is_active"] is True
    toggled = client.post(f"/cohorts/{new_id}/phases/application", json={"open": True}).get_json()
    assert toggled["application_open"] is True

    listed = client.get("/cohorts").get_json()
    assert [c["is_active"] for c in listed if c["id"] == cohort.id] == [False]


def test_delete_cohort_needs_super_admin(client, cohort, admin):
    login(client, admin)
    assert client.delete(f"/cohorts/{cohort.id}").status_code == 403
    client.post("/auth/logout")

    root = make_user("root@board.example.org")
    login(client, root)
    assert client.get("/auth/me").get_json()["is_super_admin"] is True
    assert client.delete(f"/cohorts/{cohort.id}").status_code == 200
    assert client.get("/").get_json()["active_cohort"] is None


def test_roster_edits_over_http(client, cohort, candidates, member, admin):
    login(client, admin)
    ada, grace, alan = candidates

    ordered = client.post(f"/cohorts/{cohort.id}/candidates/order", json=[grace.id, alan.id, ada.id])
    assert [c["custom_order"] for c in ordered.get_json()] == [1, 2, 3]
    assert client.post(f"/cohorts/{cohort.id}/candidates/order", json={"candidate_ids": "x"}).status_code == 400

    resp = client.post(f"/cohorts/{cohort.id}/candidates/{ada.id}/active", json={"active": False})
    assert resp.get_json()["is_active"] is False

    q1 = items_for(cohort, "application")[0]
    resp = client.post(f"/cohorts/{cohort.id}/questions/{q1}/scorable", json={"scorable": False})
    assert resp.get_json()["is_scorable"] is False


def test_board_membership_over_http(client, cohort, member, admin):
    login(client, admin)
    newcomer = make_user("newcomer@board.example.org")

    added = client.post(f"/cohorts/{cohort.id}/board", json={"user_id": newcomer.id, "position": "Chair"})
    assert added.status_code == 201
    assert client.post(f"/cohorts/{cohort.id}/board", json={"user_id": newcomer.id}).status_code == 409
    assert client.post(f"/cohorts/{cohort.id}/board", json={}).status_code == 400

    assert client.delete(f"/cohorts/{cohort.id}/board/{member.id}").status_code == 200
    assert client.delete(f"/cohorts/{cohort.id}/board/{member.id}").status_code == 404


def test_roster_routes_require_admin(client, cohort, candidates, member):
    login(client, member)
    assert client.post(f"/cohorts/{cohort.id}/candidates/order", json=[candidates[0].id]).status_code == 403
    assert client.delete(f"/cohorts/{cohort.id}/board/{member.id}").status_code == 403
