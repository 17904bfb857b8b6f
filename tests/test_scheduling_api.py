def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_occurrences_endpoint(seeded, client):
    response = client.get(
        "/scheduling/occurrences",
        params={"startDate": "2026-01-15", "endDate": "2026-01-31", "campusId": "campus-a"},
    )

    assert response.status_code == 200
    body = response.json()
    assert [o["occurrenceDate"] for o in body] == ["2026-01-19", "2026-01-26"]
    assert body[0]["occurrenceKey"] == "youth-night:2026-01-19"
    assert body[0]["serviceName"] == "Youth Night"
    assert body[0]["startTime"] == "18:30:00"


def test_occurrences_endpoint_with_inverted_range_is_empty(seeded, client):
    response = client.get(
        "/scheduling/occurrences", params={"startDate": "2026-02-01", "endDate": "2026-01-01"}
    )

    assert response.status_code == 200
    assert response.json() == []


def test_occurrences_endpoint_requires_range(client):
    assert client.get("/scheduling/occurrences").status_code == 422


def test_create_and_delete_custom_service(seeded, client):
    response = client.post(
        "/scheduling/services",
        json={
            "campusId": "campus-a",
            "ministryType": "worship",
            "serviceName": "Good Friday",
            "serviceDate": "2026-04-03",
            "startTime": "19:00",
        },
    )
    assert response.status_code == 200
    created = response.json()
    assert created["repeatsWeekly"] is False

    listed = client.get("/scheduling/services", params={"campusId": "campus-a"}).json()
    assert created["id"] in [s["id"] for s in listed]

    assert client.delete(f"/scheduling/services/{created['id']}").status_code == 200
    assert client.delete(f"/scheduling/services/{created['id']}").status_code == 404


def test_create_custom_service_rejects_blank_name(client):
    response = client.post(
        "/scheduling/services",
        json={
            "campusId": "campus-a",
            "ministryType": "worship",
            "serviceName": "   ",
            "serviceDate": "2026-04-03",
        },
    )

    assert response.status_code == 422


def test_team_schedule_endpoint(seeded, client):
    response = client.get(
        "/scheduling/team-schedule",
        params={"rotationPeriod": "Winter 2026", "campusId": "campus-a"},
    )

    assert response.status_code == 200
    body = response.json()
    assert [e["id"] for e in body] == ["campus-a-feb-1", "shared-feb-8"]
    assert body[0]["team"]["name"] == "Gold Team"


def test_scheduled_team_endpoint(seeded, client):
    response = client.get(
        "/scheduling/scheduled-team", params={"date": "2026-02-01", "campusId": "campus-b"}
    )

    assert response.status_code == 200
    assert response.json()["teamName"] == "Blue Team"


def test_scheduled_team_endpoint_returns_null_when_unscheduled(seeded, client):
    response = client.get("/scheduling/scheduled-team", params={"date": "2026-02-15"})

    assert response.status_code == 200
    assert response.json() is None


def test_rotation_period_endpoint(seeded, client):
    response = client.get(
        "/scheduling/rotation-period", params={"campusId": "campus-a", "date": "2026-02-01"}
    )

    assert response.json() == {"rotationPeriod": "Winter 2026"}


def test_assignment_endpoints(seeded, client):
    response = client.post(
        "/scheduling/services/youth-night/assignments",
        json={"assignmentDate": "2026-01-12", "userId": "user-1", "role": "vocalist"},
    )
    assert response.status_code == 200
    assignment_id = response.json()["id"]

    listed = client.get(
        "/scheduling/services/youth-night/assignments", params={"date": "2026-01-12"}
    ).json()
    assert [a["id"] for a in listed] == [assignment_id]

    assert client.delete(f"/scheduling/assignments/{assignment_id}").status_code == 200


def test_teams_endpoints(seeded, client):
    teams = client.get("/scheduling/teams").json()
    assert [t["name"] for t in teams] == ["Blue Team", "Gold Team"]

    members = client.get("/scheduling/team-members", params={"teamId": "team-gold"}).json()
    assert [m["memberName"] for m in members] == ["Jo"]
