from unittest.mock import patch

from fastapi.testclient import TestClient

from roomreel.rewards.catalog import REWARD_CATALOG
from roomreel.server.app import create_app
from roomreel.server.storage import MemoryStorage
from roomreel.utils.rng import get_rng


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_list_challenges(client):
    response = client.get("/api/challenges")
    assert response.status_code == 200
    challenges = response.json()
    assert [c["id"] for c in challenges] == ["room-tour", "day-in-life"]
    assert challenges[0]["pointsPerStep"] == 25
    assert challenges[0]["steps"][0]["title"] == "Show us your bed area"


def test_get_challenge(client):
    response = client.get("/api/challenges/day-in-life")
    assert response.status_code == 200
    assert response.json()["name"] == "Day in Life Challenge"


def test_get_unknown_challenge(client):
    response = client.get("/api/challenges/nope")
    assert response.status_code == 404
    assert response.json() == {"message": "Challenge not found"}


def test_reward_previews(client):
    response = client.get("/api/rewards/preview")
    assert response.status_code == 200
    previews = response.json()
    assert len(previews) == 6
    assert {p["rarity"] for p in previews} == {"common", "rare", "epic"}


def test_submit_and_fetch(client, submission_body):
    response = client.post("/api/submissions", json=submission_body)
    assert response.status_code == 200
    body = response.json()
    submission, reward = body["submission"], body["reward"]

    assert submission["id"]
    assert submission["challengeId"] == "room-tour"
    assert len(submission["videoClips"]) == 2
    assert submission["totalPoints"] == 50
    assert reward["submissionId"] == submission["id"]
    assert reward["claimed"] == 0
    assert reward["rewardValue"] in {e.value for e in REWARD_CATALOG}

    fetched = client.get(f"/api/submissions/{submission['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == body


def test_each_submission_gets_fresh_id(client, submission_body, memory_storage):
    first = client.post("/api/submissions", json=submission_body).json()
    second = client.post("/api/submissions", json=submission_body).json()
    assert first["submission"]["id"] != second["submission"]["id"]
    assert len(memory_storage.submissions) == 2
    assert len(memory_storage.rewards) == 2


def test_optional_user_id(client, submission_body):
    submission_body["userId"] = "user-1"
    response = client.post("/api/submissions", json=submission_body)
    assert response.status_code == 200
    assert response.json()["submission"]["userId"] == "user-1"


def test_missing_field_rejected(client, submission_body, memory_storage):
    del submission_body["totalPoints"]
    response = client.post("/api/submissions", json=submission_body)
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid submission data"
    assert any(e["field"] == "totalPoints" for e in body["errors"])
    assert memory_storage.submissions == {}
    assert memory_storage.rewards == {}


def test_bad_clip_rejected(client, submission_body, memory_storage):
    submission_body["videoClips"][0]["size"] = -1
    response = client.post("/api/submissions", json=submission_body)
    assert response.status_code == 400
    assert any(e["field"].startswith("videoClips") for e in response.json()["errors"])
    assert memory_storage.submissions == {}


def test_unknown_challenge_rejected(client, submission_body, memory_storage):
    submission_body["challengeId"] = "nope"
    response = client.post("/api/submissions", json=submission_body)
    assert response.status_code == 404
    assert response.json() == {"message": "Challenge not found"}
    assert memory_storage.submissions == {}


def test_storage_failure_is_generic_500(client, submission_body, memory_storage):
    with patch.object(memory_storage, "create_submission", side_effect=RuntimeError("disk on fire")):
        response = client.post("/api/submissions", json=submission_body)
    assert response.status_code == 500
    assert response.json() == {"message": "Failed to create submission"}
    assert "disk on fire" not in response.text


def test_unknown_submission(client):
    response = client.get("/api/submissions/missing")
    assert response.status_code == 404
    assert response.json() == {"message": "Submission not found"}


def test_seeded_apps_draw_same_reward(submission_body):
    values = []
    for _ in range(2):
        app = create_app(storage=MemoryStorage(), rng=get_rng(99))
        with TestClient(app) as test_client:
            body = test_client.post("/api/submissions", json=submission_body).json()
        values.append(body["reward"]["rewardValue"])
    assert values[0] == values[1]


def test_reward_failure_leaves_no_submission(client, submission_body, memory_storage):
    with patch.object(memory_storage, "create_reward", side_effect=RuntimeError("write failed")):
        response = client.post("/api/submissions", json=submission_body)
    assert response.status_code == 500
    assert response.json() == {"message": "Failed to create submission"}
    assert memory_storage.submissions == {}
    assert memory_storage.rewards == {}
