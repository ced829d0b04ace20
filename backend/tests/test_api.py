"""HTTP tests for the FastAPI routes.

The database dependency is overridden with sessions on a temporary SQLite
file, so the tests never touch the configured database.
"""

from collections.abc import AsyncGenerator, Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from longevity.database import Base, get_db
from longevity.main import app


@pytest.fixture
def client(tmp_path: Path) -> Iterator[TestClient]:
    db_file = tmp_path / "api.db"
    sync_engine = create_engine(f"sqlite:///{db_file}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    engine = create_async_engine(f"sqlite+aiosqlite:///{db_file}", poolclass=NullPool)
    factory = async_sessionmaker(engine, expire_on_commit=False)

    async def _get_test_db() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_test_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# ── System and battery ───────────────────────────────────────────────────────

class TestSystem:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_battery(self, client: TestClient) -> None:
        tests = client.get("/tests/battery").json()
        assert len(tests) == 6
        sit_to_stand = next(t for t in tests if t["test_id"] == "sit_to_stand")
        assert sit_to_stand["lower_is_better"] is True

    def test_reference_values(self, client: TestClient) -> None:
        response = client.get("/tests/grip_strength/reference", params={"sex": "male", "age": 27})
        assert response.status_code == 200
        assert response.json()["average"] == 49.3

    def test_reference_values_for_questionnaire(self, client: TestClient) -> None:
        response = client.get("/tests/sarc_f/reference", params={"sex": "male", "age": 27})
        assert response.status_code == 422


# ── Assessment ───────────────────────────────────────────────────────────────

class TestAssessment:
    def test_calculate_keeps_test_specific_fields(self, client: TestClient) -> None:
        response = client.post(
            "/assess/calculate",
            json={
                "sex": "male",
                "age": 27,
                "tests": {"grip_strength": 49.3, "gait_speed": 4.0},
                "gait_is_time": True,
            },
        )
        assert response.status_code == 200
        grip, gait = response.json()["results"]
        assert grip["percentile"] == 55
        assert grip["level"] == "Average"
        assert gait["speed_ms"] == 1.0

    def test_calculate_unknown_test(self, client: TestClient) -> None:
        response = client.post(
            "/assess/calculate", json={"sex": "female", "age": 40, "tests": {"plank": 60}}
        )
        assert response.status_code == 422

    def test_single_test(self, client: TestClient) -> None:
        response = client.post(
            "/assess/single_leg_stance", json={"value": 8, "sex": "female", "age": 62}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["risk_category"] == "fall"
        assert body["mortality_note"] is not None

    def test_single_test_unknown_id(self, client: TestClient) -> None:
        response = client.post("/assess/push_up", json={"value": 30, "sex": "male", "age": 30})
        assert response.status_code == 422

    def test_invalid_sex_rejected(self, client: TestClient) -> None:
        response = client.post("/assess/gait_speed", json={"value": 1.2, "sex": "x", "age": 30})
        assert response.status_code == 422

    def test_vo2max_walk_test(self, client: TestClient) -> None:
        response = client.post(
            "/assess/vo2max/walk-test",
            json={
                "walk_time_minutes": 12,
                "weight_kg": 70,
                "age": 30,
                "sex": "male",
                "heart_rate_bpm": 130,
            },
        )
        assert response.status_code == 200
        body = response.json()
        assert body["level"] == "Superior"
        assert body["vo2max"] == pytest.approx(56.14573, abs=1e-4)


class TestSarcF:
    def test_questions(self, client: TestClient) -> None:
        questions = client.get("/sarc-f/questions").json()
        assert [q["id"] for q in questions][0] == "strength"
        assert len(questions[0]["options"]) == 3

    def test_borderline(self, client: TestClient) -> None:
        response = client.post(
            "/assess/sarc-f", json={"answers": {"strength": 2, "assistance": 1}}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["total_score"] == 3
        assert body["level"] == "Borderline"
        assert body["risk_label"] == "Moderate"

    def test_item_score_out_of_range(self, client: TestClient) -> None:
        response = client.post("/assess/sarc-f", json={"answers": {"strength": 3}})
        assert response.status_code == 422


class TestSelfAssessment:
    def test_scores_answers(self, client: TestClient) -> None:
        response = client.post(
            "/assess/self-assessment",
            json={
                "sex": "male",
                "age": 27,
                "answers": {
                    "gripStrength": "49.3",
                    "endurance": "<10 min",
                    "flexibility": "Touch toes",
                    "cardio": "70-80 bpm",
                },
            },
        )
        assert response.status_code == 200
        body = response.json()
        assert body["grip_strength"]["percentile"] == 55
        assert body["fitness"]["fitness_age"] == 22


# ── Fitness age ──────────────────────────────────────────────────────────────

class TestFitnessAge:
    def test_ordinal(self, client: TestClient) -> None:
        response = client.post(
            "/fitness-age/ordinal", json={"actual_age": 45, "test_scores": [4, 3, 2, 4]}
        )
        assert response.status_code == 200
        assert response.json()["fitness_age"] == 35

    def test_ordinal_requires_scores(self, client: TestClient) -> None:
        response = client.post("/fitness-age/ordinal", json={"actual_age": 45, "test_scores": []})
        assert response.status_code == 422

    def test_subsystems(self, client: TestClient) -> None:
        response = client.post(
            "/fitness-age/subsystems",
            json={
                "actual_age": 25,
                "subsystem_scores": {"readiness": 90, "activity": 88, "sleep": 92},
            },
        )
        assert response.status_code == 200
        assert response.json()["fitness_age"] == 18

    def test_health_data_summary(self, client: TestClient) -> None:
        response = client.post(
            "/health-data/summary",
            json={
                "personal_info": {
                    "age": 50,
                    "weight": 80,
                    "height": 180,
                    "biological_sex": "male",
                },
                "activity": [{"day": "2024-05-01", "score": 70, "steps": 8000}],
                "sleep": [{"day": "2024-05-01", "score": 70}],
                "readiness": [{"day": "2024-05-01", "score": 70}],
            },
        )
        assert response.status_code == 200
        body = response.json()
        assert body["mapped"]["assessment_answers"]["endurance"] == "12-15 min"
        assert body["summary"]["fitness_age"] == 45
        assert body["summary"]["readiness_level"] == "Good"


# ── Achievements ─────────────────────────────────────────────────────────────

class TestAchievements:
    def test_catalog(self, client: TestClient) -> None:
        assert len(client.get("/achievements").json()) == 18

    def test_new_user_is_empty(self, client: TestClient) -> None:
        body = client.get("/users/u1/achievements").json()
        assert body["summary"] == {"unlocked_count": 0, "total_count": 18, "percentage": 0}
        assert body["new_achievements"] == []

    def test_check_then_seen(self, client: TestClient) -> None:
        response = client.post(
            "/users/u1/achievements/check",
            json={"level": 5, "total_workouts": 1, "streak": 0, "total_xp_earned": 0},
        )
        assert response.status_code == 200
        assert [a["id"] for a in response.json()["newly_unlocked"]] == [
            "first_workout",
            "level_5",
        ]

        status = client.get("/users/u1/achievements").json()
        assert status["summary"]["unlocked_count"] == 2
        assert len(status["new_achievements"]) == 2

        seen = client.post("/users/u1/achievements/seen").json()
        assert all(not ua["is_new"] for ua in seen["unlocked_achievements"])
        assert client.get("/users/u1/achievements").json()["new_achievements"] == []

    def test_repeat_check_unlocks_nothing(self, client: TestClient) -> None:
        stats = {"total_workouts": 10}
        client.post("/users/u1/achievements/check", json=stats)
        again = client.post("/users/u1/achievements/check", json=stats).json()
        assert again["newly_unlocked"] == []

    def test_manual_unlock(self, client: TestClient) -> None:
        first = client.post("/users/u1/achievements/perfect_week/unlock")
        assert first.status_code == 200
        assert first.json()["already_unlocked"] is False
        second = client.post("/users/u1/achievements/perfect_week/unlock").json()
        assert second["already_unlocked"] is True

    def test_unlock_unknown_achievement(self, client: TestClient) -> None:
        response = client.post("/users/u1/achievements/marathon/unlock")
        assert response.status_code == 404

    def test_award_xp(self, client: TestClient) -> None:
        client.post("/users/u1/achievements/xp", json={"amount": 250})
        body = client.post("/users/u1/achievements/xp", json={"amount": 100}).json()
        assert body["total_xp"] == 350

    def test_negative_xp_rejected(self, client: TestClient) -> None:
        response = client.post("/users/u1/achievements/xp", json={"amount": -5})
        assert response.status_code == 422
