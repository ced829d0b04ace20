"""FastAPI application entry point.

Defines the REST API endpoints. Handlers are thin: scoring is delegated to
logic.py, sarc_f.py, fitness_age.py and health_mapper.py, achievement rules
to achievements.py, and storage to db_service.py.

Run with:
    uvicorn longevity.main:app --reload --port 8000
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession

from longevity import achievements, db_service, fitness_age, health_mapper, logic, sarc_f
from longevity.config import settings
from longevity.database import create_tables, get_db
from longevity.models import (
    Achievement,
    AchievementProgress,
    AchievementStatus,
    AssessmentInput,
    CalculationResponse,
    CheckAchievementsResponse,
    FitnessAgeResult,
    HealthDataInput,
    HealthDataResponse,
    MeasurementInput,
    OrdinalScoresInput,
    PerformanceResult,
    SarcFInput,
    SarcFQuestion,
    SarcFResult,
    SelfAssessmentInput,
    SelfAssessmentResult,
    Sex,
    SubsystemScoresInput,
    TestInfo,
    UnlockResult,
    UserStats,
    VO2MaxResult,
    VO2MaxWalkInput,
    XPAward,
)
from longevity.norms import reference_values

# Import ORM models so Base.metadata is populated before create_tables() runs.
import longevity.db_models  # noqa: F401

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: create tables on startup."""
    await create_tables()
    logger.info("Database tables ready at %s", settings.database_url)
    yield


app = FastAPI(
    title="Longevity Assessment API",
    description=(
        "Age- and sex-normed scoring of physical performance tests, the SARC-F "
        "sarcopenia screen, fitness-age aggregation and achievement progress."
    ),
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── System ────────────────────────────────────────────────────────────────────


@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Confirm the API is running."""
    return {"status": "ok"}


# ── Assessment ────────────────────────────────────────────────────────────────


@app.get("/tests/battery", response_model=list[TestInfo], tags=["assessment"])
async def get_test_battery() -> list[TestInfo]:
    """Return metadata for every test in the battery."""
    return logic.get_test_battery()


@app.get("/tests/{test_id}/reference", tags=["assessment"])
async def get_reference_values(
    test_id: str,
    sex: Sex = Query(...),
    age: int = Query(..., ge=0),
) -> dict[str, object]:
    """Return display reference points (poor / average / excellent) for a test.

    Returns HTTP 422 for an unknown or non-normed test.
    """
    try:
        refs = reference_values(test_id, sex, age)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=f"No norms for test '{test_id}'") from exc
    if refs is None:
        raise HTTPException(status_code=404, detail="No reference values for this demographic")
    return refs


@app.post("/assess/calculate", response_model=None, tags=["assessment"])
async def calculate(input: AssessmentInput) -> CalculationResponse:
    """Evaluate a batch of raw test values for one person.

    Each result keeps its test-specific fields, so the response is encoded
    from the returned model rather than re-validated against the base schema.

    Returns HTTP 422 if any test id is unknown.
    """
    try:
        results = logic.calculate_all_tests(input)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return CalculationResponse(results=results)


@app.post("/assess/vo2max/walk-test", response_model=VO2MaxResult, tags=["assessment"])
async def assess_vo2max_walk_test(input: VO2MaxWalkInput) -> VO2MaxResult:
    """Estimate VO2Max from the Rockport 1-mile walk test and classify it."""
    return logic.evaluate_vo2max_walk_test(
        walk_time_minutes=input.walk_time_minutes,
        weight_kg=input.weight_kg,
        age=input.age,
        sex=input.sex,
        heart_rate_bpm=input.heart_rate_bpm,
    )


@app.post("/assess/sarc-f", response_model=SarcFResult, tags=["assessment"])
async def assess_sarc_f(input: SarcFInput) -> SarcFResult:
    """Score a SARC-F questionnaire. Unanswered items count as 0."""
    return sarc_f.evaluate_sarc_f(input.answers)


@app.post(
    "/assess/self-assessment", response_model=SelfAssessmentResult, tags=["assessment"]
)
async def assess_self_assessment(input: SelfAssessmentInput) -> SelfAssessmentResult:
    """Score the onboarding self-assessment and derive a fitness age."""
    detailed, grip, fitness = fitness_age.score_self_assessment(
        input.answers, input.sex, input.age
    )
    return SelfAssessmentResult(detailed_scores=detailed, grip_strength=grip, fitness=fitness)


@app.post("/assess/{test_id}", response_model=None, tags=["assessment"])
async def assess_single_test(test_id: str, input: MeasurementInput) -> PerformanceResult:
    """Evaluate one measured test.

    The response carries the test-specific fields (percentile, speed,
    mortality note, VO2Max). Returns HTTP 422 for an unknown test id.
    """
    try:
        return logic.evaluate_test(
            test_id, input.value, input.sex, input.age, is_time=input.is_time
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@app.get("/sarc-f/questions", response_model=list[SarcFQuestion], tags=["assessment"])
async def get_sarc_f_questions() -> list[SarcFQuestion]:
    """Return the five SARC-F items with their answer options."""
    return list(sarc_f.SARC_F_QUESTIONS)


# ── Fitness age ───────────────────────────────────────────────────────────────


@app.post("/fitness-age/ordinal", response_model=FitnessAgeResult, tags=["fitness-age"])
async def fitness_age_ordinal(input: OrdinalScoresInput) -> FitnessAgeResult:
    """Fitness age from per-test 0-4 scores."""
    try:
        return fitness_age.fitness_age_from_ordinal_scores(input.test_scores, input.actual_age)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@app.post(
    "/fitness-age/subsystems", response_model=FitnessAgeResult, tags=["fitness-age"]
)
async def fitness_age_subsystems(input: SubsystemScoresInput) -> FitnessAgeResult:
    """Fitness age from readiness, activity and sleep scores (0-100)."""
    scores = input.subsystem_scores
    return fitness_age.fitness_age_from_subsystem_scores(
        readiness=scores.readiness,
        activity=scores.activity,
        sleep=scores.sleep,
        actual_age=input.actual_age,
    )


@app.post(
    "/health-data/summary", response_model=HealthDataResponse, tags=["fitness-age"]
)
async def health_data_summary(input: HealthDataInput) -> HealthDataResponse:
    """Reduce wearable records to period averages, answers and a fitness age."""
    mapped = health_mapper.summarize_health_data(input)
    return HealthDataResponse(mapped=mapped, summary=health_mapper.build_health_summary(mapped))


# ── Achievements ──────────────────────────────────────────────────────────────


@app.get("/achievements", response_model=list[Achievement], tags=["achievements"])
async def list_achievements() -> list[Achievement]:
    """Return the full achievement catalog."""
    return list(achievements.ACHIEVEMENTS)


@app.get(
    "/users/{user_id}/achievements",
    response_model=AchievementStatus,
    tags=["achievements"],
)
async def get_user_achievements(
    user_id: str, db: AsyncSession = Depends(get_db)
) -> AchievementStatus:
    """Return a user's snapshot, unlock summary and unseen achievements."""
    progress = await db_service.load_achievement_progress(db, user_id)
    return AchievementStatus(
        progress=progress,
        summary=achievements.compute_progress(progress),
        new_achievements=achievements.get_new_achievements(progress),
    )


@app.post(
    "/users/{user_id}/achievements/check",
    response_model=CheckAchievementsResponse,
    tags=["achievements"],
)
async def check_user_achievements(
    user_id: str, stats: UserStats, db: AsyncSession = Depends(get_db)
) -> CheckAchievementsResponse:
    """Unlock every achievement the submitted stats qualify for."""
    progress = await db_service.load_achievement_progress(db, user_id)
    newly_unlocked, progress = achievements.check_and_unlock(progress, stats)
    if newly_unlocked:
        await db_service.save_achievement_progress(db, user_id, progress)
    return CheckAchievementsResponse(newly_unlocked=newly_unlocked, progress=progress)


@app.post(
    "/users/{user_id}/achievements/seen",
    response_model=AchievementProgress,
    tags=["achievements"],
)
async def mark_user_achievements_seen(
    user_id: str, db: AsyncSession = Depends(get_db)
) -> AchievementProgress:
    """Clear the "new" flag on all of a user's unlocks."""
    progress = achievements.mark_seen(await db_service.load_achievement_progress(db, user_id))
    await db_service.save_achievement_progress(db, user_id, progress)
    return progress


@app.post(
    "/users/{user_id}/achievements/xp",
    response_model=AchievementProgress,
    tags=["achievements"],
)
async def award_user_xp(
    user_id: str, award: XPAward, db: AsyncSession = Depends(get_db)
) -> AchievementProgress:
    """Add earned XP to a user's running total."""
    progress = achievements.add_xp(
        await db_service.load_achievement_progress(db, user_id), award.amount
    )
    await db_service.save_achievement_progress(db, user_id, progress)
    return progress


@app.post(
    "/users/{user_id}/achievements/{achievement_id}/unlock",
    response_model=UnlockResult,
    tags=["achievements"],
)
async def unlock_user_achievement(
    user_id: str, achievement_id: str, db: AsyncSession = Depends(get_db)
) -> UnlockResult:
    """Unlock one achievement by id (e.g. a perfect week signalled by the client).

    Returns HTTP 404 if the achievement id is not in the catalog.
    """
    progress = await db_service.load_achievement_progress(db, user_id)
    try:
        result = achievements.unlock(progress, achievement_id)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    if not result.already_unlocked:
        await db_service.save_achievement_progress(db, user_id, result.progress)
    return result
