from datetime import datetime
from typing import Annotated, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny

Sex = Literal["male", "female"]
Rarity = Literal["common", "rare", "epic", "legendary"]
RequirementType = Literal[
    "workout_count", "streak", "level", "xp", "exercise_complete", "perfect_week"
]


# ── Assessment results ────────────────────────────────────────────────────────


class PerformanceResult(BaseModel):
    """Classified result of a single physical test or questionnaire."""

    test_id: str
    test_name: str
    raw_value: float
    unit: str
    age_group: Optional[str] = None
    level: str  # "Excellent" | "Good" | "Average" | "Below Average" | ...
    description: str
    score: int = Field(ge=0, le=4)  # 0-4, used for cross-test aggregation
    risk_category: str  # "mortality" | "frailty" | "fall" | "cardiovascular" | "sarcopenia"
    risk_label: str  # "Very Low" ... "High"
    norms_available: bool = True


class GripStrengthResult(PerformanceResult):
    percentile: float


class GaitSpeedResult(PerformanceResult):
    speed_ms: float


class SingleLegStanceResult(PerformanceResult):
    # Set when the hold is under 10 s at age 51+; informational only.
    mortality_note: Optional[str] = None


class VO2MaxResult(PerformanceResult):
    vo2max: float


class SarcFResult(PerformanceResult):
    total_score: int
    components: dict[str, int]
    recommendations: list[str] = []


class TestInfo(BaseModel):
    """Metadata for a single test in the battery."""

    test_id: str
    test_name: str
    category: str
    unit: str
    description: str
    lower_is_better: bool = False


# ── Assessment inputs ─────────────────────────────────────────────────────────


class MeasurementInput(BaseModel):
    """Raw value of one test plus the demographic covariates."""

    value: float
    sex: Sex
    age: int = Field(ge=0)
    # Gait speed only: ``value`` is the time in seconds to cover 4 m.
    is_time: bool = False


class VO2MaxWalkInput(BaseModel):
    """Inputs of the Rockport 1-mile walk test."""

    walk_time_minutes: float
    weight_kg: float
    age: int = Field(ge=0)
    sex: Sex
    heart_rate_bpm: float


class AssessmentInput(BaseModel):
    """A batch of raw test values for one person.

    The tests dict maps test_id to raw value, e.g. {"grip_strength": 45.0}.
    """

    sex: Sex
    age: int = Field(ge=0)
    tests: dict[str, float]
    gait_is_time: bool = False


class CalculationResponse(BaseModel):
    """Response from the /assess/calculate endpoint."""

    results: list[SerializeAsAny[PerformanceResult]]


# ── SARC-F ────────────────────────────────────────────────────────────────────


class SarcFOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    score: int


class SarcFQuestion(BaseModel):
    """One item of the SARC-F questionnaire."""

    model_config = ConfigDict(frozen=True)

    id: str
    domain: str
    question: str
    options: tuple[SarcFOption, ...]


class SarcFInterpretation(BaseModel):
    level: str  # "At Risk" | "Borderline" | "Low Risk"
    sarcopenia_risk: str  # "High" | "Moderate" | "Low"
    recommendation: str
    performance_score: int


class SarcFInput(BaseModel):
    """Respondent answers keyed by question id; unanswered items count as 0."""

    answers: dict[str, Annotated[int, Field(ge=0, le=2)]] = {}


# ── Fitness age ───────────────────────────────────────────────────────────────


class FitnessAgeResult(BaseModel):
    """Fitness age relative to chronological age."""

    actual_age: int
    fitness_age: int
    adjustment: int  # years added to actual age before the floor is applied
    performance_level: str
    # Ordinal strategy: sum / (N*4) * 100. Subsystem strategy: mean 0-100 score.
    percentage: float
    total_score: Optional[int] = None
    max_score: Optional[int] = None


class OrdinalScoresInput(BaseModel):
    actual_age: int = Field(ge=0)
    test_scores: list[Annotated[int, Field(ge=0, le=4)]] = Field(min_length=1)


class SubsystemScores(BaseModel):
    """Third-party platform summary scores, each 0-100."""

    readiness: float = Field(ge=0, le=100)
    activity: float = Field(ge=0, le=100)
    sleep: float = Field(ge=0, le=100)


class SubsystemScoresInput(BaseModel):
    actual_age: int = Field(ge=0)
    subsystem_scores: SubsystemScores


class SelfAssessmentInput(BaseModel):
    """Onboarding answers: grip strength in kg plus multiple-choice answers."""

    sex: Sex
    age: int = Field(ge=0)
    answers: dict[str, str]


class SelfAssessmentResult(BaseModel):
    detailed_scores: dict[str, int]
    grip_strength: Optional[GripStrengthResult] = None
    fitness: FitnessAgeResult


# ── Health platforms ──────────────────────────────────────────────────────────


class PersonalInfo(BaseModel):
    age: int
    weight: float
    height: float
    biological_sex: Sex


class DailyActivity(BaseModel):
    day: str
    score: float = 0
    steps: int = 0
    active_calories: float = 0
    total_calories: float = 0
    equivalent_walking_distance: float = 0
    inactivity_alerts: int = 0


class SleepContributors(BaseModel):
    deep_sleep: float = 0
    efficiency: float = 0
    total_sleep: float = 0


class DailySleep(BaseModel):
    day: str
    score: float = 0
    contributors: SleepContributors = SleepContributors()


class ReadinessContributors(BaseModel):
    hrv_balance: float = 0
    resting_heart_rate: float = 0
    recovery_index: float = 0


class DailyReadiness(BaseModel):
    day: str
    score: float = 0
    temperature_deviation: float = 0
    contributors: ReadinessContributors = ReadinessContributors()


class HealthDataInput(BaseModel):
    """Already-fetched platform records for one reporting period."""

    personal_info: PersonalInfo
    activity: list[DailyActivity] = []
    sleep: list[DailySleep] = []
    readiness: list[DailyReadiness] = []
    resting_heart_rate: Optional[float] = None


class ActivityMetrics(BaseModel):
    average_steps: int
    active_calories: int
    activity_score: int
    equivalent_walking_distance: int


class SleepMetrics(BaseModel):
    average_sleep_score: int
    average_total_sleep: int
    sleep_efficiency: int
    deep_sleep_percentage: int


class ReadinessMetrics(BaseModel):
    average_readiness_score: int
    resting_heart_rate: float
    hrv_balance: int
    body_temperature_deviation: float


class MappedHealthData(BaseModel):
    """Platform records reduced to engine inputs."""

    personal_info: PersonalInfo
    activity_metrics: ActivityMetrics
    sleep_metrics: SleepMetrics
    readiness_metrics: ReadinessMetrics
    assessment_answers: dict[str, str]
    fitness: FitnessAgeResult


class HealthSummary(BaseModel):
    fitness_age: int
    actual_age: int
    age_difference: int
    activity_score: int
    daily_steps: int
    activity_level: str
    sleep_score: int
    average_sleep_hours: float
    sleep_efficiency: int
    sleep_quality: str
    readiness_score: int
    resting_heart_rate: float
    readiness_level: str


# ── Achievements ──────────────────────────────────────────────────────────────


class AchievementRequirement(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: RequirementType
    value: int


class Achievement(BaseModel):
    """Static catalog entry. ``id`` is the persisted identity key."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    icon: str
    color: str
    gradient: tuple[str, str]
    requirement: AchievementRequirement
    rarity: Rarity


class UnlockedAchievement(BaseModel):
    achievement_id: str
    unlocked_at: datetime
    is_new: bool = True


class AchievementProgress(BaseModel):
    """Per-user snapshot persisted by the caller."""

    unlocked_achievements: list[UnlockedAchievement] = []
    total_xp: int = 0


class UserStats(BaseModel):
    level: int = 0
    total_workouts: int = 0
    streak: int = 0
    total_xp_earned: int = 0


class UnlockResult(BaseModel):
    already_unlocked: bool
    progress: AchievementProgress


class AchievementSummary(BaseModel):
    unlocked_count: int
    total_count: int
    percentage: int


class AchievementStatus(BaseModel):
    """Response of GET /users/{user_id}/achievements."""

    progress: AchievementProgress
    summary: AchievementSummary
    new_achievements: list[Achievement]


class CheckAchievementsResponse(BaseModel):
    newly_unlocked: list[Achievement]
    progress: AchievementProgress


class XPAward(BaseModel):
    amount: int = Field(ge=0)


class HealthDataResponse(BaseModel):
    """Response from the /health-data/summary endpoint."""

    mapped: MappedHealthData
    summary: HealthSummary
