"""SARC-F sarcopenia screening questionnaire.

Five self-reported items (Strength, Assistance walking, Rising from a chair,
Climbing stairs, Falls), each scored 0-2. A total of 4 or more indicates
sarcopenia risk (Eur Geriatr Med. 2018;9(1):5-9).
"""

from collections.abc import Mapping

from longevity.logic import TEST_REGISTRY
from longevity.models import SarcFInterpretation, SarcFOption, SarcFQuestion, SarcFResult

_NONE_SOME = (SarcFOption(text="None", score=0), SarcFOption(text="Some", score=1))

SARC_F_QUESTIONS: tuple[SarcFQuestion, ...] = (
    SarcFQuestion(
        id="strength",
        domain="Strength",
        question="How much difficulty do you have in lifting and carrying 10 pounds (4.5 kg)?",
        options=(*_NONE_SOME, SarcFOption(text="A lot or unable", score=2)),
    ),
    SarcFQuestion(
        id="assistance",
        domain="Assistance Walking",
        question="How much difficulty do you have walking across a room?",
        options=(*_NONE_SOME, SarcFOption(text="A lot, use aids, or unable", score=2)),
    ),
    SarcFQuestion(
        id="rising",
        domain="Rising from Chair",
        question="How much difficulty do you have transferring from a chair or bed?",
        options=(*_NONE_SOME, SarcFOption(text="A lot or unable without help", score=2)),
    ),
    SarcFQuestion(
        id="climbing",
        domain="Climbing Stairs",
        question="How much difficulty do you have climbing a flight of 10 stairs?",
        options=(*_NONE_SOME, SarcFOption(text="A lot or unable", score=2)),
    ),
    SarcFQuestion(
        id="falls",
        domain="Falls",
        question="How many times have you fallen in the past year?",
        options=(
            SarcFOption(text="None", score=0),
            SarcFOption(text="1-3 falls", score=1),
            SarcFOption(text="4 or more falls", score=2),
        ),
    ),
)

SARC_F_AT_RISK_THRESHOLD = 4

_DOMAIN_RECOMMENDATIONS: dict[str, str] = {
    "strength": "Strength Training: Focus on upper body resistance exercises 2-3x/week",
    "assistance": (
        "Walking Program: Start with short distances, gradually increase. "
        "Consider walking aids if needed."
    ),
    "rising": (
        "Chair Stands: Practice sit-to-stand exercises daily to improve lower body strength"
    ),
    "climbing": "Stair Training: Practice step-ups or leg strengthening exercises",
    "falls": (
        "Fall Prevention: Consider balance training, home safety assessment, "
        "and medical review of medications"
    ),
}

_AT_RISK_RECOMMENDATIONS = (
    "Nutrition: Aim for 1.0-1.2g protein per kg body weight daily",
    "Medical Review: Consult healthcare provider for comprehensive sarcopenia assessment",
)


def calculate_sarc_f_score(answers: Mapping[str, int]) -> int:
    """Sum the five item scores.

    Unanswered items count as 0 ("None"), which can understate the risk of
    an incomplete questionnaire. Keys that are not SARC-F items are ignored.
    """
    return sum(answers.get(q.id, 0) for q in SARC_F_QUESTIONS)


def interpret_sarc_f_score(score: int) -> SarcFInterpretation:
    """Map a SARC-F total (0-10) to its risk band.

    Args:
        score: Total SARC-F score.

    Returns:
        SarcFInterpretation. A high questionnaire score is poor performance,
        so ``performance_score`` runs opposite to the total.
    """
    if score >= SARC_F_AT_RISK_THRESHOLD:
        return SarcFInterpretation(
            level="At Risk",
            sarcopenia_risk="High",
            recommendation=(
                "SARC-F score ≥4 indicates sarcopenia risk. Recommend comprehensive "
                "assessment including grip strength, muscle mass measurement (DEXA or "
                "BIA), and gait speed evaluation per EWGSOP2 guidelines."
            ),
            performance_score=0,
        )
    elif score >= 2:
        return SarcFInterpretation(
            level="Borderline",
            sarcopenia_risk="Moderate",
            recommendation=(
                "Some functional limitations detected. Consider preventive resistance "
                "training and protein supplementation. Monitor with repeat SARC-F in "
                "6-12 months."
            ),
            performance_score=2,
        )
    else:
        return SarcFInterpretation(
            level="Low Risk",
            sarcopenia_risk="Low",
            recommendation=(
                "No significant functional limitations. Continue regular physical "
                "activity and adequate protein intake to maintain muscle health."
            ),
            performance_score=4,
        )


def sarc_f_component_scores(answers: Mapping[str, int]) -> dict[str, int]:
    """Per-domain breakdown plus ``total``."""
    components = {q.id: answers.get(q.id, 0) for q in SARC_F_QUESTIONS}
    components["total"] = calculate_sarc_f_score(answers)
    return components


def personalized_recommendations(answers: Mapping[str, int]) -> list[str]:
    """Targeted suggestions for every impaired domain (item score >= 1).

    A total at or above the risk threshold adds nutrition and medical-review
    suggestions.
    """
    recommendations = [
        _DOMAIN_RECOMMENDATIONS[q.id]
        for q in SARC_F_QUESTIONS
        if answers.get(q.id, 0) >= 1
    ]
    if calculate_sarc_f_score(answers) >= SARC_F_AT_RISK_THRESHOLD:
        recommendations.extend(_AT_RISK_RECOMMENDATIONS)
    return recommendations


def evaluate_sarc_f(answers: Mapping[str, int]) -> SarcFResult:
    """Score and interpret a SARC-F questionnaire.

    Args:
        answers: Question id to item score (0-2).

    Returns:
        SarcFResult in the common PerformanceResult shape, with the total,
        component scores and personalised recommendations.
    """
    total = calculate_sarc_f_score(answers)
    interpretation = interpret_sarc_f_score(total)
    info = TEST_REGISTRY["sarc_f"]
    return SarcFResult(
        test_id=info.test_id,
        test_name=info.test_name,
        raw_value=total,
        unit=info.unit,
        level=interpretation.level,
        description=interpretation.recommendation,
        score=interpretation.performance_score,
        risk_category="sarcopenia",
        risk_label=interpretation.sarcopenia_risk,
        total_score=total,
        components=sarc_f_component_scores(answers),
        recommendations=personalized_recommendations(answers),
    )
