"""Technology lifecycle classification.

Places a technology in one of eight stages from its score, momentum,
volatility and age:
- emerging: new, low-to-moderate score, strong growth
- growing: sustained upward momentum
- mature: high score, stable, low volatility, over a year old
- plateau: high score, near-zero momentum
- declining: sustained negative momentum
- legacy: old, low score, flat or falling
- niche: moderate score, stable
- hype: extreme volatility and rapid score swings
"""

import math

from trend_engine.models.model_analysis import (
    ConfidenceGrade,
    LifecycleClassification,
    LifecycleContext,
    LifecycleStage,
    MomentumAnalysis,
    MomentumTrend,
)

STAGE_DESCRIPTIONS = {
    LifecycleStage.EMERGING: "Early stage: growing adoption, high potential",
    LifecycleStage.GROWING: "Rapid growth: increasing developer adoption",
    LifecycleStage.MATURE: "Industry standard: stable and widely adopted",
    LifecycleStage.DECLINING: "Losing momentum: consider alternatives",
    LifecycleStage.LEGACY: "Maintenance mode: being replaced by newer options",
    LifecycleStage.NICHE: "Specialized: strong in a specific domain",
    LifecycleStage.HYPE: "Highly volatile: wait for stability before adopting",
    LifecycleStage.PLATEAU: "Stable peak: widely adopted but not growing",
}

STAGE_RECOMMENDATIONS = {
    LifecycleStage.EMERGING: "Worth learning for future opportunities, but production use carries risk",
    LifecycleStage.GROWING: "Strong learning investment: adoption is accelerating",
    LifecycleStage.MATURE: "Safe production choice: widely supported and stable",
    LifecycleStage.DECLINING: "Maintain existing skills, but prioritize learning alternatives",
    LifecycleStage.LEGACY: "Only learn if required for maintenance work",
    LifecycleStage.NICHE: "Learn if it matches your specialization or project needs",
    LifecycleStage.HYPE: "Monitor developments but wait for clearer direction",
    LifecycleStage.PLATEAU: "Safe for production, but limited future growth potential",
}


def _score_volatility(scores: list[float]) -> float:
    """Population standard deviation of raw scores."""
    if len(scores) < 2:
        return 0.0
    mean = sum(scores) / len(scores)
    return math.sqrt(sum((s - mean) ** 2 for s in scores) / len(scores))


def classify_lifecycle(context: LifecycleContext) -> LifecycleClassification:
    """Classify a technology's lifecycle stage.

    Rules are checked in order and the first match wins. Classification
    confidence is then nudged by the data confidence grade.

    Args:
        context: Score, momentum, confidence, age and recent scores

    Returns:
        LifecycleClassification with reasoning
    """
    score = context.composite_score
    momentum = context.momentum
    age = context.data_age_days
    recent = context.recent_scores

    volatility = _score_volatility(recent)
    score_range = max(recent) - min(recent) if recent else 0.0

    reasoning: list[str] = []

    if volatility > 10 and score_range > 30 and momentum.trend == MomentumTrend.VOLATILE:
        stage = LifecycleStage.HYPE
        reasoning.append("Extremely high volatility and rapid score swings")
        reasoning.append(f"Volatility: {volatility:.1f}, Score range: {score_range:.1f}")
        confidence = 0.9

    elif age < 180 and score < 60 and (
        momentum.trend == MomentumTrend.ACCELERATING or momentum.short_term > 2
    ):
        stage = LifecycleStage.EMERGING
        reasoning.append("Recently appeared with strong growth momentum")
        reasoning.append(f"Age: {age} days, Score: {score:.1f}")
        reasoning.append(f"Short-term momentum: {momentum.short_term:.2f}")
        confidence = 0.85

    elif (
        momentum.short_term > 1
        and momentum.medium_term > 0.5
        and momentum.trend in (MomentumTrend.ACCELERATING, MomentumTrend.STABLE)
        and score < 85
    ):
        stage = LifecycleStage.GROWING
        reasoning.append("Strong sustained growth momentum")
        reasoning.append(
            f"Short-term: +{momentum.short_term:.2f}, Medium-term: +{momentum.medium_term:.2f}"
        )
        reasoning.append(f"Current score: {score:.1f}")
        confidence = 0.9

    elif score >= 70 and abs(momentum.medium_term) < 1 and volatility < 5 and age > 365:
        stage = LifecycleStage.MATURE
        reasoning.append("High score with stable, low-volatility performance")
        reasoning.append(f"Score: {score:.1f}, Volatility: {volatility:.1f}")
        reasoning.append(f"Age: {age // 365} years")
        confidence = 0.95

    elif (
        score >= 70
        and abs(momentum.short_term) < 0.5
        and abs(momentum.medium_term) < 0.5
        and momentum.trend == MomentumTrend.STABLE
    ):
        stage = LifecycleStage.PLATEAU
        reasoning.append("High score but minimal momentum in either direction")
        reasoning.append(f"Score: {score:.1f}, Momentum: {momentum.short_term:.2f}")
        confidence = 0.85

    elif (
        momentum.short_term < -1
        and momentum.medium_term < -0.5
        and momentum.trend in (MomentumTrend.DECELERATING, MomentumTrend.REVERSING)
    ):
        stage = LifecycleStage.DECLINING
        reasoning.append("Sustained negative momentum across time windows")
        reasoning.append(
            f"Short-term: {momentum.short_term:.2f}, Medium-term: {momentum.medium_term:.2f}"
        )
        if momentum.streak < -7:
            reasoning.append(f"Declining for {abs(momentum.streak)} consecutive days")
        confidence = 0.9

    elif age > 730 and score < 40 and momentum.medium_term <= 0:
        stage = LifecycleStage.LEGACY
        reasoning.append("Long-established technology with low current scores")
        reasoning.append(f"Age: {age // 365} years, Score: {score:.1f}")
        reasoning.append("Negative or flat momentum")
        confidence = 0.85

    elif 40 <= score < 70 and abs(momentum.medium_term) < 1 and volatility < 5:
        stage = LifecycleStage.NICHE
        reasoning.append("Moderate score with stable performance")
        reasoning.append(f"Score: {score:.1f}, Volatility: {volatility:.1f}")
        reasoning.append("Likely strong in a specific domain")
        confidence = 0.7

    else:
        if score >= 60 and momentum.medium_term > 0:
            stage = LifecycleStage.GROWING
            reasoning.append("Positive momentum with solid score")
        elif score >= 60:
            stage = LifecycleStage.PLATEAU
            reasoning.append("High score, unclear momentum pattern")
        elif momentum.medium_term > 0:
            stage = LifecycleStage.EMERGING
            reasoning.append("Low score but showing growth")
        else:
            stage = LifecycleStage.NICHE
            reasoning.append("Moderate score, stable pattern")
        confidence = 0.6

    grade = context.confidence.grade
    if grade in (ConfidenceGrade.A, ConfidenceGrade.B):
        confidence = min(1.0, confidence + 0.05)
    elif grade in (ConfidenceGrade.D, ConfidenceGrade.F):
        confidence *= 0.8
        reasoning.append(f"Limited data confidence (grade {grade.value})")

    days_in_stage = estimate_days_in_stage(momentum, stage)

    return LifecycleClassification(
        stage=stage,
        confidence=round(confidence, 2),
        reasoning=reasoning,
        days_in_stage=days_in_stage,
        stage_transition_probability=transition_probability(
            stage, momentum, volatility, days_in_stage
        ),
    )


def estimate_days_in_stage(momentum: MomentumAnalysis, stage: LifecycleStage) -> int:
    """Estimate how long the technology has been in its stage from the streak."""
    if stage in (LifecycleStage.GROWING, LifecycleStage.DECLINING):
        return abs(momentum.streak)
    if stage in (LifecycleStage.MATURE, LifecycleStage.PLATEAU, LifecycleStage.NICHE):
        return 30
    if stage in (LifecycleStage.EMERGING, LifecycleStage.HYPE):
        return min(abs(momentum.streak), 30)
    if stage == LifecycleStage.LEGACY:
        return 180
    return 7


def transition_probability(
    stage: LifecycleStage,
    momentum: MomentumAnalysis,
    volatility: float,
    days_in_stage: int,
) -> float:
    """Likelihood (0-1) of moving to another stage soon."""
    if stage in (LifecycleStage.HYPE, LifecycleStage.EMERGING):
        probability = 0.6
    elif stage in (LifecycleStage.GROWING, LifecycleStage.DECLINING):
        probability = 0.3
    elif stage in (LifecycleStage.MATURE, LifecycleStage.PLATEAU, LifecycleStage.LEGACY):
        probability = 0.05
    else:
        probability = 0.1

    if momentum.trend == MomentumTrend.REVERSING:
        probability += 0.3
    if volatility > 8:
        probability += 0.2
    if days_in_stage > 90:
        probability += 0.15

    return min(1.0, round(probability, 2))


def get_lifecycle_description(stage: LifecycleStage) -> str:
    """Human-readable description of a lifecycle stage."""
    return STAGE_DESCRIPTIONS[stage]


def get_lifecycle_recommendation(stage: LifecycleStage) -> str:
    """Recommended action for developers at a lifecycle stage."""
    return STAGE_RECOMMENDATIONS[stage]
