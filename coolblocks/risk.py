# coolblocks/risk.py
"""
Heat risk scoring
Weights heat index (70%) against missing greenspace (30%) into a 0-100 score
"""

import math

from coolblocks.models import RiskAssessment, RiskLevel

HEAT_INDEX_FLOOR_C = 15.0
HEAT_INDEX_CEIL_C = 47.0
HEAT_WEIGHT = 0.7
GREEN_WEIGHT = 0.3

# Descending, first match wins
RISK_THRESHOLDS = [
    (75, RiskLevel.HIGH),
    (60, RiskLevel.ELEVATED),
    (45, RiskLevel.MODERATE),
]

RISK_COLORS = {
    RiskLevel.HIGH: '#e11d48',
    RiskLevel.ELEVATED: '#f59e0b',
    RiskLevel.MODERATE: '#10b981',
    RiskLevel.LOW: '#22c55e',
}


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def heat_score(hi_c: float) -> float:
    """Map heat index 15..47 C linearly onto 0..100"""
    span = HEAT_INDEX_CEIL_C - HEAT_INDEX_FLOOR_C
    return clamp((hi_c - HEAT_INDEX_FLOOR_C) / span * 100, 0, 100)


def risk_score(hi_c: float, greenspace_pct: float) -> int:
    """Combined score; less greenspace means more risk."""
    green = clamp(greenspace_pct, 0, 100)
    return round_half_up(HEAT_WEIGHT * heat_score(hi_c) + GREEN_WEIGHT * (100 - green))


def risk_label(score: int) -> RiskLevel:
    for threshold, level in RISK_THRESHOLDS:
        if score >= threshold:
            return level
    return RiskLevel.LOW


def risk_color(score: int) -> str:
    return RISK_COLORS[risk_label(score)]


def assess(hi_c: float, greenspace_pct: float) -> RiskAssessment:
    score = risk_score(hi_c, greenspace_pct)
    return RiskAssessment(
        heat_index_c=hi_c,
        greenspace_pct=clamp(greenspace_pct, 0, 100),
        score=score,
        label=risk_label(score),
    )
