"""
test_risk.py: heat risk score and tier labels.

Run:
    pytest tests/test_risk.py -v
"""

import pytest

from coolblocks.models import RiskLevel
from coolblocks.risk import assess, heat_score, risk_color, risk_label, risk_score, round_half_up


class TestHeatScore:

    def test_linear_between_15_and_47(self):
        assert heat_score(15) == 0
        assert heat_score(31) == pytest.approx(50)
        assert heat_score(47) == pytest.approx(100)

    def test_clamped(self):
        assert heat_score(-40) == 0
        assert heat_score(80) == 100


class TestRiskScore:

    def test_extremes(self):
        assert risk_score(15, 100) == 0
        assert risk_score(47, 0) == 100

    def test_less_greenspace_means_more_risk(self):
        assert risk_score(30, 10) > risk_score(30, 60)

    def test_greenspace_is_clamped(self):
        assert risk_score(60, -10) == 100
        assert risk_score(-50, 150) == 0

    def test_integer_in_range_over_grid(self):
        """Score is an int in [0, 100] for heat index -50..60 and greenspace 0..100."""
        for hi in range(-50, 61, 2):
            for green in range(0, 101, 5):
                score = risk_score(float(hi), float(green))
                assert isinstance(score, int)
                assert 0 <= score <= 100

    def test_halves_round_up(self):
        assert round_half_up(4.5) == 5
        assert round_half_up(2.5) == 3
        assert round_half_up(2.49) == 2


class TestRiskLabel:

    @pytest.mark.parametrize("score,label", [
        (80, RiskLevel.HIGH),
        (65, RiskLevel.ELEVATED),
        (50, RiskLevel.MODERATE),
        (10, RiskLevel.LOW),
        (75, RiskLevel.HIGH),
        (74, RiskLevel.ELEVATED),
        (60, RiskLevel.ELEVATED),
        (59, RiskLevel.MODERATE),
        (45, RiskLevel.MODERATE),
        (44, RiskLevel.LOW),
        (0, RiskLevel.LOW),
        (100, RiskLevel.HIGH),
    ])
    def test_thresholds(self, score, label):
        assert risk_label(score) == label

    def test_label_values(self):
        assert [level.value for level in RiskLevel] == ["Low", "Moderate", "Elevated", "High"]

    def test_colors(self):
        assert risk_color(90) == "#e11d48"
        assert risk_color(10) == "#22c55e"


class TestAssess:

    def test_builds_assessment(self):
        assessment = assess(34.36, 20.0)
        assert assessment.heat_index_c == 34.36
        assert assessment.greenspace_pct == 20.0
        assert assessment.score == risk_score(34.36, 20.0)
        assert assessment.label == risk_label(assessment.score)

    def test_greenspace_stored_clamped(self):
        assert assess(30, 140).greenspace_pct == 100
