"""Tests for appeal-overturn estimation and cost savings."""

import random

import pytest

from aiie.models import AppealInputs
from aiie.scoring import (
    AppealOverturnEstimator,
    calculate_appeal_cost_savings,
    estimate_appeal_overturn,
)


class TestPreDenialProbability:
    """Test the score-based overturn probability."""

    def test_modality_adjustment(self):
        estimator = AppealOverturnEstimator()
        assert estimator.pre_denial_probability(5.0, "Ultrasound") == pytest.approx(49.2)
        assert estimator.pre_denial_probability(5.0, "PET") == pytest.approx(51.6)

    def test_unknown_modality_has_no_adjustment(self):
        assert AppealOverturnEstimator().pre_denial_probability(5.0, "X-ray") == 50.0

    def test_clamped_to_range(self):
        estimator = AppealOverturnEstimator()
        assert estimator.pre_denial_probability(1.0, "Ultrasound") == 1.0
        assert estimator.pre_denial_probability(9.0, "PET") == 99.0

    def test_custom_baselines(self):
        estimator = AppealOverturnEstimator({"MRI": {"avg_appeal_overturn": 0.90}})
        assert estimator.pre_denial_probability(5.0, "MRI") == pytest.approx(52.0)


class TestOverturnProbability:
    """Test the weighted post-denial estimate."""

    def test_all_maximal_inputs(self):
        inputs = AppealInputs(
            documentation_score=100,
            criteria_match_score=100,
            aiie_score=9,
            historical_approval_rate=100,
            provider_specialty_match=100,
        )
        assert estimate_appeal_overturn(inputs) == 100.0

    def test_all_minimal_inputs(self):
        inputs = AppealInputs(
            documentation_score=0,
            criteria_match_score=0,
            aiie_score=1,
            historical_approval_rate=0,
            provider_specialty_match=0,
        )
        assert estimate_appeal_overturn(inputs) == 0.0

    def test_weighted_mix(self):
        inputs = AppealInputs(
            documentation_score=80,
            criteria_match_score=60,
            aiie_score=5,
            historical_approval_rate=70,
            provider_specialty_match=100,
        )
        # 20 + 15 + 11 + 12.6 + 10
        assert estimate_appeal_overturn(inputs) == pytest.approx(68.6)

    def test_out_of_range_inputs_clamped(self):
        rng = random.Random(7)
        for _ in range(200):
            inputs = AppealInputs(
                documentation_score=rng.uniform(-50, 150),
                criteria_match_score=rng.uniform(-50, 150),
                aiie_score=rng.uniform(-5, 15),
                historical_approval_rate=rng.uniform(-50, 150),
                provider_specialty_match=rng.uniform(-50, 150),
            )
            assert 0.0 <= estimate_appeal_overturn(inputs) <= 100.0


class TestCostSavings:
    """Test appeal cost savings."""

    def test_savings_for_prevented_appeals(self):
        savings = calculate_appeal_cost_savings(10)
        assert savings.direct_cost == 1270
        assert savings.staff_hours == 25.0
        assert savings.total_savings == 1270

    def test_negative_count_clamped(self):
        savings = calculate_appeal_cost_savings(-3)
        assert savings.appeals_prevented == 0
        assert savings.total_savings == 0
