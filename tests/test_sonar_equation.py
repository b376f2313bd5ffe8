"""Tests for the sonar equation and modifier scaling."""

import numpy as np
import pytest

from tacsub_sonar.detection import (
    DetectionThresholds,
    signal_excess_passive,
    signal_excess_active,
    sonar_threshold,
    detection_prob,
    raw_modifier,
    sd_2d6,
)


class TestSignalExcess:
    """Tests for passive and active signal excess."""

    def test_passive(self):
        """SE = SL - TL - NL + DI - DT."""
        se = signal_excess_passive(130.0, 60.0, 72.0, 10.0, 15.0)
        assert np.isclose(se, -7.0)

    def test_active(self):
        """SE = SL - 2TL + TS - NL + DI - DT."""
        se = signal_excess_active(210.0, 40.0, 15.0, 72.0, 5.0, 50.0)
        assert np.isclose(se, 28.0)

    def test_active_counts_tl_twice(self):
        """One more dB of TL costs the active sonar two dB of SE."""
        se1 = signal_excess_active(210.0, 40.0, 15.0, 72.0, 5.0, 50.0)
        se2 = signal_excess_active(210.0, 41.0, 15.0, 72.0, 5.0, 50.0)
        assert np.isclose(se1 - se2, 2.0)

    def test_arrays(self):
        """Works element-wise."""
        tl = np.array([50.0, 60.0, 70.0])
        se = signal_excess_passive(130.0, tl, 72.0, 10.0, 15.0)
        assert np.allclose(se, [3.0, -7.0, -17.0])


class TestDetectionProbability:
    """Tests for sonar_threshold and detection_prob."""

    def test_threshold(self):
        """Break-even noise level is SE above the mean noise."""
        assert np.isclose(sonar_threshold(-7.0, 72.0), 65.0)

    def test_even_odds_at_zero_excess(self):
        assert np.isclose(detection_prob(0.0, 72.0, 10.0), 0.5)

    def test_one_sigma(self):
        """One noise sd of excess gives Phi(1)."""
        assert np.isclose(detection_prob(10.0, 72.0, 10.0), 0.8413447, atol=1e-7)
        assert np.isclose(detection_prob(-10.0, 72.0, 10.0), 1 - 0.8413447, atol=1e-7)

    def test_limits(self):
        assert detection_prob(-np.inf, 72.0, 10.0) == 0.0
        assert detection_prob(np.inf, 72.0, 10.0) == 1.0
        assert detection_prob(-200.0, 72.0, 10.0) < 1e-12
        assert detection_prob(200.0, 72.0, 10.0) > 1 - 1e-12

    def test_monotone(self):
        """Detection probability never decreases with SE."""
        se = np.linspace(-80, 80, 321)
        prob = detection_prob(se, 72.0, 10.0)
        assert np.all(np.diff(prob) >= 0)
        assert np.all((prob >= 0) & (prob <= 1))

    def test_invalid_sd(self):
        with pytest.raises(ValueError):
            detection_prob(0.0, 72.0, 0.0)


class TestModifiers:
    """Tests for raw modifiers and class centering."""

    def test_raw_modifier(self):
        """One noise sd above the mean is one 2d6 sd."""
        assert np.isclose(raw_modifier(82.0, 72.0, 10.0), sd_2d6)
        assert np.isclose(raw_modifier(72.0, 72.0, 10.0), 0.0)
        assert np.isclose(raw_modifier(52.0, 72.0, 5.0), -4 * sd_2d6)

    def test_class_thresholds(self):
        thresholds = DetectionThresholds.from_decibels(15.0, 50.0, 10.0)
        assert np.isclose(thresholds.passive, sd_2d6 * 1.5 + 7.0)
        assert np.isclose(thresholds.active, sd_2d6 * 5.0 + 7.0)

    def test_adjustment_centers_classes(self):
        """Adjustments sum to zero and restore the shared mean."""
        thresholds = DetectionThresholds.from_decibels(15.0, 50.0, 10.0)
        adjust = thresholds.adjust
        assert np.isclose(adjust["passive"] + adjust["active"], 0.0)
        assert np.isclose(thresholds.passive - adjust["passive"], thresholds.overall)
        assert np.isclose(thresholds.active - adjust["active"], thresholds.overall)
        assert np.isclose(
            np.mean([thresholds.passive, thresholds.active]), thresholds.overall
        )

    def test_equal_thresholds_need_no_adjustment(self):
        thresholds = DetectionThresholds.from_decibels(20.0, 20.0, 8.0)
        assert np.isclose(thresholds.adjust["passive"], 0.0)
        assert np.isclose(thresholds.adjust["active"], 0.0)

    def test_records(self):
        records = DetectionThresholds(passive=1.0, active=3.0).as_records()
        assert [r["class"] for r in records] == ["passive", "active"]
        assert [r["threshold"] for r in records] == [1.0, 3.0]
