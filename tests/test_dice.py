"""Tests for the dice sum distribution."""

from fractions import Fraction
import math

import numpy as np
import pytest

from tacsub_sonar.detection.dice import DiceSumDistribution, TWO_D6, mean_2d6, sd_2d6


class TestTwoD6:
    """Tests for the 2d6 distribution."""

    def test_range(self):
        """Rolls run from 2 to 12 over 36 outcomes."""
        assert TWO_D6.minimum == 2
        assert TWO_D6.maximum == 12
        assert TWO_D6.outcomes == 36

    def test_pmf(self):
        """Known probabilities of single rolls."""
        assert TWO_D6.pmf(2) == Fraction(1, 36)
        assert TWO_D6.pmf(7) == Fraction(6, 36)
        assert TWO_D6.pmf(12) == Fraction(1, 36)
        assert TWO_D6.pmf(1) == 0
        assert TWO_D6.pmf(13) == 0

    def test_table_sums_to_one(self):
        """Probability table is normalized."""
        table = TWO_D6.table()
        assert list(table) == list(range(2, 13))
        assert np.isclose(sum(table.values()), 1.0)

    def test_prob_less_than(self):
        """Cumulative probabilities against hand-counted values."""
        assert TWO_D6.prob_less_than(7) == Fraction(15, 36)
        assert TWO_D6.prob_less_than(12) == Fraction(35, 36)
        assert TWO_D6.prob_less_than(2.5) == Fraction(1, 36)

    def test_prob_less_than_out_of_range(self):
        """Thresholds outside 2..12 give exactly 0 or 1."""
        assert TWO_D6.prob_less_than(2) == 0
        assert TWO_D6.prob_less_than(-5) == 0
        assert TWO_D6.prob_less_than(13) == 1
        assert TWO_D6.prob_less_than(40) == 1

    def test_prob_at_least(self):
        """Complement of prob_less_than."""
        for x in range(0, 15):
            assert TWO_D6.prob_at_least(x) + TWO_D6.prob_less_than(x) == 1

    def test_monotone(self):
        """Cumulative probability never decreases with the threshold."""
        values = [TWO_D6.prob_less_than(x) for x in range(-2, 16)]
        assert all(a <= b for a, b in zip(values, values[1:]))

    def test_moments(self):
        """Mean 7 and sd sqrt(2) * sd(d6)."""
        assert np.isclose(mean_2d6, 7.0)
        assert np.isclose(sd_2d6, math.sqrt(2 * 35 / 12))
        assert np.isclose(sd_2d6, 2.41523, atol=1e-5)


class TestOtherDice:
    """Tests for non-default dice."""

    def test_three_d6(self):
        """3d6 spans 3..18 over 216 outcomes."""
        dice = DiceSumDistribution(sides=6, count=3)
        assert dice.minimum == 3
        assert dice.maximum == 18
        assert dice.pmf(10) == Fraction(27, 216)
        assert np.isclose(dice.mean, 10.5)

    def test_single_die(self):
        """One d6 is uniform."""
        die = DiceSumDistribution(count=1)
        assert all(die.pmf(v) == Fraction(1, 6) for v in range(1, 7))

    def test_invalid(self):
        """Dice need sides and count."""
        with pytest.raises(ValueError):
            DiceSumDistribution(sides=0)
        with pytest.raises(ValueError):
            DiceSumDistribution(count=0)
