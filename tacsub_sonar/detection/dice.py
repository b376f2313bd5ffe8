"""
Dice Sum Distribution
=====================

Distribution of the sum of independent fair dice, used as the common
scale for every sonar roll in the game (2d6 by default).

The single-die moments come from ``scipy.stats.randint`` and the sum
probability mass function is built by repeated convolution, so the
probabilities are exact multiples of ``1 / sides**count``.
"""

from dataclasses import dataclass, field
from fractions import Fraction
from typing import Dict
import math

import numpy as np
from scipy import stats

from tacsub_sonar.utils.constants import DIE_SIDES, DICE_PER_ROLL


@dataclass(frozen=True)
class DiceSumDistribution:
    """
    Sum of ``count`` independent uniform dice with faces ``1..sides``.

    Attributes
    ----------
    sides : int
        Number of faces per die
    count : int
        Number of dice summed
    """
    sides: int = DIE_SIDES
    count: int = DICE_PER_ROLL
    _counts: Dict[int, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.sides < 1 or self.count < 1:
            raise ValueError("Dice need at least one side and one die")

        face = np.ones(self.sides, dtype=np.int64)
        ways = np.array([1], dtype=np.int64)
        for _ in range(self.count):
            ways = np.convolve(ways, face)

        counts = {self.count + i: int(w) for i, w in enumerate(ways)}
        object.__setattr__(self, "_counts", counts)

    @property
    def outcomes(self) -> int:
        """Total number of equally likely rolls."""
        return self.sides ** self.count

    @property
    def minimum(self) -> int:
        return self.count

    @property
    def maximum(self) -> int:
        return self.count * self.sides

    @property
    def mean(self) -> float:
        """Mean of the sum (7 for 2d6)."""
        die = stats.randint(1, self.sides + 1)
        return self.count * float(die.mean())

    @property
    def std(self) -> float:
        """Standard deviation of the sum (sqrt(2) * sd(d6) for 2d6)."""
        die = stats.randint(1, self.sides + 1)
        return math.sqrt(self.count) * float(die.std())

    def pmf(self, value: int) -> Fraction:
        """Exact probability of rolling exactly ``value``."""
        return Fraction(self._counts.get(value, 0), self.outcomes)

    def prob_less_than(self, x: float) -> Fraction:
        """
        Exact probability that a roll is strictly below ``x``.

        Defined for any real ``x``: zero at or below the minimum roll and
        one above the maximum roll.
        """
        ways = sum(c for v, c in self._counts.items() if v < x)
        return Fraction(ways, self.outcomes)

    def prob_at_least(self, x: float) -> Fraction:
        """Exact probability that a roll meets or exceeds ``x``."""
        return 1 - self.prob_less_than(x)

    def table(self) -> Dict[int, float]:
        """Probability of each roll as floats, keyed by roll value."""
        return {v: c / self.outcomes for v, c in sorted(self._counts.items())}


TWO_D6 = DiceSumDistribution()

mean_2d6 = TWO_D6.mean
sd_2d6 = TWO_D6.std
