"""
Alert Probability
=================

Probability that a surface ship is alerted to the submarine.

Each detection point rolls 2d6 plus its own modifier against the
detection threshold; the submarine side makes one more check against the
threshold shifted by the submarine modifier. The ship stays unalerted
only if every one of those checks fails:

    P_none = prod_m P(2d6 < threshold - m) * P(2d6 < threshold - submod)

and the alert probability is ``1 - P_none``.
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import Sequence, Tuple, List

from tacsub_sonar.detection.dice import DiceSumDistribution, TWO_D6


@dataclass(frozen=True)
class AlertModel:
    """
    Inputs for one alert probability evaluation.

    Attributes
    ----------
    threshold : int
        Detection threshold on the dice scale
    sub_modifier : int
        Modifier applied on the submarine side
    point_modifiers : tuple of int
        Modifier of each detection point, in order
    """
    threshold: int
    sub_modifier: int = 0
    point_modifiers: Tuple[int, ...] = (0, 0)

    def miss_probability(self, dice: DiceSumDistribution = TWO_D6) -> Fraction:
        """Exact probability that no check succeeds."""
        p_none = dice.prob_less_than(self.threshold - self.sub_modifier)
        if len(self.point_modifiers) >= 1:
            for modifier in self.point_modifiers:
                p_none *= dice.prob_less_than(self.threshold - modifier)
        return p_none

    def probability(self, dice: DiceSumDistribution = TWO_D6) -> float:
        """Probability that at least one check succeeds."""
        return float(1 - self.miss_probability(dice))


def alert_probability(
    threshold: int,
    sub_modifier: int = 0,
    point_modifiers: Sequence[int] = (0, 0),
    dice: DiceSumDistribution = TWO_D6,
) -> float:
    """
    Probability that the submarine alerts its target.

    Parameters
    ----------
    threshold : int
        Detection threshold on the 2d6 scale
    sub_modifier : int
        Submarine-side modifier
    point_modifiers : sequence of int
        Detection point modifiers; empty means no detection points, in
        which case only the submarine-side check counts
    dice : DiceSumDistribution
        Roll distribution, 2d6 by default

    Returns
    -------
    probability : float
        Alert probability in [0, 1]

    Examples
    --------
    >>> round(alert_probability(7, 0, []), 4)
    0.5833
    """
    model = AlertModel(
        threshold=int(threshold),
        sub_modifier=int(sub_modifier),
        point_modifiers=tuple(int(m) for m in point_modifiers),
    )
    return model.probability(dice)


def parse_modifiers(text: str) -> List[int]:
    """
    Parse a comma-separated list of integer modifiers.

    An empty (or blank) string yields an empty list.

    Raises
    ------
    ValueError
        If any entry is not an integer
    """
    text = text.strip()
    if not text:
        return []
    modifiers = []
    for item in text.split(","):
        item = item.strip()
        try:
            modifiers.append(int(item))
        except ValueError:
            raise ValueError(f"Invalid modifier: {item!r}") from None
    return modifiers
