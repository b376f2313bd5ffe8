"""
Sound velocity profiles and custom profile loading.

Provides the built-in deep-water profile used when no measured profile is
supplied, and loading of measured profiles from a two-column CSV file.

Depths are in feet and velocities in feet per second.
"""

import numpy as np
from dataclasses import dataclass
from pathlib import Path
import csv
import logging

from tacsub_sonar.utils.constants import FEET_PER_METER

logger = logging.getLogger(__name__)


@dataclass
class SoundVelocityProfile:
    """Sound speed as a function of depth.

    Attributes:
        depths: Depth grid, increasing [ft]
        velocities: Sound speed at each depth [ft/s]
        name: Profile identifier
    """
    depths: np.ndarray
    velocities: np.ndarray
    name: str = "custom"

    def __post_init__(self):
        depths = np.asarray(self.depths, dtype=float)
        velocities = np.asarray(self.velocities, dtype=float)

        if depths.ndim != 1 or depths.shape != velocities.shape:
            raise ValueError("depths and velocities must be 1-D arrays of equal length")
        if len(depths) < 2:
            raise ValueError("A sound velocity profile needs at least two points")
        if not (np.all(np.isfinite(depths)) and np.all(np.isfinite(velocities))):
            raise ValueError("Sound velocity profile contains non-finite values")
        if np.any(velocities <= 0):
            raise ValueError("Sound velocities must be positive")

        order = np.argsort(depths, kind="stable")
        depths = depths[order]
        velocities = velocities[order]
        if np.any(np.diff(depths) <= 0):
            raise ValueError("Sound velocity profile has repeated depths")

        self.depths = depths
        self.velocities = velocities

    @property
    def num_points(self) -> int:
        """Number of profile points."""
        return len(self.depths)

    def velocity_at(self, depth):
        """Linearly interpolated sound speed, held flat beyond the data.

        Args:
            depth: Depth or array of depths [ft]

        Returns:
            Sound speed [ft/s]
        """
        velocity = np.interp(depth, self.depths, self.velocities)
        return velocity if np.ndim(velocity) else float(velocity)

    def refine(self, max_depth: float, step: float = 1.0) -> "SoundVelocityProfile":
        """Resample the profile on a regular grid down to ``max_depth``.

        Args:
            max_depth: Deepest grid point [ft]
            step: Grid spacing [ft]

        Returns:
            Refined profile
        """
        if step <= 0:
            raise ValueError("SVP step must be positive")
        top = self.depths[0]
        if max_depth <= top:
            raise ValueError("max_depth must be below the top of the profile")

        # The grid always ends exactly at max_depth, even off-step.
        grid = np.arange(top, max_depth, step)
        grid = np.append(grid[grid < max_depth - 1e-6 * step], max_depth)
        return SoundVelocityProfile(
            depths=grid,
            velocities=np.interp(grid, self.depths, self.velocities),
            name=f"{self.name}_refined",
        )


class SoundVelocityProfiles:
    """Factory for sound velocity profiles."""

    # Built-in profile: depth [m], velocity [m/s]
    DEFAULT_PROFILE_SI = np.array([
        [0, 1540.4],
        [10, 1540.5],
        [20, 1540.7],
        [30, 1534.4],
        [50, 1523.3],
        [75, 1519.6],
        [100, 1518.5],
        [125, 1517.9],
        [150, 1517.3],
        [200, 1516.6],
        [250, 1516.5],
        [300, 1516.2],
        [400, 1516.4],
        [500, 1517.2],
        [600, 1518.2],
        [700, 1519.5],
        [800, 1521.0],
        [900, 1522.6],
        [1000, 1524.1],
        [1100, 1525.7],
        [1200, 1527.3],
        [1300, 1529.0],
        [1400, 1530.7],
        [1500, 1532.4],
        [1750, 1536.7],
        [2000, 1541.0],
    ])

    @classmethod
    def default(cls) -> SoundVelocityProfile:
        """Built-in profile converted to feet and feet per second."""
        table = cls.DEFAULT_PROFILE_SI * FEET_PER_METER
        return SoundVelocityProfile(
            depths=table[:, 0],
            velocities=table[:, 1],
            name="DEFAULT",
        )

    @classmethod
    def load_csv(cls, csv_path: str) -> SoundVelocityProfile:
        """Load a measured profile from CSV.

        Expected CSV format (header row required, values used as given):
            depth,velocity
            0,5053.8
            32.8,5054.1
            ...

        Args:
            csv_path: Path to CSV file

        Returns:
            SoundVelocityProfile from the file

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If a row is malformed or too few rows are present
        """
        path = Path(csv_path)
        if not path.exists():
            raise FileNotFoundError(f"SVP file not found: {csv_path}")

        depths = []
        velocities = []
        with open(path, 'r', newline='') as f:
            reader = csv.reader(f)
            header = next(reader, None)
            if header is None:
                raise ValueError(f"SVP file is empty: {csv_path}")
            for line_no, row in enumerate(reader, start=2):
                if not row or all(not cell.strip() for cell in row):
                    continue
                if len(row) < 2:
                    raise ValueError(
                        f"{csv_path}:{line_no}: expected depth and velocity columns"
                    )
                try:
                    depths.append(float(row[0]))
                    velocities.append(float(row[1]))
                except ValueError:
                    raise ValueError(
                        f"{csv_path}:{line_no}: non-numeric value in {row[:2]}"
                    ) from None

        logger.info(f"Loaded {len(depths)} SVP points from {path}")
        return SoundVelocityProfile(
            depths=np.array(depths),
            velocities=np.array(velocities),
            name=f"SVP_{path.stem}",
        )

    @classmethod
    def get_profile(cls, csv_path=None) -> SoundVelocityProfile:
        """Measured profile from ``csv_path`` if given, else the default."""
        if csv_path:
            return cls.load_csv(csv_path)
        return cls.default()
