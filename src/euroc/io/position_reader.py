"""EuRoC Leica position reader (leica0)."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .records import RowView
from .sensor_folder import SensorReader


@dataclass(frozen=True, eq=False)
class PositionRecord:
    """Laser tracker position of the prism at a given timestamp."""

    timestamp_ns: int
    position: np.ndarray  # (3,) m


class PositionReader(SensorReader[PositionRecord]):
    """Reader for the external position tracker.

    CSV format:
        #timestamp [ns], p_RS_R_x [m], p_RS_R_y [m], p_RS_R_z [m]
    """

    NUM_COLUMNS = 4

    def _parse_row(self, row: RowView) -> PositionRecord:
        return PositionRecord(timestamp_ns=row.timestamp(0), position=row.vector(1, 3))
