"""EuRoC ground truth reader.

Ground truth is provided at ~200Hz in state_groundtruth_estimate0/data.csv,
as the body state estimated from Vicon/Leica and IMU data. Poses are body
frame, as published; no frame change or interpolation is applied here.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .records import RowView
from .sensor_folder import SensorReader


@dataclass(frozen=True, eq=False)
class GroundTruthRecord:
    """Ground truth state at a given timestamp.

    Attributes:
        timestamp_ns: Timestamp in nanoseconds
        position: p_RS_R, position (x, y, z) in m
        quaternion: q_RS, orientation (w, x, y, z), Hamilton convention
        velocity: v_RS_R, linear velocity (x, y, z) in m/s
        gyro_bias: b_w_RS_S, gyroscope bias (x, y, z) in rad/s
        accel_bias: b_a_RS_S, accelerometer bias (x, y, z) in m/s²
    """

    timestamp_ns: int
    position: np.ndarray  # (3,) m
    quaternion: np.ndarray  # (4,) w, x, y, z
    velocity: np.ndarray  # (3,) m/s
    gyro_bias: np.ndarray  # (3,) rad/s
    accel_bias: np.ndarray  # (3,) m/s²


class GroundTruthReader(SensorReader[GroundTruthRecord]):
    """Reader for EuRoC ground truth states.

    CSV format:
        #timestamp, p_RS_R_x, p_RS_R_y, p_RS_R_z, q_RS_w, q_RS_x, q_RS_y, q_RS_z,
            v_RS_R_x, v_RS_R_y, v_RS_R_z, b_w_RS_S_x, b_w_RS_S_y, b_w_RS_S_z,
            b_a_RS_S_x, b_a_RS_S_y, b_a_RS_S_z
    """

    NUM_COLUMNS = 17

    def _parse_row(self, row: RowView) -> GroundTruthRecord:
        return GroundTruthRecord(
            timestamp_ns=row.timestamp(0),
            position=row.vector(1, 3),
            quaternion=row.vector(4, 4),
            velocity=row.vector(8, 3),
            gyro_bias=row.vector(11, 3),
            accel_bias=row.vector(14, 3),
        )
