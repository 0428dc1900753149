"""EuRoC IMU data reader.

Streams IMU measurements (gyroscope and accelerometer) from imu0/data.csv and
reads the noise model from imu0/sensor.yaml.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .calibration import IMUCalibration
from .records import RowView
from .sensor_folder import SensorReader


@dataclass(frozen=True, eq=False)
class IMURecord:
    """Single IMU measurement at a given timestamp.

    Attributes:
        timestamp_ns: Measurement timestamp in nanoseconds
        gyroscope: Angular velocity (wx, wy, wz) in rad/s
        accelerometer: Linear acceleration (ax, ay, az) in m/s²
    """

    timestamp_ns: int
    gyroscope: np.ndarray  # (3,) rad/s
    accelerometer: np.ndarray  # (3,) m/s²


class IMUReader(SensorReader[IMURecord]):
    """Reader for EuRoC IMU data.

    CSV format:
        #timestamp [ns],w_RS_S_x [rad s^-1],w_RS_S_y [rad s^-1],w_RS_S_z [rad s^-1],
            a_RS_S_x [m s^-2],a_RS_S_y [m s^-2],a_RS_S_z [m s^-2]

    Example usage:
        reader = IMUReader("data/euroc/MH_01_easy/mav0/imu0")
        for m in reader.records():
            print(f"t={m.timestamp_ns}, gyro={m.gyroscope}, accel={m.accelerometer}")
    """

    NUM_COLUMNS = 7

    def gyro_noise_density(self) -> float:
        """Return gyroscope "white noise" (rad/s/√Hz)."""
        return self.read_sensor_yaml().scalar("gyroscope_noise_density")

    def gyro_random_walk(self) -> float:
        """Return gyroscope "random walk" (rad/s²/√Hz)."""
        return self.read_sensor_yaml().scalar("gyroscope_random_walk")

    def accel_noise_density(self) -> float:
        """Return accelerometer "white noise" (m/s²/√Hz)."""
        return self.read_sensor_yaml().scalar("accelerometer_noise_density")

    def accel_random_walk(self) -> float:
        """Return accelerometer "random walk" (m/s³/√Hz)."""
        return self.read_sensor_yaml().scalar("accelerometer_random_walk")

    def calibration(self) -> IMUCalibration:
        """Return the IMU noise model from a single read of sensor.yaml."""
        descriptor = self.read_sensor_yaml()
        return IMUCalibration(
            gyro_noise_density=descriptor.scalar("gyroscope_noise_density"),
            gyro_random_walk=descriptor.scalar("gyroscope_random_walk"),
            accel_noise_density=descriptor.scalar("accelerometer_noise_density"),
            accel_random_walk=descriptor.scalar("accelerometer_random_walk"),
            T_BS=descriptor.transform("T_BS"),
            rate_hz=descriptor.scalar("rate_hz"),
        )

    def _parse_row(self, row: RowView) -> IMURecord:
        return IMURecord(
            timestamp_ns=row.timestamp(0),
            gyroscope=row.vector(1, 3),
            accelerometer=row.vector(4, 3),
        )
