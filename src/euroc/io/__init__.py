"""Per-sensor readers for EuRoC MAV sensor folders."""

from .calibration import (
    CameraCalibration,
    CameraIntrinsics,
    DistortionCoeffs,
    IMUCalibration,
    SensorDescriptor,
    load_sensor_yaml,
)
from .camera_reader import CameraReader, ImageRecord
from .ground_truth import GroundTruthReader, GroundTruthRecord
from .imu_reader import IMUReader, IMURecord
from .position_reader import PositionReader, PositionRecord
from .records import RawRecord, RecordIterator, RowView
from .sensor_folder import SensorReader, validate_sensor_folder

__all__ = [
    # Readers
    "SensorReader",
    "CameraReader",
    "IMUReader",
    "GroundTruthReader",
    "PositionReader",
    "validate_sensor_folder",
    # Records
    "RecordIterator",
    "RowView",
    "RawRecord",
    "ImageRecord",
    "IMURecord",
    "GroundTruthRecord",
    "PositionRecord",
    # Calibration
    "SensorDescriptor",
    "load_sensor_yaml",
    "CameraCalibration",
    "CameraIntrinsics",
    "DistortionCoeffs",
    "IMUCalibration",
]
