"""Python EuRoC - read-only access to EuRoC MAV recordings."""

__version__ = "0.1.0"

# Re-export main classes for convenient imports
from .dataset_reader import DatasetReader
from .errors import (
    EurocError,
    ImageDecodeError,
    LayoutError,
    MalformedError,
    OutOfRangeError,
)
from .io import (
    CameraCalibration,
    CameraIntrinsics,
    CameraReader,
    DistortionCoeffs,
    GroundTruthReader,
    GroundTruthRecord,
    IMUCalibration,
    IMUReader,
    IMURecord,
    ImageRecord,
    PositionReader,
    PositionRecord,
    RawRecord,
    RecordIterator,
    SensorReader,
)
from .layout import DEFAULT_LAYOUT, EurocLayout

__all__ = [
    "__version__",
    # Dataset
    "DatasetReader",
    "EurocLayout",
    "DEFAULT_LAYOUT",
    # Sensors
    "SensorReader",
    "CameraReader",
    "IMUReader",
    "GroundTruthReader",
    "PositionReader",
    # Records
    "RecordIterator",
    "RawRecord",
    "ImageRecord",
    "IMURecord",
    "GroundTruthRecord",
    "PositionRecord",
    # Calibration
    "CameraCalibration",
    "CameraIntrinsics",
    "DistortionCoeffs",
    "IMUCalibration",
    # Errors
    "EurocError",
    "LayoutError",
    "MalformedError",
    "ImageDecodeError",
    "OutOfRangeError",
]
