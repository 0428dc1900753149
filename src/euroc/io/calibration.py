"""EuRoC sensor.yaml calibration descriptors.

Every sensor folder carries a ``sensor.yaml`` such as::

    sensor_type: camera
    T_BS:
      cols: 4
      rows: 4
      data: [0.0148655429818, -0.999880929698, ...]
    rate_hz: 20
    resolution: [752, 480]
    intrinsics: [458.654, 457.296, 367.215, 248.375] #fu, fv, cu, cv
    distortion_coefficients: [-0.28340811, 0.07395907, 0.00019359, 1.76187114e-05]

The descriptor is re-read on every call; nothing here is cached.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np
import yaml

from ..errors import MalformedError, OutOfRangeError

logger = logging.getLogger(__name__)

_MISSING = object()


def _as_float(value: Any) -> float | None:
    """Return value as float, or None if it is not a number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            # int too large for a double
            return None
    if isinstance(value, str):
        # PyYAML follows YAML 1.1, which leaves "3e-3" (no dot) as a string
        try:
            return float(value)
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class CameraIntrinsics:
    """Camera intrinsic parameters (pinhole model)."""

    fu: float  # Focal length x (pixels)
    fv: float  # Focal length y (pixels)
    cu: float  # Principal point x (pixels)
    cv: float  # Principal point y (pixels)

    def to_matrix(self) -> np.ndarray:
        """Return 3x3 camera intrinsic matrix K."""
        return np.array(
            [[self.fu, 0.0, self.cu], [0.0, self.fv, self.cv], [0.0, 0.0, 1.0]],
            dtype=np.float64,
        )


@dataclass(frozen=True)
class DistortionCoeffs:
    """Radial-tangential distortion coefficients."""

    k1: float  # Radial distortion coefficient 1
    k2: float  # Radial distortion coefficient 2
    p1: float  # Tangential distortion coefficient 1
    p2: float  # Tangential distortion coefficient 2

    def to_array(self) -> np.ndarray:
        """Return distortion coefficients as (4,) array for OpenCV."""
        return np.array([self.k1, self.k2, self.p1, self.p2], dtype=np.float64)


@dataclass(frozen=True, eq=False)
class CameraCalibration:
    """Everything a camera's sensor.yaml says about the camera.

    Attributes:
        resolution: Image size as (width, height)
        intrinsics: Pinhole parameters
        distortion: Radial-tangential distortion
        T_BS: 4x4 sensor extrinsics wrt. the body frame, as published
    """

    resolution: tuple[int, int]
    intrinsics: CameraIntrinsics
    distortion: DistortionCoeffs
    T_BS: np.ndarray


@dataclass(frozen=True, eq=False)
class IMUCalibration:
    """IMU noise parameters from sensor calibration.

    Attributes:
        gyro_noise_density: Gyroscope white noise (rad/s/√Hz)
        gyro_random_walk: Gyroscope bias random walk (rad/s²/√Hz)
        accel_noise_density: Accelerometer white noise (m/s²/√Hz)
        accel_random_walk: Accelerometer bias random walk (m/s³/√Hz)
        T_BS: 4x4 IMU extrinsics wrt. the body frame (identity in EuRoC)
        rate_hz: IMU sampling rate in Hz
    """

    gyro_noise_density: float
    gyro_random_walk: float
    accel_noise_density: float
    accel_random_walk: float
    T_BS: np.ndarray
    rate_hz: float


class SensorDescriptor:
    """Document 0 of a sensor.yaml, with checked field access.

    Keys may be dotted to reach into nested mappings, e.g. ``"T_BS.data"``.
    Every accessor either returns a value of the requested shape or raises
    MalformedError naming the key; no defaults are substituted.
    """

    def __init__(self, document: dict[str, Any], path: str | Path) -> None:
        self._document = document
        self.path = Path(path)

    def __contains__(self, key: str) -> bool:
        return self._lookup(key) is not _MISSING

    def _lookup(self, key: str) -> Any:
        node: Any = self._document
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return _MISSING
            node = node[part]
        return node

    def _malformed(self, key: str, reason: str) -> MalformedError:
        return MalformedError(f"'{key}' {reason} in {self.path}", path=self.path, key=key)

    def value(self, key: str) -> Any:
        """Return the raw value at key.

        Raises:
            MalformedError: If the key (or any parent key) is absent
        """
        node = self._lookup(key)
        if node is _MISSING:
            raise self._malformed(key, "is missing")
        return node

    def scalar(self, key: str) -> float:
        """Return a single number as float."""
        number = _as_float(self.value(key))
        if number is None:
            raise self._malformed(key, "is not a number")
        return number

    def text(self, key: str) -> str:
        """Return a string value."""
        node = self.value(key)
        if not isinstance(node, str):
            raise self._malformed(key, "is not a string")
        return node

    def _sequence(self, key: str, length: int) -> list[Any]:
        node = self.value(key)
        if not isinstance(node, list):
            raise self._malformed(key, f"is not a sequence (got {type(node).__name__})")
        if len(node) != length:
            raise self._malformed(key, f"must have {length} elements, got {len(node)}")
        return node

    def float_sequence(self, key: str, length: int) -> np.ndarray:
        """Return a fixed-length numeric sequence as a float64 array.

        Args:
            key: Descriptor key, dotted for nested keys
            length: Required number of elements

        Returns:
            (length,) float64 array
        """
        values = []
        for i, item in enumerate(self._sequence(key, length)):
            number = _as_float(item)
            if number is None:
                raise self._malformed(key, f"element {i} is not a number ({item!r})")
            values.append(number)
        return np.array(values, dtype=np.float64)

    def int_sequence(self, key: str, length: int, bits: int = 32) -> tuple[int, ...]:
        """Return a fixed-length sequence of unsigned integers.

        Args:
            key: Descriptor key, dotted for nested keys
            length: Required number of elements
            bits: Width of the unsigned target type

        Raises:
            MalformedError: If the key is absent or an element is not an integer
            OutOfRangeError: If an element does not fit in ``bits`` unsigned bits
        """
        values = []
        for i, item in enumerate(self._sequence(key, length)):
            if isinstance(item, bool) or not isinstance(item, int):
                raise self._malformed(key, f"element {i} is not an integer ({item!r})")
            if not 0 <= item < 2**bits:
                raise OutOfRangeError(
                    f"'{key}' element {i} = {item} does not fit in u{bits} in {self.path}",
                    value=item,
                    path=self.path,
                )
            values.append(item)
        return tuple(values)

    def transform(self, key: str = "T_BS") -> np.ndarray:
        """Return a 4x4 transform stored as ``{cols, rows, data}`` in row-major order."""
        return self.float_sequence(f"{key}.data", 16).reshape(4, 4)


def load_sensor_yaml(path: str | Path) -> SensorDescriptor:
    """Parse a sensor.yaml file.

    Args:
        path: Path to sensor.yaml

    Returns:
        SensorDescriptor wrapping the first YAML document

    Raises:
        OSError: If the file cannot be opened or read
        MalformedError: If the file is not YAML or holds no mapping document
    """
    path = Path(path)
    with open(path, "r") as f:
        try:
            documents = list(yaml.safe_load_all(f))
        except yaml.YAMLError as e:
            raise MalformedError(f"Invalid YAML in {path}: {e}", path=path) from e

    if not documents or documents[0] is None:
        raise MalformedError(f"No YAML document in {path}", path=path)

    document = documents[0]
    if not isinstance(document, dict):
        raise MalformedError(
            f"Expected a mapping at the top of {path}, got {type(document).__name__}",
            path=path,
        )

    logger.debug("Loaded %s (%d keys)", path, len(document))
    return SensorDescriptor(document, path)
