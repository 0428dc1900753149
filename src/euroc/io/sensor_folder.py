"""Sensor folder validation and the generic sensor reader.

A EuRoC sensor folder looks like::

    imu0/
        sensor.yaml   calibration descriptor
        data.csv      timestamped measurements

Camera folders additionally hold a ``data/`` directory with the images.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Generic, Iterable, TypeVar

import numpy as np

from ..errors import LayoutError
from ..layout import DEFAULT_LAYOUT, EurocLayout
from .calibration import SensorDescriptor, load_sensor_yaml
from .records import RecordIterator, RowView, parse_raw_row

logger = logging.getLogger(__name__)

R = TypeVar("R")


def validate_sensor_folder(
    path: Path,
    required_files: Iterable[str] = (),
    required_dirs: Iterable[str] = (),
) -> None:
    """Check that a sensor folder and its required entries exist.

    Only existence is checked; nothing is opened or parsed.

    Args:
        path: Sensor folder, e.g. mav0/cam0
        required_files: File names that must exist inside the folder
        required_dirs: Directory names that must exist inside the folder

    Raises:
        LayoutError: Naming the first missing path
    """
    if not path.exists():
        raise LayoutError(f"Sensor directory not found: {path}", path=path)
    if not path.is_dir():
        raise LayoutError(f"Sensor path is not a directory: {path}", path=path)

    for name in required_dirs:
        if not (path / name).is_dir():
            raise LayoutError(
                f"{path.name}/{name} directory not found: {path / name}",
                path=path / name,
            )

    for name in required_files:
        if not (path / name).is_file():
            raise LayoutError(
                f"{path.name}/{name} not found: {path / name}",
                path=path / name,
            )


class SensorReader(Generic[R]):
    """Reader for any EuRoC sensor folder.

    Exposes the calibration common to all sensors (extrinsics, rate, type)
    and the data log as RawRecord rows. The sensor-specific readers subclass
    this and override ``_parse_row``.

    The folder is validated once, here. Accessors re-read sensor.yaml on
    every call and ``records()`` reopens data.csv every time.
    """

    NUM_COLUMNS = 1

    def __init__(
        self, sensor_path: str | Path, layout: EurocLayout = DEFAULT_LAYOUT
    ) -> None:
        """Initialize reader for one sensor folder.

        Args:
            sensor_path: Path to the sensor folder, e.g. mav0/imu0
            layout: File naming conventions

        Raises:
            LayoutError: If the folder, sensor.yaml or data.csv (or, for
                cameras, the image directory) is missing
        """
        self.sensor_path = Path(sensor_path)
        self._layout = layout

        validate_sensor_folder(
            self.sensor_path,
            required_files=(layout.sensor_yaml, layout.data_csv),
            required_dirs=self._required_dirs(),
        )
        logger.debug("Opened %s folder %s", type(self).__name__, self.sensor_path)

    def _required_dirs(self) -> tuple[str, ...]:
        return ()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.sensor_path)!r})"

    @property
    def name(self) -> str:
        """Folder name, e.g. 'cam0'."""
        return self.sensor_path.name

    @property
    def sensor_yaml_path(self) -> Path:
        return self.sensor_path / self._layout.sensor_yaml

    @property
    def data_csv_path(self) -> Path:
        return self.sensor_path / self._layout.data_csv

    def read_sensor_yaml(self) -> SensorDescriptor:
        """Parse sensor.yaml afresh."""
        return load_sensor_yaml(self.sensor_yaml_path)

    def extrinsics(self) -> np.ndarray:
        """Return the 4x4 T_BS extrinsics wrt. the body frame.

        The matrix is returned exactly as published (row-major), with no
        assumption about which way it maps.
        """
        return self.read_sensor_yaml().transform("T_BS")

    def sensor_type(self) -> str:
        """Return the descriptor's sensor_type, e.g. 'camera' or 'imu'."""
        return self.read_sensor_yaml().text("sensor_type")

    def rate_hz(self) -> float:
        """Return the nominal sampling rate in Hz."""
        return self.read_sensor_yaml().scalar("rate_hz")

    def _parse_row(self, row: RowView) -> R:
        return parse_raw_row(row)  # type: ignore[return-value]

    def records(self) -> RecordIterator[R]:
        """Open data.csv and return a lazy iterator over its rows.

        Raises:
            OSError: If data.csv cannot be opened
        """
        return RecordIterator(self.data_csv_path, self._parse_row, self.NUM_COLUMNS)

