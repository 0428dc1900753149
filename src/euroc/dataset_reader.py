"""EuRoC MAV dataset reader."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import LayoutError
from .io import CameraReader, GroundTruthReader, IMUReader, PositionReader, SensorReader
from .layout import DEFAULT_LAYOUT, EurocLayout

logger = logging.getLogger(__name__)


class DatasetReader:
    """Entry point for one EuRoC MAV recording.

    Only the root directory is checked here. Each sensor folder is validated
    when its reader is requested, so a recording without e.g. ``leica0`` is
    still usable for the other sensors.

    Example:
        >>> reader = DatasetReader('data/euroc/MH_01_easy/mav0')
        >>> imu = reader.imu()
        >>> imu.gyro_noise_density()
        0.00016968
        >>> for frame in reader.left_camera().records():
        ...     print(f"Frame at {frame.timestamp_ns}ns")
    """

    def __init__(
        self,
        dataset_path: str | Path,
        layout: EurocLayout = DEFAULT_LAYOUT,
    ) -> None:
        """Initialize reader with path to dataset.

        Args:
            dataset_path: Path to mav0 directory
            layout: Sensor folder and file names

        Raises:
            LayoutError: If the dataset path does not exist or is not a directory
        """
        self.dataset_path = Path(dataset_path)
        self.layout = layout

        self._validate_paths()
        logger.debug("Opened EuRoC dataset at %s", self.dataset_path)

    def _validate_paths(self) -> None:
        """Validate that the dataset root exists."""
        if not self.dataset_path.exists():
            raise LayoutError(
                f"Dataset path does not exist: {self.dataset_path}",
                path=self.dataset_path,
            )

        if not self.dataset_path.is_dir():
            raise LayoutError(
                f"Dataset path is not a directory: {self.dataset_path}\n"
                f"Expected the mav0/ directory of a EuRoC recording",
                path=self.dataset_path,
            )

    def left_camera(self) -> CameraReader:
        """Return reader for cam0."""
        return CameraReader(self.dataset_path / self.layout.left_camera, self.layout)

    def right_camera(self) -> CameraReader:
        """Return reader for cam1."""
        return CameraReader(self.dataset_path / self.layout.right_camera, self.layout)

    def imu(self) -> IMUReader:
        """Return reader for imu0."""
        return IMUReader(self.dataset_path / self.layout.imu, self.layout)

    def position(self) -> PositionReader:
        """Return reader for the Leica position tracker (leica0)."""
        return PositionReader(self.dataset_path / self.layout.position, self.layout)

    def ground_truth(self) -> GroundTruthReader:
        """Return reader for state_groundtruth_estimate0."""
        return GroundTruthReader(self.dataset_path / self.layout.ground_truth, self.layout)

    def sensor(self, name: str) -> SensorReader:
        """Return a generic reader for any sensor folder below the root.

        Args:
            name: Folder name, e.g. 'vicon0'

        Returns:
            SensorReader yielding RawRecord rows
        """
        return SensorReader(self.dataset_path / name, self.layout)

    def available_sensors(self) -> list[str]:
        """Return names of the sub-folders that carry a sensor.yaml, sorted."""
        return sorted(
            child.name
            for child in self.dataset_path.iterdir()
            if child.is_dir() and (child / self.layout.sensor_yaml).is_file()
        )
