"""EuRoC camera reader.

Loads the pinhole calibration from camN/sensor.yaml and images listed in
camN/data.csv::

    #timestamp [ns],filename
    1403636579763555584,1403636579763555584.png
    1403636579813555456,1403636579813555456.png
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import cv2
import numpy as np

from ..errors import ImageDecodeError
from ..layout import DEFAULT_LAYOUT, EurocLayout
from .calibration import CameraCalibration, CameraIntrinsics, DistortionCoeffs
from .records import RecordIterator, RowView
from .sensor_folder import SensorReader


@dataclass(frozen=True, eq=False)
class ImageRecord:
    """Single camera frame.

    Attributes:
        timestamp_ns: Exposure timestamp in nanoseconds
        image: Decoded image (grayscale uint8 by default)
        path: Image file the frame was decoded from
    """

    timestamp_ns: int
    image: np.ndarray
    path: Path

    @property
    def size(self) -> tuple[int, int]:
        """Image size as (width, height)."""
        return int(self.image.shape[1]), int(self.image.shape[0])


class CameraReader(SensorReader[ImageRecord]):
    """Reader for one EuRoC camera (cam0 or cam1).

    Example usage:
        camera = CameraReader("data/euroc/MH_01_easy/mav0/cam0")
        K = camera.camera_matrix()
        for frame in camera.records():
            print(frame.timestamp_ns, frame.size)
    """

    NUM_COLUMNS = 2

    def __init__(
        self,
        sensor_path: str | Path,
        layout: EurocLayout = DEFAULT_LAYOUT,
        imread_flags: int = cv2.IMREAD_GRAYSCALE,
    ) -> None:
        """Initialize camera reader.

        Args:
            sensor_path: Path to the camera folder, e.g. mav0/cam0
            layout: File naming conventions
            imread_flags: Flags passed to cv2.imread for every frame

        Raises:
            LayoutError: If the folder, sensor.yaml, data.csv or data/ is missing
        """
        self._imread_flags = imread_flags
        super().__init__(sensor_path, layout)

    def _required_dirs(self) -> tuple[str, ...]:
        return (self._layout.image_dir,)

    @property
    def image_dir(self) -> Path:
        return self.sensor_path / self._layout.image_dir

    def image_size(self) -> tuple[int, int]:
        """Return image size as (width, height)."""
        width, height = self.read_sensor_yaml().int_sequence("resolution", 2, bits=32)
        return width, height

    def intrinsics(self) -> tuple[float, float, float, float]:
        """Return intrinsics (fu, fv, cu, cv)."""
        fu, fv, cu, cv = self.read_sensor_yaml().float_sequence("intrinsics", 4)
        return float(fu), float(fv), float(cu), float(cv)

    def camera_matrix(self) -> np.ndarray:
        """Return 3x3 camera intrinsic matrix K."""
        return CameraIntrinsics(*self.intrinsics()).to_matrix()

    def distortion_coefficients(self) -> np.ndarray:
        """Return radial-tangential distortion (k1, k2, p1, p2) as (4,) array."""
        return self.read_sensor_yaml().float_sequence("distortion_coefficients", 4)

    def calibration(self) -> CameraCalibration:
        """Return the full camera calibration from a single read of sensor.yaml."""
        descriptor = self.read_sensor_yaml()
        width, height = descriptor.int_sequence("resolution", 2, bits=32)
        intrinsics = descriptor.float_sequence("intrinsics", 4)
        distortion = descriptor.float_sequence("distortion_coefficients", 4)

        return CameraCalibration(
            resolution=(width, height),
            intrinsics=CameraIntrinsics(*(float(v) for v in intrinsics)),
            distortion=DistortionCoeffs(*(float(v) for v in distortion)),
            T_BS=descriptor.transform("T_BS"),
        )

    def load_image(self, filename: str) -> np.ndarray:
        """Load one image from the camera's data directory.

        Args:
            filename: Image filename (e.g., '1403636579763555584.png')

        Raises:
            FileNotFoundError: If the image file doesn't exist
            ImageDecodeError: If OpenCV cannot decode the file
        """
        path = self.image_dir / filename

        if not path.is_file():
            raise FileNotFoundError(f"Camera image not found: {path}")

        image = cv2.imread(str(path), self._imread_flags)
        if image is None:
            raise ImageDecodeError(f"Failed to decode image: {path}", path=path)

        return image

    def _parse_row(self, row: RowView) -> ImageRecord:
        timestamp_ns = row.timestamp(0)
        filename = row.text(1)
        image = self.load_image(filename)
        image.flags.writeable = False

        return ImageRecord(
            timestamp_ns=timestamp_ns,
            image=image,
            path=self.image_dir / filename,
        )

    def records(self) -> RecordIterator[ImageRecord]:
        """Open data.csv and return a lazy iterator decoding one frame per row.

        A missing or undecodable image raises from that row's ``next()``
        only; the following rows are still readable.

        Raises:
            OSError: If data.csv cannot be opened
        """
        return super().records()
