"""Tests for CameraReader."""

from pathlib import Path

import cv2
import numpy as np
import pytest

from euroc import (
    CameraCalibration,
    CameraReader,
    DatasetReader,
    ImageDecodeError,
    ImageRecord,
    MalformedError,
)

CAM0_T_BS = [
    [0.0148655429818, -0.999880929698, 0.00414029679422, -0.0216401454975],
    [0.999557249008, 0.0149672133247, 0.025715529948, -0.064676986768],
    [-0.0257744366974, 0.00375618835797, 0.999660727178, 0.00981073058949],
    [0.0, 0.0, 0.0, 1.0],
]


@pytest.fixture
def camera(mav0: Path) -> CameraReader:
    return DatasetReader(mav0).left_camera()


class TestCameraCalibration:
    """Test suite for camera descriptor accessors."""

    def test_image_size(self, camera):
        assert camera.image_size() == (752, 480)

    def test_intrinsics(self, camera):
        assert camera.intrinsics() == (458.654, 457.296, 367.215, 248.375)

    def test_camera_matrix(self, camera):
        fu, fv, cu, cv = camera.intrinsics()
        K = camera.camera_matrix()

        assert K.shape == (3, 3)
        assert K[0, 0] == fu
        assert K[1, 1] == fv
        assert K[0, 2] == cu
        assert K[1, 2] == cv
        assert K[2, 2] == 1.0
        assert K[0, 1] == K[1, 0] == K[2, 0] == K[2, 1] == 0.0

    def test_distortion_coefficients(self, camera):
        np.testing.assert_array_equal(
            camera.distortion_coefficients(),
            [-0.28340811, 0.07395907, 0.00019359, 1.76187114e-05],
        )

    def test_extrinsics(self, camera):
        np.testing.assert_array_equal(camera.extrinsics(), CAM0_T_BS)

    def test_right_camera_differs(self, mav0: Path):
        right = DatasetReader(mav0).right_camera()

        assert right.intrinsics() == (457.587, 456.134, 379.999, 255.238)
        assert right.extrinsics()[1, 3] == 0.0453689425024

    def test_sensor_metadata(self, camera):
        assert camera.sensor_type() == "camera"
        assert camera.rate_hz() == 20.0

    def test_calibration_bundle(self, camera):
        calibration = camera.calibration()

        assert isinstance(calibration, CameraCalibration)
        assert calibration.resolution == (752, 480)
        assert calibration.intrinsics.fu == 458.654
        assert calibration.intrinsics.cv == 248.375
        assert calibration.distortion.k1 == -0.28340811
        np.testing.assert_array_equal(
            calibration.intrinsics.to_matrix(), camera.camera_matrix()
        )
        np.testing.assert_array_equal(calibration.T_BS, CAM0_T_BS)

    def test_accessors_are_idempotent(self, camera):
        assert camera.image_size() == camera.image_size()
        assert camera.intrinsics() == camera.intrinsics()
        np.testing.assert_array_equal(camera.camera_matrix(), camera.camera_matrix())
        np.testing.assert_array_equal(
            camera.distortion_coefficients(), camera.distortion_coefficients()
        )
        np.testing.assert_array_equal(camera.extrinsics(), camera.extrinsics())


class TestCameraRecords:
    """Test suite for camera log iteration."""

    def test_third_record(self, camera):
        records = camera.records()
        next(records)
        next(records)
        record = next(records)

        assert isinstance(record, ImageRecord)
        assert record.timestamp_ns == 1403636579863555584
        assert record.size == (752, 480)
        assert record.path == camera.image_dir / "1403636579863555584.png"

    def test_record_count(self, camera):
        assert sum(1 for _ in camera.records()) == 5

    def test_images_follow_log_order(self, camera):
        for i, record in enumerate(camera.records()):
            assert np.all(record.image == i * 40)

    def test_grayscale_loading(self, camera):
        image = next(camera.records()).image

        assert image.ndim == 2
        assert image.dtype == np.uint8
        assert not image.flags.writeable

    def test_color_loading(self, mav0: Path):
        camera = CameraReader(mav0 / "cam1", imread_flags=cv2.IMREAD_COLOR)

        record = next(camera.records())

        assert record.image.shape == (480, 752, 3)
        assert np.all(record.image == 20)

    def test_restart_by_reopening(self, camera):
        first = [(r.timestamp_ns, r.image) for r in camera.records()]
        second = [(r.timestamp_ns, r.image) for r in camera.records()]

        assert [t for t, _ in first] == [t for t, _ in second]
        for (_, a), (_, b) in zip(first, second):
            np.testing.assert_array_equal(a, b)

    def test_missing_image_is_per_record(self, mav0: Path, camera):
        (camera.image_dir / "1403636579813555456.png").unlink()

        records = camera.records()
        assert next(records).timestamp_ns == 1403636579763555584

        with pytest.raises(FileNotFoundError, match="Camera image not found"):
            next(records)

        assert next(records).timestamp_ns == 1403636579863555584
        assert len(list(records)) == 2

    def test_corrupt_image_is_per_record(self, camera):
        (camera.image_dir / "1403636579763555584.png").write_bytes(b"not a png")

        records = camera.records()

        with pytest.raises(ImageDecodeError, match="Failed to decode image"):
            next(records)

        assert next(records).timestamp_ns == 1403636579813555456

    def test_decode_error_is_malformed(self):
        assert issubclass(ImageDecodeError, MalformedError)

    def test_filename_with_whitespace(self, mav0: Path, camera):
        data_csv = mav0 / "cam0" / "data.csv"
        data_csv.write_text(
            "#timestamp [ns],filename\n"
            "  1403636579763555584  ,  1403636579763555584.png  \n"
        )

        records = list(camera.records())

        assert len(records) == 1
        assert records[0].timestamp_ns == 1403636579763555584
