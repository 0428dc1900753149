"""Tests for IMUReader."""

from pathlib import Path

import numpy as np
import pytest

from euroc import DatasetReader, IMUCalibration, IMURecord, MalformedError


@pytest.fixture
def imu(mav0: Path):
    return DatasetReader(mav0).imu()


class TestIMUCalibration:
    """Test suite for IMU descriptor accessors."""

    def test_extrinsics(self, imu):
        np.testing.assert_array_equal(imu.extrinsics(), np.eye(4))

    def test_noise_parameters(self, imu):
        assert imu.gyro_noise_density() == 1.6968e-04
        assert imu.gyro_random_walk() == 1.9393e-05
        assert imu.accel_noise_density() == 2.0000e-3
        assert imu.accel_random_walk() == 3.0000e-3

    def test_sensor_metadata(self, imu):
        assert imu.sensor_type() == "imu"
        assert imu.rate_hz() == 200.0

    def test_calibration_bundle(self, imu):
        calibration = imu.calibration()

        assert isinstance(calibration, IMUCalibration)
        assert calibration.gyro_noise_density == imu.gyro_noise_density()
        assert calibration.gyro_random_walk == imu.gyro_random_walk()
        assert calibration.accel_noise_density == imu.accel_noise_density()
        assert calibration.accel_random_walk == imu.accel_random_walk()
        assert calibration.rate_hz == 200.0
        np.testing.assert_array_equal(calibration.T_BS, np.eye(4))

    def test_accessors_are_idempotent(self, imu):
        assert imu.gyro_noise_density() == imu.gyro_noise_density()
        np.testing.assert_array_equal(imu.extrinsics(), imu.extrinsics())


class TestIMURecords:
    """Test suite for IMU log iteration."""

    def test_third_record(self, imu):
        records = imu.records()
        next(records)
        next(records)
        record = next(records)

        assert isinstance(record, IMURecord)
        assert record.timestamp_ns == 1403636579768555520
        np.testing.assert_array_equal(
            record.gyroscope,
            [-0.098436569812480182, 0.12775810124598494, 0.037699111843077518],
        )
        np.testing.assert_array_equal(
            record.accelerometer,
            [7.8861810416666662, -0.42495483333333334, -2.4353180833333332],
        )
        np.testing.assert_allclose(
            record.gyroscope, [-0.0984366, 0.1277581, 0.0376991], atol=1e-7
        )
        np.testing.assert_allclose(
            record.accelerometer, [7.8861810, -0.4249548, -2.4353181], atol=1e-7
        )

    def test_record_count(self, imu):
        assert sum(1 for _ in imu.records()) == 5

    def test_file_order(self, imu):
        timestamps = [m.timestamp_ns for m in imu.records()]

        assert timestamps == [
            1403636579758555392,
            1403636579763555584,
            1403636579768555520,
            1403636579773555456,
            1403636579778555392,
        ]

    def test_restart_by_reopening(self, imu):
        first = list(imu.records())
        second = list(imu.records())

        assert len(first) == len(second) == 5
        for a, b in zip(first, second):
            assert a.timestamp_ns == b.timestamp_ns
            np.testing.assert_array_equal(a.gyroscope, b.gyroscope)
            np.testing.assert_array_equal(a.accelerometer, b.accelerometer)

    def test_record_arrays_are_read_only(self, imu):
        record = next(imu.records())

        assert record.gyroscope.shape == (3,)
        assert record.accelerometer.shape == (3,)
        with pytest.raises(ValueError):
            record.gyroscope[0] = 0.0

    def test_malformed_row_is_reported_and_skipped(self, mav0: Path, imu):
        data_csv = mav0 / "imu0" / "data.csv"
        lines = data_csv.read_text().splitlines()
        fields = lines[2].split(",")
        fields[5] = "n/a"
        lines[2] = ",".join(fields)
        data_csv.write_text("\n".join(lines) + "\n")

        records = imu.records()
        next(records)

        with pytest.raises(MalformedError, match="row 1, column 5"):
            next(records)

        assert next(records).timestamp_ns == 1403636579768555520
        assert len(list(records)) == 2

    def test_truncated_row(self, mav0: Path, imu):
        data_csv = mav0 / "imu0" / "data.csv"
        with open(data_csv, "a") as f:
            f.write("1403636579783555584,0.1,0.2\n")

        records = imu.records()
        assert len([next(records) for _ in range(5)]) == 5

        with pytest.raises(MalformedError, match="row 5 has 3 columns"):
            next(records)

    def test_records_fail_fast_when_log_is_gone(self, mav0: Path, imu):
        (mav0 / "imu0" / "data.csv").unlink()

        with pytest.raises(FileNotFoundError):
            imu.records()
