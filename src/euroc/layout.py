"""Folder and file naming conventions of a EuRoC MAV recording."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EurocLayout:
    """Names used to locate sensors and their files below ``mav0/``.

    The defaults match the published ASL dataset format. Override single
    fields with ``dataclasses.replace`` for recordings that renamed a folder.
    """

    left_camera: str = "cam0"
    right_camera: str = "cam1"
    imu: str = "imu0"
    position: str = "leica0"  # Leica Nova MS50 laser tracker
    ground_truth: str = "state_groundtruth_estimate0"

    sensor_yaml: str = "sensor.yaml"
    data_csv: str = "data.csv"
    image_dir: str = "data"  # Camera folders only


DEFAULT_LAYOUT = EurocLayout()
