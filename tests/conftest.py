"""Shared fixtures: a small EuRoC recording with five rows per sensor."""

import shutil
from pathlib import Path

import cv2
import numpy as np
import pytest

TEST_DATA = Path(__file__).parent / "test_data" / "mav0"

IMAGE_WIDTH = 752
IMAGE_HEIGHT = 480


def _render_camera_images(camera_path: Path, offset: int) -> None:
    """Write one PNG per data.csv row, filled with ``row * 40 + offset``."""
    data_dir = camera_path / "data"
    data_dir.mkdir(exist_ok=True)

    lines = (camera_path / "data.csv").read_text().splitlines()[1:]
    for i, line in enumerate(lines):
        filename = line.split(",")[1].strip()
        img = np.full((IMAGE_HEIGHT, IMAGE_WIDTH), i * 40 + offset, dtype=np.uint8)
        cv2.imwrite(str(data_dir / filename), img)


@pytest.fixture
def mav0(tmp_path: Path) -> Path:
    """Create a writable copy of the EuRoC test recording.

    Args:
        tmp_path: Pytest temporary directory fixture

    Returns:
        Path to mock mav0 directory
    """
    root = tmp_path / "mav0"
    shutil.copytree(TEST_DATA, root)

    _render_camera_images(root / "cam0", offset=0)
    _render_camera_images(root / "cam1", offset=20)

    return root
