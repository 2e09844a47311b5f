import pytest
from cv2 import VideoWriter, VideoWriter_fourcc
from numpy import full, uint8

from roomreel.analysis.sources import CaptureFrameSource, StaticFrameSource


def test_static_source_returns_frame(gray_frame):
    assert StaticFrameSource(gray_frame).read_frame() is gray_frame
    assert StaticFrameSource().read_frame() is None


def test_capture_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        CaptureFrameSource(tmp_path / "missing.avi").open()


def test_capture_not_opened_reads_nothing(tmp_path):
    source = CaptureFrameSource(tmp_path / "missing.avi")
    assert source.read_frame() is None
    assert source.frame_count is None


def test_capture_reads_rgba_frames(tmp_path):
    path = tmp_path / "clip.avi"
    writer = VideoWriter(str(path), VideoWriter_fourcc(*"MJPG"), 10, (32, 24))
    if not writer.isOpened():
        pytest.skip("MJPG writer unavailable")
    for _ in range(3):
        writer.write(full((24, 32, 3), 128, dtype=uint8))
    writer.release()

    with CaptureFrameSource(path) as source:
        frames = [source.read_frame() for _ in range(4)]

    assert frames[0].shape == (24, 32, 4)
    assert frames[-1] is None
