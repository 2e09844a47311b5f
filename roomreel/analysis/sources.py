from logging import getLogger
from pathlib import Path
from typing import Protocol

from cv2 import COLOR_BGR2RGBA, CAP_PROP_FRAME_COUNT, VideoCapture, cvtColor
from numpy import ndarray

logger = getLogger(__name__)


class FrameSource(Protocol):
    def read_frame(self) -> ndarray | None: ...


class StaticFrameSource:
    """Serves the same RGBA frame on every read, or nothing when unset."""

    def __init__(self, frame: ndarray | None = None) -> None:
        self.frame = frame

    def read_frame(self) -> ndarray | None:
        return self.frame


class CaptureFrameSource:
    """
    Reads RGBA frames from an OpenCV capture: a video file path or a camera
    index. Returns None when no frame is available.
    """

    def __init__(self, source: str | int | Path) -> None:
        self.source = source
        self._capture: VideoCapture | None = None

    def open(self) -> "CaptureFrameSource":
        target = self.source
        if isinstance(target, str) and target.isdigit():
            target = int(target)
        if not isinstance(target, int):
            if not Path(target).is_file():
                raise FileNotFoundError(f"Video not found: {target}")
            target = str(target)
        capture = VideoCapture(target)
        if not capture.isOpened():
            capture.release()
            raise ValueError(f"Could not open capture source: {self.source}")
        logger.info(f"Opened capture source {self.source}")
        self._capture = capture
        return self

    @property
    def frame_count(self) -> int | None:
        if self._capture is None:
            return None
        count = int(self._capture.get(CAP_PROP_FRAME_COUNT))
        return count if count > 0 else None

    def read_frame(self) -> ndarray | None:
        if self._capture is None:
            return None
        ok, frame = self._capture.read()
        if not ok or frame is None:
            return None
        return cvtColor(frame, COLOR_BGR2RGBA)

    def close(self) -> None:
        if self._capture is not None:
            self._capture.release()
            self._capture = None

    def __enter__(self) -> "CaptureFrameSource":
        return self.open()

    def __exit__(self, *exc) -> None:
        self.close()
