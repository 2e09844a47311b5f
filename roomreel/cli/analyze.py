import asyncio
from dataclasses import dataclass
from logging import getLogger

from roomreel.analysis.analyzer import FrameAnalyzer
from roomreel.analysis.frame_quality import ScoringConfig
from roomreel.analysis.sources import CaptureFrameSource, StaticFrameSource
from roomreel.cli.errors import SourceError
from roomreel.utils.rng import get_rng
from roomreel.utils.schemas import AnalysisResult

logger = getLogger(__name__)


@dataclass
class FrameReport:
    frame_number: int
    result: AnalysisResult

    def to_dict(self) -> dict:
        return {"frame": self.frame_number, **self.result.model_dump(by_alias=True)}


def _open_source(source: str) -> CaptureFrameSource:
    try:
        return CaptureFrameSource(source).open()
    except (FileNotFoundError, ValueError) as e:
        raise SourceError(str(e)) from e


def analyze_video(
    source: str, max_frames: int | None, every: int, seed: int | None
) -> list[FrameReport]:
    """Scores every `every`-th frame of a file or camera, up to `max_frames` reads."""
    if every < 1:
        raise SourceError(f"--every must be >= 1, got {every}")
    capture = _open_source(source)
    current = StaticFrameSource()
    analyzer = FrameAnalyzer(
        current, rng=get_rng(seed), config=ScoringConfig.from_settings()
    )
    reports = []
    frame_number = 0
    try:
        while max_frames is None or frame_number < max_frames:
            frame = capture.read_frame()
            if frame is None:
                break
            if frame_number % every == 0:
                current.frame = frame
                reports.append(FrameReport(frame_number, analyzer.analyze_once()))
            frame_number += 1
    finally:
        capture.close()
    logger.info(f"Analyzed {len(reports)} of {frame_number} frames from {source}")
    return reports


async def watch_source(
    source: str, duration_s: float, interval_s: float, seed: int | None, on_result
) -> int:
    """
    Runs the periodic analyzer against a live source for `duration_s` and calls
    `on_result` with the latest result every interval. Returns the tick count.
    """
    capture = _open_source(source)
    analyzer = FrameAnalyzer(
        capture,
        interval_s=interval_s,
        rng=get_rng(seed),
        config=ScoringConfig.from_settings(),
    )
    loop = asyncio.get_running_loop()
    deadline = loop.time() + duration_s
    try:
        analyzer.enabled = True
        while loop.time() < deadline:
            await asyncio.sleep(interval_s)
            on_result(analyzer.result)
    finally:
        analyzer.enabled = False
        await analyzer.wait_idle()
        capture.close()
    return analyzer.tick_count


def summarize(reports: list[FrameReport]) -> dict[str, float]:
    if not reports:
        return {"frames": 0, "good_shots": 0, "good_ratio": 0.0, "mean_confidence": 0.0}
    good = sum(1 for r in reports if r.result.is_good_shot)
    return {
        "frames": len(reports),
        "good_shots": good,
        "good_ratio": good / len(reports),
        "mean_confidence": sum(r.result.confidence for r in reports) / len(reports),
    }
