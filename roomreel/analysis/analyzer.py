import asyncio
from logging import getLogger

from numpy import ndarray

from roomreel.analysis.frame_quality import DEFAULT_SCORING, ScoringConfig, analyze_frame
from roomreel.analysis.sources import FrameSource
from roomreel.utils.rng import RandomSource, get_rng
from roomreel.utils.schemas import AnalysisResult

logger = getLogger(__name__)


class FrameAnalyzer:
    """
    Periodically scores frames from a source while enabled.

    Each tick reads one frame and replaces `result`. A tick with no frame, or
    one whose read or scoring raises, leaves the previous result in place.
    Ticks run one after another inside a single task, so they never overlap.
    While armed, the blocking frame read runs in a worker thread to keep the
    event loop free; `stop()` cancels the task, and a read still in flight
    when it does is discarded without touching `result`. Await `wait_idle()`
    before releasing the source.
    """

    def __init__(
        self,
        source: FrameSource | None,
        interval_s: float = 0.2,
        rng: RandomSource | None = None,
        config: ScoringConfig = DEFAULT_SCORING,
    ) -> None:
        if interval_s <= 0:
            raise ValueError(f"interval_s must be > 0, got {interval_s}")
        self.source = source
        self.interval_s = interval_s
        self.rng = rng if rng is not None else get_rng()
        self.config = config
        self.result = AnalysisResult()
        self.tick_count = 0
        self._task: asyncio.Task | None = None
        self._pending_read: asyncio.Task | None = None

    @property
    def is_analyzing(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def enabled(self) -> bool:
        return self.is_analyzing

    @enabled.setter
    def enabled(self, value: bool) -> None:
        if value:
            self.start()
        else:
            self.stop()

    def analyze_once(self) -> AnalysisResult:
        if self.source is None:
            self.tick_count += 1
            return self.result
        return self._score(self._read())

    def _read(self) -> ndarray | None:
        try:
            return self.source.read_frame()
        except Exception as e:
            logger.debug(f"Frame read failed: {e}")
            return None

    def _score(self, frame: ndarray | None) -> AnalysisResult:
        self.tick_count += 1
        if frame is None:
            return self.result
        try:
            self.result = analyze_frame(frame, rng=self.rng, config=self.config)
        except Exception as e:
            logger.debug(f"Skipping analysis tick: {e}")
        return self.result

    def start(self) -> None:
        if self.is_analyzing or self.source is None:
            return
        logger.debug(f"Starting frame analysis every {self.interval_s}s")
        self._task = asyncio.get_running_loop().create_task(self._run())

    def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        self._task = None
        logger.debug("Stopped frame analysis")

    async def wait_idle(self) -> None:
        """Waits for a read left in flight by `stop()` to return."""
        if self._pending_read is not None:
            await asyncio.wait({self._pending_read})
            self._pending_read = None

    async def _run(self) -> None:
        while True:
            self._pending_read = asyncio.ensure_future(asyncio.to_thread(self._read))
            frame = await asyncio.shield(self._pending_read)
            self._pending_read = None
            self._score(frame)
            await asyncio.sleep(self.interval_s)
