import logging
import sys

_FORMAT = "%(asctime)s | %(levelname)s | %(component)s | %(message)s"
_DATEFMT = "%H:%M:%S"

_RESET = "\033[0m"
_BOLD = "\033[1m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_GRAY = "\033[90m"

_LEVEL_COLORS = {
    "DEBUG": _GRAY,
    "INFO": _GREEN,
    "WARNING": _YELLOW,
    "ERROR": _RED,
    "CRITICAL": _BOLD + _RED,
}

_VERBOSITY_MAP = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}

# Per-tick frame logs stay quiet unless -vv
_NOISY_LOGGERS = ("roomreel.analysis.frame_quality", "roomreel.analysis.analyzer")
_THIRD_PARTY_LEVELS = {
    "uvicorn.access": logging.WARNING,
    "uvicorn.error": logging.INFO,
    "multipart": logging.WARNING,
}

_configured_level: int = logging.INFO


class ComponentFormatter(logging.Formatter):
    """Renders `roomreel.server.routes` as `server.routes`, colouring the level."""

    def __init__(self, fmt: str, datefmt: str, use_color: bool) -> None:
        super().__init__(fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record):
        record = logging.makeLogRecord(record.__dict__)
        record.component = record.name.removeprefix("roomreel.")
        if self.use_color:
            color = _LEVEL_COLORS.get(record.levelname, _RESET)
            record.levelname = f"{color}{record.levelname:7}{_RESET}"
        else:
            record.levelname = f"{record.levelname:7}"
        return super().format(record)


def verbosity_to_level(verbosity: int) -> int:
    return _VERBOSITY_MAP[max(0, min(verbosity, 2))]


def setup_logging(verbosity: int | None = None) -> logging.Logger:
    global _configured_level
    if verbosity is not None:
        _configured_level = verbosity_to_level(verbosity)

    rr_logger = logging.getLogger("roomreel")
    rr_logger.setLevel(_configured_level)
    rr_logger.propagate = False

    if not rr_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            ComponentFormatter(_FORMAT, datefmt=_DATEFMT, use_color=sys.stdout.isatty())
        )
        rr_logger.addHandler(handler)

    rr_logger.handlers[0].setLevel(_configured_level)

    noisy_level = logging.DEBUG if _configured_level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)
    for name, level in _THIRD_PARTY_LEVELS.items():
        logging.getLogger(name).setLevel(max(level, _configured_level))
    return rr_logger
