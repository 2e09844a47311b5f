from os import getenv
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel

__version__ = "0.1.0"


class Settings(BaseModel):
    # Server
    ROOMREEL_VERSION: str
    ROOMREEL_HOST: str
    ROOMREEL_PORT: int
    ROOMREEL_API_PREFIX: str
    ROOMREEL_CORS_ORIGINS: list[str]

    # Frame analysis
    ROOMREEL_ANALYSIS_INTERVAL_S: float
    ROOMREEL_ANALYSIS_SAMPLE_STRIDE: int
    ROOMREEL_ANALYSIS_EDGE_THRESHOLD: float
    ROOMREEL_ANALYSIS_JITTER: float
    ROOMREEL_GOOD_SHOT_THRESHOLD: float

    # Randomness
    ROOMREEL_RANDOM_SEED: int | None


def _env_list(name: str, default: str) -> list[str]:
    v = getenv(name, default)
    return [item.strip() for item in v.split(",") if item.strip()]


def _env_optional_int(name: str) -> int | None:
    v = getenv(name, "").strip()
    return int(v) if v else None


@lru_cache
def get_settings() -> Settings:
    load_dotenv()
    return Settings(
        # Server
        ROOMREEL_VERSION=getenv("ROOMREEL_VERSION", __version__),
        ROOMREEL_HOST=getenv("ROOMREEL_HOST", "127.0.0.1"),
        ROOMREEL_PORT=int(getenv("ROOMREEL_PORT", 5000)),
        ROOMREEL_API_PREFIX=getenv("ROOMREEL_API_PREFIX", "/api"),
        ROOMREEL_CORS_ORIGINS=_env_list("ROOMREEL_CORS_ORIGINS", "*"),
        # Frame analysis
        ROOMREEL_ANALYSIS_INTERVAL_S=float(
            getenv("ROOMREEL_ANALYSIS_INTERVAL_S", 0.2)
        ),
        ROOMREEL_ANALYSIS_SAMPLE_STRIDE=int(
            getenv("ROOMREEL_ANALYSIS_SAMPLE_STRIDE", 4)
        ),
        ROOMREEL_ANALYSIS_EDGE_THRESHOLD=float(
            getenv("ROOMREEL_ANALYSIS_EDGE_THRESHOLD", 30)
        ),
        ROOMREEL_ANALYSIS_JITTER=float(getenv("ROOMREEL_ANALYSIS_JITTER", 5)),
        ROOMREEL_GOOD_SHOT_THRESHOLD=float(
            getenv("ROOMREEL_GOOD_SHOT_THRESHOLD", 65)
        ),
        # Randomness
        ROOMREEL_RANDOM_SEED=_env_optional_int("ROOMREEL_RANDOM_SEED"),
    )
