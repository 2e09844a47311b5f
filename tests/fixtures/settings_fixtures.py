from types import SimpleNamespace

from pytest import fixture

from roomreel.utils.settings import get_settings


@fixture
def fake_settings():
    """A fake settings object with deterministic analysis parameters"""
    return SimpleNamespace(
        ROOMREEL_VERSION="0.0.0-test",
        ROOMREEL_HOST="127.0.0.1",
        ROOMREEL_PORT=5001,
        ROOMREEL_API_PREFIX="/v1",
        ROOMREEL_CORS_ORIGINS=["*"],
        ROOMREEL_ANALYSIS_INTERVAL_S=0.01,
        ROOMREEL_ANALYSIS_SAMPLE_STRIDE=4,
        ROOMREEL_ANALYSIS_EDGE_THRESHOLD=30.0,
        ROOMREEL_ANALYSIS_JITTER=0.0,
        ROOMREEL_GOOD_SHOT_THRESHOLD=65.0,
        ROOMREEL_RANDOM_SEED=3,
    )


@fixture
def fresh_settings():
    """Clears the settings cache around a test that edits the environment."""
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()
