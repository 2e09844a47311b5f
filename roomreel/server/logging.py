from logging import getLogger

from fastapi import FastAPI

from roomreel.rewards.catalog import rarity_shares
from roomreel.utils.logging import setup_logging
from roomreel.utils.settings import get_settings

setup_logging()
logger = getLogger("roomreel.server")


def log_startup_config(app: FastAPI) -> None:
    settings = get_settings()
    logger.info(f"RoomReel API {settings.ROOMREEL_VERSION} mounted at {settings.ROOMREEL_API_PREFIX}")

    shares = rarity_shares(app.state.reward_catalog)
    logger.info(
        f"Reward catalog: {len(app.state.reward_catalog)} entries, "
        + ", ".join(f"{rarity.value} {share:.0%}" for rarity, share in shares.items())
    )
    if settings.ROOMREEL_RANDOM_SEED is None:
        logger.info("Random source: OS entropy")
    else:
        logger.warning(
            f"Random source seeded with {settings.ROOMREEL_RANDOM_SEED} - reward draws are reproducible"
        )

    storage_name = type(app.state.storage).__name__
    if storage_name == "MemoryStorage":
        logger.warning("Storage: in-memory, submissions are lost on restart")
    else:
        logger.info(f"Storage: {storage_name}")
    logger.info(
        f"Good shot threshold {settings.ROOMREEL_GOOD_SHOT_THRESHOLD:g}, "
        f"analysis every {settings.ROOMREEL_ANALYSIS_INTERVAL_S:g}s"
    )
