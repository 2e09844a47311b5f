from logging import getLogger
from typing import Sequence

from roomreel.rewards.catalog import RewardEntry
from roomreel.rewards.selector import select_reward
from roomreel.server.storage import Storage
from roomreel.utils.rng import RandomSource
from roomreel.utils.schemas import Reward, RewardCreate, Submission, SubmissionCreate

logger = getLogger(__name__)


def submit_challenge(
    storage: Storage,
    payload: SubmissionCreate,
    rng: RandomSource,
    catalog: Sequence[RewardEntry],
) -> tuple[Submission, Reward]:
    """
    Stores the submission and its single reward draw.

    The draw happens before anything is written. If the reward cannot be
    stored the submission is removed again, so a submission never exists
    without its reward.
    """
    entry = select_reward(catalog, rng=rng)
    submission = storage.create_submission(payload)
    try:
        reward = storage.create_reward(
            RewardCreate(
                submission_id=submission.id,
                reward_type=entry.type,
                reward_value=entry.value,
                claimed=0,
            )
        )
    except Exception:
        logger.error(f"Reward write failed, rolling back submission {submission.id}")
        storage.delete_submission(submission.id)
        raise
    logger.info(
        f"Submission {submission.id} ({submission.challenge_id}, "
        f"{len(submission.video_clips)} clips) rewarded {entry.value} [{entry.rarity.value}]"
    )
    return submission, reward


def get_submission_with_reward(
    storage: Storage, submission_id: str
) -> tuple[Submission, Reward | None] | None:
    submission = storage.get_submission(submission_id)
    if submission is None:
        return None
    return submission, storage.get_reward_by_submission(submission.id)
