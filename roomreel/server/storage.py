from abc import ABC, abstractmethod
from datetime import datetime, timezone
from logging import getLogger
from uuid import uuid4

from roomreel.server.challenges import DEFAULT_CHALLENGES
from roomreel.utils.schemas import (
    Challenge,
    ChallengeCreate,
    Reward,
    RewardCreate,
    Submission,
    SubmissionCreate,
)

logger = getLogger(__name__)


class StorageError(Exception):
    pass


class Storage(ABC):
    """Get/create access to challenges, submissions and rewards."""

    @abstractmethod
    def get_challenge(self, challenge_id: str) -> Challenge | None: ...

    @abstractmethod
    def get_challenges(self) -> list[Challenge]: ...

    @abstractmethod
    def create_challenge(
        self, challenge: ChallengeCreate, challenge_id: str | None = None
    ) -> Challenge: ...

    @abstractmethod
    def get_submission(self, submission_id: str) -> Submission | None: ...

    @abstractmethod
    def create_submission(self, submission: SubmissionCreate) -> Submission: ...

    @abstractmethod
    def delete_submission(self, submission_id: str) -> None:
        """Removes a submission that has no reward yet; used to undo a failed submit."""

    @abstractmethod
    def create_reward(self, reward: RewardCreate) -> Reward: ...

    @abstractmethod
    def get_reward_by_submission(self, submission_id: str) -> Reward | None: ...


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStorage(Storage):
    """Process-local storage; everything is lost on restart."""

    def __init__(self, seed_challenges: bool = True) -> None:
        self.challenges: dict[str, Challenge] = {}
        self.submissions: dict[str, Submission] = {}
        self.rewards: dict[str, Reward] = {}
        if seed_challenges:
            for challenge_id, challenge in DEFAULT_CHALLENGES.items():
                self.create_challenge(challenge, challenge_id=challenge_id)

    def get_challenge(self, challenge_id: str) -> Challenge | None:
        return self.challenges.get(challenge_id)

    def get_challenges(self) -> list[Challenge]:
        return list(self.challenges.values())

    def create_challenge(
        self, challenge: ChallengeCreate, challenge_id: str | None = None
    ) -> Challenge:
        created = Challenge(
            id=challenge_id or str(uuid4()),
            created_at=_now(),
            **challenge.model_dump(),
        )
        self.challenges[created.id] = created
        return created

    def get_submission(self, submission_id: str) -> Submission | None:
        return self.submissions.get(submission_id)

    def create_submission(self, submission: SubmissionCreate) -> Submission:
        created = Submission(
            id=str(uuid4()), completed_at=_now(), **submission.model_dump()
        )
        self.submissions[created.id] = created
        logger.debug(f"Stored submission {created.id} for {created.challenge_id}")
        return created

    def delete_submission(self, submission_id: str) -> None:
        if self.get_reward_by_submission(submission_id) is not None:
            raise StorageError(f"Submission already rewarded: {submission_id}")
        self.submissions.pop(submission_id, None)

    def create_reward(self, reward: RewardCreate) -> Reward:
        if reward.submission_id not in self.submissions:
            raise StorageError(f"Unknown submission: {reward.submission_id}")
        if self.get_reward_by_submission(reward.submission_id) is not None:
            raise StorageError(f"Submission already rewarded: {reward.submission_id}")
        created = Reward(id=str(uuid4()), created_at=_now(), **reward.model_dump())
        self.rewards[created.id] = created
        return created

    def get_reward_by_submission(self, submission_id: str) -> Reward | None:
        return next(
            (r for r in self.rewards.values() if r.submission_id == submission_id),
            None,
        )
