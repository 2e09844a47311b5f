from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Rarity(str, Enum):
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"


class ChallengeStep(CamelModel):
    id: int
    title: str
    description: str
    emoji: str
    duration: int = Field(gt=0)


class ChallengeCreate(CamelModel):
    name: str
    description: str
    steps: list[ChallengeStep] = Field(default_factory=list)
    points_per_step: int = Field(default=25, ge=0)


class Challenge(ChallengeCreate):
    id: str
    created_at: datetime


class VideoClip(CamelModel):
    step_id: int
    duration: float = Field(ge=0)
    size: int = Field(ge=0)
    timestamp: str


class SubmissionCreate(CamelModel):
    challenge_id: str = Field(min_length=1)
    video_clips: list[VideoClip]
    total_points: int = Field(ge=0)
    user_id: str | None = None


class Submission(SubmissionCreate):
    id: str
    completed_at: datetime


class RewardCreate(CamelModel):
    submission_id: str
    reward_type: str
    reward_value: str
    claimed: int = 0


class Reward(RewardCreate):
    id: str
    created_at: datetime


class SubmissionResponse(CamelModel):
    submission: Submission
    reward: Reward | None


class RewardPreview(CamelModel):
    icon: str
    name: str
    rarity: Rarity


class FieldError(CamelModel):
    field: str
    message: str


class ErrorResponse(CamelModel):
    message: str
    errors: list[FieldError] | None = None


class AnalysisResult(CamelModel):
    is_good_shot: bool = False
    confidence: float = Field(default=0.0, ge=0, le=100)
    reasons: list[str] = Field(default_factory=list, max_length=3)
