from fastapi import APIRouter, Depends, HTTPException, Request

from roomreel.rewards.catalog import REWARD_PREVIEWS
from roomreel.server.logging import logger
from roomreel.server.storage import Storage
from roomreel.server.submissions import get_submission_with_reward, submit_challenge
from roomreel.utils.rng import RandomSource
from roomreel.utils.schemas import (
    Challenge,
    ErrorResponse,
    RewardPreview,
    SubmissionCreate,
    SubmissionResponse,
)

router = APIRouter()


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_random_source(request: Request) -> RandomSource:
    return request.app.state.rng


@router.get("/challenges", response_model=list[Challenge])
async def list_challenges(storage: Storage = Depends(get_storage)) -> list[Challenge]:
    try:
        return storage.get_challenges()
    except Exception as e:
        logger.error(f"Failed to fetch challenges: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch challenges")


@router.get("/rewards/preview", response_model=list[RewardPreview])
async def reward_previews() -> list[RewardPreview]:
    return list(REWARD_PREVIEWS)


@router.get(
    "/challenges/{challenge_id}",
    response_model=Challenge,
    responses={404: {"model": ErrorResponse}},
)
async def get_challenge(
    challenge_id: str, storage: Storage = Depends(get_storage)
) -> Challenge:
    try:
        challenge = storage.get_challenge(challenge_id)
    except Exception as e:
        logger.error(f"Failed to fetch challenge {challenge_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch challenge")
    if challenge is None:
        raise HTTPException(status_code=404, detail="Challenge not found")
    return challenge


@router.post(
    "/submissions",
    response_model=SubmissionResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_submission(
    payload: SubmissionCreate,
    request: Request,
    storage: Storage = Depends(get_storage),
    rng: RandomSource = Depends(get_random_source),
) -> SubmissionResponse:
    try:
        if storage.get_challenge(payload.challenge_id) is None:
            raise HTTPException(status_code=404, detail="Challenge not found")
        submission, reward = submit_challenge(
            storage, payload, rng=rng, catalog=request.app.state.reward_catalog
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Submission failed for {payload.challenge_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to create submission")
    return SubmissionResponse(submission=submission, reward=reward)


@router.get(
    "/submissions/{submission_id}",
    response_model=SubmissionResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_submission(
    submission_id: str, storage: Storage = Depends(get_storage)
) -> SubmissionResponse:
    try:
        found = get_submission_with_reward(storage, submission_id)
    except Exception as e:
        logger.error(f"Failed to fetch submission {submission_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch submission")
    if found is None:
        raise HTTPException(status_code=404, detail="Submission not found")
    submission, reward = found
    return SubmissionResponse(submission=submission, reward=reward)
