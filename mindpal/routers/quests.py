"""
Weekly quest endpoints.
"""

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from mindpal.core.auth import CurrentUserId
from mindpal.core.deps import CurrentProfile, QuestDep, SupabaseDep
from mindpal.models.schemas import QuestBoard
from mindpal.services.quest_service import QUESTS, QuestIncompleteError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quests", tags=["quests"])


class ProgressRequest(BaseModel):
    amount: int = Field(1, ge=1, le=10)


class CompleteQuestResponse(BaseModel):
    reward: int
    coins: int
    board: QuestBoard


@router.get("", response_model=QuestBoard)
async def get_quests(user_id: CurrentUserId, quest_service: QuestDep) -> QuestBoard:
    """This week's quests with the user's progress."""
    try:
        return await quest_service.get_board(user_id)

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to load quests: {str(e)}")


@router.post("/{quest_id}/progress", response_model=QuestBoard)
async def record_progress(
    quest_id: str,
    user_id: CurrentUserId,
    quest_service: QuestDep,
    request: ProgressRequest | None = None,
) -> QuestBoard:
    """Advance a quest."""
    if quest_id not in QUESTS:
        raise HTTPException(status_code=404, detail="Quest not found")

    try:
        amount = request.amount if request else 1
        return await quest_service.record_progress(user_id, quest_id, amount)

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update quest: {str(e)}")


@router.post("/{quest_id}/complete", response_model=CompleteQuestResponse)
async def complete_quest(
    quest_id: str,
    profile: CurrentProfile,
    quest_service: QuestDep,
    supabase_service: SupabaseDep,
) -> CompleteQuestResponse:
    """
    Complete a finished quest and collect its coins.

    The completion is undone if the coins can't be paid, so the quest can
    be completed again.
    """
    if quest_id not in QUESTS:
        raise HTTPException(status_code=404, detail="Quest not found")

    try:
        reward, board = await quest_service.complete_quest(profile.id, quest_id)

        try:
            updated = await supabase_service.adjust_coins(profile.id, reward)
        except Exception:
            logger.error(f"❌ Quest {quest_id} reward failed for {profile.id}, reopening")
            await quest_service.reopen_quest(profile.id, quest_id)
            raise

        return CompleteQuestResponse(reward=reward, coins=updated.coins, board=board)

    except QuestIncompleteError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to complete quest: {str(e)}")
