"""
Journal endpoints: write, analyse and list entries.

Each saved entry earns coins, advances the daily journaling streak and
sets the pet's mood.
"""

import logging
from datetime import date, datetime

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from mindpal.core.auth import CurrentUserId
from mindpal.core.config import settings
from mindpal.core.deps import RewardDep, SentimentDep, SupabaseDep
from mindpal.models.schemas import (
    AnalysisResult,
    JournalEntry,
    MoodReward,
    MoodType,
    PetMood,
)
from mindpal.services.mood_analytics import get_mood_emoji, pet_mood_for
from mindpal.services.reward_service import earned_rewards
from mindpal.services.sentiment_analysis import get_mood_explanation
from mindpal.services.supabase_service import utc_now

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/journal", tags=["journal"])


# Request/Response Models
class JournalRequest(BaseModel):
    text: str = Field(..., max_length=10000)
    mood: MoodType | None = Field(None, description="Mood the user picked themselves")


class AnalyzeRequest(BaseModel):
    text: str = Field(..., max_length=10000)


class JournalSubmitResponse(BaseModel):
    entry: JournalEntry
    pet_mood: PetMood
    mood_emoji: str
    summary: str
    coins: int
    coins_earned: int
    streak: int
    new_rewards: list[MoodReward]


class AnalyzeResponse(BaseModel):
    analysis: AnalysisResult
    mood_emoji: str
    summary: str


def next_streak(current: int, last_journaled: datetime | None, today: date) -> int:
    """
    Daily journaling streak after writing an entry today.

    Writing again on the same day leaves it alone, writing the day after
    extends it, and any longer gap starts over.
    """
    if last_journaled is None:
        return 1

    days = (today - last_journaled.date()).days
    if days <= 0:
        return max(current, 1)
    if days == 1:
        return current + 1
    return 1


@router.post("", response_model=JournalSubmitResponse)
async def create_journal_entry(
    request: JournalRequest,
    user_id: CurrentUserId,
    supabase_service: SupabaseDep,
    sentiment_service: SentimentDep,
    reward_service: RewardDep,
) -> JournalSubmitResponse:
    """
    Analyse and save a journal entry.

    The analysis never fails the request: if the AI is unavailable the
    keyword analyser is used instead.
    """
    text = request.text.strip()
    if not text:
        raise HTTPException(status_code=400, detail="Journal text is required")

    try:
        profile = await supabase_service.get_profile(user_id)
        if not profile:
            profile = await supabase_service.create_profile(user_id)

        analysis = await sentiment_service.analyze(text)
        if analysis.risk_level == "high":
            logger.warning(f"⚠️  High risk journal entry from {user_id}: {analysis.triggers}")

        entry = await supabase_service.create_journal_entry(user_id, text, request.mood, analysis)

        now = utc_now()
        streak = next_streak(profile.streak, profile.last_journaled, now.date())
        updated = await supabase_service.update_profile(
            user_id,
            {
                "coins": profile.coins + settings.journal_coin_reward,
                "total_entries": profile.total_entries + 1,
                "streak": streak,
                "last_journaled": now.isoformat(),
            },
        )

        new_rewards = await reward_service.unclaimed(
            user_id, await earned_rewards(supabase_service, user_id)
        )

        logger.info(f"✅ Journal entry saved for {user_id}: {analysis.mood} (streak {streak})")

        return JournalSubmitResponse(
            entry=entry,
            pet_mood=pet_mood_for(analysis.mood),
            mood_emoji=get_mood_emoji(analysis.mood),
            summary=get_mood_explanation(analysis.mood, analysis),
            coins=updated.coins,
            coins_earned=settings.journal_coin_reward,
            streak=streak,
            new_rewards=new_rewards,
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Failed to save journal entry for {user_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to save journal entry: {str(e)}")


@router.get("", response_model=list[JournalEntry])
async def list_journal_entries(
    user_id: CurrentUserId,
    supabase_service: SupabaseDep,
    limit: int = Query(10, ge=1, le=100),
) -> list[JournalEntry]:
    """Most recent entries, newest first."""
    try:
        return await supabase_service.list_journal_entries(user_id, limit=limit)

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to load journal: {str(e)}")


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_text(
    request: AnalyzeRequest,
    user_id: CurrentUserId,
    sentiment_service: SentimentDep,
) -> AnalyzeResponse:
    """Analyse text without saving it."""
    try:
        analysis = await sentiment_service.analyze(request.text)
        return AnalyzeResponse(
            analysis=analysis,
            mood_emoji=get_mood_emoji(analysis.mood),
            summary=get_mood_explanation(analysis.mood, analysis),
        )

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Analysis failed: {str(e)}")
