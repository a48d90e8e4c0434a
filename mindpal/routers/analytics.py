"""
Mood analytics and reward claiming.
"""

import logging
from datetime import timedelta

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from mindpal.core.auth import CurrentUserId
from mindpal.core.deps import CurrentProfile, RewardDep, SupabaseDep
from mindpal.models.schemas import DailyMoodScore, MoodAnalytics
from mindpal.services.mood_analytics import analyze_moods, daily_mood_trend, mood_insight
from mindpal.services.reward_service import earned_rewards
from mindpal.services.supabase_service import utc_now

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])

WINDOW_LIMIT = 500


class MoodDistribution(BaseModel):
    positive: int
    neutral: int
    negative: int


class AnalyticsResponse(BaseModel):
    days: int
    analytics: MoodAnalytics
    mood_distribution: MoodDistribution
    most_common_mood: str | None
    average_words_per_entry: int
    mood_trend: list[DailyMoodScore]
    insight: str
    claimed_rewards: list[str]


class ClaimRewardResponse(BaseModel):
    reward_type: str
    coins_awarded: int
    coins: int
    message: str


@router.get("", response_model=AnalyticsResponse)
async def get_analytics(
    user_id: CurrentUserId,
    supabase_service: SupabaseDep,
    reward_service: RewardDep,
    days: int = Query(7, ge=1, le=365),
) -> AnalyticsResponse:
    """
    Mood statistics over the last ``days`` days.

    Rewards are the ones the claim endpoint would accept, so they don't
    depend on ``days``.
    """
    try:
        since = utc_now() - timedelta(days=days)
        entries = await supabase_service.list_journal_entries(
            user_id, limit=WINDOW_LIMIT, since=since
        )
        entries.reverse()

        analytics = analyze_moods(entries).model_copy(
            update={"rewards": await earned_rewards(supabase_service, user_id)}
        )
        most_common = analytics.dominant_mood if entries else None
        average_words = (
            round(sum(entry.word_count for entry in entries) / len(entries)) if entries else 0
        )

        return AnalyticsResponse(
            days=days,
            analytics=analytics,
            mood_distribution=MoodDistribution(
                positive=analytics.positive_count,
                neutral=analytics.neutral_count,
                negative=analytics.negative_count,
            ),
            most_common_mood=most_common,
            average_words_per_entry=average_words,
            mood_trend=daily_mood_trend(entries),
            insight=mood_insight(most_common, len(entries)),
            claimed_rewards=sorted(await reward_service.claimed_types(user_id)),
        )

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to load analytics: {str(e)}")


@router.post("/rewards/{reward_type}/claim", response_model=ClaimRewardResponse)
async def claim_reward(
    reward_type: str,
    profile: CurrentProfile,
    supabase_service: SupabaseDep,
    reward_service: RewardDep,
) -> ClaimRewardResponse:
    """Cash in a reward the user's journal history has earned."""
    try:
        earned = {
            reward.type: reward
            for reward in await earned_rewards(supabase_service, profile.id)
        }

        reward = earned.get(reward_type)
        if reward is None:
            raise HTTPException(status_code=400, detail="Reward not earned yet")

        try:
            await reward_service.mark_claimed(profile.id, reward)
        except ValueError as e:
            raise HTTPException(status_code=409, detail=str(e))

        profile = await supabase_service.adjust_coins(profile.id, reward.coin_reward)

        return ClaimRewardResponse(
            reward_type=reward.type,
            coins_awarded=reward.coin_reward,
            coins=profile.coins,
            message=f"{reward.emoji} {reward.title} +{reward.coin_reward} coins",
        )

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to claim reward: {str(e)}")
