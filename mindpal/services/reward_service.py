"""
Claim tracking for mood rewards, kept in the KV store.

Each reward type can be claimed once per user. Whether a reward is earned
is always judged on the user's recent journal history, whatever window
the analytics screen is showing.
"""

import logging
from datetime import datetime, timezone

from mindpal.models.schemas import MoodReward
from mindpal.services.kv_store import KVStore
from mindpal.services.mood_analytics import analyze_moods
from mindpal.services.supabase_service import SupabaseService

logger = logging.getLogger(__name__)

REWARD_HISTORY_LIMIT = 500


async def earned_rewards(supabase_service: SupabaseService, user_id: str) -> list[MoodReward]:
    """Rewards the user's latest entries currently qualify for."""
    entries = await supabase_service.list_journal_entries(user_id, limit=REWARD_HISTORY_LIMIT)
    return analyze_moods(list(reversed(entries))).rewards


class RewardService:
    """Which mood rewards a user has already cashed in."""

    def __init__(self, kv: KVStore) -> None:
        self.kv = kv

    @staticmethod
    def _key(user_id: str, reward_type: str) -> str:
        return f"rewards:{user_id}:{reward_type}"

    async def claimed_types(self, user_id: str) -> set[str]:
        claims = await self.kv.get_by_prefix(f"rewards:{user_id}:")
        return {claim["type"] for claim in claims}

    async def unclaimed(self, user_id: str, earned: list[MoodReward]) -> list[MoodReward]:
        """Filter earned rewards down to those not yet claimed."""
        claimed = await self.claimed_types(user_id)
        return [reward for reward in earned if reward.type not in claimed]

    async def mark_claimed(self, user_id: str, reward: MoodReward) -> None:
        """Record a claim. Raises ValueError if this type was claimed before."""
        key = self._key(user_id, reward.type)
        if await self.kv.get(key) is not None:
            raise ValueError("Reward already claimed")

        await self.kv.set(
            key,
            {
                "type": reward.type,
                "coin_reward": reward.coin_reward,
                "claimed_at": datetime.now(timezone.utc).isoformat(),
            },
        )
        logger.info(f"🎁 {user_id} claimed {reward.type} (+{reward.coin_reward})")
