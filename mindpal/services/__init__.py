"""Service layer for external integrations."""

from .supabase_service import SupabaseService
from .kv_store import KVStore
from .bedrock_service import BedrockService
from .sentiment_service import SentimentService
from .quest_service import QuestService
from .reward_service import RewardService
from .huggingface_service import HuggingFaceService

__all__ = [
    "SupabaseService",
    "KVStore",
    "BedrockService",
    "SentimentService",
    "QuestService",
    "RewardService",
    "HuggingFaceService",
]
