"""
Service dependencies for API endpoints.
"""

from typing import Annotated

from fastapi import Depends, HTTPException
from supabase import create_client, Client

from mindpal.core.auth import CurrentUserId
from mindpal.core.config import settings
from mindpal.models.schemas import Profile
from mindpal.services import (
    HuggingFaceService,
    KVStore,
    QuestService,
    RewardService,
    SentimentService,
    SupabaseService,
)


def get_supabase_service() -> SupabaseService:
    return SupabaseService()


def get_auth_client() -> Client:
    """Client for Supabase Auth calls made on behalf of an end user."""
    return create_client(
        settings.supabase_url, settings.supabase_anon_key or settings.supabase_service_role_key
    )


def get_sentiment_service() -> SentimentService:
    return SentimentService()


def get_huggingface_service() -> HuggingFaceService:
    return HuggingFaceService()


SupabaseDep = Annotated[SupabaseService, Depends(get_supabase_service)]
AuthClientDep = Annotated[Client, Depends(get_auth_client)]
SentimentDep = Annotated[SentimentService, Depends(get_sentiment_service)]
HuggingFaceDep = Annotated[HuggingFaceService, Depends(get_huggingface_service)]


def get_kv_store(supabase_service: SupabaseDep) -> KVStore:
    return KVStore(supabase_service.client)


KVStoreDep = Annotated[KVStore, Depends(get_kv_store)]


def get_quest_service(kv: KVStoreDep) -> QuestService:
    return QuestService(kv)


def get_reward_service(kv: KVStoreDep) -> RewardService:
    return RewardService(kv)


QuestDep = Annotated[QuestService, Depends(get_quest_service)]
RewardDep = Annotated[RewardService, Depends(get_reward_service)]


async def get_current_profile(user_id: CurrentUserId, supabase_service: SupabaseDep) -> Profile:
    """The caller's profile; 404 if they haven't got one yet."""
    profile = await supabase_service.get_profile(user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


CurrentProfile = Annotated[Profile, Depends(get_current_profile)]
