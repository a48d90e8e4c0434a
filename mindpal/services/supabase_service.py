"""
Supabase database service for profiles, journal entries and therapist data.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from supabase import create_client, Client

from mindpal.core.config import settings
from mindpal.models.schemas import (
    AnalysisResult,
    ChatMessage,
    JournalEntry,
    Profile,
    TherapistProfile,
    TherapistRequest,
)

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class SupabaseService:
    """Service for interacting with Supabase database."""

    def __init__(self, client: Client | None = None) -> None:
        """Initialize Supabase client."""
        self.client: Client = client or create_client(
            settings.supabase_url, settings.supabase_service_role_key
        )

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    async def get_profile(self, user_id: str) -> Profile | None:
        """Get profile by user ID."""
        response = self.client.table("profiles").select("*").eq("id", user_id).execute()

        if not response.data:
            return None

        return Profile(**response.data[0])

    async def create_profile(
        self,
        user_id: str,
        email: str | None = None,
        username: str | None = None,
        user_type: str = "user",
    ) -> Profile:
        """Create a profile row with a fresh wallet."""
        data = {
            "id": user_id,
            "email": email,
            "username": username,
            "user_type": user_type,
            # Therapists don't take part in the pet economy
            "coins": settings.starting_coins if user_type == "user" else 0,
            "is_premium": False,
            "level": 1,
            "streak": 0,
            "total_entries": 0,
            "last_active": utc_now().isoformat(),
        }

        response = self.client.table("profiles").insert(data).execute()

        if not response.data:
            raise Exception("Failed to create profile")

        logger.info(f"✅ Created {user_type} profile for {user_id}")
        return Profile(**response.data[0])

    async def update_profile(self, user_id: str, updates: dict[str, Any]) -> Profile:
        """Apply a partial update to a profile and stamp last_active."""
        data = {**updates, "last_active": utc_now().isoformat()}

        response = self.client.table("profiles").update(data).eq("id", user_id).execute()

        if not response.data:
            raise Exception("Failed to update profile")

        return Profile(**response.data[0])

    async def adjust_coins(self, user_id: str, delta: int) -> Profile:
        """Add (or with a negative delta, spend) coins."""
        profile = await self.get_profile(user_id)
        if not profile:
            raise Exception("Profile not found")

        coins = profile.coins + delta
        if coins < 0:
            raise ValueError("Not enough coins")

        return await self.update_profile(user_id, {"coins": coins})

    # ------------------------------------------------------------------
    # Journal
    # ------------------------------------------------------------------

    async def create_journal_entry(
        self,
        user_id: str,
        text: str,
        user_mood: str | None,
        analysis: AnalysisResult,
    ) -> JournalEntry:
        """Store an analysed journal entry."""
        data = {
            "user_id": user_id,
            "entry_text": text,
            "user_mood": user_mood,
            "mood": analysis.mood,
            "sentiment_score": analysis.confidence,
            "risk_level": analysis.risk_level,
            "triggers": analysis.triggers,
            "emotions": analysis.emotions,
            "suggestions": analysis.suggestions,
            "explanation": analysis.explanation,
            "word_count": len(text.split()),
        }

        response = self.client.table("journal_entries").insert(data).execute()

        if not response.data:
            raise Exception("Failed to create journal entry")

        return JournalEntry(**response.data[0])

    async def list_journal_entries(
        self, user_id: str, limit: int = 10, since: datetime | None = None
    ) -> list[JournalEntry]:
        """Get a user's journal entries, newest first."""
        query = self.client.table("journal_entries").select("*").eq("user_id", user_id)

        if since is not None:
            query = query.gte("created_at", since.isoformat())

        response = query.order("created_at", desc=True).limit(limit).execute()

        return [JournalEntry(**row) for row in response.data]

    # ------------------------------------------------------------------
    # Therapists
    # ------------------------------------------------------------------

    async def save_therapist(self, therapist_id: str, data: dict[str, Any]) -> TherapistProfile:
        """Create or update a therapist listing."""
        response = (
            self.client.table("therapists")
            .upsert({**data, "id": therapist_id})
            .execute()
        )

        if not response.data:
            raise Exception("Failed to save therapist profile")

        return TherapistProfile(**response.data[0])

    async def get_therapist(self, therapist_id: str) -> TherapistProfile | None:
        """Get a therapist listing by ID."""
        response = self.client.table("therapists").select("*").eq("id", therapist_id).execute()

        if not response.data:
            return None

        return TherapistProfile(**response.data[0])

    async def list_therapists(self) -> list[TherapistProfile]:
        """All therapists, best rated first."""
        response = self.client.table("therapists").select("*").order("rating", desc=True).execute()

        return [TherapistProfile(**row) for row in response.data]

    # ------------------------------------------------------------------
    # Therapist requests
    # ------------------------------------------------------------------

    async def create_request(
        self, user_id: str, therapist_id: str, message: str | None
    ) -> TherapistRequest:
        """Send a pending connection request."""
        data = {
            "user_id": user_id,
            "therapist_id": therapist_id,
            "message": message,
            "status": "pending",
        }

        response = self.client.table("therapist_requests").insert(data).execute()

        if not response.data:
            raise Exception("Failed to create request")

        return TherapistRequest(**response.data[0])

    async def get_request(self, request_id: str) -> TherapistRequest | None:
        """Get a request by ID."""
        response = (
            self.client.table("therapist_requests").select("*").eq("id", request_id).execute()
        )

        if not response.data:
            return None

        return TherapistRequest(**response.data[0])

    async def list_requests_for_therapist(self, therapist_id: str) -> list[TherapistRequest]:
        """
        Requests addressed to a therapist, newest first.

        Each request carries the requesting user's id/username/email under
        ``users`` (None when that user has no profile).
        """
        response = (
            self.client.table("therapist_requests")
            .select("*")
            .eq("therapist_id", therapist_id)
            .order("created_at", desc=True)
            .execute()
        )
        requests = response.data or []

        user_ids = list(dict.fromkeys(r["user_id"] for r in requests if r.get("user_id")))
        users_map: dict[str, dict[str, Any]] = {}
        if user_ids:
            users = (
                self.client.table("profiles")
                .select("id, username, email")
                .in_("id", user_ids)
                .execute()
            )
            users_map = {u["id"]: u for u in users.data or []}

        return [
            TherapistRequest(**{**r, "users": users_map.get(r["user_id"])}) for r in requests
        ]

    async def list_requests_for_user(self, user_id: str) -> list[TherapistRequest]:
        """Requests a user has sent, newest first."""
        response = (
            self.client.table("therapist_requests")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )

        return [TherapistRequest(**row) for row in response.data]

    async def find_request(
        self, user_id: str, therapist_id: str, statuses: list[str]
    ) -> TherapistRequest | None:
        """Find a request between a user and therapist in one of the given statuses."""
        response = (
            self.client.table("therapist_requests")
            .select("*")
            .eq("user_id", user_id)
            .eq("therapist_id", therapist_id)
            .in_("status", statuses)
            .limit(1)
            .execute()
        )

        if not response.data:
            return None

        return TherapistRequest(**response.data[0])

    async def update_request_status(self, request_id: str, status: str) -> TherapistRequest:
        """Accept or reject a request."""
        response = (
            self.client.table("therapist_requests")
            .update({"status": status})
            .eq("id", request_id)
            .execute()
        )

        if not response.data:
            raise Exception("Failed to update request")

        return TherapistRequest(**response.data[0])

    # ------------------------------------------------------------------
    # Chat
    # ------------------------------------------------------------------

    async def list_messages(
        self, chat_id: str, after: str | None = None, since: str | None = None
    ) -> list[ChatMessage]:
        """
        Messages in a chat, oldest first.

        ``after`` keeps only messages strictly newer than a timestamp,
        ``since`` also keeps those stamped exactly at it.
        """
        query = self.client.table("therapist_chat").select("*").eq("chat_id", chat_id)

        if after:
            query = query.gt("created_at", after)
        if since:
            query = query.gte("created_at", since)

        response = query.order("created_at").execute()

        return [ChatMessage(**row) for row in response.data]

    async def create_message(
        self, chat_id: str, sender_id: str, receiver_id: str, message: str
    ) -> ChatMessage:
        """Store a chat message."""
        data = {
            "chat_id": chat_id,
            "sender_id": sender_id,
            "receiver_id": receiver_id,
            "message": message,
        }

        response = self.client.table("therapist_chat").insert(data).execute()

        if not response.data:
            raise Exception("Failed to send message")

        return ChatMessage(**response.data[0])
