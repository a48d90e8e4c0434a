"""
Therapist directory and connection requests.

Users browse therapists and send a request; the therapist accepts or
rejects it. An accepted request opens a chat between the two and lets
the therapist follow the client's mood analytics.
"""

import logging
from datetime import timedelta

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from mindpal.core.auth import CurrentUserId
from mindpal.core.deps import SupabaseDep
from mindpal.models.schemas import (
    DailyMoodScore,
    JournalEntry,
    MoodAnalytics,
    TherapistProfile,
    TherapistRequest,
)
from mindpal.services.mood_analytics import analyze_moods, daily_mood_trend, mood_insight
from mindpal.services.supabase_service import utc_now

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/therapists", tags=["therapists"])

CLIENT_HISTORY_LIMIT = 500
RECENT_ENTRIES = 10


# Request/Response Models
class TherapistProfileRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    specialization: str | None = None
    experience: str | None = None
    description: str | None = Field(None, max_length=2000)
    avatar: str | None = None
    languages: list[str] | None = None
    response_time: str | None = None
    price: float | None = Field(None, ge=0)


class ConnectionRequest(BaseModel):
    message: str | None = Field(None, max_length=1000)


class RequestDecision(BaseModel):
    status: str = Field(..., pattern="^(accepted|rejected)$")


class ClientAnalyticsResponse(BaseModel):
    user_id: str
    username: str | None
    days: int
    analytics: MoodAnalytics
    most_common_mood: str | None
    mood_trend: list[DailyMoodScore]
    insight: str
    recent_entries: list[JournalEntry]


@router.get("", response_model=list[TherapistProfile])
async def list_therapists(
    user_id: CurrentUserId, supabase_service: SupabaseDep
) -> list[TherapistProfile]:
    """All therapists, best rated first."""
    try:
        return await supabase_service.list_therapists()

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to load therapists: {str(e)}")


@router.post("/profile", response_model=TherapistProfile)
async def save_therapist_profile(
    request: TherapistProfileRequest,
    user_id: CurrentUserId,
    supabase_service: SupabaseDep,
) -> TherapistProfile:
    """Create or update the caller's therapist listing."""
    try:
        profile = await supabase_service.get_profile(user_id)
        if not profile or profile.user_type != "therapist":
            raise HTTPException(status_code=403, detail="Only therapists can have a listing")

        existing = await supabase_service.get_therapist(user_id)
        data = request.model_dump()
        data["email"] = profile.email
        data["rating"] = existing.rating if existing and existing.rating is not None else 0

        return await supabase_service.save_therapist(user_id, data)

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to save therapist profile: {str(e)}")


@router.get("/me/requests", response_model=list[TherapistRequest])
async def list_incoming_requests(
    user_id: CurrentUserId, supabase_service: SupabaseDep
) -> list[TherapistRequest]:
    """Requests addressed to the calling therapist, with requester details."""
    try:
        if not await supabase_service.get_therapist(user_id):
            raise HTTPException(status_code=403, detail="Only therapists can view requests")

        return await supabase_service.list_requests_for_therapist(user_id)

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to load requests: {str(e)}")


@router.get("/requests/mine", response_model=list[TherapistRequest])
async def list_my_requests(
    user_id: CurrentUserId, supabase_service: SupabaseDep
) -> list[TherapistRequest]:
    """Requests the caller has sent."""
    try:
        return await supabase_service.list_requests_for_user(user_id)

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to load requests: {str(e)}")


@router.patch("/requests/{request_id}", response_model=TherapistRequest)
async def decide_request(
    request_id: str,
    decision: RequestDecision,
    user_id: CurrentUserId,
    supabase_service: SupabaseDep,
) -> TherapistRequest:
    """Accept or reject a pending request. Only the addressed therapist may decide."""
    try:
        existing = await supabase_service.get_request(request_id)
        if not existing:
            raise HTTPException(status_code=404, detail="Request not found")

        if existing.therapist_id != user_id:
            raise HTTPException(status_code=403, detail="Not your request to answer")

        if existing.status != "pending":
            raise HTTPException(status_code=409, detail=f"Request already {existing.status}")

        updated = await supabase_service.update_request_status(request_id, decision.status)
        logger.info(f"✅ Therapist {user_id} {decision.status} request {request_id}")
        return updated

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update request: {str(e)}")


@router.post("/{therapist_id}/requests", response_model=TherapistRequest)
async def send_request(
    therapist_id: str,
    request: ConnectionRequest,
    user_id: CurrentUserId,
    supabase_service: SupabaseDep,
) -> TherapistRequest:
    """Ask a therapist to connect."""
    if therapist_id == user_id:
        raise HTTPException(status_code=400, detail="You can't send a request to yourself")

    try:
        if not await supabase_service.get_therapist(therapist_id):
            raise HTTPException(status_code=404, detail="Therapist not found")

        open_request = await supabase_service.find_request(
            user_id, therapist_id, ["pending", "accepted"]
        )
        if open_request:
            raise HTTPException(
                status_code=409,
                detail=f"You already have a {open_request.status} request with this therapist",
            )

        created = await supabase_service.create_request(user_id, therapist_id, request.message)
        logger.info(f"📨 {user_id} sent a request to therapist {therapist_id}")
        return created

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to send request: {str(e)}")


@router.get("/me/clients", response_model=list[TherapistRequest])
async def list_clients(
    user_id: CurrentUserId, supabase_service: SupabaseDep
) -> list[TherapistRequest]:
    """Users whose requests the calling therapist has accepted."""
    try:
        if not await supabase_service.get_therapist(user_id):
            raise HTTPException(status_code=403, detail="Only therapists have clients")

        requests = await supabase_service.list_requests_for_therapist(user_id)
        return [request for request in requests if request.status == "accepted"]

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to load clients: {str(e)}")


@router.get("/me/clients/{client_id}/analytics", response_model=ClientAnalyticsResponse)
async def get_client_analytics(
    client_id: str,
    user_id: CurrentUserId,
    supabase_service: SupabaseDep,
    days: int = Query(30, ge=1, le=365),
) -> ClientAnalyticsResponse:
    """
    A client's mood analytics, as the client sees them on their own
    analytics screen.

    Only a therapist who has accepted the client's request may look.
    Rewards are left out since therapists don't claim them.
    """
    try:
        connection = await supabase_service.find_request(client_id, user_id, ["accepted"])
        if not connection:
            raise HTTPException(status_code=403, detail="Not your client")

        entries = await supabase_service.list_journal_entries(
            client_id, limit=CLIENT_HISTORY_LIMIT, since=utc_now() - timedelta(days=days)
        )
        recent = entries[:RECENT_ENTRIES]
        entries.reverse()

        analytics = analyze_moods(entries).model_copy(update={"rewards": []})
        most_common = analytics.dominant_mood if entries else None
        client = await supabase_service.get_profile(client_id)

        logger.info(f"📊 Therapist {user_id} viewed analytics for {client_id}")

        return ClientAnalyticsResponse(
            user_id=client_id,
            username=client.username if client else None,
            days=days,
            analytics=analytics,
            most_common_mood=most_common,
            mood_trend=daily_mood_trend(entries),
            insight=mood_insight(most_common, len(entries)),
            recent_entries=recent,
        )

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to load client analytics: {str(e)}")
