"""
Pydantic schemas for request/response validation.
"""

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, computed_field


# ============================================================================
# Mood Types
# ============================================================================

MoodType = Literal[
    "happy",
    "sad",
    "calm",
    "anxious",
    "excited",
    "angry",
    "irritated",
    "frustrated",
    "content",
    "energetic",
    "love",
    "disgust",
    "envy",
    "guilt",
    "shame",
    "pride",
    "lonely",
    "hopeful",
    "grateful",
    "confused",
    "disappointed",
    "jealous",
    "embarrassed",
    "bored",
    "nostalgic",
    "overwhelmed",
]

RiskLevel = Literal["low", "medium", "high"]

Complexity = Literal["simple", "mixed", "complex"]

MoodCategory = Literal["positive", "neutral", "negative"]

PetMood = Literal["happy", "calm", "sad"]

PetType = Literal["dog", "cat", "rabbit", "penguin"]

UserType = Literal["user", "therapist"]

RequestStatus = Literal["pending", "accepted", "rejected"]


# ============================================================================
# Profile & Pet Schemas
# ============================================================================


class Pet(BaseModel):
    """A companion pet from the catalog."""

    name: str
    emoji: str
    color: str
    type: PetType
    description: str | None = None


class Profile(BaseModel):
    """User profile with wallet and pet state."""

    id: str
    username: str | None = None
    email: str | None = None
    user_type: UserType = "user"
    coins: int = 0
    is_premium: bool = False
    level: int = 1
    streak: int = 0
    total_entries: int = 0
    last_active: datetime | None = None
    last_journaled: datetime | None = None
    selected_pet: Pet | None = None
    pet_name: str | None = None
    pet_type: PetType | None = None
    pet_hunger: int | None = None
    pet_happiness: int | None = None
    pet_health: int | None = None
    last_fed: datetime | None = None
    last_played: datetime | None = None
    created_at: datetime | None = None


# ============================================================================
# Journal Schemas
# ============================================================================


class AnalysisResult(BaseModel):
    """Outcome of analysing a journal entry."""

    mood: MoodType
    confidence: float = Field(..., ge=0, le=1)
    triggers: list[str] = Field(default_factory=list)
    emotions: dict[str, float] = Field(default_factory=dict)
    complexity: Complexity = "simple"
    risk_level: RiskLevel = "low"
    suggestions: list[str] = Field(default_factory=list)
    explanation: str = ""


class JournalEntry(BaseModel):
    """A stored journal entry."""

    id: str
    user_id: str
    entry_text: str
    user_mood: str | None = None
    mood: MoodType
    sentiment_score: float | None = None
    risk_level: RiskLevel = "low"
    triggers: list[str] = Field(default_factory=list)
    emotions: dict[str, float] = Field(default_factory=dict)
    suggestions: list[str] = Field(default_factory=list)
    explanation: str | None = None
    word_count: int = 0
    created_at: datetime


# ============================================================================
# Analytics Schemas
# ============================================================================


class MoodReward(BaseModel):
    """A reward earned from journaling patterns."""

    type: Literal["positive_streak", "balance_achievement", "growth_milestone", "consistency_bonus"]
    title: str
    description: str
    emoji: str
    coin_reward: int


class FineEmotion(BaseModel):
    """Averaged fine-grained emotion score."""

    label: str
    score: float


class MoodAnalytics(BaseModel):
    """Aggregated mood statistics for a set of entries."""

    total_entries: int
    dominant_mood: str
    positive_count: int
    neutral_count: int
    negative_count: int
    positive_percentage: int
    neutral_percentage: int
    negative_percentage: int
    mood_counts: dict[str, int]
    top_fine_emotions: list[FineEmotion]
    recent_trend: Literal["improving", "declining", "stable"]
    suggestions: list[str]
    rewards: list[MoodReward]


class DailyMoodScore(BaseModel):
    """Average mood score for a single day."""

    date: date
    score: float
    count: int


# ============================================================================
# Quest Schemas
# ============================================================================


class Quest(BaseModel):
    """Quest definition merged with the user's progress."""

    id: str
    title: str
    description: str
    emoji: str
    total: int
    reward: int
    difficulty: Literal["easy", "medium", "hard"]
    progress: int = 0
    completed: bool = False
    completed_at: datetime | None = None


class QuestBoard(BaseModel):
    """All quests for a user this week."""

    quests: list[Quest]
    weekly_streak: int
    last_reset: datetime


# ============================================================================
# Therapist Schemas
# ============================================================================


class TherapistProfile(BaseModel):
    """Public therapist listing."""

    id: str
    name: str
    email: str | None = None
    specialization: str | None = None
    experience: str | None = None
    description: str | None = None
    avatar: str | None = None
    rating: float | None = None
    languages: list[str] | None = None
    response_time: str | None = None
    price: float | None = None


class TherapistRequest(BaseModel):
    """A user's request to connect with a therapist."""

    id: str
    user_id: str
    therapist_id: str
    message: str | None = None
    status: RequestStatus
    created_at: datetime
    users: dict[str, Any] | None = None

    @computed_field
    @property
    def chat_id(self) -> str:
        """Chat opened by this request once accepted."""
        return f"{self.user_id}-{self.therapist_id}"


class ChatMessage(BaseModel):
    """A message in a user/therapist chat."""

    id: str
    chat_id: str
    sender_id: str
    receiver_id: str
    message: str
    created_at: datetime
