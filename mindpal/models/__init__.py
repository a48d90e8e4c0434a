"""Data models and schemas."""

from .schemas import (
    AnalysisResult,
    ChatMessage,
    JournalEntry,
    MoodAnalytics,
    MoodReward,
    Pet,
    Profile,
    Quest,
    QuestBoard,
    TherapistProfile,
    TherapistRequest,
)

__all__ = [
    "AnalysisResult",
    "ChatMessage",
    "JournalEntry",
    "MoodAnalytics",
    "MoodReward",
    "Pet",
    "Profile",
    "Quest",
    "QuestBoard",
    "TherapistProfile",
    "TherapistRequest",
]
