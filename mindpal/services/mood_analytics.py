"""
Mood analytics over journal history: distribution, trend, suggestions and rewards.
"""

from collections import defaultdict
from datetime import date

from mindpal.models.schemas import (
    DailyMoodScore,
    FineEmotion,
    JournalEntry,
    MoodAnalytics,
    MoodCategory,
    MoodReward,
    PetMood,
)

POSITIVE_MOODS = {"happy", "excited", "love", "grateful", "hopeful", "pride", "content", "energetic"}
NEUTRAL_MOODS = {"calm", "confused", "bored", "nostalgic"}
NEGATIVE_MOODS = {
    "sad", "angry", "anxious", "frustrated", "irritated", "lonely", "disappointed",
    "embarrassed", "overwhelmed", "guilt", "shame", "disgust", "envy", "jealous",
}
STRESS_MOODS = {"anxious", "overwhelmed"}

TREND_WINDOW = 7
TREND_THRESHOLD = 0.15
MAX_SUGGESTIONS = 4
TOP_FINE_EMOTIONS = 8

MOOD_EMOJIS = {
    "happy": "😊",
    "sad": "😢",
    "angry": "😠",
    "anxious": "😰",
    "excited": "🤩",
    "calm": "😌",
    "frustrated": "😤",
    "irritated": "😤",
    "love": "🥰",
    "grateful": "🙏",
    "hopeful": "🌈",
    "lonely": "😔",
    "confused": "😕",
    "disappointed": "😞",
    "pride": "😎",
    "embarrassed": "😳",
    "bored": "😑",
    "overwhelmed": "🤯",
    "content": "😊",
    "energetic": "⚡",
    "guilt": "😔",
    "shame": "😞",
    "disgust": "🤢",
    "envy": "😒",
    "jealous": "😒",
    "nostalgic": "🥺",
}

PET_MOODS: dict[str, PetMood] = {
    "happy": "happy",
    "excited": "happy",
    "energetic": "happy",
    "content": "calm",
    "calm": "calm",
    "sad": "sad",
    "anxious": "sad",
    "angry": "sad",
    "irritated": "sad",
    "frustrated": "sad",
}


def categorize_mood(mood: str) -> MoodCategory:
    if mood in POSITIVE_MOODS:
        return "positive"
    if mood in NEGATIVE_MOODS:
        return "negative"
    return "neutral"


def get_mood_emoji(mood: str) -> str:
    return MOOD_EMOJIS.get(mood, "😐")


def pet_mood_for(mood: str) -> PetMood:
    """Map a journal mood onto the pet's mood."""
    if mood in PET_MOODS:
        return PET_MOODS[mood]
    category = categorize_mood(mood)
    if category == "positive":
        return "happy"
    if category == "negative":
        return "sad"
    return "calm"


def _percentage(count: int, total: int) -> int:
    # halves round up
    return int(count * 100 / total + 0.5)


def analyze_moods(entries: list[JournalEntry]) -> MoodAnalytics:
    """
    Aggregate a user's entries.

    ``entries`` must be ordered oldest first; the trend, streak and
    consistency rules read from the end of the list.
    """
    if not entries:
        return MoodAnalytics(
            total_entries=0,
            dominant_mood="calm",
            positive_count=0,
            neutral_count=0,
            negative_count=0,
            positive_percentage=0,
            neutral_percentage=0,
            negative_percentage=0,
            mood_counts={},
            top_fine_emotions=[],
            recent_trend="stable",
            suggestions=[],
            rewards=[],
        )

    mood_counts: dict[str, int] = {}
    category_counts = {"positive": 0, "neutral": 0, "negative": 0}
    emotion_scores: dict[str, list[float]] = defaultdict(list)

    for entry in entries:
        mood_counts[entry.mood] = mood_counts.get(entry.mood, 0) + 1
        category_counts[categorize_mood(entry.mood)] += 1
        for label, score in entry.emotions.items():
            emotion_scores[label].append(score)

    total = len(entries)
    positive_percentage = _percentage(category_counts["positive"], total)
    neutral_percentage = _percentage(category_counts["neutral"], total)
    negative_percentage = _percentage(category_counts["negative"], total)

    top_fine_emotions = sorted(
        (FineEmotion(label=label, score=sum(scores) / len(scores)) for label, scores in emotion_scores.items()),
        key=lambda emotion: emotion.score,
        reverse=True,
    )[:TOP_FINE_EMOTIONS]

    return MoodAnalytics(
        total_entries=total,
        dominant_mood=max(mood_counts, key=mood_counts.__getitem__),
        positive_count=category_counts["positive"],
        neutral_count=category_counts["neutral"],
        negative_count=category_counts["negative"],
        positive_percentage=positive_percentage,
        neutral_percentage=neutral_percentage,
        negative_percentage=negative_percentage,
        mood_counts=mood_counts,
        top_fine_emotions=top_fine_emotions,
        recent_trend=recent_trend(entries),
        suggestions=generate_suggestions(mood_counts, positive_percentage, negative_percentage),
        rewards=generate_rewards(entries, positive_percentage),
    )


def recent_trend(entries: list[JournalEntry]) -> str:
    """Compare the positive ratio of the last 7 entries with the 7 before."""
    if len(entries) < 6:
        return "stable"

    recent = entries[-TREND_WINDOW:]
    previous = entries[-2 * TREND_WINDOW:-TREND_WINDOW]

    if not previous:
        return "stable"

    def positive_ratio(window: list[JournalEntry]) -> float:
        return sum(1 for e in window if categorize_mood(e.mood) == "positive") / len(window)

    difference = positive_ratio(recent) - positive_ratio(previous)

    if difference > TREND_THRESHOLD:
        return "improving"
    if difference < -TREND_THRESHOLD:
        return "declining"
    return "stable"


def generate_suggestions(
    mood_counts: dict[str, int], positive_percentage: int, negative_percentage: int
) -> list[str]:
    suggestions: list[str] = []

    if negative_percentage > 60:
        suggestions += [
            "Try spending 10 minutes in nature or by a window each day",
            "Practice deep breathing: inhale for 4, hold for 4, exhale for 6",
            "Write down 3 things you're grateful for each morning",
        ]

    if mood_counts.get("angry", 0) > 2:
        suggestions += [
            "When feeling angry, try the 5-4-3-2-1 grounding technique",
            "Physical exercise can help release anger constructively",
        ]

    if mood_counts.get("anxious", 0) > 2:
        suggestions += [
            "Progressive muscle relaxation can help with anxiety",
            "Limit caffeine and try herbal teas like chamomile",
        ]

    if mood_counts.get("frustrated", 0) > 2:
        suggestions += [
            "Break big tasks into smaller, manageable steps",
            "Take regular breaks to prevent overwhelm",
        ]

    if mood_counts.get("sad", 0) > 3:
        suggestions += [
            "Connect with friends or family - social support matters",
            "Engage in activities that brought you joy before",
        ]

    if positive_percentage > 70:
        suggestions += [
            "You're doing great! Keep up the positive habits",
            "Share your positivity with others - it's contagious!",
        ]

    if 40 <= positive_percentage <= 60:
        suggestions += [
            "You're maintaining good emotional balance - that's healthy!",
            "Consider adding one small self-care activity to your routine",
        ]

    return suggestions[:MAX_SUGGESTIONS]


def positive_streak(entries: list[JournalEntry]) -> int:
    """Number of trailing entries with a positive mood."""
    streak = 0
    for entry in reversed(entries):
        if categorize_mood(entry.mood) != "positive":
            break
        streak += 1
    return streak


def generate_rewards(entries: list[JournalEntry], positive_percentage: int) -> list[MoodReward]:
    rewards: list[MoodReward] = []

    streak = positive_streak(entries)
    if streak >= 3:
        rewards.append(
            MoodReward(
                type="positive_streak",
                title=f"{streak}-Day Positive Streak!",
                description=f"You've maintained positive moods for {streak} consecutive entries!",
                coin_reward=streak * 10,
                emoji="🌟",
            )
        )

    if positive_percentage >= 70 and len(entries) >= 10:
        rewards.append(
            MoodReward(
                type="balance_achievement",
                title="Emotional Wellness Master",
                description=f"{positive_percentage}% of your recent entries show positive emotions!",
                coin_reward=50,
                emoji="🏆",
            )
        )

    if len(entries) >= 30 and positive_percentage >= 60:
        rewards.append(
            MoodReward(
                type="growth_milestone",
                title="Journey Milestone",
                description="You've completed 30 journal entries with great emotional awareness!",
                coin_reward=100,
                emoji="🌱",
            )
        )

    if len(entries) >= 7:
        days = {entry.created_at.date() for entry in entries[-7:]}
        if len(days) >= 7:
            rewards.append(
                MoodReward(
                    type="consistency_bonus",
                    title="Daily Journaling Champion",
                    description="You've journaled every day this week!",
                    coin_reward=30,
                    emoji="📔",
                )
            )

    return rewards


def mood_score(mood: str) -> int:
    """Day-trend weight of a single mood."""
    category = categorize_mood(mood)
    if category == "positive":
        return 2
    if category == "neutral":
        return 1
    if mood in STRESS_MOODS:
        return -2
    return -1


def daily_mood_trend(entries: list[JournalEntry]) -> list[DailyMoodScore]:
    """Average mood score per calendar day, oldest day first."""
    by_day: dict[date, list[int]] = defaultdict(list)
    for entry in entries:
        by_day[entry.created_at.date()].append(mood_score(entry.mood))

    return [
        DailyMoodScore(date=day, score=round(sum(scores) / len(scores), 2), count=len(scores))
        for day, scores in sorted(by_day.items())
    ]


def mood_insight(most_common_mood: str | None, total_entries: int) -> str:
    if total_entries == 0 or most_common_mood is None:
        return "Start journaling to track your mood patterns!"
    if most_common_mood in STRESS_MOODS:
        return "Consider trying some relaxation techniques. Your pet is here to help! 🧘"
    category = categorize_mood(most_common_mood)
    if category == "positive":
        return "You've been feeling positive lately! Keep it up! 🌟"
    if category == "negative":
        return "Remember, it's okay to have difficult days. Take care of yourself 💙"
    return "You seem to be in a peaceful state of mind. Great balance! ⚖️"
