"""
Keyword-based mood classification and risk screening for journal text.

Everything here is a static lookup: moods are scored by substring matches
against fixed pattern lists, with small boosts for intensifiers and penalties
for negation. The trigger scan is the safety net that runs on every entry,
whether or not the AI analysis succeeds.
"""

import logging
from typing import get_args

from mindpal.models.schemas import AnalysisResult, MoodType, RiskLevel

logger = logging.getLogger(__name__)

ALL_MOODS: tuple[str, ...] = get_args(MoodType)

# Concerning phrases grouped by category
TRIGGER_WORDS: dict[str, list[str]] = {
    "suicide": [
        "suicide", "kill myself", "end my life", "want to die", "better off dead",
        "no point living", "point of living", "no point of living",
    ],
    "self_harm": [
        "cut myself", "hurt myself", "self harm", "self-harm", "burn myself", "hit myself",
    ],
    "depression": [
        "hopeless", "worthless", "useless", "hate myself", "empty inside", "numb", "void",
        "dont know what to do", "dont see the point",
    ],
    "anxiety": [
        "panic attack", "cant breathe", "heart racing", "overwhelming", "spiraling",
        "losing control",
    ],
    "trauma": ["flashback", "nightmare", "triggered", "ptsd", "abuse", "assault", "violence"],
    "substance": [
        "overdose", "pills", "drinking too much", "using drugs", "addiction", "relapse",
    ],
}

HIGH_RISK_CATEGORIES = {"suicide", "self_harm"}
MEDIUM_RISK_CATEGORIES = {"depression", "trauma", "substance"}

RISK_ORDER: dict[str, int] = {"low": 0, "medium": 1, "high": 2}

INTENSIFIERS = [
    "very", "extremely", "really", "so", "incredibly", "absolutely", "totally", "completely",
]
NEGATORS = ["not", "never", "dont", "doesnt", "cant", "wont", "isnt", "arent"]

# Pattern order doubles as the tie-break order
EMOTION_PATTERNS: dict[str, list[str]] = {
    "frustrated": [
        "frustrated", "frustrating", "fed up", "sick of", "tired of", "had enough", "give up",
        "quit", "done with", "over it", "not working", "doesnt work", "broken",
        "waste of time", "annoying", "irritating", "stuck", "blocked",
    ],
    "disappointed": [
        "disappointed", "let down", "letdown", "expected better", "not good enough",
        "underwhelming", "unsatisfied", "dissatisfied", "terrible", "awful", "horrible",
        "pathetic", "ridiculous", "failed expectations", "not what i hoped",
        "thought it would be better",
    ],
    "sad": [
        "sad", "depressed", "down", "blue", "miserable", "heartbroken", "devastated", "grief",
        "sorrow", "melancholy", "gloomy", "dejected", "crying", "tears", "empty", "hopeless",
        "despair", "no point", "dont see the point", "nothing matters", "dont know what to do",
        "give up on life",
    ],
    "lonely": [
        "lonely", "alone", "isolated", "no one understands", "no friends", "by myself",
        "nobody cares", "abandoned", "left out", "excluded", "disconnected",
        "no one to talk to", "feel invisible", "forgotten",
    ],
    "angry": [
        "angry", "mad", "furious", "rage", "hate", "pissed", "livid", "outraged", "enraged",
        "seething", "pissed off", "ticked off", "steamed", "boiling", "fuming", "irate",
        "incensed", "infuriated",
    ],
    "anxious": [
        "worried", "worry", "anxious", "anxiety", "nervous", "scared", "afraid", "panic",
        "tense", "uneasy", "restless", "heart racing", "cant breathe", "racing heart",
        "sweating", "presentation", "exam", "interview", "meeting", "deadline", "pressure",
        "performance", "judgment", "what if", "catastrophic", "disaster", "failure",
    ],
    "overwhelmed": [
        "overwhelmed", "too much", "cant handle", "drowning", "buried", "swamped",
        "stressed out", "breaking point", "cant cope", "falling apart", "losing control",
        "spiraling", "chaos", "everything at once",
    ],
    "happy": [
        "happy", "joy", "great", "amazing", "wonderful", "good", "fantastic", "awesome",
        "brilliant", "perfect", "delighted", "cheerful", "elated", "blissful", "euphoric",
        "radiant", "glowing", "beaming",
    ],
    "love": [
        "love", "adore", "cherish", "treasure", "devoted", "affection", "romantic", "soulmate",
        "in love", "love so much", "mean everything", "heart full", "butterflies",
        "head over heels", "crazy about",
    ],
    "excited": [
        "excited", "thrilled", "pumped", "enthusiastic", "eager", "hyped", "stoked",
        "cant wait", "looking forward", "anticipating", "buzzing", "electric", "charged",
        "amped", "ready", "motivated", "inspired",
    ],
    "disgust": [
        "disgusted", "disgusting", "gross", "revolting", "repulsive", "sick", "nauseous", "vile",
        "repugnant", "makes me sick", "cant stand", "revolted", "appalled", "horrified",
        "turned off", "repelled",
    ],
    "envy": [
        "envious", "envy", "wish i had", "why cant i have", "not fair", "they have everything",
        "lucky them", "wish i was", "why them and not me", "they dont deserve",
        "i want what they have",
    ],
    "jealous": [
        "jealous", "jealousy", "possessive", "threatened", "insecure", "paranoid", "suspicious",
        "worried about losing", "afraid theyll leave", "comparing myself",
        "not good enough for them", "they might find someone better",
    ],
    "guilt": [
        "guilty", "guilt", "my fault", "i should have", "i shouldnt have", "regret", "sorry",
        "apologize", "feel bad about", "wish i hadnt", "made a mistake", "hurt someone",
        "let them down", "responsible for",
    ],
    "shame": [
        "ashamed", "shame", "embarrassed", "humiliated", "mortified", "exposed", "judged",
        "worthless", "pathetic", "hate myself", "disgusted with myself", "cant face anyone",
        "want to hide", "feel small",
    ],
    "pride": [
        "proud", "accomplished", "achieved", "succeeded", "did it", "nailed it", "crushed it",
        "victory", "earned it", "worked hard", "deserve this", "finally", "breakthrough",
        "milestone", "personal best",
    ],
    "grateful": [
        "grateful", "thankful", "blessed", "appreciate", "lucky", "fortunate", "thank god",
        "so grateful", "means so much", "couldnt ask for more", "feel blessed",
        "appreciate everything", "thankful for",
    ],
    "hopeful": [
        "hopeful", "hope", "optimistic", "positive", "looking up", "getting better",
        "bright future", "things will improve", "light at the end", "tomorrow will be better",
        "faith", "believe",
    ],
    "confused": [
        "confused", "dont understand", "makes no sense", "lost", "puzzled", "baffled",
        "perplexed", "what does this mean", "how is this possible", "dont get it", "mixed up",
        "unclear",
    ],
    "embarrassed": [
        "embarrassed", "embarrassing", "awkward", "cringe", "mortified", "red faced",
        "want to disappear", "so awkward", "humiliating", "made a fool", "everyone saw",
        "cant show my face",
    ],
    "bored": [
        "bored", "boring", "nothing to do", "dull", "tedious", "monotonous", "same old",
        "routine", "uninspired", "restless", "need something new", "going through motions",
        "lifeless",
    ],
    "nostalgic": [
        "nostalgic", "miss", "remember when", "good old days", "used to", "back then",
        "memories", "wish i could go back", "those were the days", "simpler times",
        "reminds me of", "long for",
    ],
}

BASIC_SUGGESTIONS: dict[str, list[str]] = {
    "frustrated": [
        "Take a step back and breathe deeply for 30 seconds",
        "Try breaking the problem into smaller, manageable parts",
        "Consider asking for help or a different perspective",
    ],
    "sad": [
        "Talk to someone you trust about how you're feeling",
        "Consider professional support if these feelings persist",
        "Practice gentle self-care and be patient with yourself",
    ],
    "anxious": [
        "Try the 4-7-8 breathing technique (inhale 4, hold 7, exhale 8)",
        "Ground yourself using the 5-4-3-2-1 technique",
        "Write down your specific worries to externalize them",
    ],
    "angry": [
        "Count to 10 slowly before responding",
        "Try physical exercise to release tension safely",
        "Practice the 'STOP' technique: Stop, Take a breath, Observe, Proceed mindfully",
    ],
    "happy": [
        "Share this positive energy with someone you care about",
        "Write down what made you happy to remember later",
        "Use this good mood to tackle something you've been putting off",
    ],
    "excited": [
        "Channel this energy into a productive activity",
        "Share your excitement with supportive people",
        "Make a concrete plan to maintain this momentum",
    ],
    "calm": [
        "Enjoy and savor this peaceful moment",
        "Practice gratitude for three specific things",
        "Use this clarity to reflect on your goals",
    ],
    "love": [
        "Express your feelings to those who matter to you",
        "Practice loving-kindness meditation",
        "Write a gratitude letter to someone special",
    ],
    "disgust": [
        "Identify what specifically bothers you and why",
        "Consider if this feeling is protecting you from something harmful",
        "Practice acceptance of things you cannot change",
    ],
    "envy": [
        "Focus on your own achievements and progress",
        "Practice gratitude for what you have",
        "Use this feeling as motivation to work toward your goals",
    ],
    "guilt": [
        "Acknowledge your mistake and learn from it",
        "Make amends if possible and appropriate",
        "Practice self-forgiveness and focus on future actions",
    ],
    "shame": [
        "Remember that you are not defined by your mistakes",
        "Talk to a trusted friend or counselor",
        "Practice self-compassion and challenge negative self-talk",
    ],
    "pride": [
        "Celebrate your accomplishment mindfully",
        "Share your success with supportive people",
        "Use this confidence to tackle new challenges",
    ],
    "lonely": [
        "Reach out to a friend or family member",
        "Consider joining a community group or activity",
        "Practice self-compassion and remember this feeling is temporary",
    ],
    "hopeful": [
        "Channel this optimism into concrete action plans",
        "Share your hopes with others who support you",
        "Write down your goals and next steps",
    ],
    "grateful": [
        "Write down three specific things you're grateful for",
        "Express thanks to someone who has helped you",
        "Practice gratitude meditation",
    ],
    "confused": [
        "Break down the situation into smaller parts",
        "Write down what you know vs. what you don't know",
        "Seek clarity from trusted sources or advisors",
    ],
    "disappointed": [
        "Allow yourself to feel this emotion fully",
        "Identify what you can learn from this experience",
        "Focus on what you can control moving forward",
    ],
    "jealous": [
        "Examine the root cause of your jealousy",
        "Focus on your own unique strengths and path",
        "Practice gratitude for your relationships and achievements",
    ],
    "embarrassed": [
        "Remember that everyone makes mistakes",
        "Focus on what you can learn from this experience",
        "Practice self-compassion and move forward",
    ],
    "bored": [
        "Try a new activity or hobby",
        "Set a small, achievable goal for today",
        "Reach out to someone you haven't talked to in a while",
    ],
    "nostalgic": [
        "Appreciate the good memories while staying present",
        "Consider what from the past you can bring into your current life",
        "Share a fond memory with someone who was part of it",
    ],
    "overwhelmed": [
        "List your tasks and prioritize the most important ones",
        "Take breaks and practice deep breathing",
        "Ask for help or delegate if possible",
    ],
}


def higher_risk(risk_a: str, risk_b: str) -> RiskLevel:
    """Return the stricter of two risk levels. Unknown levels count as low."""
    value_a = RISK_ORDER.get(risk_a, 0)
    value_b = RISK_ORDER.get(risk_b, 0)
    if value_a > value_b:
        return risk_a  # type: ignore[return-value]
    return risk_b if risk_b in RISK_ORDER else "low"  # type: ignore[return-value]


def detect_triggers(text: str) -> tuple[list[str], RiskLevel]:
    """Scan text for concerning phrases and assess the risk level."""
    lower_text = (text or "").lower()
    found: list[str] = []
    risk: RiskLevel = "low"

    for category, words in TRIGGER_WORDS.items():
        for word in words:
            if word not in lower_text:
                continue
            found.append(word)
            if category in HIGH_RISK_CATEGORIES:
                risk = "high"
            elif category in MEDIUM_RISK_CATEGORIES and risk != "high":
                risk = "medium"

    if found:
        logger.warning(f"⚠️  Trigger phrases detected (risk={risk}): {found}")

    return found, risk


def score_moods(text: str) -> dict[str, float]:
    """Score every mood in EMOTION_PATTERNS against the text."""
    lower_text = text.lower()
    scores: dict[str, float] = {mood: 0 for mood in EMOTION_PATTERNS}
    boosts: dict[str, float] = {mood: 0 for mood in EMOTION_PATTERNS}

    for mood, patterns in EMOTION_PATTERNS.items():
        for pattern in patterns:
            index = lower_text.find(pattern)
            if index == -1:
                continue

            weight = max(len(pattern.split(" ")), 1)
            scores[mood] += weight

            window = lower_text[max(0, index - 50): index + len(pattern) + 50]

            for intensifier in INTENSIFIERS:
                if intensifier in window:
                    boosts[mood] += 2

            for negator in NEGATORS:
                if f"{negator} {pattern}" in window or f"{negator}t {pattern}" in window:
                    scores[mood] = max(0, scores[mood] - weight)

    for mood in scores:
        scores[mood] += boosts[mood]

    return scores


def analyze_sentiment_basic(text: str) -> MoodType:
    """Pick the highest scoring mood, or calm when nothing matches."""
    scores = score_moods(text)
    best_mood: MoodType = "calm"
    best_score = 0.0

    for mood, score in scores.items():
        if score > best_score:
            best_mood, best_score = mood, score  # type: ignore[assignment]

    matched = {m: s for m, s in scores.items() if s > 0}
    logger.debug(f"Keyword scores: {matched}")
    return best_mood


def get_basic_suggestions(mood: str) -> list[str]:
    """Canned coping suggestions for a mood."""
    return list(BASIC_SUGGESTIONS.get(mood, BASIC_SUGGESTIONS["calm"]))


def get_mood_explanation(mood: str, analysis: AnalysisResult | None = None) -> str:
    """Human-readable summary of an analysis."""
    if analysis is None:
        return f"I detected a {mood} mood from your writing."

    explanation = f"I detected {mood} as your primary emotion"

    if analysis.complexity == "complex":
        explanation += " along with several other complex emotions"
    elif analysis.complexity == "mixed":
        explanation += " mixed with other feelings"

    top_emotions = [
        label
        for label, score in sorted(analysis.emotions.items(), key=lambda item: item[1], reverse=True)
        if score > 0.3
    ][:3]

    if len(top_emotions) > 1:
        explanation += f". I also sense {', '.join(top_emotions[1:])}"

    explanation += f". Confidence: {int(analysis.confidence * 100 + 0.5)}%"

    if analysis.risk_level == "high":
        explanation += " ⚠️ I noticed some concerning language. Please consider reaching out for support."
    elif analysis.risk_level == "medium":
        explanation += " 💙 I sense you might be going through a difficult time."

    return explanation
