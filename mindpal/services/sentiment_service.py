"""
Journal analysis: local safety screening plus AI mood reading with keyword fallback.
"""

import logging
from typing import Any

from mindpal.models.schemas import AnalysisResult
from mindpal.services.bedrock_service import BedrockService
from mindpal.services.sentiment_analysis import (
    ALL_MOODS,
    analyze_sentiment_basic,
    detect_triggers,
    get_basic_suggestions,
    higher_risk,
    score_moods,
)

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 5
FALLBACK_CONFIDENCE = 0.6


class SentimentService:
    """Analyse journal text, never failing the caller."""

    def __init__(self, analyzer: BedrockService | None = None) -> None:
        self.analyzer = analyzer or BedrockService()

    async def analyze(self, text: str) -> AnalysisResult:
        """
        Analyse a journal entry.

        The local trigger scan always runs, so risky language is reported even
        when the AI call fails. AI results are merged with the local triggers
        and the stricter risk level wins.
        """
        local_triggers, local_risk = detect_triggers(text or "")

        if not text or len(text.strip()) < MIN_TEXT_LENGTH:
            return AnalysisResult(mood="calm", confidence=0)

        ai_result: dict[str, Any] | None = None
        try:
            ai_result = await self.analyzer.analyze_journal_entry(text)
        except Exception as e:
            logger.error(f"❌ AI analysis failed: {e}")

        if ai_result and ai_result.get("mood") in ALL_MOODS:
            return self._merge_ai_result(ai_result, local_triggers, local_risk)

        logger.info("⚠️  Falling back to keyword analysis")
        return self._keyword_result(text, local_triggers, local_risk)

    def _merge_ai_result(
        self, ai_result: dict[str, Any], local_triggers: list[str], local_risk: str
    ) -> AnalysisResult:
        mood = ai_result["mood"]

        raw_confidence = ai_result.get("confidence")
        # bool is an int subclass
        if (
            isinstance(raw_confidence, bool)
            or not isinstance(raw_confidence, (int, float))
            or not raw_confidence
        ):
            raw_confidence = 0.7
        confidence = min(max(float(raw_confidence), 0.3), 1.0)

        ai_triggers = [t for t in ai_result.get("triggers") or [] if isinstance(t, str)]
        triggers = list(dict.fromkeys([*local_triggers, *ai_triggers]))

        return AnalysisResult(
            mood=mood,
            confidence=confidence,
            triggers=triggers,
            emotions={mood: confidence},
            complexity="simple",
            risk_level=higher_risk(str(ai_result.get("riskLevel") or "low"), local_risk),
            suggestions=[s for s in ai_result.get("suggestions") or [] if isinstance(s, str)],
            explanation=ai_result.get("explanation") or f"Detected {mood} mood",
        )

    def _keyword_result(
        self, text: str, local_triggers: list[str], local_risk: str
    ) -> AnalysisResult:
        mood = analyze_sentiment_basic(text)

        scores = {m: s for m, s in score_moods(text).items() if s > 0}
        top = max(scores.values(), default=0)
        emotions = {m: round(s / top, 2) for m, s in scores.items()} if top else {mood: FALLBACK_CONFIDENCE}

        if len(scores) >= 3:
            complexity = "complex"
        elif len(scores) == 2:
            complexity = "mixed"
        else:
            complexity = "simple"

        return AnalysisResult(
            mood=mood,
            confidence=FALLBACK_CONFIDENCE,
            triggers=local_triggers,
            emotions=emotions,
            complexity=complexity,
            risk_level=local_risk,
            suggestions=get_basic_suggestions(mood),
            explanation=f"Detected {mood} mood from your writing",
        )
