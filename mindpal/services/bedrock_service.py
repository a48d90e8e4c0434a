"""
AWS Bedrock service for AI-powered journal analysis.
"""

import json
import logging
import re
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from mindpal.core.config import settings

logger = logging.getLogger(__name__)


class BedrockService:
    """Service for analysing journal entries using Claude on AWS Bedrock."""

    def __init__(self) -> None:
        """Initialize Bedrock client."""
        session_kwargs = {"region_name": settings.aws_region}

        if settings.aws_access_key_id and settings.aws_secret_access_key:
            session_kwargs.update(
                {
                    "aws_access_key_id": settings.aws_access_key_id,
                    "aws_secret_access_key": settings.aws_secret_access_key,
                }
            )

        self.bedrock_runtime = boto3.client("bedrock-runtime", **session_kwargs)

    async def analyze_journal_entry(self, text: str) -> dict[str, Any] | None:
        """
        Ask Claude for a structured reading of a journal entry.

        Returns the parsed JSON object, or None if the call or parsing fails.
        """
        try:
            response = self.bedrock_runtime.invoke_model(
                modelId=settings.bedrock_model_id,
                body=json.dumps(
                    {
                        "anthropic_version": "bedrock-2023-05-31",
                        "max_tokens": 500,
                        "temperature": 0.2,
                        "system": self._build_system_prompt(),
                        "messages": [{"role": "user", "content": self._build_user_prompt(text)}],
                    }
                ),
            )

            response_body = json.loads(response["body"].read())
            content = response_body["content"][0]["text"]

            try:
                analysis = json.loads(content)
            except json.JSONDecodeError as e:
                logger.warning(f"⚠️  JSON parse error: {e}, stripping control characters")
                # Remove actual control characters (ASCII 0-31 except tab/newline/return)
                analysis = json.loads(re.sub(r"[\x00-\x08\x0B\x0C\x0E-\x1F]", "", content))

            if not isinstance(analysis, dict) or not analysis.get("mood"):
                logger.warning("⚠️  Bedrock analysis missing mood")
                return None

            logger.info(f"✅ Bedrock analysis: {analysis['mood']}")
            return analysis

        except (BotoCoreError, ClientError, json.JSONDecodeError, KeyError, IndexError) as e:
            logger.error(f"❌ Error analysing journal entry: {e}")
            return None

    def _build_system_prompt(self) -> str:
        """Build the system prompt for Claude."""
        return """You are a gentle mental-wellness companion reading a private journal entry.

Respond ONLY with valid JSON (no markdown):
{
  "mood": "happy|sad|angry|anxious|excited|calm|frustrated|overwhelmed",
  "confidence": <number 0-1>,
  "suggestions": ["<suggestion 1>", "<suggestion 2>", "<suggestion 3>"],
  "explanation": "<brief analysis of the emotion>",
  "riskLevel": "low|medium|high",
  "triggers": ["<concerning words if any>"]
}

Risk level:
- high: any mention of suicide or self-harm
- medium: hopelessness, trauma, substance misuse
- low: everything else

Suggestions are short, kind and doable today."""

    def _build_user_prompt(self, text: str) -> str:
        """Build the user prompt with the entry text."""
        escaped = text.replace('"', '\\"')
        return f'Analyze this journal entry.\n\nText: "{escaped}"'
