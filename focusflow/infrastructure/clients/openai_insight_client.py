from __future__ import annotations

import logging

from openai import OpenAI

from focusflow.application.ports.insight_port import InsightGeneratorPort
from focusflow.domain.entities.analytics import ActivitySummary
from focusflow.domain.exceptions import InsightGenerationError


logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a productivity coach analyzing a user's focus session data from the past 7 days.
Provide personalized, actionable insights in a supportive and encouraging tone.
Format your response in Markdown with these sections:
- ## Overview (brief summary of their week)
- ## Strengths (what they're doing well)
- ## Opportunities to Improve (constructive feedback)
- ## Recommendations (3-5 specific, actionable tips)

Be specific and reference their actual data. Keep the response concise but valuable."""

FALLBACK_INSIGHT = "Unable to generate insight"


def build_user_prompt(summary: ActivitySummary) -> str:
    modes = "\n".join(f"- {mode}: {count} sessions" for mode, count in summary.mode_breakdown.items())
    days = "\n".join(
        f"- {day}: {stats.work_minutes} minutes, {stats.sessions} sessions"
        for day, stats in summary.daily_stats.items()
    )
    return f"""Here's my productivity data for the past 7 days:

Total Work Time: {summary.total_work_minutes} minutes
Total Break Time: {summary.total_break_minutes} minutes
Total Focus Sessions: {summary.total_sessions}
Focus Score: {summary.focus_score}%
Average Session Length: {summary.average_session_length} minutes

Focus Modes Used:
{modes}

Daily Breakdown:
{days}

Please analyze my productivity patterns and provide personalized insights."""


class OpenAiInsightClient(InsightGeneratorPort):
    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout_seconds: float,
        max_tokens: int = 1000,
        temperature: float = 0.7,
    ):
        self._client = OpenAI(api_key=api_key, timeout=timeout_seconds)
        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature

    def generate_insight(self, *, summary: ActivitySummary) -> str:
        try:
            completion = self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_user_prompt(summary)},
                ],
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            )
        except Exception as exc:  # pragma: no cover - external API
            logger.error("openai_insight_client: completion_failed model=%s error=%s", self._model, exc)
            raise InsightGenerationError("Failed to generate insight.") from exc

        content = None
        if completion.choices:
            content = completion.choices[0].message.content
        return content or FALLBACK_INSIGHT
