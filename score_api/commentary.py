# score_api/commentary.py
from __future__ import annotations

import logging
from typing import Optional, Protocol

from google import genai
from google.genai import types

from score_api.config import COMMENTARY_ENABLED, GEMINI_API_KEY, GEMINI_MODEL_NAME
from score_api.models import MatchState, Phase

logger = logging.getLogger(__name__)

NO_KEY_MESSAGE = "Configure API Key for AI commentary."
FAILURE_FALLBACK = "Live updates proceeding..."
EMPTY_FALLBACK = "Update from the middle!"

SYSTEM_PROMPT = "You are an exciting cricket commentator writing for a live ticker."


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> str: ...


class GeminiClient:
    """
    Thin wrapper around the Gemini client.

    Usage:
        client = GeminiClient(api_key="...")
        text = client.generate("Say hello")
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: str = GEMINI_MODEL_NAME,
        system_prompt: str = SYSTEM_PROMPT,
    ) -> None:
        self.model_name = model_name
        self.system_prompt = system_prompt.strip()
        # Prefer explicit key; otherwise let the SDK read GEMINI_API_KEY/GOOGLE_API_KEY.
        if api_key:
            self.client = genai.Client(api_key=api_key)
        else:
            self.client = genai.Client()

    def generate(self, prompt: str, max_tokens: int = 120, temperature: float = 0.8) -> str:
        config = types.GenerateContentConfig(
            system_instruction=self.system_prompt,
            max_output_tokens=max_tokens,
            temperature=temperature,
        )
        response = self.client.models.generate_content(
            model=self.model_name,
            contents=prompt,
            config=config,
        )
        return (getattr(response, "text", None) or "").strip()


def build_match_summary(state: MatchState, team_a_name: str, team_b_name: str) -> str:
    a, b = state.score_a, state.score_b
    if state.phase in (Phase.SECOND_INNINGS, Phase.COMPLETE) or b.balls > 0:
        chase = f"Chasing {state.target}"
    else:
        chase = "1st Innings"
    return (
        f"Match: {team_a_name} vs {team_b_name}\n"
        f"Status: {state.status.value}\n"
        f"{team_a_name} Score: {a.runs}/{a.wickets} ({a.overs} overs)\n"
        f"{team_b_name} Score: {b.runs}/{b.wickets} ({b.overs} overs)\n"
        f"Target (if 2nd innings): {chase}"
    )


def build_commentary_prompt(state: MatchState, team_a_name: str, team_b_name: str) -> str:
    return (
        "Generate a short, punchy 2-sentence summary of the current match situation "
        "for the live ticker. Focus on the tension, run rate, or wickets.\n"
        f"Match Data:\n{build_match_summary(state, team_a_name, team_b_name)}"
    )


def generate_commentary(
    state: MatchState,
    team_a_name: str,
    team_b_name: str,
    client: Optional[TextGenerator] = None,
) -> str:
    """
    Best-effort ticker text. Never raises and never touches `state`.
    """
    if client is None:
        if not COMMENTARY_ENABLED or not GEMINI_API_KEY:
            return NO_KEY_MESSAGE
        try:
            client = GeminiClient(api_key=GEMINI_API_KEY)
        except Exception:
            logger.exception("Could not create Gemini client")
            return FAILURE_FALLBACK

    prompt = build_commentary_prompt(state, team_a_name, team_b_name)
    try:
        text = client.generate(prompt)
    except Exception:
        logger.exception("Commentary generation failed for match %s", state.id)
        return FAILURE_FALLBACK

    return text or EMPTY_FALLBACK
