from __future__ import annotations

from score_api import commentary
from score_api.commentary import (
    EMPTY_FALLBACK,
    FAILURE_FALLBACK,
    NO_KEY_MESSAGE,
    build_match_summary,
    generate_commentary,
)


class StubClient:
    def __init__(self, reply: str = "", error: Exception = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


def test_summary_first_innings(live_match):
    live_match.score_a.runs = 42
    live_match.score_a.wickets = 2
    live_match.score_a.balls = 31
    text = build_match_summary(live_match, "Lions", "Tigers")
    assert "Lions Score: 42/2 (5.1 overs)" in text
    assert "1st Innings" in text


def test_summary_chase(live_match):
    live_match.score_a.runs = 149
    live_match.score_b.balls = 3
    assert "Chasing 150" in build_match_summary(live_match, "Lions", "Tigers")


def test_reply_passed_through(live_match):
    client = StubClient(reply="What a shot!")
    before = live_match.to_dict()
    assert generate_commentary(live_match, "Lions", "Tigers", client=client) == "What a shot!"
    assert "Lions vs Tigers" in client.prompts[0]
    assert live_match.to_dict() == before


def test_failure_swallowed(live_match):
    client = StubClient(error=RuntimeError("quota exceeded"))
    assert generate_commentary(live_match, "Lions", "Tigers", client=client) == FAILURE_FALLBACK


def test_empty_reply(live_match):
    assert generate_commentary(live_match, "Lions", "Tigers", client=StubClient(reply="")) == EMPTY_FALLBACK


def test_no_key(live_match, monkeypatch):
    monkeypatch.setattr(commentary, "GEMINI_API_KEY", "")
    assert generate_commentary(live_match, "Lions", "Tigers") == NO_KEY_MESSAGE
