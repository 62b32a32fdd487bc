"""Tests for the OpenAI-backed reasoning step."""
import json

import httpx
import openai
import pytest

from conftest import fake_client, openai_request
from skill_agent import reasoning
from skill_agent.reasoning import ReasoningUnavailable, build_system_prompt, parse_reply, reason
from skill_agent.skills.loader import load_skills

PREFIXES = ("obsidian-cli", "obsidian://")


@pytest.fixture
def catalog(skills_dir):
    return load_skills(skills_dir, prefixes=PREFIXES)


class TestParseReply:
    def test_parses_expected_shape(self):
        reply = json.dumps(
            {"skillName": "obsidian", "command": 'obsidian-cli search "x"', "rationale": "because"}
        )
        result = parse_reply(reply)
        assert result.skill_name == "obsidian"
        assert result.command == 'obsidian-cli search "x"'
        assert result.rationale == "because"
        assert result.source == "reasoning"

    def test_accepts_equivalent_key_names(self):
        reply = json.dumps({"skill_name": "obsidian", "command": "obsidian-cli x", "reasoning": "why"})
        result = parse_reply(reply)
        assert (result.skill_name, result.rationale) == ("obsidian", "why")

    def test_strips_code_fence(self):
        reply = '```json\n{"skillName": "obsidian", "command": "obsidian-cli x"}\n```'
        result = parse_reply(reply)
        assert result.command == "obsidian-cli x"
        assert result.rationale == ""

    @pytest.mark.parametrize(
        "reply",
        [
            "",
            "not json",
            "[1, 2]",
            '"a string"',
            '{"command": "obsidian-cli x"}',
            '{"skillName": "obsidian"}',
            '{"skillName": "obsidian", "command": ""}',
            '{"skillName": 3, "command": "obsidian-cli x"}',
        ],
    )
    def test_unusable_replies_raise(self, reply):
        with pytest.raises(ReasoningUnavailable):
            parse_reply(reply)


class TestReason:
    def test_returns_model_choice(self, catalog):
        client = fake_client(
            json.dumps({"skillName": "obsidian", "command": "obsidian-cli print-default", "rationale": "r"})
        )
        result = reason("where is my vault?", catalog, client=client, model="test-model")
        assert result.command == "obsidian-cli print-default"

        (call,) = client.chat.completions.calls
        assert call["model"] == "test-model"
        assert call["response_format"] == {"type": "json_object"}
        system, user = call["messages"]
        assert system["role"] == "system"
        assert "**obsidian**: Notes" in system["content"]
        assert user == {"role": "user", "content": "where is my vault?"}

    def test_system_prompt_lists_at_most_three_commands(self, catalog):
        prompt = build_system_prompt(catalog)
        assert "obsidian-cli print-default --path-only" in prompt
        assert "obsidian://open?vault=Main" not in prompt

    def test_http_500_raises_unavailable(self, catalog):
        response = httpx.Response(500, request=openai_request(), text='{"error": "boom"}')
        error = openai.InternalServerError("boom", response=response, body={"error": "boom"})
        with pytest.raises(ReasoningUnavailable, match="500"):
            reason("x", catalog, client=fake_client(error=error))

    def test_timeout_raises_unavailable(self, catalog):
        error = openai.APITimeoutError(request=openai_request())
        with pytest.raises(ReasoningUnavailable):
            reason("x", catalog, client=fake_client(error=error))

    def test_connection_error_raises_unavailable(self, catalog):
        error = openai.APIConnectionError(request=openai_request())
        with pytest.raises(ReasoningUnavailable):
            reason("x", catalog, client=fake_client(error=error))

    def test_no_choices_raises_unavailable(self, catalog):
        client = fake_client("{}")
        client.chat.completions.create = lambda **kwargs: type("R", (), {"choices": []})()
        with pytest.raises(ReasoningUnavailable):
            reason("x", catalog, client=client)

    def test_missing_api_key_raises_without_client(self, catalog, monkeypatch):
        monkeypatch.setattr(reasoning, "OPENAI_API_KEY", None)
        with pytest.raises(ReasoningUnavailable, match="OPENAI_API_KEY"):
            reason("x", catalog)
