"""Tests for the run_studio command-line entry point."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from PIL import Image

from clients.gemini_client import GeminiRateLimitError
from run_studio import build_parser, format_result, run
from shorts_tools.gateway import ContentGateway


TREND_REPLY = {
    "trend": "Skibidi Toilet",
    "viralPotential": 90,
    "whyItIsTrending": "Serialized absurdism",
    "ideas": [{"niche": "Gaming", "concept": "Skibidi speedrun", "hook": "Flush in 3"}],
}

THUMBNAIL_REPLY = {
    "score": 55,
    "strengths": ["Contrast"],
    "weaknesses": ["No face"],
    "colorPaletteSuggestion": ["#FFB800", "#0A0F1A"],
    "emotionalImpact": "Neutral",
    "improvements": "Add a face",
}


def _gateway(reply):
    gemini = MagicMock()
    gemini.generate_json_text = AsyncMock()
    if isinstance(reply, Exception):
        gemini.generate_json_text.side_effect = reply
    else:
        gemini.generate_json_text.return_value = json.dumps(reply)
    return ContentGateway(gemini), gemini


def _run(argv, gateway=None) -> int:
    return asyncio.run(run(build_parser().parse_args(argv), gateway=gateway))


class TestRun:
    def test_tools(self, capsys):
        assert _run(["tools"]) == 0
        out = capsys.readouterr().out
        assert "Viral Title Optimizer" in out
        assert "Trend Jacking Analyst" in out

    def test_trend_text_output(self, capsys):
        gateway, _ = _gateway(TREND_REPLY)
        assert _run(["trend", "Skibidi Toilet"], gateway) == 0
        out = capsys.readouterr().out
        assert "Trend: Skibidi Toilet (viral potential 90)" in out
        assert "[Gaming] Skibidi speedrun" in out

    def test_json_output(self, capsys):
        gateway, _ = _gateway(TREND_REPLY)
        assert _run(["--json", "trend", "Skibidi Toilet"], gateway) == 0
        assert json.loads(capsys.readouterr().out) == TREND_REPLY

    def test_blank_input(self, capsys):
        gateway, gemini = _gateway(TREND_REPLY)
        assert _run(["trend", "   "], gateway) == 2
        assert "input is empty" in capsys.readouterr().out
        gemini.generate_json_text.assert_not_awaited()

    def test_error_message(self, capsys):
        gateway, _ = _gateway(GeminiRateLimitError("429 RESOURCE_EXHAUSTED: quota", 429))
        assert _run(["title", "cake"], gateway) == 1
        assert capsys.readouterr().out.strip() == (
            "Error: Rate limit exceeded. Please wait a moment before retrying."
        )

    def test_thumbnail_file(self, tmp_path, capsys):
        path = tmp_path / "thumb.jpg"
        Image.new("RGB", (64, 36)).save(path, format="JPEG")
        gateway, gemini = _gateway(THUMBNAIL_REPLY)

        assert _run(["thumbnail", str(path)], gateway) == 0

        assert gemini.generate_json_text.await_args.kwargs["image"]["mime_type"] == "image/jpeg"
        out = capsys.readouterr().out
        assert "CTR score: 55" in out
        assert "Palette: #FFB800, #0A0F1A" in out

    def test_thumbnail_missing_file(self, tmp_path, capsys):
        gateway, gemini = _gateway(THUMBNAIL_REPLY)
        assert _run(["thumbnail", str(tmp_path / "missing.png")], gateway) == 2
        assert capsys.readouterr().out.startswith("Error:")
        gemini.generate_json_text.assert_not_awaited()

    def test_thumbnail_not_an_image(self, tmp_path, capsys):
        path = tmp_path / "notes.png"
        path.write_text("not an image")
        gateway, _ = _gateway(THUMBNAIL_REPLY)
        assert _run(["thumbnail", str(path)], gateway) == 2


class TestParser:
    def test_tool_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_flags(self):
        args = build_parser().parse_args(["--json", "--model", "gemini-2.0-flash", "seo", "cats"])
        assert args.json is True
        assert args.model == "gemini-2.0-flash"
        assert args.tool == "seo"
        assert args.text == "cats"


class TestFormatResult:
    def test_title(self):
        result = {
            "score": 42,
            "critique": "flat",
            "viralSuggestions": [
                {"title": "I Baked a Car-Sized Cake", "predictedViews": "2M",
                 "hookType": "Curiosity", "whyItWorks": "Scale"},
            ],
        }
        text = format_result("title", result)
        assert "Viral score: 42" in text
        assert "1. I Baked a Car-Sized Cake  [Curiosity, 2M]" in text

    def test_seo_appends_script(self):
        result = {
            "seo": {
                "videoTitle": "T", "description": "D", "tags": ["a", "b"], "hashtags": ["#a"],
                "keywords": [{"keyword": "k", "volume": "High", "competition": "Low"}],
                "nicheAdvice": "N", "relatedTopics": [{"topic": "R", "reason": "why"}],
            },
            "outline": {},
        }
        text = format_result("seo", result, script_text="Title: T")
        assert "Tags: a,b" in text
        assert "k (volume: High, competition: Low)" in text
        assert text.endswith("Title: T")
