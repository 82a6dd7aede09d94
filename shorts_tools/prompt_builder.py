"""Prompt builders for the four studio tools.

Each builder is a pure function: the same input always yields an equal
``PromptSpec``. Callers must reject empty or whitespace-only input first;
the builders embed whatever they are given verbatim.
"""

from dataclasses import dataclass

from shorts_tools.schemas import (
    OUTLINE_RESULT_SCHEMA,
    SEO_RESULT_SCHEMA,
    THUMBNAIL_ANALYSIS_SCHEMA,
    TITLE_ANALYSIS_SCHEMA,
    TREND_JACK_SCHEMA,
)


@dataclass(frozen=True)
class PromptSpec:
    """Instruction text plus the response schema for one operation."""
    operation: str
    instruction: str
    schema: dict


TITLE_PROMPT = """\
Act as a world-class YouTube Shorts algorithm expert and viral strategist (like MrBeast's producer).
Analyze the following video title: "{title}".

Provide a strict JSON response with:
1. A viral score (0-100).
2. A 1-sentence critique.
3. 5 Viral alternative titles targeting 1 Million+ views. For each, specify the "hookType" (Curiosity, Urgency, Relatability, etc.) and "predictedViews" (e.g. "1.2M").

The goal is High CTR and Instant Appeal.
"""

THUMBNAIL_PROMPT = """\
You are a YouTube Thumbnail expert. Analyze this image for a Shorts thumbnail.
Focus on:
1. Focal point clarity (Is it obvious on a small screen?).
2. Color contrast and saturation.
3. Emotional expression/hook.

Provide a JSON response scoring it and giving actionable advice to reach 1M views.
"""

SEO_PROMPT = """\
Act as a top-tier SEO tool (like VidIQ or TubeBuddy) for YouTube Shorts.
The video topic is: "{topic}".

Generate a JSON response with:
1. A perfect SEO-optimized Title.
2. A compelling, keyword-rich Description (first 2 lines crucial).
3. 15 highly relevant Tags (comma separated).
4. 5 trending Hashtags.
5. 5 Keyword phrases with estimated Search Volume (High/Med) and Competition (Low/Med/High).
6. Specific advice for this niche to go viral.
7. 3 Related trending video topic ideas that capitalize on the keywords identified, with a brief reason.
"""

OUTLINE_PROMPT = """\
Act as a professional YouTube Shorts scriptwriter.
Create a viral 60-second video outline for the topic: "{topic}".

Provide a JSON response with:
1. A catchy Title.
2. The strong visual/audio Hook (0-3s).
3. A list of sections (timestamp, narration/script, visual description).
4. A strong Call to Action (CTA).
5. Estimated total duration.
"""

TREND_PROMPT = """\
Act as a viral trend analyst.
The current trend is: "{trend}".

Provide a JSON response with:
1. Analysis of why it's trending.
2. A viral potential score (0-100).
3. 5 unique video ideas (Trend Jacking) for different niches (e.g., Gaming, Tech, Lifestyle, Cooking, Education) applying this trend.
"""


def build_title_prompt(title: str) -> PromptSpec:
    return PromptSpec("title", TITLE_PROMPT.format(title=title), TITLE_ANALYSIS_SCHEMA)


def build_thumbnail_prompt() -> PromptSpec:
    """Thumbnail instruction. The image itself travels as a separate part."""
    return PromptSpec("thumbnail", THUMBNAIL_PROMPT, THUMBNAIL_ANALYSIS_SCHEMA)


def build_seo_prompt(topic: str) -> PromptSpec:
    return PromptSpec("seo", SEO_PROMPT.format(topic=topic), SEO_RESULT_SCHEMA)


def build_outline_prompt(topic: str) -> PromptSpec:
    return PromptSpec("outline", OUTLINE_PROMPT.format(topic=topic), OUTLINE_RESULT_SCHEMA)


def build_trend_prompt(trend: str) -> PromptSpec:
    return PromptSpec("trend", TREND_PROMPT.format(trend=trend), TREND_JACK_SCHEMA)
