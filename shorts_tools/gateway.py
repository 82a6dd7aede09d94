"""Content gateway: one Gemini call per studio operation.

Every operation follows the same path:
    prompt builder -> GeminiClient.generate_json_text -> json.loads
    -> validate_against_schema -> entity.from_dict

Usage:
    gateway = ContentGateway(GeminiClient(api_key))
    analysis = await gateway.analyze_title("I made a giant cake")
"""

import json
import logging
from typing import Optional, Union

from clients.gemini_client import GeminiEmptyResponseError, GeminiMalformedResponseError
from shorts_tools.prompt_builder import (
    PromptSpec,
    build_outline_prompt,
    build_seo_prompt,
    build_thumbnail_prompt,
    build_title_prompt,
    build_trend_prompt,
)
from shorts_tools.schemas import (
    ImagePayload,
    OutlineResult,
    SEOResult,
    ThumbnailAnalysis,
    TitleAnalysis,
    TrendJackResult,
)
from shorts_tools.validator import parse_image_payload, validate_against_schema

logger = logging.getLogger(__name__)


def parse_json_text(text: str):
    """Parse a JSON reply, tolerating a markdown fence around it.

    Raises:
        GeminiMalformedResponseError: The text is not JSON.
    """
    clean = text.strip()
    if clean.startswith("```"):
        clean = clean.split("\n", 1)[1] if "\n" in clean else ""
        if clean.rstrip().endswith("```"):
            clean = clean.rstrip()[:-3]

    try:
        return json.loads(clean)
    except json.JSONDecodeError as e:
        raise GeminiMalformedResponseError(f"Gemini returned invalid JSON: {e}") from e


class ContentGateway:
    """Typed request/response contract between the tools and Gemini."""

    def __init__(self, gemini_client, model: Optional[str] = None):
        """Initialize with an existing GeminiClient instance.

        Args:
            gemini_client: Anything with an async ``generate_json_text`` method.
            model: Optional model override for every call.
        """
        self.gemini = gemini_client
        self.model = model

    async def analyze_title(self, title: str) -> TitleAnalysis:
        return await self._run(build_title_prompt(title), TitleAnalysis)

    async def analyze_thumbnail(self, image: Union[str, ImagePayload]) -> ThumbnailAnalysis:
        """Rate a thumbnail. ``image`` may be a payload or base64 with a data-URI header."""
        if not isinstance(image, ImagePayload):
            image = parse_image_payload(image)
        return await self._run(build_thumbnail_prompt(), ThumbnailAnalysis, image=image)

    async def generate_seo(self, topic: str) -> SEOResult:
        return await self._run(build_seo_prompt(topic), SEOResult)

    async def generate_outline(self, topic: str) -> OutlineResult:
        return await self._run(build_outline_prompt(topic), OutlineResult)

    async def suggest_trend_jacks(self, trend: str) -> TrendJackResult:
        return await self._run(build_trend_prompt(trend), TrendJackResult)

    async def _run(self, spec: PromptSpec, entity_cls, image: Optional[ImagePayload] = None):
        kwargs = {}
        if image is not None:
            kwargs["image"] = image.to_part()
        if self.model:
            kwargs["model"] = self.model

        text = await self.gemini.generate_json_text(spec.instruction, spec.schema, **kwargs)
        if not text or not text.strip():
            raise GeminiEmptyResponseError()

        data = parse_json_text(text)
        issues = validate_against_schema(data, spec.schema)
        if issues:
            logger.warning("%s reply failed schema check: %s", spec.operation, "; ".join(issues))
            raise GeminiMalformedResponseError(
                f"Gemini reply for {spec.operation} does not match the schema: {issues[0]}"
            )

        return entity_cls.from_dict(data)
