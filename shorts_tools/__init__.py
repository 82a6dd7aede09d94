"""ViralShorts Studio tools: title optimizer, thumbnail rater, SEO generator, trend analyzer.

Every tool sends one prompt (two for SEO) to Gemini and renders the
structured JSON it returns. Layers, leaf-first:
  schemas         - result entities and Gemini response schemas
  prompt_builder  - pure (instruction, schema) builders per operation
  validator       - input gating and response schema checks
  gateway         - ContentGateway, one async call per operation
  messages        - error kind -> user-facing message
  controllers     - per-tool idle/loading/success/error state machines
"""

from shorts_tools.schemas import (
    TitleAnalysis,
    ThumbnailAnalysis,
    SEOResult,
    OutlineResult,
    TrendJackResult,
    SeoBundle,
    ImagePayload,
)
from shorts_tools.prompt_builder import (
    PromptSpec,
    build_title_prompt,
    build_thumbnail_prompt,
    build_seo_prompt,
    build_outline_prompt,
    build_trend_prompt,
)
from shorts_tools.validator import (
    InvalidImageError,
    clean_text_input,
    parse_image_payload,
    load_image_file,
    validate_against_schema,
)
from shorts_tools.gateway import ContentGateway
from shorts_tools.messages import ErrorKind, classify_exception, user_message
from shorts_tools.controllers import (
    ViewState,
    ToolController,
    TitleOptimizer,
    ThumbnailRater,
    SeoGenerator,
    TrendAnalyzer,
    build_controllers,
)

__all__ = [
    "TitleAnalysis",
    "ThumbnailAnalysis",
    "SEOResult",
    "OutlineResult",
    "TrendJackResult",
    "SeoBundle",
    "ImagePayload",
    "PromptSpec",
    "build_title_prompt",
    "build_thumbnail_prompt",
    "build_seo_prompt",
    "build_outline_prompt",
    "build_trend_prompt",
    "InvalidImageError",
    "clean_text_input",
    "parse_image_payload",
    "load_image_file",
    "validate_against_schema",
    "ContentGateway",
    "ErrorKind",
    "classify_exception",
    "user_message",
    "ViewState",
    "ToolController",
    "TitleOptimizer",
    "ThumbnailRater",
    "SeoGenerator",
    "TrendAnalyzer",
    "build_controllers",
]
