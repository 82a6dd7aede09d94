"""Configuration for the ViralShorts Studio tools.

Model settings, validation bounds, and the tool catalog shown on the
navigation hub. Secrets are read from the environment (see ``load_settings``).
"""

import os
from dataclasses import dataclass
from typing import Optional

# ---------------------------------------------------------------------------
# Gemini API
# ---------------------------------------------------------------------------
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash"

# ---------------------------------------------------------------------------
# Validation bounds
# ---------------------------------------------------------------------------
SCORE_MIN = 0
SCORE_MAX = 100

# Image formats Gemini accepts inline, keyed by Pillow format name
SUPPORTED_IMAGE_FORMATS = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
    "WEBP": "image/webp",
}

# ---------------------------------------------------------------------------
# Tool catalog (navigation hub)
# ---------------------------------------------------------------------------
TOOLS = {
    "title": {
        "name": "Viral Title Optimizer",
        "description": (
            "Turn boring titles into 1M+ view magnets. Get scores, emotional "
            "hooks, and MrBeast-style variations instantly."
        ),
        "input": "title",
    },
    "thumbnail": {
        "name": "Thumbnail Rater",
        "description": (
            "Upload your thumbnail. Get AI feedback on colors, faces, and "
            "composition to maximize your Click-Through Rate (CTR)."
        ),
        "input": "image",
    },
    "seo": {
        "name": "Full Stack SEO",
        "description": (
            "Generate VidIQ-grade tags, descriptions, and hashtags. Uncover "
            "low-competition keywords for your niche."
        ),
        "input": "topic",
    },
    "trend": {
        "name": "Trend Jacking Analyst",
        "description": (
            "Input a current trend (e.g. 'Skibidi Toilet'). Get specific video "
            "ideas for your niche to ride the viral wave."
        ),
        "input": "trend",
    },
}


@dataclass
class Settings:
    """Process-wide settings, read once at startup."""
    api_key: Optional[str]
    model: str = DEFAULT_MODEL
    base_url: str = GEMINI_BASE_URL
    timeout_seconds: Optional[float] = None
    host: str = "127.0.0.1"
    port: int = 5000


def load_settings(environ: Optional[dict] = None) -> Settings:
    """Build Settings from environment variables.

    Call ``dotenv.load_dotenv()`` first if the values live in a .env file.
    ``GEMINI_TIMEOUT_SECONDS`` is optional; without it no timeout is applied.
    """
    env = os.environ if environ is None else environ

    timeout = env.get("GEMINI_TIMEOUT_SECONDS")
    return Settings(
        api_key=env.get("GEMINI_API_KEY") or env.get("API_KEY"),
        model=env.get("GEMINI_MODEL") or DEFAULT_MODEL,
        base_url=env.get("GEMINI_BASE_URL") or GEMINI_BASE_URL,
        timeout_seconds=float(timeout) if timeout else None,
        host=env.get("STUDIO_HOST", "127.0.0.1"),
        port=int(env.get("STUDIO_PORT", "5000")),
    )
