"""Per-tool controllers: idle -> loading -> success | error.

Each controller owns one input, one in-flight request at most, and the
result or classified error of its latest request. Controllers share nothing,
so the shell can keep one instance per tool.

Usage:
    gateway = ContentGateway(GeminiClient())
    optimizer = TitleOptimizer(gateway)
    optimizer.set_input("I made a giant cake")
    await optimizer.submit()
    if optimizer.state is ViewState.SUCCESS:
        print(optimizer.result.score)
"""

import asyncio
import logging
from enum import Enum
from typing import Optional, Union

from shorts_tools.messages import ErrorKind, classify_exception, user_message
from shorts_tools.schemas import ImagePayload, SeoBundle
from shorts_tools.validator import clean_text_input, parse_image_payload

logger = logging.getLogger(__name__)


class ViewState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class ToolController:
    """Shared state machine for the studio tools.

    Subclasses set ``tool`` and implement ``_dispatch``.
    """

    tool = ""

    def __init__(self, gateway):
        """Initialize with a shared ContentGateway instance.

        Args:
            gateway: ContentGateway (or any object with the same async operations)
        """
        self.gateway = gateway
        self.state = ViewState.IDLE
        self.input = ""
        self.result = None
        self.error_kind: Optional[ErrorKind] = None
        self.error_message = ""
        # Bumped on every submit/reset; a reply for an older id is stale
        self._request_id = 0
        # True until the gateway call settles, even after a reset made it stale
        self._in_flight = False

    # -- input ---------------------------------------------------------------

    def set_input(self, value: str):
        """Store new input. Editing after a result or error returns to idle."""
        self.input = value
        if self.state in (ViewState.SUCCESS, ViewState.ERROR):
            self._clear_outcome()
            self.state = ViewState.IDLE

    @property
    def busy(self) -> bool:
        """A gateway call is outstanding (possibly already discarded)."""
        return self._in_flight or self.state is ViewState.LOADING

    def can_submit(self) -> bool:
        return not self.busy and clean_text_input(self.input) is not None

    # -- transitions ---------------------------------------------------------

    async def submit(self) -> ViewState:
        """Run the tool on the current input.

        No-op when the input is missing or a request is already in flight.
        """
        if not self.can_submit():
            return self.state

        self._request_id += 1
        request_id = self._request_id
        self._clear_outcome()
        self.state = ViewState.LOADING
        self._in_flight = True

        try:
            result = await self._dispatch()
        except Exception as e:
            if request_id != self._request_id:
                logger.info("%s: discarding stale failure", self.tool)
                return self.state
            kind = classify_exception(e)
            self.error_kind = kind
            self.error_message = user_message(kind, self.tool, str(e))
            self.state = ViewState.ERROR
            logger.exception("%s request failed (%s)", self.tool, kind.value)
            return self.state
        finally:
            self._in_flight = False

        if request_id != self._request_id:
            logger.info("%s: discarding stale result", self.tool)
            return self.state

        self.result = result
        self.state = ViewState.SUCCESS
        return self.state

    async def retry(self) -> ViewState:
        """Re-submit the unchanged input after an error."""
        if self.state is not ViewState.ERROR:
            return self.state
        return await self.submit()

    def reset(self):
        """Back to idle with no input. An in-flight reply will be ignored."""
        self._request_id += 1
        self.input = ""
        self._clear_outcome()
        self.state = ViewState.IDLE

    # -- presentation --------------------------------------------------------

    def snapshot(self) -> dict:
        """JSON-ready view of the controller."""
        error = None
        if self.state is ViewState.ERROR:
            error = {"kind": self.error_kind.value, "message": self.error_message}
        return {
            "tool": self.tool,
            "state": self.state.value,
            "input": self._input_snapshot(),
            "result": self.result.to_dict() if self.result is not None else None,
            "error": error,
        }

    def _input_snapshot(self):
        return self.input

    def _clear_outcome(self):
        self.result = None
        self.error_kind = None
        self.error_message = ""

    async def _dispatch(self):
        raise NotImplementedError


class TitleOptimizer(ToolController):
    tool = "title"

    async def _dispatch(self):
        return await self.gateway.analyze_title(clean_text_input(self.input))

    def suggestion_titles(self) -> list[str]:
        """Exact suggestion titles, in order, for copying."""
        if self.result is None:
            return []
        return [s.title for s in self.result.viral_suggestions]


class ThumbnailRater(ToolController):
    tool = "thumbnail"

    def __init__(self, gateway):
        super().__init__(gateway)
        self.input: Optional[ImagePayload] = None

    def select_image(self, image: Union[str, ImagePayload]):
        """Select a thumbnail (base64, data-URI allowed) and return to idle.

        Raises:
            InvalidImageError: The payload is not a readable PNG/JPEG/WEBP image.
        """
        payload = parse_image_payload(image)
        self._request_id += 1
        self.input = payload
        self._clear_outcome()
        self.state = ViewState.IDLE

    def clear_image(self):
        self.reset()

    def set_input(self, value):
        self.select_image(value)

    def reset(self):
        super().reset()
        self.input = None

    def can_submit(self) -> bool:
        return not self.busy and self.input is not None

    async def _dispatch(self):
        return await self.gateway.analyze_thumbnail(self.input)

    def _input_snapshot(self):
        if self.input is None:
            return None
        return {"mime_type": self.input.mime_type}


class SeoGenerator(ToolController):
    """SEO metadata and script outline, fetched together.

    Both calls run concurrently; the submission succeeds only if both do.
    """

    tool = "seo"

    async def _dispatch(self):
        topic = clean_text_input(self.input)
        seo, outline = await asyncio.gather(
            self.gateway.generate_seo(topic),
            self.gateway.generate_outline(topic),
        )
        return SeoBundle(seo=seo, outline=outline)

    def use_related_topic(self, topic: str):
        """Load a suggested related topic as the next input."""
        self.set_input(topic)

    def script_text(self) -> str:
        if self.result is None:
            return ""
        return self.result.outline.script_text()

    def copy_texts(self) -> dict:
        """Copy-ready strings for each copyable field of the result."""
        if self.result is None:
            return {}
        seo = self.result.seo
        return {
            "title": seo.video_title,
            "description": seo.description,
            "tags": ",".join(seo.tags),
            "hashtags": " ".join(seo.hashtags),
            "script": self.script_text(),
        }

    def snapshot(self) -> dict:
        snapshot = super().snapshot()
        snapshot["script_text"] = self.script_text()
        snapshot["copy"] = self.copy_texts()
        return snapshot


class TrendAnalyzer(ToolController):
    tool = "trend"

    async def _dispatch(self):
        return await self.gateway.suggest_trend_jacks(clean_text_input(self.input))


CONTROLLERS = {
    TitleOptimizer.tool: TitleOptimizer,
    ThumbnailRater.tool: ThumbnailRater,
    SeoGenerator.tool: SeoGenerator,
    TrendAnalyzer.tool: TrendAnalyzer,
}


def build_controllers(gateway) -> dict:
    """One controller per tool, all sharing the same gateway."""
    return {name: cls(gateway) for name, cls in CONTROLLERS.items()}
