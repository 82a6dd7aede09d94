"""ViralShorts Studio web server.

Run with: python studio_server.py
Serves the navigation hub and one JSON endpoint per tool. Posting the same
body again after an error is the retry action.
"""

import os
import asyncio
import logging

from flask import Flask, request, jsonify
from dotenv import load_dotenv

from clients.gemini_client import GeminiClient
from shorts_tools.config import TOOLS, load_settings
from shorts_tools.controllers import build_controllers
from shorts_tools.gateway import ContentGateway
from shorts_tools.validator import InvalidImageError

logger = logging.getLogger(__name__)

# Request body field holding each tool's input
INPUT_FIELDS = {name: spec["input"] for name, spec in TOOLS.items()}


def run_async(coro):
    """Run async function in sync context."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def create_app(gateway=None, settings=None) -> Flask:
    """Build the Flask app.

    Args:
        gateway: ContentGateway to share across tools (built from settings if omitted)
        settings: shorts_tools.config.Settings (read from the environment if omitted)
    """
    settings = settings or load_settings()
    if gateway is None:
        gemini = GeminiClient(
            api_key=settings.api_key,
            model=settings.model,
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
        )
        gateway = ContentGateway(gemini)

    app = Flask(__name__)
    controllers = build_controllers(gateway)
    app.config["CONTROLLERS"] = controllers

    @app.route("/", methods=["GET"])
    def hub():
        """Navigation hub: the four tools."""
        return jsonify({
            "app": "ViralShorts",
            "tools": [
                {"id": name, "name": spec["name"], "description": spec["description"], "route": f"/{name}"}
                for name, spec in TOOLS.items()
            ],
        })

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok", "api_key_configured": bool(settings.api_key)})

    @app.route("/<tool>", methods=["GET"])
    def show_tool(tool: str):
        controller = controllers.get(tool)
        if controller is None:
            return jsonify({"error": f"Unknown tool: {tool}"}), 404
        return jsonify(controller.snapshot())

    @app.route("/<tool>", methods=["POST"])
    def run_tool(tool: str):
        controller = controllers.get(tool)
        if controller is None:
            return jsonify({"error": f"Unknown tool: {tool}"}), 404

        body = request.get_json(silent=True) or {}
        value = body.get(INPUT_FIELDS[tool])
        if not isinstance(value, str):
            value = ""

        try:
            controller.set_input(value)
        except InvalidImageError as e:
            controller.reset()
            snapshot = controller.snapshot()
            snapshot["error"] = {"kind": "invalid_input", "message": str(e)}
            return jsonify(snapshot), 400

        if not controller.can_submit():
            status = 409 if controller.busy else 400
            return jsonify(controller.snapshot()), status

        run_async(controller.submit())
        return jsonify(controller.snapshot())

    @app.route("/<tool>/retry", methods=["POST"])
    def retry_tool(tool: str):
        controller = controllers.get(tool)
        if controller is None:
            return jsonify({"error": f"Unknown tool: {tool}"}), 404
        run_async(controller.retry())
        return jsonify(controller.snapshot())

    @app.route("/<tool>/reset", methods=["POST"])
    def reset_tool(tool: str):
        controller = controllers.get(tool)
        if controller is None:
            return jsonify({"error": f"Unknown tool: {tool}"}), 404
        controller.reset()
        return jsonify(controller.snapshot())

    return app


if __name__ == "__main__":
    load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), ".env"))
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    settings = load_settings()
    app = create_app(settings=settings)

    print(f"Starting ViralShorts Studio on http://{settings.host}:{settings.port}")
    print("\nEndpoints:")
    print("  GET  /                - Navigation hub")
    print("  GET  /health          - Health check")
    print("  POST /title           - {\"title\": ...}")
    print("  POST /thumbnail       - {\"image\": <base64 or data URI>}")
    print("  POST /seo             - {\"topic\": ...}")
    print("  POST /trend           - {\"trend\": ...}")
    print("  POST /<tool>/retry    - Retry after an error")
    print("  POST /<tool>/reset    - Clear input and result")
    if not settings.api_key:
        print("\nWARNING: GEMINI_API_KEY not set - every request will fail as unauthorized")
    app.run(host=settings.host, port=settings.port, threaded=False)
