"""
Run a ViralShorts Studio tool from the command line.

Usage:
    python run_studio.py tools
    python run_studio.py title "I made a giant cake"
    python run_studio.py thumbnail thumb.png
    python run_studio.py seo "budget meal prep"
    python run_studio.py --json trend "Skibidi Toilet"
"""

import os
import sys
import json
import asyncio
import argparse
import logging

from clients.gemini_client import GeminiClient
from shorts_tools.config import TOOLS, load_settings
from shorts_tools.controllers import ViewState, build_controllers
from shorts_tools.gateway import ContentGateway
from shorts_tools.validator import InvalidImageError, load_image_file


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="ViralShorts Studio - Shorts title, thumbnail, SEO and trend tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--json", action="store_true", help="Print the raw result JSON")
    parser.add_argument("--model", help="Gemini model override")

    sub = parser.add_subparsers(dest="tool", required=True)
    sub.add_parser("tools", help="List the available tools")
    sub.add_parser("title", help=TOOLS["title"]["name"]).add_argument("text")
    sub.add_parser("thumbnail", help=TOOLS["thumbnail"]["name"]).add_argument("path")
    sub.add_parser("seo", help=TOOLS["seo"]["name"]).add_argument("text")
    sub.add_parser("trend", help=TOOLS["trend"]["name"]).add_argument("text")
    return parser


def format_tools() -> str:
    lines = ["ViralShorts Studio", ""]
    for name, spec in TOOLS.items():
        lines.append(f"  {name:<10} {spec['name']}")
        lines.append(f"  {'':<10} {spec['description']}")
    return "\n".join(lines)


def format_result(tool: str, result: dict, script_text: str = "") -> str:
    """Human-readable rendering of a tool result."""
    lines = []
    if tool == "title":
        lines.append(f"Viral score: {result['score']}")
        lines.append(f"Critique: {result['critique']}")
        lines.append("")
        lines.append("Viral variations (target: 1M+ views):")
        for i, s in enumerate(result["viralSuggestions"], 1):
            lines.append(f"  {i}. {s['title']}  [{s['hookType']}, {s['predictedViews']}]")
            lines.append(f"     {s['whyItWorks']}")
    elif tool == "thumbnail":
        lines.append(f"CTR score: {result['score']}")
        lines.append(f"Emotional impact: {result['emotionalImpact']}")
        lines.append("Strengths:")
        lines.extend(f"  + {s}" for s in result["strengths"])
        lines.append("Weaknesses:")
        lines.extend(f"  - {w}" for w in result["weaknesses"])
        lines.append(f"Palette: {', '.join(result['colorPaletteSuggestion'])}")
        lines.append(f"Improvements: {result['improvements']}")
    elif tool == "seo":
        seo = result["seo"]
        lines.append(f"Title: {seo['videoTitle']}")
        lines.append("")
        lines.append(seo["description"])
        lines.append("")
        lines.append(f"Tags: {','.join(seo['tags'])}")
        lines.append(f"Hashtags: {' '.join(seo['hashtags'])}")
        lines.append("Keywords:")
        for k in seo["keywords"]:
            lines.append(f"  {k['keyword']} (volume: {k['volume']}, competition: {k['competition']})")
        lines.append(f"Niche advice: {seo['nicheAdvice']}")
        lines.append("Related topics:")
        for t in seo["relatedTopics"]:
            lines.append(f"  {t['topic']} - {t['reason']}")
        lines.append("")
        lines.append(script_text)
    elif tool == "trend":
        lines.append(f"Trend: {result['trend']} (viral potential {result['viralPotential']})")
        lines.append(result["whyItIsTrending"])
        lines.append("")
        for idea in result["ideas"]:
            lines.append(f"  [{idea['niche']}] {idea['concept']}")
            lines.append(f"     Hook: {idea['hook']}")
    return "\n".join(lines)


async def run(args, gateway=None) -> int:
    """Run one tool and print its result. Returns the exit status."""
    if args.tool == "tools":
        print(format_tools())
        return 0

    if gateway is None:
        settings = load_settings()
        gemini = GeminiClient(
            api_key=settings.api_key,
            model=args.model or settings.model,
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
        )
        gateway = ContentGateway(gemini)

    controller = build_controllers(gateway)[args.tool]

    if args.tool == "thumbnail":
        try:
            controller.select_image(load_image_file(args.path))
        except (FileNotFoundError, InvalidImageError) as e:
            print(f"Error: {e}")
            return 2
    else:
        controller.set_input(args.text)
        if not controller.can_submit():
            print("Error: input is empty")
            return 2

    await controller.submit()
    snapshot = controller.snapshot()

    if controller.state is ViewState.ERROR:
        print(f"Error: {controller.error_message}")
        return 1

    if args.json:
        print(json.dumps(snapshot["result"], indent=2))
    else:
        print(format_result(args.tool, snapshot["result"], snapshot.get("script_text", "")))
    return 0


async def main():
    args = build_parser().parse_args()
    sys.exit(await run(args))


if __name__ == "__main__":
    from dotenv import load_dotenv
    load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), ".env"))
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    asyncio.run(main())
