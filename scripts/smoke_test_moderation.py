import argparse
import asyncio
import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.config import settings
from src.pipeline.decision import decide_status
from src.pipeline.moderation import ReviewModerationClient


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Smoke test for the Gemini review moderation call.")
    parser.add_argument("text", nargs="+", help="Review text to classify.")
    parser.add_argument(
        "--model",
        default=None,
        help=f"Gemini model to call (default: {settings.gemini_model}).",
    )
    return parser.parse_args()


async def _run() -> None:
    args = _parse_args()
    if not settings.gemini_api_key:
        raise RuntimeError("GEMINI_API_KEY is empty. Set it in .env first.")

    client = ReviewModerationClient(model_name=args.model)
    outcome = await client.classify(" ".join(args.text))
    if outcome.defaulted:
        raise RuntimeError(f"Moderation fell back to defaults: {outcome.reason}")

    result = outcome.result
    print(f"Used model: {client.model_name}")
    print(f"Result: {json.dumps(result.model_dump(), ensure_ascii=False)}")
    print(f"Status: {decide_status(result.safety_score, result.action).value}")
    print("Moderation test: OK")


if __name__ == "__main__":
    asyncio.run(_run())
