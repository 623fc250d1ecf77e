import argparse
import asyncio
import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.config import settings
from src.database import close_mongo_connection, connect_to_mongo
from src.services.review_service import build_review_intake_service


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run one review submission through the intake pipeline without API server.")
    parser.add_argument("business_id", help="Business identifier.")
    parser.add_argument("reviewer_name", help="Reviewer display name.")
    parser.add_argument("phone", help="Reviewer phone number.")
    parser.add_argument("content", nargs="+", help="Review text.")
    return parser.parse_args()


async def _run() -> None:
    args = _parse_args()
    payload = {
        "business_id": args.business_id,
        "reviewer_name": args.reviewer_name,
        "phone": args.phone,
        "content": " ".join(args.content),
    }

    await connect_to_mongo()
    try:
        service = build_review_intake_service()
        result = await service.submit(payload, webhook_secret=settings.webhook_secret or None)
    finally:
        await close_mongo_connection()

    print(json.dumps({"ok": True, "status": result.status.value}, ensure_ascii=False))


if __name__ == "__main__":
    asyncio.run(_run())
