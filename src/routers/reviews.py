import json
import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.errors import InvalidWebhookSecretError, MissingFieldsError, StorageError
from src.services.review_service import ReviewIntakeService, build_review_intake_service

LOGGER = logging.getLogger("review_intake")

WEBHOOK_SECRET_HEADER = "x-webhook-secret"

router = APIRouter(prefix="/api", tags=["Reviews"])


@lru_cache
def get_review_intake_service() -> ReviewIntakeService:
    return build_review_intake_service()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _read_payload(request: Request) -> object:
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}


@router.post("/addReview")
async def add_review(
    request: Request,
    service: ReviewIntakeService = Depends(get_review_intake_service),
) -> JSONResponse:
    try:
        payload = await _read_payload(request)
        result = await service.submit(payload, webhook_secret=request.headers.get(WEBHOOK_SECRET_HEADER))
    except MissingFieldsError:
        return _error(status.HTTP_400_BAD_REQUEST, "Missing required fields")
    except InvalidWebhookSecretError:
        return _error(status.HTTP_401_UNAUTHORIZED, "Invalid webhook secret")
    except StorageError as exc:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
    except Exception as exc:
        LOGGER.exception("Unexpected error while handling review submission")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or "Internal error")

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "ok": True,
            "message": "Review received successfully.",
            "status": result.status.value,
        },
    )


@router.api_route("/addReview", methods=["GET", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"], include_in_schema=False)
async def add_review_method_not_allowed() -> JSONResponse:
    return _error(status.HTTP_405_METHOD_NOT_ALLOWED, "Method not allowed")
