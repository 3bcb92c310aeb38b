"""Plan handler: POST /api/plan."""
import uuid
from typing import Dict

from aiohttp import web
import structlog

from apps.plan_service.schemas import INVALID_REQUEST_CODE, PlanError, to_payload
from apps.plan_service.services.planner import plan_from_request
from apps.plan_service.utils.error_handler import ErrorHandler

logger = structlog.get_logger()

NO_STORE_HEADERS: Dict[str, str] = {"Cache-Control": "no-store"}


async def plan_handler(request: web.Request) -> web.Response:
    """
    Turn a merchant's free-text edit into a plan.

    Body:
        {"text": "increase hoodie prices by 10%", "locale": "en"}

    Returns:
        JSON plan / clarify (200), invalid request (400) or failure (500)
    """
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    try:
        payload = await request.json()
    except ValueError as e:
        logger.warning(
            "plan_request_not_json",
            request_id=request_id,
            error_type=ErrorHandler.classify_planning_error(e),
            error=str(e),
        )
        response = PlanError(
            code=INVALID_REQUEST_CODE,
            message=f"body: Request body is not valid JSON ({e})",
        )
    else:
        response = plan_from_request(payload, request_id=request_id)

    status = ErrorHandler.get_status_for_response(response)
    return web.json_response(
        to_payload(response),
        status=status,
        headers={**NO_STORE_HEADERS, "X-Request-ID": request_id},
    )
