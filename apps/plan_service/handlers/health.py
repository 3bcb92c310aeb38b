"""Health check handler."""
from aiohttp import web
from typing import Dict, Any


async def health_handler(request: web.Request) -> web.Response:
    """
    Health check endpoint.

    The planner has no backing services, so being able to answer is healthy.

    Returns:
        JSON response with health status
    """
    health_status: Dict[str, Any] = {
        "status": "ok",
        "service": "plan_service"
    }
    return web.json_response(health_status, headers={"Cache-Control": "no-store"})
