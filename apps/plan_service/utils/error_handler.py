"""Error types and classification for the planning service."""
import json
from typing import Dict, Union

import structlog
from pydantic import ValidationError

from apps.plan_service.schemas import (
    FAILED_CODE,
    INVALID_REQUEST_CODE,
    PlanClarify,
    PlanError,
    PlanSuccess,
)

logger = structlog.get_logger()

ERROR_STATUS_CODES: Dict[str, int] = {
    INVALID_REQUEST_CODE: 400,
    FAILED_CODE: 500,
}


class PlanningError(Exception):
    """Base class for planner failures that are not the merchant's fault."""


class PlanInvariantError(PlanningError):
    """A builder produced a response that does not fit the plan schema."""


class ErrorHandler:
    """Utility class for classifying planner errors and mapping them to HTTP."""

    @staticmethod
    def classify_planning_error(exception: Exception) -> str:
        """
        Classify a planning error.

        Args:
            exception: Exception object

        Returns:
            'invariant', 'invalid_request', 'invalid_json' or 'unknown'
        """
        if isinstance(exception, PlanInvariantError):
            return "invariant"
        if isinstance(exception, ValidationError):
            return "invalid_request"
        if isinstance(exception, json.JSONDecodeError):
            return "invalid_json"
        return "unknown"

    @staticmethod
    def format_validation_error(exception: ValidationError) -> str:
        """
        Render a pydantic validation error as a single line.

        Examples:
            - "text: String should have at least 1 character"
            - "body: Input should be a valid dictionary or instance of PlanRequest"
        """
        parts = []
        for error in exception.errors():
            location = ".".join(str(part) for part in error.get("loc", ())) or "body"
            parts.append(f"{location}: {error.get('msg', 'invalid value')}")
        return "; ".join(parts)

    @staticmethod
    def get_status_for_response(response: Union[PlanSuccess, PlanClarify, PlanError]) -> int:
        """
        Get HTTP status for a plan response.

        Plans and clarifications are both successful answers; only errors map
        to 4xx/5xx. Unknown error codes are treated as server errors.
        """
        if not isinstance(response, PlanError):
            return 200
        status = ERROR_STATUS_CODES.get(response.code)
        if status is None:
            logger.warning("unknown_error_code", code=response.code)
            return 500
        return status
