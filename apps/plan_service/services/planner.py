"""Text-to-command planner: routes merchant text to a family builder."""
import re
from typing import Any, Callable, Dict, Optional, Union

import structlog
from pydantic import ValidationError

from apps.plan_service.schemas import (
    FAILED_CODE,
    INVALID_REQUEST_CODE,
    ClarifyOption,
    PlanClarify,
    PlanError,
    PlanRequest,
    PlanSuccess,
    validate_plan_response,
)
from apps.plan_service.services.extractors import TextExtractor
from apps.plan_service.services.plan_builders import (
    BuilderResult,
    build_inventory_plan,
    build_price_plan,
    build_status_plan,
    build_tags_plan,
    clarify_issue,
)
from apps.plan_service.services.vocabulary import FAMILIES, FAMILY_TRIGGERS
from apps.plan_service.utils.error_handler import ErrorHandler, PlanInvariantError
from apps.plan_service.utils.logger_utils import log_event, sanitize_for_logging

logger = structlog.get_logger()

PlanResult = Union[PlanSuccess, PlanClarify, PlanError]

FAMILY_TRIGGER_RES = tuple(
    (family, re.compile(pattern, re.IGNORECASE)) for family, pattern in FAMILY_TRIGGERS
)

FAMILY_BUILDERS: Dict[str, Callable[[str], BuilderResult]] = {
    "price": build_price_plan,
    "tags": build_tags_plan,
    "inventory": build_inventory_plan,
    "status": build_status_plan,
}

FAMILY_OPTIONS = [
    ClarifyOption(value=family, label_key=f"plan.family.{family}") for family in FAMILIES
]


def detect_family(text: str) -> Optional[str]:
    """
    Detect the operation family of a request.

    Args:
        text: Merchant text

    Returns:
        'price', 'tags', 'inventory', 'status' or None. Families are tried in
        priority order and the first match wins.
    """
    for family, pattern in FAMILY_TRIGGER_RES:
        if pattern.search(text):
            return family
    return None


def _revalidate(response: Any, family: Optional[str]) -> PlanResult:
    try:
        return validate_plan_response(response)
    except ValidationError as e:
        raise PlanInvariantError(
            f"{family or 'dispatcher'} builder produced an invalid response: {e}"
        ) from e


def plan(request: PlanRequest) -> PlanResult:
    """
    Plan a single request. Pure: no I/O and no state between calls.

    Args:
        request: Validated planning request

    Returns:
        PlanSuccess or PlanClarify

    Raises:
        PlanInvariantError: If a builder produced output outside the schema
    """
    text = TextExtractor.normalize(request.text)
    family = detect_family(text)

    if family is None:
        response: Any = PlanClarify(
            issues=[clarify_issue("plan.unrecognized", options=FAMILY_OPTIONS)]
        )
    else:
        try:
            response = FAMILY_BUILDERS[family](text)
        except ValidationError as e:
            raise PlanInvariantError(f"{family} builder produced an invalid value: {e}") from e

    return _revalidate(response, family)


def plan_from_request(payload: Any, request_id: Optional[str] = None) -> PlanResult:
    """
    Plan from a raw request payload.

    This is the boundary operation used by the HTTP handler and the CLI.

    Args:
        payload: PlanRequest or a mapping shaped like ``{"text": ..., "locale": ...}``
        request_id: Optional request ID for log correlation

    Returns:
        - PlanSuccess / PlanClarify for any well-formed request
        - PlanError ``plan.invalid_request`` when the payload has the wrong shape
        - PlanError ``plan.failed`` when planning raised
    """
    if isinstance(payload, PlanRequest):
        request = payload
    else:
        try:
            request = PlanRequest.model_validate(payload)
        except ValidationError as e:
            message = ErrorHandler.format_validation_error(e)
            log_event(
                "plan_request_invalid",
                request_id=request_id,
                level="warning",
                detail=message,
            )
            return PlanError(code=INVALID_REQUEST_CODE, message=message)

    log_event(
        "plan_request_received",
        request_id=request_id,
        locale=request.locale,
        text=request.text,
        text_length=len(request.text),
    )

    try:
        response = plan(request)
    except Exception as e:
        logger.error(
            "plan_failed",
            request_id=request_id,
            error_type=ErrorHandler.classify_planning_error(e),
            error=str(e),
            text=sanitize_for_logging(request.text),
        )
        return PlanError(code=FAILED_CODE, message=str(e) or type(e).__name__)

    if isinstance(response, PlanSuccess):
        log_event(
            "plan_built",
            request_id=request_id,
            locale=request.locale,
            operation=response.op_spec.operation,
            confidence=response.confidence,
            summary_key=response.summary_key,
        )
    elif isinstance(response, PlanClarify):
        log_event(
            "plan_needs_clarification",
            request_id=request_id,
            locale=request.locale,
            issues=[issue.code for issue in response.issues],
            has_draft=response.draft is not None,
        )

    return response
