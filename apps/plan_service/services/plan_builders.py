"""Per-family plan builders.

Each builder receives the normalized merchant text and returns either a full
``PlanSuccess`` or a ``PlanClarify``. Builders never return half a plan: a
missing parameter always ends in a clarification.
"""
import re
from typing import Dict, List, Optional, Union

from apps.plan_service.schemas import (
    OP_SPEC_ADAPTER,
    ClarifyIssue,
    ClarifyOption,
    PlanClarify,
    PlanDraft,
    PlanSuccess,
)
from apps.plan_service.services.extractors import TextExtractor
from apps.plan_service.services.filter_builder import build_filter_spec
from apps.plan_service.services.vocabulary import (
    COMPARE_AT,
    CONSUMED_FRAGMENTS,
    INVENTORY_DECREASE,
    INVENTORY_INCREASE,
    PRICE_DECREASE,
    PRICE_INCREASE,
    PRICE_NOUN,
    PRICE_SET,
    TAG_REMOVE,
    TAG_REPLACE,
)

BuilderResult = Union[PlanSuccess, PlanClarify]

CLARIFY_MESSAGE_KEYS: Dict[str, str] = {
    "plan.missingAmount": "plan.clarify.missingAmount",
    "plan.missingTagValues": "plan.clarify.missingTags",
    "inventory.requireLocation": "plan.clarify.requireLocation",
    "plan.unsupported": "plan.clarify.unsupportedStatus",
    "plan.unrecognized": "plan.clarify.unrecognized",
}

PRICE_INCREASE_RE = re.compile(PRICE_INCREASE, re.IGNORECASE)
PRICE_DECREASE_RE = re.compile(PRICE_DECREASE, re.IGNORECASE)
PRICE_SET_RE = re.compile(PRICE_SET, re.IGNORECASE)
PRICE_NOUN_RE = re.compile(PRICE_NOUN, re.IGNORECASE)
COMPARE_AT_RE = re.compile(COMPARE_AT, re.IGNORECASE)
TAG_REPLACE_RE = re.compile(TAG_REPLACE, re.IGNORECASE)
TAG_REMOVE_RE = re.compile(TAG_REMOVE, re.IGNORECASE)
INVENTORY_INCREASE_RE = re.compile(INVENTORY_INCREASE, re.IGNORECASE)
INVENTORY_DECREASE_RE = re.compile(INVENTORY_DECREASE, re.IGNORECASE)

TAG_SUMMARY_KEYS = {
    "add": "plan.summary.tagsAdd",
    "remove": "plan.summary.tagsRemove",
    "replace": "plan.summary.tagsReplace",
}


def clarify_issue(code: str, options: Optional[List[ClarifyOption]] = None) -> ClarifyIssue:
    """Build a clarify issue with its standard message key."""
    return ClarifyIssue(code=code, message_key=CLARIFY_MESSAGE_KEYS[code], options=options)


def build_price_plan(text: str) -> BuilderResult:
    """
    Build a price (or compare-at price) plan.

    Direction words pick the sign; a percentage selects ``inc_percent``,
    otherwise an amount selects ``inc_value``. "set"/"change" together with
    "price" sets the literal amount.
    """
    operation = "compare_at" if COMPARE_AT_RE.search(text) else "price"
    summary_prefix = "compareAt" if operation == "compare_at" else "price"

    mode: Optional[str] = None
    value: Optional[float] = None
    summary_suffix: Optional[str] = None

    if PRICE_INCREASE_RE.search(text):
        direction, label = 1, "Increase"
    elif PRICE_DECREASE_RE.search(text):
        direction, label = -1, "Decrease"
    else:
        direction, label = 0, None

    if direction:
        percent = TextExtractor.extract_percentage(text)
        if percent is not None:
            mode = "inc_percent"
            value = direction * abs(percent)
            summary_suffix = f"{label}Percent"
        else:
            amount = TextExtractor.extract_currency_amount(text)
            if amount is not None:
                mode = "inc_value"
                value = direction * abs(amount)
                summary_suffix = f"{label}Value"
    elif PRICE_SET_RE.search(text) and PRICE_NOUN_RE.search(text):
        amount = TextExtractor.extract_currency_amount(text)
        if amount is not None:
            mode = "set"
            value = amount
            summary_suffix = "Set"

    if mode is None or value is None:
        return PlanClarify(issues=[clarify_issue("plan.missingAmount")])

    params = {"mode": mode, "value": value}
    consumed = list(CONSUMED_FRAGMENTS["price"])
    if mode != "inc_percent":
        currency = TextExtractor.extract_currency_code(text)
        if currency:
            params["currency"] = currency
            consumed.append(currency)

    op_spec = OP_SPEC_ADAPTER.validate_python(
        {"operation": operation, "scope": "product", "params": params}
    )
    return PlanSuccess(
        op_spec=op_spec,
        filter_spec=build_filter_spec(text, consumed),
        confidence="medium",
        summary_key=f"plan.summary.{summary_prefix}{summary_suffix}",
    )


def build_tags_plan(text: str) -> BuilderResult:
    """Build an add/remove/replace tags plan."""
    tags = TextExtractor.parse_tags(text)
    if not tags:
        return PlanClarify(issues=[clarify_issue("plan.missingTagValues")])

    if TAG_REPLACE_RE.search(text):
        mode = "replace"
    elif TAG_REMOVE_RE.search(text):
        mode = "remove"
    else:
        mode = "add"

    op_spec = OP_SPEC_ADAPTER.validate_python(
        {"operation": "tags", "scope": "product", "params": {"mode": mode, "values": tags}}
    )
    # Unquoted tags are plain words in the text; keep them out of the filter.
    consumed = [*CONSUMED_FRAGMENTS["tags"], *tags]
    return PlanSuccess(
        op_spec=op_spec,
        filter_spec=build_filter_spec(text, consumed),
        confidence="medium",
        summary_key=TAG_SUMMARY_KEYS[mode],
    )


def build_inventory_plan(text: str) -> BuilderResult:
    """
    Build an inventory plan.

    Inventory changes are only planned when both a quantity and a location are
    known. Otherwise every missing piece is reported in one clarification,
    with a low-confidence draft when a quantity was found.
    """
    number = TextExtractor.extract_integer(text)
    location = TextExtractor.detect_location(text)

    mode = "set"
    if INVENTORY_INCREASE_RE.search(text):
        mode = "inc"
    if INVENTORY_DECREASE_RE.search(text):
        mode = "dec"

    consumed = list(CONSUMED_FRAGMENTS["inventory"])
    if location:
        consumed.append(location)
    filter_spec = build_filter_spec(text, consumed)

    op_spec = None
    if number is not None:
        op_spec = OP_SPEC_ADAPTER.validate_python(
            {
                "operation": "inventory",
                "scope": "variant",
                "params": {"mode": mode, "value": abs(number), "locationId": location},
            }
        )

    issues: List[ClarifyIssue] = []
    if number is None:
        issues.append(clarify_issue("plan.missingAmount"))
    if not location:
        issues.append(clarify_issue("inventory.requireLocation"))

    if issues:
        draft = None
        if op_spec is not None:
            draft = PlanDraft(op_spec=op_spec, filter_spec=filter_spec, confidence="low")
        return PlanClarify(issues=issues, draft=draft)

    return PlanSuccess(
        op_spec=op_spec,
        filter_spec=filter_spec,
        confidence="medium",
        summary_key="plan.summary.inventoryAdjust",
    )


def build_status_plan(text: str) -> BuilderResult:
    """Build a publish/unpublish/archive plan."""
    status = TextExtractor.derive_status(text)
    if not status:
        return PlanClarify(issues=[clarify_issue("plan.unsupported")])

    op_spec = OP_SPEC_ADAPTER.validate_python(
        {"operation": "status", "scope": "product", "params": {"status": status}}
    )
    return PlanSuccess(
        op_spec=op_spec,
        filter_spec=build_filter_spec(text, CONSUMED_FRAGMENTS["status"]),
        confidence="medium",
        summary_key="plan.summary.statusChange",
    )
