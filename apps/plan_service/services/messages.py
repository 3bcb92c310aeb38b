"""Message catalog for rendering plan responses to merchants.

The planner only returns message and summary keys; this module turns them
into text for a locale. Unknown locales fall back to English and unknown keys
render as the key itself.
"""
from typing import Any, Dict, List, Optional, Union

from apps.plan_service.schemas import (
    FAILED_CODE,
    INVALID_REQUEST_CODE,
    PlanClarify,
    PlanError,
    PlanSuccess,
)

FALLBACK_LOCALE = "en"

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "plan.summary.priceIncreasePercent": "Increase prices by {value}%",
        "plan.summary.priceDecreasePercent": "Decrease prices by {value}%",
        "plan.summary.priceIncreaseValue": "Increase prices by {value}",
        "plan.summary.priceDecreaseValue": "Decrease prices by {value}",
        "plan.summary.priceSet": "Set prices to {value}",
        "plan.summary.compareAtIncreasePercent": "Increase compare-at prices by {value}%",
        "plan.summary.compareAtDecreasePercent": "Decrease compare-at prices by {value}%",
        "plan.summary.compareAtIncreaseValue": "Increase compare-at prices by {value}",
        "plan.summary.compareAtDecreaseValue": "Decrease compare-at prices by {value}",
        "plan.summary.compareAtSet": "Set compare-at prices to {value}",
        "plan.summary.tagsAdd": "Add tags: {tags}",
        "plan.summary.tagsRemove": "Remove tags: {tags}",
        "plan.summary.tagsReplace": "Replace tags with: {tags}",
        "plan.summary.inventoryAdjust": "Inventory {mode} {value} at {location}",
        "plan.summary.statusChange": "Change status to {status}",
        "plan.inventoryMode.set": "set to",
        "plan.inventoryMode.inc": "increase by",
        "plan.inventoryMode.dec": "decrease by",
        "plan.filter.titleContains": "Products whose title contains \"{term}\"",
        "plan.filter.all": "All products",
        "plan.confidence": "Confidence: {confidence}",
        "plan.draft": "Draft: {summary}",
        "plan.clarify.missingAmount": "How much should change? Add an amount or a percentage.",
        "plan.clarify.missingTags": "Which tags? Put each tag in quotes, e.g. \"Summer Sale\".",
        "plan.clarify.requireLocation": "Which location should the inventory change apply to?",
        "plan.clarify.unsupportedStatus": "Say whether to publish, unpublish or archive the products.",
        "plan.clarify.unrecognized": "Sorry, I couldn't tell what to change. Pick one:",
        "plan.family.price": "Prices",
        "plan.family.tags": "Tags",
        "plan.family.inventory": "Inventory",
        "plan.family.status": "Product status",
        "plan.error.invalidRequest": "The request could not be read: {message}",
        "plan.error.failed": "Planning failed. Please try again.",
    },
}

ERROR_MESSAGE_KEYS = {
    INVALID_REQUEST_CODE: "plan.error.invalidRequest",
    FAILED_CODE: "plan.error.failed",
}


def translate(locale: Optional[str], key: str, **variables: Any) -> str:
    """
    Render a message key for a locale.

    Args:
        locale: Locale code ("en", "en-US", ...); region suffixes fall back to the language
        key: Message key
        **variables: Values for ``{name}`` placeholders

    Returns:
        Rendered text, or the key itself when no catalog has it
    """
    catalog = _catalog_for(locale)
    template = catalog.get(key) or MESSAGES[FALLBACK_LOCALE].get(key) or key
    for name, value in variables.items():
        template = template.replace("{" + name + "}", str(value))
    return template


def _catalog_for(locale: Optional[str]) -> Dict[str, str]:
    if locale:
        if locale in MESSAGES:
            return MESSAGES[locale]
        language = locale.replace("_", "-").split("-", 1)[0].lower()
        if language in MESSAGES:
            return MESSAGES[language]
    return MESSAGES[FALLBACK_LOCALE]


def format_number(value: float) -> str:
    """Format 10.0 as "10" and 12.5 as "12.5"."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def summary_variables(op_spec: Any, locale: Optional[str] = None) -> Dict[str, str]:
    """Placeholder values for an operation's summary key."""
    params = op_spec.params
    operation = op_spec.operation

    if operation in ("price", "compare_at"):
        value = format_number(abs(params.value) if params.mode != "set" else params.value)
        if params.currency:
            value = f"{value} {params.currency}"
        return {"value": value}
    if operation == "tags":
        return {"tags": ", ".join(params.values)}
    if operation == "inventory":
        return {
            "mode": translate(locale, f"plan.inventoryMode.{params.mode}"),
            "value": str(params.value),
            "location": params.location_id or "?",
        }
    if operation == "status":
        return {"status": params.status}
    return {}


def render_summary(op_spec: Any, summary_key: Optional[str], locale: Optional[str] = None) -> Optional[str]:
    """Render a summary line for an operation, or None without a summary key."""
    if not summary_key:
        return None
    return translate(locale, summary_key, **summary_variables(op_spec, locale))


def render_response(
    response: Union[PlanSuccess, PlanClarify, PlanError],
    locale: Optional[str] = None,
) -> List[str]:
    """
    Render a plan response as display lines.

    Args:
        response: Planner response
        locale: Locale for messages

    Returns:
        Lines of text, most important first
    """
    lines: List[str] = []

    if isinstance(response, PlanSuccess):
        summary = render_summary(response.op_spec, response.summary_key, locale)
        if summary:
            lines.append(summary)
        if response.filter_spec.title_contains:
            lines.append(
                translate(locale, "plan.filter.titleContains", term=response.filter_spec.title_contains)
            )
        else:
            lines.append(translate(locale, "plan.filter.all"))
        lines.append(translate(locale, "plan.confidence", confidence=response.confidence))

    elif isinstance(response, PlanClarify):
        for issue in response.issues:
            lines.append(translate(locale, issue.message_key))
            for option in issue.options or []:
                lines.append(f"  - {translate(locale, option.label_key)}")
        draft = response.draft
        if draft is not None and draft.op_spec is not None:
            summary_key = draft.summary_key or _default_summary_key(draft.op_spec.operation)
            summary = render_summary(draft.op_spec, summary_key, locale)
            if summary:
                lines.append(translate(locale, "plan.draft", summary=summary))

    else:
        key = ERROR_MESSAGE_KEYS.get(response.code)
        if key:
            lines.append(translate(locale, key, message=response.message))
        else:
            lines.append(f"{response.code}: {response.message}")

    return lines


def _default_summary_key(operation: str) -> Optional[str]:
    # Drafts carry no summary key of their own.
    if operation == "inventory":
        return "plan.summary.inventoryAdjust"
    return None
