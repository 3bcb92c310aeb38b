"""Unit tests for the message catalog."""
import pytest

from apps.plan_service.schemas import PlanError
from apps.plan_service.services.messages import (
    MESSAGES,
    format_number,
    render_response,
    translate,
)
from apps.plan_service.services.plan_builders import CLARIFY_MESSAGE_KEYS, TAG_SUMMARY_KEYS
from apps.plan_service.services.vocabulary import FAMILIES


class TestTranslate:
    """Test cases for translate."""

    def test_placeholders(self):
        """Test variable substitution."""
        assert translate("en", "plan.summary.priceSet", value="20") == "Set prices to 20"

    @pytest.mark.parametrize("locale", ["en-US", "en_GB", "xx", None])
    def test_fallback_locale(self, locale):
        """Test region and unknown locales fall back to English."""
        assert translate(locale, "plan.filter.all") == "All products"

    def test_unknown_key(self):
        """Test missing keys render as the key."""
        assert translate("en", "plan.nope") == "plan.nope"

    def test_format_number(self):
        """Test integral floats lose the decimal part."""
        assert format_number(10.0) == "10"
        assert format_number(12.5) == "12.5"

    def test_catalog_covers_planner_keys(self):
        """Test every key the planner can emit has English text."""
        keys = list(CLARIFY_MESSAGE_KEYS.values()) + list(TAG_SUMMARY_KEYS.values())
        keys += [f"plan.family.{family}" for family in FAMILIES]
        keys += ["plan.summary.inventoryAdjust", "plan.summary.statusChange"]
        for prefix in ("price", "compareAt"):
            for suffix in ("IncreasePercent", "DecreasePercent", "IncreaseValue", "DecreaseValue", "Set"):
                keys.append(f"plan.summary.{prefix}{suffix}")
        missing = [key for key in keys if key not in MESSAGES["en"]]
        assert missing == []


class TestRenderResponse:
    """Test cases for render_response."""

    def test_plan(self, plan_text):
        """Test a full plan renders summary, filter and confidence."""
        lines = render_response(plan_text("increase hoodie prices by 10%"), "en")
        assert lines == [
            "Increase prices by 10%",
            'Products whose title contains "hoodie"',
            "Confidence: medium",
        ]

    def test_decrease_shows_magnitude(self, plan_text):
        """Test the direction is in the wording, not the sign."""
        lines = render_response(plan_text("decrease price by 15%"), "en")
        assert lines[0] == "Decrease prices by 15%"
        assert lines[1] == "All products"

    def test_currency_in_summary(self, plan_text):
        """Test currency code is appended to amounts."""
        lines = render_response(plan_text("reduce prices by 5 EUR"), "en")
        assert lines[0] == "Decrease prices by 5 EUR"

    def test_tags(self, plan_text):
        """Test tag list rendering."""
        lines = render_response(plan_text('add "Summer Sale" and "Clearance" tags'), "en")
        assert lines[0] == "Add tags: Summer Sale, Clearance"

    def test_unrecognized_lists_options(self, plan_text):
        """Test clarify options are rendered."""
        lines = render_response(plan_text("do something vague"), "en")
        assert lines[0] == MESSAGES["en"]["plan.clarify.unrecognized"]
        assert lines[1:] == ["  - Prices", "  - Tags", "  - Inventory", "  - Product status"]

    def test_inventory_draft(self, plan_text):
        """Test a draft is summarized after the issues."""
        lines = render_response(plan_text("increase inventory by 5"), "en")
        assert lines == [
            MESSAGES["en"]["plan.clarify.requireLocation"],
            "Draft: Inventory increase by 5 at ?",
        ]

    def test_error(self):
        """Test known error codes."""
        lines = render_response(PlanError(code="plan.failed", message="boom"), "en")
        assert lines == ["Planning failed. Please try again."]

    def test_invalid_request_error(self):
        """Test validation detail is shown."""
        lines = render_response(PlanError(code="plan.invalid_request", message="text: required"), "en")
        assert lines == ["The request could not be read: text: required"]

    def test_unknown_error_code(self):
        """Test unknown codes are shown raw."""
        lines = render_response(PlanError(code="x", message="y"), "en")
        assert lines == ["x: y"]
