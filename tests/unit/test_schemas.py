"""Unit tests for plan schemas."""
from datetime import datetime

import pytest
from pydantic import ValidationError

from apps.plan_service.schemas import (
    OP_SPEC_ADAPTER,
    ClarifyIssue,
    FilterSpec,
    PlanClarify,
    PlanError,
    PlanRequest,
    PlanSuccess,
    PriceParams,
    validate_plan_response,
    to_payload,
)


class TestOpSpecSchema:
    """Test cases for the operation spec union."""

    def test_price_defaults(self):
        """Test scope default and optional fields."""
        op_spec = OP_SPEC_ADAPTER.validate_python(
            {"operation": "price", "params": {"mode": "inc_percent", "value": 10}}
        )
        assert op_spec.scope == "product"
        assert op_spec.schedule is None
        assert op_spec.params.currency is None
        assert op_spec.params.round is None

    def test_price_rounding(self):
        """Test rounding policy with camelCase keys."""
        op_spec = OP_SPEC_ADAPTER.validate_python(
            {
                "operation": "compare_at",
                "params": {
                    "mode": "set",
                    "value": 20,
                    "currency": "USD",
                    "round": {"precision": 0.01, "endWith": ".99"},
                },
            }
        )
        assert op_spec.params.round.end_with == ".99"
        assert op_spec.params.round.mode == "nearest"

    @pytest.mark.parametrize("precision", [0, 1.5])
    def test_rounding_precision_bounds(self, precision):
        """Test rounding precision must be in (0, 1]."""
        with pytest.raises(ValidationError):
            OP_SPEC_ADAPTER.validate_python(
                {"operation": "price", "params": {"mode": "set", "value": 1, "round": {"precision": precision}}}
            )

    def test_schedule_is_iso_datetime(self):
        """Test schedule parsing."""
        op_spec = OP_SPEC_ADAPTER.validate_python(
            {
                "operation": "status",
                "schedule": "2026-10-16T09:00:00Z",
                "params": {"status": "DRAFT"},
            }
        )
        assert isinstance(op_spec.schedule, datetime)

    def test_schedule_rejects_free_text(self):
        """Test non-ISO schedule."""
        with pytest.raises(ValidationError):
            OP_SPEC_ADAPTER.validate_python(
                {"operation": "status", "schedule": "tomorrow", "params": {"status": "DRAFT"}}
            )

    @pytest.mark.parametrize(
        "op_spec",
        [
            {"operation": "discount", "params": {}},
            {"operation": "price", "params": {"mode": "double", "value": 1}},
            {"operation": "price", "params": {"mode": "set", "value": 1, "currency": "US"}},
            {"operation": "tags", "params": {"mode": "add", "values": []}},
            {"operation": "tags", "params": {"mode": "add", "values": [""]}},
            {"operation": "inventory", "params": {"mode": "set", "value": -1}},
            {"operation": "inventory", "params": {"mode": "set", "value": 2.5}},
            {"operation": "inventory", "params": {"mode": "set", "value": 1, "locationId": ""}},
            {"operation": "status", "params": {"status": "LIVE"}},
            {"operation": "seo", "params": {"seo": {"title": "x" * 71}}},
            {"operation": "metafield", "params": {"metafield": {"ns": "", "key": "k", "type": "t"}}},
            {"operation": "price", "scope": "shop", "params": {"mode": "set", "value": 1}},
        ],
    )
    def test_invalid_op_specs(self, op_spec):
        """Test each family rejects malformed params."""
        with pytest.raises(ValidationError):
            OP_SPEC_ADAPTER.validate_python(op_spec)

    def test_metafield(self):
        """Test metafield payload."""
        op_spec = OP_SPEC_ADAPTER.validate_python(
            {
                "operation": "metafield",
                "params": {
                    "metafield": {
                        "ns": "custom",
                        "key": "fabric",
                        "type": "single_line_text_field",
                        "value": "cotton",
                    }
                },
            }
        )
        assert op_spec.params.metafield.value == "cotton"

    def test_seo(self):
        """Test seo payload with nullable fields."""
        op_spec = OP_SPEC_ADAPTER.validate_python(
            {"operation": "seo", "params": {"seo": {"title": "Hoodies", "description": None}}}
        )
        assert op_spec.params.seo.title == "Hoodies"

    def test_unknown_param_keys_rejected(self):
        """Test params do not accept extra keys."""
        with pytest.raises(ValidationError):
            PriceParams(mode="set", value=1, bogus=2)


class TestFilterSpec:
    """Test cases for FilterSpec."""

    def test_empty_by_default(self):
        """Test default filter is empty."""
        spec = FilterSpec()
        assert spec.is_empty()
        assert spec.must.vendors == []
        assert spec.title_contains is None

    @pytest.mark.parametrize(
        "data",
        [
            {"titleContains": "hoodie"},
            {"must": {"vendors": ["Acme"]}},
            {"mustNot": {"tags": ["old"]}},
            {"numeric": {"priceGte": 10}},
        ],
    )
    def test_not_empty(self, data):
        """Test any narrowing makes the filter non-empty."""
        assert not FilterSpec.model_validate(data).is_empty()

    def test_camel_case_dump(self):
        """Test wire keys."""
        payload = FilterSpec(title_contains="hoodie").model_dump(by_alias=True)
        assert payload["titleContains"] == "hoodie"
        assert payload["mustNot"] == {"tags": []}
        assert payload["numeric"] == {"priceGte": None, "priceLte": None, "inventoryEq": None}


class TestPlanResponses:
    """Test cases for response variants."""

    def test_clarify_requires_issues(self):
        """Test clarify must carry at least one issue."""
        with pytest.raises(ValidationError):
            PlanClarify(issues=[])

    def test_unknown_clarify_code(self):
        """Test clarify codes are a closed set."""
        with pytest.raises(ValidationError):
            ClarifyIssue(code="plan.guess", message_key="x")

    def test_issue_from_camel_case(self):
        """Test aliases on input."""
        issue = ClarifyIssue.model_validate({"code": "plan.unsupported", "messageKey": "k"})
        assert issue.message_key == "k"
        assert issue.options is None

    def test_success_payload(self):
        """Test wire form of a plan."""
        response = PlanSuccess(
            op_spec=OP_SPEC_ADAPTER.validate_python(
                {"operation": "status", "params": {"status": "ACTIVE"}}
            ),
            filter_spec=FilterSpec(),
            summary_key="plan.summary.statusChange",
        )
        payload = to_payload(response)
        assert payload["action"] == "plan"
        assert payload["confidence"] == "medium"
        assert payload["summaryKey"] == "plan.summary.statusChange"
        assert payload["opSpec"]["scope"] == "product"
        assert payload["filterSpec"]["titleContains"] is None

    def test_validate_response_dispatches_on_action(self):
        """Test discriminated parsing of responses."""
        response = validate_plan_response({"action": "error", "code": "plan.failed", "message": "x"})
        assert isinstance(response, PlanError)

    def test_validate_response_rejects_unknown_action(self):
        """Test unknown discriminant."""
        with pytest.raises(ValidationError):
            validate_plan_response({"action": "maybe"})

    def test_draft_is_partial(self):
        """Test a clarify draft may carry only a filter."""
        response = validate_plan_response(
            {
                "action": "clarify",
                "issues": [{"code": "plan.missingAmount", "messageKey": "k"}],
                "draft": {"filterSpec": {"titleContains": "hoodie"}},
            }
        )
        assert response.draft.op_spec is None
        assert response.draft.filter_spec.title_contains == "hoodie"


class TestPlanRequest:
    """Test cases for PlanRequest."""

    def test_locale_optional(self):
        """Test locale defaults to None."""
        assert PlanRequest(text="archive").locale is None

    def test_text_required(self):
        """Test empty text rejected."""
        with pytest.raises(ValidationError):
            PlanRequest(text="")

    def test_extra_keys_ignored(self):
        """Test unknown keys are dropped."""
        request = PlanRequest.model_validate({"text": "archive", "shop": "demo"})
        assert not hasattr(request, "shop")
