"""Plan request/response schemas.

Field names are snake_case in Python and camelCase on the wire
(``op_spec`` <-> ``opSpec``). Use :func:`to_payload` for the JSON form.
"""
from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

INVALID_REQUEST_CODE = "plan.invalid_request"
FAILED_CODE = "plan.failed"

Scope = Literal["product", "variant"]
Confidence = Literal["high", "medium", "low"]
ProductStatus = Literal["ACTIVE", "DRAFT", "ARCHIVED"]
ClarifyCode = Literal[
    "inventory.requireLocation",
    "plan.unrecognized",
    "plan.unsupported",
    "plan.missingAmount",
    "plan.missingTagValues",
]


class SchemaModel(BaseModel):
    """Base for every plan schema: camelCase aliases, unknown keys rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


# Operation specs

class RoundSpec(SchemaModel):
    precision: float = Field(gt=0, le=1)
    end_with: Optional[str] = None
    mode: Literal["nearest", "up", "down"] = "nearest"


class PriceParams(SchemaModel):
    mode: Literal["inc_percent", "inc_value", "set"]
    value: float = Field(allow_inf_nan=False)
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    round: Optional[RoundSpec] = None


class TagsParams(SchemaModel):
    mode: Literal["add", "remove", "replace"]
    values: List[Annotated[str, Field(min_length=1)]] = Field(min_length=1)


class InventoryParams(SchemaModel):
    mode: Literal["set", "inc", "dec"]
    value: int = Field(ge=0)
    location_id: Optional[str] = Field(default=None, min_length=1)


class StatusParams(SchemaModel):
    status: ProductStatus


class MetafieldSpec(SchemaModel):
    ns: str = Field(min_length=1)
    key: str = Field(min_length=1)
    type: str = Field(min_length=1)
    value: Union[str, float, bool, None] = None


class MetafieldParams(SchemaModel):
    metafield: MetafieldSpec


class SeoSpec(SchemaModel):
    title: Optional[str] = Field(default=None, max_length=70)
    description: Optional[str] = Field(default=None, max_length=320)


class SeoParams(SchemaModel):
    seo: SeoSpec


class BaseOpSpec(SchemaModel):
    scope: Scope = "product"
    schedule: Optional[datetime] = None


class PriceOpSpec(BaseOpSpec):
    operation: Literal["price"] = "price"
    params: PriceParams


class CompareAtOpSpec(BaseOpSpec):
    operation: Literal["compare_at"] = "compare_at"
    params: PriceParams


class TagsOpSpec(BaseOpSpec):
    operation: Literal["tags"] = "tags"
    params: TagsParams


class InventoryOpSpec(BaseOpSpec):
    operation: Literal["inventory"] = "inventory"
    params: InventoryParams


class StatusOpSpec(BaseOpSpec):
    operation: Literal["status"] = "status"
    params: StatusParams


class MetafieldOpSpec(BaseOpSpec):
    operation: Literal["metafield"] = "metafield"
    params: MetafieldParams


class SeoOpSpec(BaseOpSpec):
    operation: Literal["seo"] = "seo"
    params: SeoParams


OpSpec = Annotated[
    Union[
        PriceOpSpec,
        CompareAtOpSpec,
        TagsOpSpec,
        InventoryOpSpec,
        StatusOpSpec,
        MetafieldOpSpec,
        SeoOpSpec,
    ],
    Field(discriminator="operation"),
]


# Filter spec

class FilterMust(SchemaModel):
    vendors: List[str] = Field(default_factory=list)
    types: List[str] = Field(default_factory=list)
    collections: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)


class FilterMustNot(SchemaModel):
    tags: List[str] = Field(default_factory=list)


class FilterNumeric(SchemaModel):
    price_gte: Optional[float] = None
    price_lte: Optional[float] = None
    inventory_eq: Optional[float] = None


class FilterSpec(SchemaModel):
    """Which catalog items an operation applies to.

    Categories in ``must`` are AND'd together, values within a category are
    OR'd. An empty spec means the caller picks the default scope.
    """

    must: FilterMust = Field(default_factory=FilterMust)
    must_not: FilterMustNot = Field(default_factory=FilterMustNot)
    title_contains: Optional[str] = None
    numeric: FilterNumeric = Field(default_factory=FilterNumeric)

    def is_empty(self) -> bool:
        """True when the spec does not narrow the selection at all."""
        must = self.must
        return (
            not (must.vendors or must.types or must.collections or must.tags)
            and not self.must_not.tags
            and self.title_contains is None
            and self.numeric.price_gte is None
            and self.numeric.price_lte is None
            and self.numeric.inventory_eq is None
        )


# Responses

class ClarifyOption(SchemaModel):
    value: str
    label_key: str


class ClarifyIssue(SchemaModel):
    code: ClarifyCode
    message_key: str
    options: Optional[List[ClarifyOption]] = None


class PlanSuccess(SchemaModel):
    action: Literal["plan"] = "plan"
    op_spec: OpSpec
    filter_spec: FilterSpec
    confidence: Confidence = "medium"
    summary_key: Optional[str] = None


class PlanDraft(SchemaModel):
    """Whatever part of a plan could be inferred despite a clarification."""

    op_spec: Optional[OpSpec] = None
    filter_spec: Optional[FilterSpec] = None
    confidence: Optional[Confidence] = None
    summary_key: Optional[str] = None


class PlanClarify(SchemaModel):
    action: Literal["clarify"] = "clarify"
    issues: List[ClarifyIssue] = Field(min_length=1)
    draft: Optional[PlanDraft] = None


class PlanError(SchemaModel):
    action: Literal["error"] = "error"
    code: str
    message: str


PlanResponse = Annotated[
    Union[PlanSuccess, PlanClarify, PlanError],
    Field(discriminator="action"),
]


class PlanRequest(BaseModel):
    """Incoming planning request. Unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    text: str = Field(min_length=1)
    locale: Optional[str] = None


OP_SPEC_ADAPTER: TypeAdapter = TypeAdapter(OpSpec)
PLAN_RESPONSE_ADAPTER: TypeAdapter = TypeAdapter(PlanResponse)


def validate_plan_response(response: Any) -> Union[PlanSuccess, PlanClarify, PlanError]:
    """
    Re-validate a response against the full response union.

    Args:
        response: A response model or a plain (camelCase) mapping

    Returns:
        Freshly validated response model

    Raises:
        pydantic.ValidationError: If the response does not fit the schema
    """
    if isinstance(response, BaseModel):
        response = response.model_dump(by_alias=True)
    return PLAN_RESPONSE_ADAPTER.validate_python(response)


def to_payload(response: Union[PlanSuccess, PlanClarify, PlanError]) -> Dict[str, Any]:
    """Serialize a response to its JSON wire form."""
    return response.model_dump(mode="json", by_alias=True)
