"""
Summarize Request Schema

Pydantic models describing the accepted shape of a summarize_context call.
These models are the single source of truth for both server-side validation
and the JSON Schema advertised through tools/list.

Every object is closed (unknown keys are rejected), strings must carry at
least one non-whitespace character and are never coerced from other types,
and every list defaults to an empty list.

Optional strings default to None without validating the default, so an
omitted key is accepted while an explicit null fails the string check.
"""

from dataclasses import dataclass, field
from typing import Annotated, Any, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictStr, StringConstraints
from pydantic import ValidationError as PydanticValidationError


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("String should not be blank")
    return value


def _check_date(value: str) -> str:
    # Fixed width and ASCII digits only; no calendar parsing.
    if len(value) != 10 or value[4] != "-" or value[7] != "-":
        raise ValueError("Use YYYY-MM-DD")
    digits = value[:4] + value[5:7] + value[8:]
    if not all("0" <= ch <= "9" for ch in digits):
        raise ValueError("Use YYYY-MM-DD")
    return value


Text = Annotated[StrictStr, StringConstraints(min_length=1), AfterValidator(_require_text)]
DateString = Annotated[Text, AfterValidator(_check_date)]

OutputFormat = Literal["exec_bullets", "se_deal_update", "memo"]


class _ClosedModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class OpenQuestion(_ClosedModel):
    question: Text
    owner: Text = None
    due: Text = None


class NextStep(_ClosedModel):
    action: Text
    owner: Text = None
    due: Text = None
    status: Literal["open", "done"]


class Risk(_ClosedModel):
    risk: Text
    severity: Literal["low", "med", "high"]
    mitigation: Text = None


class Stakeholder(_ClosedModel):
    name: Text
    role: Text = None
    influence: Text = None


class Evidence(_ClosedModel):
    type: Literal["conversation", "canvas"]
    pointer: Text
    excerpt: Text


class Context(_ClosedModel):
    summary: Text
    key_points: list[Text] = Field(default_factory=list)
    open_questions: list[OpenQuestion] = Field(default_factory=list)
    next_steps: list[NextStep] = Field(default_factory=list)
    risks: list[Risk] = Field(default_factory=list)
    stakeholders: list[Stakeholder] = Field(default_factory=list)
    evidence: list[Evidence] = Field(default_factory=list)
    last_updated: DateString = Field(None, description="YYYY-MM-DD")


class SummarizeRequest(_ClosedModel):
    """Validated summarize_context arguments."""

    deal_id: Text = None
    deal_name: Text = None
    source_canvas_name: Text = None
    context: Context
    output_format: OutputFormat
    doc_title: Text = None

    def to_payload(self) -> dict[str, Any]:
        """JSON-compatible dict of the request, omitting unset optional fields."""
        return self.model_dump(mode="json", exclude_none=True)


# --- Validation Result ---


@dataclass(frozen=True)
class Violation:
    """A single field-level validation failure."""

    path: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    """Either a normalized request or the list of violations that rejected it."""

    request: Optional[SummarizeRequest] = None
    violations: list[Violation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.request is not None


def _violation_from_error(error: dict) -> Violation:
    path = ".".join(str(part) for part in error["loc"]) or "input"
    message = error["msg"]
    # AfterValidator failures come through as "Value error, <text>"
    if error.get("type") == "value_error" and message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return Violation(path=path, message=message)


def validate_summarize_input(value: Any) -> ValidationResult:
    """
    Validate and normalize summarize_context arguments.

    Args:
        value: Arbitrary decoded JSON value

    Returns:
        ValidationResult with either `request` set or every violation listed
    """
    try:
        request = SummarizeRequest.model_validate(value)
    except PydanticValidationError as e:
        return ValidationResult(violations=[_violation_from_error(err) for err in e.errors()])
    return ValidationResult(request=request)


def format_violations(violations: list[Violation]) -> str:
    """Render violations one per line as `- path: message`."""
    return "\n".join(f"- {v.path}: {v.message}" for v in violations)


def summarize_input_schema() -> dict[str, Any]:
    """JSON Schema for summarize_context, as advertised to clients."""
    json_schema = SummarizeRequest.model_json_schema()
    # Remove Pydantic metadata that MCP doesn't need
    json_schema.pop("title", None)
    json_schema.pop("description", None)
    return json_schema
