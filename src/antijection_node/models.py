"""Data models for detection requests and host output items."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_PROMPT_LENGTH = 10_000


class DetectionMethod(str, Enum):
    """Server-side detection model selection."""

    INJECTION_GUARD = "INJECTION_GUARD"  # fast, English only
    INJECTION_GUARD_MULTI = "INJECTION_GUARD_MULTI"  # multilingual
    SAFETY_GUARD = "SAFETY_GUARD"  # comprehensive safety analysis


DEFAULT_DETECTION_METHOD = DetectionMethod.INJECTION_GUARD_MULTI


class RuleCategory(str, Enum):
    """Heuristic rule categories that can be switched off per request."""

    COMMAND_INJECTION = "command_injection"
    EMOJIS = "emojis"
    ENCODED_ATTACKS = "encoded_attacks"
    FUZZY_MATCHES = "fuzzy_matches"
    IGNORE_INSTRUCTIONS = "ignore_instructions"
    MANY_SHOT = "many_shot"
    PATH_TRAVERSAL = "path_traversal"
    PROMPT_EXTRACTION = "prompt_extraction"
    REPETITION_ATTACKS = "repetition_attacks"
    ROLE_HIJACKING = "role_hijacking"
    SQL_INJECTION = "sql_injection"
    SYSTEM_OVERRIDE = "system_override"
    UNUSUAL_PUNCTUATION = "unusual_punctuation"
    XSS_PATTERNS = "xss_patterns"


def _dedupe_categories(categories: list[RuleCategory]) -> list[RuleCategory]:
    return list(dict.fromkeys(categories))


class RuleSettingsParameter(BaseModel):
    """The ``ruleSettings`` collection as supplied by the host.

    Every field is optional; an empty collection still produces rule
    settings in the request.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    enabled: bool | None = None
    disabled_categories: list[RuleCategory] | None = Field(default=None, alias="disabledCategories")
    blocked_keywords: str | None = Field(default=None, alias="blockedKeywords")


class NodeParameters(BaseModel):
    """Parameters resolved by the host for a single input item."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    prompt: str = ""
    detection_method: DetectionMethod = Field(
        default=DEFAULT_DETECTION_METHOD,
        alias="detectionMethod",
    )
    rule_settings: RuleSettingsParameter | None = Field(default=None, alias="ruleSettings")

    @field_validator("prompt", mode="before")
    @classmethod
    def _none_prompt_is_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class RuleSettings(BaseModel):
    """Rule settings as sent to the API."""

    enabled: bool = True
    disabled_categories: list[RuleCategory] = Field(default_factory=list)
    blocked_keywords: list[str] = Field(default_factory=list)

    @field_validator("disabled_categories")
    @classmethod
    def _unique_categories(cls, v: list[RuleCategory]) -> list[RuleCategory]:
        # Categories form a set; keep the order the user picked them in
        return _dedupe_categories(v)


class DetectionRequest(BaseModel):
    """Body of ``POST /v1/detect``."""

    prompt: str = Field(..., min_length=1, max_length=MAX_PROMPT_LENGTH)
    detection_method: DetectionMethod
    rule_settings: RuleSettings | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body, omitting ``rule_settings`` when not set."""
        return self.model_dump(mode="json", exclude_none=True)


class ErrorRecord(BaseModel):
    """Output payload for an item that failed under continue-on-failure."""

    model_config = ConfigDict(populate_by_name=True)

    error: str
    details: str = ""
    status_code: int | None = Field(default=None, alias="statusCode")

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class PairedItem(BaseModel):
    """Links an output item back to the input item it came from."""

    item: int = Field(..., ge=0)


class NodeExecutionData(BaseModel):
    """One output item in the host's item model.

    ``data`` is exposed to the host as ``json``: either the raw detection
    response or an error record.
    """

    model_config = ConfigDict(populate_by_name=True)

    data: dict[str, Any] = Field(..., alias="json")
    paired_item: PairedItem = Field(..., alias="pairedItem")
    is_error: bool = Field(default=False, exclude=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
