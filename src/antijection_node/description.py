"""Declarative description of the Antijection node.

The description is what the host renders as the node's parameter form. It
is validated when the module is imported, and option values are taken
from the model enums so the form and the request payload cannot drift.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from antijection_node.models import (
    DEFAULT_DETECTION_METHOD,
    MAX_PROMPT_LENGTH,
    DetectionMethod,
    RuleCategory,
)

PropertyType = Literal["string", "options", "multiOptions", "boolean", "collection"]


class PropertyOption(BaseModel):
    """A selectable value of an ``options``/``multiOptions`` property."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value, "description": self.description}


class NodeProperty(BaseModel):
    """A single parameter in the node's form.

    ``options`` holds choices for ``options``/``multiOptions`` properties;
    ``children`` holds the nested properties of a ``collection``.
    """

    model_config = ConfigDict(frozen=True)

    display_name: str
    name: str
    type: PropertyType
    default: Any = None
    description: str = ""
    placeholder: str | None = None
    required: bool = False
    rows: int | None = None
    options: tuple[PropertyOption, ...] = ()
    children: tuple["NodeProperty", ...] = ()

    @model_validator(mode="after")
    def _check_consistency(self) -> "NodeProperty":
        values = {opt.value for opt in self.options}
        if self.type == "options":
            if not self.options:
                raise ValueError(f"Property '{self.name}' has no options")
            if self.default not in values:
                raise ValueError(f"Default of '{self.name}' is not one of its options")
        if self.type == "multiOptions" and not set(self.default or []) <= values:
            raise ValueError(f"Defaults of '{self.name}' are not all valid options")
        if self.type == "collection" and not self.children:
            raise ValueError(f"Collection '{self.name}' declares no fields")
        return self

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "displayName": self.display_name,
            "name": self.name,
            "type": self.type,
            "default": self.default,
        }
        if self.description:
            data["description"] = self.description
        if self.placeholder is not None:
            data["placeholder"] = self.placeholder
        if self.required:
            data["required"] = True
        if self.rows is not None:
            data["typeOptions"] = {"rows": self.rows}
        if self.options:
            data["options"] = [opt.to_dict() for opt in self.options]
        elif self.children:
            data["options"] = [prop.to_dict() for prop in self.children]
        return data


class CredentialReference(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    required: bool = True


class NodeDescription(BaseModel):
    """Node metadata consumed by the host."""

    model_config = ConfigDict(frozen=True)

    display_name: str
    name: str
    icon: str
    group: tuple[str, ...]
    version: int = Field(default=1, ge=1)
    subtitle: str
    description: str
    usable_as_tool: bool = False
    inputs: tuple[str, ...] = ("main",)
    outputs: tuple[str, ...] = ("main",)
    credentials: tuple[CredentialReference, ...] = ()
    properties: tuple[NodeProperty, ...]

    @model_validator(mode="after")
    def _unique_property_names(self) -> "NodeDescription":
        names = [prop.name for prop in self.properties]
        if len(names) != len(set(names)):
            raise ValueError("Property names must be unique")
        return self

    def get_property(self, name: str) -> NodeProperty:
        for prop in self.properties:
            if prop.name == name:
                return prop
        raise KeyError(f"Unknown property: {name}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "displayName": self.display_name,
            "name": self.name,
            "icon": self.icon,
            "group": list(self.group),
            "version": self.version,
            "subtitle": self.subtitle,
            "description": self.description,
            "defaults": {"name": self.display_name},
            "usableAsTool": self.usable_as_tool,
            "inputs": list(self.inputs),
            "outputs": list(self.outputs),
            "credentials": [
                {"name": cred.name, "required": cred.required} for cred in self.credentials
            ],
            "properties": [prop.to_dict() for prop in self.properties],
        }


# Display names and help text for the enum values
_DETECTION_METHOD_OPTIONS: dict[DetectionMethod, tuple[str, str]] = {
    DetectionMethod.INJECTION_GUARD: (
        "Injection Guard (Fast)",
        "Fast injection detection (English only)",
    ),
    DetectionMethod.INJECTION_GUARD_MULTI: (
        "Injection Guard Multi (Multilingual)",
        "Multilingual injection detection",
    ),
    DetectionMethod.SAFETY_GUARD: (
        "Safety Guard (Comprehensive)",
        "Comprehensive safety analysis",
    ),
}

_RULE_CATEGORY_OPTIONS: dict[RuleCategory, tuple[str, str]] = {
    RuleCategory.COMMAND_INJECTION: ("Command Injection", "Shell command execution attempts"),
    RuleCategory.EMOJIS: ("Emojis", "Suspicious or excessive use of emojis"),
    RuleCategory.ENCODED_ATTACKS: ("Encoded Attacks", "Base64, Hex, or Unicode encoding tricks"),
    RuleCategory.FUZZY_MATCHES: ("Fuzzy Matches", "Common misspellings of attack keywords"),
    RuleCategory.IGNORE_INSTRUCTIONS: (
        "Ignore Instructions",
        "Direct attempts to override system prompts",
    ),
    RuleCategory.MANY_SHOT: ("Many Shot", "Overloading context with fake Q&A"),
    RuleCategory.PATH_TRAVERSAL: ("Path Traversal", "File system traversal attempts"),
    RuleCategory.PROMPT_EXTRACTION: ("Prompt Extraction", "Attempts to leak the system prompt"),
    RuleCategory.REPETITION_ATTACKS: ("Repetition Attacks", "Excessive or interspersed repetition"),
    RuleCategory.ROLE_HIJACKING: ("Role Hijacking", "Forcing the AI into a specific persona"),
    RuleCategory.SQL_INJECTION: ("SQL Injection", "Common SQL injection patterns"),
    RuleCategory.SYSTEM_OVERRIDE: ("System Override", "Attempts to toggle developer/admin modes"),
    RuleCategory.UNUSUAL_PUNCTUATION: (
        "Unusual Punctuation",
        "Abnormal clusters of special characters",
    ),
    RuleCategory.XSS_PATTERNS: ("XSS Patterns", "Script injection and XSS vectors"),
}


def _options(labels: dict[Any, tuple[str, str]]) -> tuple[PropertyOption, ...]:
    return tuple(
        PropertyOption(name=name, value=member.value, description=description)
        for member, (name, description) in labels.items()
    )


NODE_DESCRIPTION = NodeDescription(
    display_name="Antijection",
    name="antijection",
    icon="file:antijection.svg",
    group=("transform",),
    version=1,
    subtitle='={{$parameter["detectionMethod"]}}',
    description="Detect prompt injection and safety issues",
    usable_as_tool=True,
    credentials=(CredentialReference(name="antijectionApi"),),
    properties=(
        NodeProperty(
            display_name="Prompt",
            name="prompt",
            type="string",
            default="",
            placeholder="Enter the user prompt or AI input to analyze...",
            description=(
                f"The text prompt to analyze for injections and safety risks "
                f"(1-{MAX_PROMPT_LENGTH:,} characters). "
                "Prompts with risk_score ≥ 50 should be blocked."
            ),
            required=True,
            rows=5,
        ),
        NodeProperty(
            display_name="Detection Method",
            name="detectionMethod",
            type="options",
            default=DEFAULT_DETECTION_METHOD.value,
            description="The detection model/method to use",
            options=_options(_DETECTION_METHOD_OPTIONS),
        ),
        NodeProperty(
            display_name="Rule Settings",
            name="ruleSettings",
            type="collection",
            default={},
            placeholder="Add Rule Settings",
            description="Configure heuristic detection rules for fine-tuned protection",
            children=(
                NodeProperty(
                    display_name="Enabled",
                    name="enabled",
                    type="boolean",
                    default=True,
                    description="Whether to enable heuristic rule-based detection",
                ),
                NodeProperty(
                    display_name="Disabled Categories",
                    name="disabledCategories",
                    type="multiOptions",
                    default=[],
                    description=(
                        "Select rule categories to disable. Useful for coding assistants "
                        "that need to process SQL or shell commands."
                    ),
                    options=_options(_RULE_CATEGORY_OPTIONS),
                ),
                NodeProperty(
                    display_name="Blocked Keywords",
                    name="blockedKeywords",
                    type="string",
                    default="",
                    rows=4,
                    placeholder="internal_project_name\n<special_token>\n\\b(secret|key)\\b",
                    description=(
                        "Custom keywords or regex patterns to block (one per line). "
                        "Supports Python-style regex."
                    ),
                ),
            ),
        ),
    ),
)
