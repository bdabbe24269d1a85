"""Build detection requests from per-item node parameters."""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from antijection_node.exceptions import NodeOperationError, PromptValidationError
from antijection_node.models import (
    MAX_PROMPT_LENGTH,
    DetectionRequest,
    NodeParameters,
    RuleSettings,
    RuleSettingsParameter,
)


def parse_blocked_keywords(text: str | None) -> list[str]:
    """Split a multi-line keyword field into one trimmed entry per line.

    Blank lines are dropped. Entries may be plain keywords or regex
    patterns; they are forwarded verbatim and evaluated server-side.
    """
    if not text:
        return []
    return [line.strip() for line in text.split("\n") if line.strip()]


def build_rule_settings(settings: RuleSettingsParameter) -> RuleSettings:
    """Apply defaults to the host's rule settings collection."""
    return RuleSettings(
        enabled=settings.enabled is not False,
        disabled_categories=settings.disabled_categories or [],
        blocked_keywords=parse_blocked_keywords(settings.blocked_keywords),
    )


def parse_parameters(raw: Mapping[str, Any] | NodeParameters, item_index: int) -> NodeParameters:
    """Coerce raw host parameters into :class:`NodeParameters`.

    Raises:
        NodeOperationError: If a parameter has an unsupported value.
    """
    if isinstance(raw, NodeParameters):
        return raw
    try:
        return NodeParameters.model_validate(raw)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(part) for part in err.get("loc", ()))
        raise NodeOperationError(
            f"Invalid value for parameter '{field}': {err.get('msg', '')}",
            item_index=item_index,
        ) from e


def build_detection_request(parameters: NodeParameters, item_index: int) -> DetectionRequest:
    """Validate the prompt and assemble the request body for one item.

    Args:
        parameters: Parameters resolved for the item.
        item_index: Position of the item in the input list, echoed in errors.

    Returns:
        The request to send to ``/v1/detect``.

    Raises:
        PromptValidationError: If the prompt is blank or exceeds 10,000 characters.
    """
    prompt = parameters.prompt

    if not prompt or not prompt.strip():
        raise PromptValidationError("Prompt cannot be empty", item_index=item_index)

    if len(prompt) > MAX_PROMPT_LENGTH:
        raise PromptValidationError(
            f"Prompt is too long ({len(prompt)} characters). "
            f"Maximum allowed is {MAX_PROMPT_LENGTH:,} characters.",
            item_index=item_index,
        )

    rule_settings = None
    if parameters.rule_settings is not None:
        rule_settings = build_rule_settings(parameters.rule_settings)

    return DetectionRequest(
        prompt=prompt,
        detection_method=parameters.detection_method,
        rule_settings=rule_settings,
    )
