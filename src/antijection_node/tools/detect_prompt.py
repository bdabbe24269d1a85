"""Detect prompt MCP tool."""

import json

from antijection_node.models import DEFAULT_DETECTION_METHOD, RuleCategory
from antijection_node.node import AntijectionNode
from antijection_node.tools._app import mcp
from antijection_node.tools._error_handler import handle_tool_errors
from antijection_node.tools._service import get_credentials


@mcp.tool
@handle_tool_errors
def detect_prompt(
    prompt: str,
    detection_method: str = DEFAULT_DETECTION_METHOD.value,
    rules_enabled: bool | None = None,
    disabled_categories: list[str] | None = None,
    blocked_keywords: list[str] | None = None,
) -> str:
    """Check a prompt for injection attempts and safety issues.

    The verdict is returned as JSON exactly as reported by the Antijection
    API. Prompts with a risk_score of 50 or more should be treated as unsafe.

    Args:
        prompt: Text to analyze (1-10,000 characters).
        detection_method: INJECTION_GUARD (fast, English), INJECTION_GUARD_MULTI
            (multilingual) or SAFETY_GUARD (comprehensive).
        rules_enabled: Enable or disable heuristic rules. Omit to keep defaults.
        disabled_categories: Rule categories to switch off, e.g. "sql_injection".
        blocked_keywords: Extra keywords or regex patterns to block.
    """
    parameters: dict[str, object] = {"prompt": prompt, "detectionMethod": detection_method}

    if rules_enabled is not None or disabled_categories or blocked_keywords:
        rule_settings: dict[str, object] = {}
        if rules_enabled is not None:
            rule_settings["enabled"] = rules_enabled
        if disabled_categories:
            rule_settings["disabledCategories"] = [RuleCategory(c) for c in disabled_categories]
        if blocked_keywords:
            rule_settings["blockedKeywords"] = "\n".join(blocked_keywords)
        parameters["ruleSettings"] = rule_settings

    [result] = AntijectionNode().execute([parameters], get_credentials())
    return json.dumps(result.data, indent=2, ensure_ascii=False)
