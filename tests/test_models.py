"""Tests for data models."""

import pytest
from pydantic import ValidationError

from antijection_node.models import (
    DetectionMethod,
    DetectionRequest,
    NodeExecutionData,
    NodeParameters,
    PairedItem,
    RuleCategory,
    RuleSettings,
)


class TestDetectionRequest:
    def test_rejects_empty_prompt(self) -> None:
        with pytest.raises(ValidationError):
            DetectionRequest(prompt="", detection_method=DetectionMethod.INJECTION_GUARD)

    def test_rejects_overlong_prompt(self) -> None:
        with pytest.raises(ValidationError):
            DetectionRequest(prompt="a" * 10_001, detection_method=DetectionMethod.SAFETY_GUARD)

    def test_payload_uses_enum_values(self) -> None:
        request = DetectionRequest(
            prompt="hi",
            detection_method=DetectionMethod.SAFETY_GUARD,
            rule_settings=RuleSettings(disabled_categories=[RuleCategory.XSS_PATTERNS]),
        )
        assert request.to_payload() == {
            "prompt": "hi",
            "detection_method": "SAFETY_GUARD",
            "rule_settings": {
                "enabled": True,
                "disabled_categories": ["xss_patterns"],
                "blocked_keywords": [],
            },
        }


class TestNodeParameters:
    def test_defaults(self) -> None:
        params = NodeParameters()
        assert params.prompt == ""
        assert params.detection_method is DetectionMethod.INJECTION_GUARD_MULTI
        assert params.rule_settings is None

    def test_snake_case_names_accepted(self) -> None:
        params = NodeParameters(prompt="x", detection_method="INJECTION_GUARD")
        assert params.detection_method is DetectionMethod.INJECTION_GUARD

    def test_unrelated_item_fields_ignored(self) -> None:
        params = NodeParameters.model_validate({"prompt": "x", "sessionId": "abc"})
        assert params.prompt == "x"


class TestRuleCategory:
    def test_all_categories(self) -> None:
        assert len(RuleCategory) == 14
        assert RuleCategory("path_traversal") is RuleCategory.PATH_TRAVERSAL


class TestNodeExecutionData:
    def test_to_dict_uses_host_keys(self) -> None:
        item = NodeExecutionData(json={"risk_score": 5}, pairedItem=PairedItem(item=2))
        assert item.to_dict() == {"json": {"risk_score": 5}, "pairedItem": {"item": 2}}

    def test_negative_index_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PairedItem(item=-1)
