"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from portraitctl.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="parse_directive", data={"count": 1})
        assert result.ok is True
        assert result.op == "parse_directive"
        assert result.data == {"count": 1}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_failure_helper(self) -> None:
        result = ServiceResult.failure(
            "load_portrait",
            "MANIFEST_NOT_FOUND",
            "missing",
            detail={"path": "x.toml"},
            warnings=["w"],
        )
        assert result.ok is False
        assert result.error == ServiceError(
            code="MANIFEST_NOT_FOUND", message="missing", detail={"path": "x.toml"}
        )
        assert result.warnings == ["w"]

    def test_json_serialization(self) -> None:
        result = ServiceResult(
            ok=True,
            op="apply_directive",
            data={"applied": [{"operation": "show", "path": "a"}]},
            meta={"source": "portrait.toml"},
        )
        parsed = json.loads(result.model_dump_json())
        assert parsed["data"]["applied"][0]["path"] == "a"
        assert parsed["meta"]["source"] == "portrait.toml"

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_default_detail(self) -> None:
        error = ServiceError(code="E001", message="bad")
        assert error.detail == {}
