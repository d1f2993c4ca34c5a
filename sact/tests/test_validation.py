"""Tests for input validation."""

import pytest

from sact.models.exceptions import ValidationError
from sact.models.resource import ResourceType
from sact.services.validation import (
    ValidationResult,
    is_valid_zone,
    require_valid_id,
    validate_iaas_id,
    validate_monitoring_id,
    validate_resource_id,
    validate_uuid,
)


class TestIaasId:
    """IaaS ids are exactly 12 digits."""

    def test_valid(self):
        assert validate_iaas_id("113100000001").is_valid

    @pytest.mark.parametrize("item_id", [
        "", "11310000000", "1131000000011", "11310000000a", " 113100000001", "113100000001\n",
        "\uff11\uff11\uff13\uff11\uff10\uff10\uff10\uff10\uff10\uff10\uff10\uff11",
    ])
    def test_invalid(self, item_id):
        result = validate_iaas_id(item_id)
        assert not result.is_valid
        assert "12 digits" in result.first_error


class TestUuid:
    def test_valid(self):
        assert validate_uuid("3fa85f64-5717-4562-b3fc-2c963f66afa6").is_valid

    def test_invalid(self):
        assert not validate_uuid("not-a-uuid").is_valid
        assert not validate_uuid("").is_valid


class TestMonitoringId:
    def test_valid(self):
        assert validate_monitoring_id("42").is_valid

    @pytest.mark.parametrize("item_id", ["0", "-1", "abc", "", "007", "\u00b2", "\u0664\u0662", "5\n"])
    def test_invalid(self, item_id):
        assert not validate_monitoring_id(item_id).is_valid


class TestResourceId:
    """Routing to the right format per backend."""

    def test_per_type(self):
        assert validate_resource_id(ResourceType.DNS, "113100000001").is_valid
        assert not validate_resource_id(ResourceType.APPRUN_DEDICATED, "113100000001").is_valid
        assert validate_resource_id(ResourceType.MONITORING_TRACE_STORAGE, "5").is_valid

    def test_require_raises(self):
        with pytest.raises(ValidationError, match="invalid resource id"):
            require_valid_id(ResourceType.SERVER, "web-server")

    def test_require_passes(self):
        require_valid_id(ResourceType.SERVER, "113100000001")


class TestValidationResult:
    def test_first_error(self):
        assert ValidationResult().first_error is None
        assert ValidationResult(False, ["a", "b"]).first_error == "a"


def test_zone_validation():
    assert is_valid_zone("is1c")
    assert not is_valid_zone("IS1C")
