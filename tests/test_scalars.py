"""Tests for custom scalar handlers."""

import pytest

from gql_projections.core.scalars import (
    DateHandler,
    DateTimeHandler,
    JSONHandler,
    MappedScalar,
    ScalarHandler,
    ScalarRegistry,
    TimeHandler,
    UUIDHandler,
)


class TestBuiltinHandlers:
    """Tests for the default handlers."""

    @pytest.mark.parametrize(
        "handler, python_type, import_statement",
        [
            (DateTimeHandler(), "datetime", "from datetime import datetime"),
            (DateHandler(), "date", "from datetime import date"),
            (TimeHandler(), "time", "from datetime import time"),
            (UUIDHandler(), "UUID", "from uuid import UUID"),
            (JSONHandler(), "Any", "from typing import Any"),
        ],
    )
    def test_types_and_imports(self, handler, python_type, import_statement):
        assert handler.python_type == python_type
        assert handler.import_statement == import_statement

    def test_handlers_match_protocol(self):
        assert isinstance(DateTimeHandler(), ScalarHandler)
        assert isinstance(MappedScalar("int"), ScalarHandler)


class TestMappedScalar:
    """Tests for MappedScalar."""

    def test_dotted_path(self):
        handler = MappedScalar.from_path("decimal.Decimal")
        assert handler.python_type == "Decimal"
        assert handler.import_statement == "from decimal import Decimal"

    def test_nested_module(self):
        handler = MappedScalar.from_path("my.money.Money")
        assert handler.import_statement == "from my.money import Money"

    def test_builtin(self):
        handler = MappedScalar.from_path("int")
        assert handler.python_type == "int"
        assert handler.import_statement == ""

    @pytest.mark.parametrize("path", ["", "decimal.", "my-module.Money", "1abc"])
    def test_invalid_path(self, path):
        with pytest.raises(ValueError, match="Invalid type path"):
            MappedScalar.from_path(path)


class TestScalarRegistry:
    """Tests for ScalarRegistry."""

    def test_default_handlers_registered(self):
        registry = ScalarRegistry()
        for name in ("DateTime", "Date", "Time", "UUID", "JSON", "JSONObject", "Long", "BigDecimal"):
            assert registry.has(name)

    def test_get_handler(self):
        registry = ScalarRegistry()
        handler = registry.get("DateTime")
        assert handler is not None
        assert handler.python_type == "datetime"

    def test_long_and_big_decimal(self):
        registry = ScalarRegistry()
        assert registry.get("Long").python_type == "int"
        assert registry.get("BigDecimal").import_statement == "from decimal import Decimal"

    def test_get_nonexistent(self):
        registry = ScalarRegistry()
        assert registry.get("NonExistent") is None
        assert not registry.has("NonExistent")

    def test_register_overrides_default(self):
        registry = ScalarRegistry()
        registry.register("DateTime", MappedScalar.from_path("pendulum.DateTime"))
        assert registry.get("DateTime").import_statement == "from pendulum import DateTime"

    def test_get_all_imports(self):
        imports = ScalarRegistry().get_all_imports()
        assert "from datetime import datetime" in imports
        assert "from uuid import UUID" in imports
        assert "" not in imports
