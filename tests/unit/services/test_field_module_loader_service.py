import sys
import types

import pytest

from core.exceptions import QuickEditConfigError
from services.field_module_loader_service import load_field_modules
from services.quick_edit_registry import QuickEditRegistry


def make_module(name: str, register=None) -> types.ModuleType:
    module = types.ModuleType(name)
    if register is not None:
        module.register = register
    return module


@pytest.mark.unit
class TestLoadFieldModules:

    def test_register_is_called_with_registry(self, monkeypatch):
        registry = QuickEditRegistry()

        def register(target):
            target.register("download", {"sale_price": {"type": "number", "step": "0.01"}})

        monkeypatch.setitem(sys.modules, "shop_fields", make_module("shop_fields", register))

        loaded = load_field_modules(registry, ["shop_fields"])

        assert loaded == ["shop_fields"]
        assert registry.get_field("download", "sale_price") is not None

    def test_module_without_register_is_skipped(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "empty_fields", make_module("empty_fields"))

        assert load_field_modules(QuickEditRegistry(), ["empty_fields"]) == []

    def test_missing_module_raises(self):
        with pytest.raises(ImportError):
            load_field_modules(QuickEditRegistry(), ["no_such_quick_edit_module"])

    def test_configuration_errors_propagate(self, monkeypatch):
        def register(target):
            target.register("post", {"published": {"type": "date"}})

        monkeypatch.setitem(sys.modules, "bad_fields", make_module("bad_fields", register))

        with pytest.raises(QuickEditConfigError):
            load_field_modules(QuickEditRegistry(), ["bad_fields"])
