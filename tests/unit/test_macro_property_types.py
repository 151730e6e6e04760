"""Tests for macro property type discovery and the resolver."""

import pytest

from src.domain.entities import MacroPropertyBaseType, MacroPropertyType
from src.infrastructure.macro_property_types import (
    MacroPropertyTypeResolver,
    discover_macro_property_types,
)

BUILT_IN_ALIASES = {
    "text",
    "textMultiLine",
    "number",
    "bool",
    "contentPicker",
    "contentTree",
    "contentSubs",
    "contentRandom",
    "contentAll",
    "mediaCurrent",
    "contentType",
    "contentTypeSingle",
    "contentTypeMultiple",
    "propertyTypePicker",
    "propertyTypePickerMultiple",
    "tabPicker",
    "tabPickerMultiple",
}


class TestDiscovery:
    """Test plugin module discovery."""

    def test_discovers_all_built_in_types(self):
        types = discover_macro_property_types()
        assert {t.alias for t in types} == BUILT_IN_ALIASES

    def test_built_in_aliases_are_unique(self):
        aliases = [t.alias for t in discover_macro_property_types()]
        assert len(aliases) == len(set(aliases))

    def test_module_order_then_declaration_order(self):
        """Modules are visited by name: content, primitives, schema."""
        aliases = [t.alias for t in discover_macro_property_types()]

        assert aliases[0] == "contentPicker"
        assert aliases.index("mediaCurrent") < aliases.index("text")
        assert aliases.index("text") < aliases.index("textMultiLine")
        assert aliases[-1] == "tabPickerMultiple"

    @pytest.mark.parametrize(
        ("alias", "base_type"),
        [
            ("text", MacroPropertyBaseType.STRING),
            ("number", MacroPropertyBaseType.INT32),
            ("bool", MacroPropertyBaseType.BOOLEAN),
            ("contentPicker", MacroPropertyBaseType.INT32),
            ("tabPicker", MacroPropertyBaseType.STRING),
        ],
    )
    def test_base_types(self, alias, base_type):
        types = {t.alias: t for t in discover_macro_property_types()}
        assert types[alias].base_type is base_type


class TestResolver:
    """Test MacroPropertyTypeResolver behaviour."""

    def test_current_is_a_singleton(self):
        assert MacroPropertyTypeResolver.current() is MacroPropertyTypeResolver.current()

    def test_reset_replaces_current(self):
        first = MacroPropertyTypeResolver.current()
        MacroPropertyTypeResolver.reset()
        assert MacroPropertyTypeResolver.current() is not first

    def test_lazy_discovery(self, monkeypatch):
        calls = []

        def fake_discover():
            calls.append(1)
            return [MacroPropertyType("text", "Textbox")]

        monkeypatch.setattr(
            "src.infrastructure.macro_property_types.discover_macro_property_types",
            fake_discover,
        )
        resolver = MacroPropertyTypeResolver()
        assert calls == []

        resolver.macro_property_types
        resolver.macro_property_types
        assert calls == [1]

    def test_preloaded_types_skip_discovery(self, property_types):
        resolver = MacroPropertyTypeResolver(property_types)
        assert resolver.macro_property_types == property_types

    def test_returned_list_is_a_copy(self, property_types):
        resolver = MacroPropertyTypeResolver(property_types)
        resolver.macro_property_types.clear()
        assert len(resolver.macro_property_types) == 3

    def test_register_appends_after_existing(self, property_types):
        resolver = MacroPropertyTypeResolver(property_types)
        color = MacroPropertyType("colorPicker", "Color")

        resolver.register(color)

        assert resolver.macro_property_types[-1] == color
        assert len(resolver.macro_property_types) == 4

    def test_register_triggers_discovery_first(self):
        resolver = MacroPropertyTypeResolver()
        resolver.register(MacroPropertyType("colorPicker", "Color"))

        aliases = [t.alias for t in resolver.macro_property_types]
        assert aliases[-1] == "colorPicker"
        assert BUILT_IN_ALIASES <= set(aliases)

    def test_register_does_not_deduplicate(self):
        resolver = MacroPropertyTypeResolver()
        resolver.register(MacroPropertyType("text", "Plugin textbox"))

        matches = [t for t in resolver.macro_property_types if t.alias == "text"]
        assert [t.name for t in matches] == ["Textbox", "Plugin textbox"]
