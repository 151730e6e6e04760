"""Property types for plain values typed in by the editor."""

from src.domain.entities import MacroPropertyBaseType, MacroPropertyType


def get_macro_property_types() -> list[MacroPropertyType]:
    return [
        MacroPropertyType("text", "Textbox", MacroPropertyBaseType.STRING),
        MacroPropertyType("textMultiLine", "Textbox multiple", MacroPropertyBaseType.STRING),
        MacroPropertyType("number", "Numeric", MacroPropertyBaseType.INT32),
        MacroPropertyType("bool", "True/false", MacroPropertyBaseType.BOOLEAN),
    ]
