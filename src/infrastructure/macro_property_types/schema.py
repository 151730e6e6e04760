"""Property types that pick parts of the content schema.

These store aliases, so their base type is string.
"""

from src.domain.entities import MacroPropertyBaseType, MacroPropertyType


def get_macro_property_types() -> list[MacroPropertyType]:
    string = MacroPropertyBaseType.STRING
    return [
        MacroPropertyType("contentType", "Document type", string),
        MacroPropertyType("contentTypeSingle", "Single document type", string),
        MacroPropertyType("contentTypeMultiple", "Multiple document types", string),
        MacroPropertyType("propertyTypePicker", "Property type", string),
        MacroPropertyType("propertyTypePickerMultiple", "Multiple property types", string),
        MacroPropertyType("tabPicker", "Tab", string),
        MacroPropertyType("tabPickerMultiple", "Multiple tabs", string),
    ]
