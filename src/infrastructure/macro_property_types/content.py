"""Property types that pick content or media nodes.

Pickers store node ids, hence the int32 base type.
"""

from src.domain.entities import MacroPropertyBaseType, MacroPropertyType


def get_macro_property_types() -> list[MacroPropertyType]:
    return [
        MacroPropertyType("contentPicker", "Content picker", MacroPropertyBaseType.INT32),
        MacroPropertyType("contentTree", "Content tree", MacroPropertyBaseType.INT32),
        MacroPropertyType("contentSubs", "Content with subpages", MacroPropertyBaseType.INT32),
        MacroPropertyType("contentRandom", "Random content", MacroPropertyBaseType.INT32),
        MacroPropertyType("contentAll", "All content", MacroPropertyBaseType.INT32),
        MacroPropertyType("mediaCurrent", "Media picker", MacroPropertyBaseType.INT32),
    ]
