"""Macro-related domain entities.

Pure macro representations and the property-type plugin descriptor with zero
external dependencies beyond attrs.
"""

from enum import StrEnum

import attrs
from attrs import define, field, validators


class MacroType(StrEnum):
    """Rendering engine a macro is implemented with."""

    UNKNOWN = "unknown"
    XSLT = "xslt"
    CUSTOM_CONTROL = "custom_control"
    USER_CONTROL = "user_control"
    PYTHON = "python"
    SCRIPT = "script"
    PARTIAL_VIEW = "partial_view"


class MacroPropertyBaseType(StrEnum):
    """Underlying value type of a macro property editor."""

    STRING = "string"
    INT32 = "int32"
    BOOLEAN = "boolean"


@define(frozen=True, slots=True)
class MacroPropertyType:
    """Plugin descriptor for a kind of macro parameter editor.

    Property types are registered process-wide and referenced from
    macro properties by alias only.
    """

    alias: str
    name: str
    base_type: MacroPropertyBaseType = MacroPropertyBaseType.STRING


@define(frozen=True, slots=True)
class MacroProperty:
    """A named parameter accepted by a macro."""

    alias: str
    name: str
    property_type_alias: str = "text"
    sort_order: int = 0


@define(frozen=True, slots=True)
class Macro:
    """Reusable content-insertion unit managed by the CMS.

    The alias is the macro's unique textual key. It is carried as-is; nothing
    in the domain validates its format.
    """

    alias: str = field(validator=validators.instance_of(str))
    name: str = field(default="")
    macro_type: MacroType = field(default=MacroType.UNKNOWN, converter=MacroType)
    macro_source: str = field(default="")
    use_in_editor: bool = field(default=False)
    dont_render: bool = field(default=False)
    cache_duration: int = field(default=0)
    cache_by_page: bool = field(default=False)
    cache_by_member: bool = field(default=False)
    properties: list[MacroProperty] = field(factory=list)

    @properties.validator
    def _check_unique_property_aliases(self, attribute, value):
        aliases = [p.alias for p in value]
        duplicates = sorted({a for a in aliases if aliases.count(a) > 1})
        if duplicates:
            raise ValueError(
                f"Duplicate property aliases in macro '{self.alias}': {', '.join(duplicates)}",
            )

    # The internal database ID, None until persisted
    id: int | None = field(default=None)

    def get_property(self, alias: str) -> MacroProperty | None:
        """Return the property with the given alias, if any."""
        return next((p for p in self.properties if p.alias == alias), None)

    def with_properties(self, properties: list[MacroProperty]) -> "Macro":
        """Create a new macro with the given properties."""
        return attrs.evolve(self, properties=list(properties))

    def with_id(self, db_id: int) -> "Macro":
        """Set the internal database ID for this macro."""
        if not isinstance(db_id, int) or db_id <= 0:
            raise ValueError(
                f"Invalid database ID: {db_id}. Must be a positive integer.",
            )
        return attrs.evolve(self, id=db_id)
