"""Macro repository mapper for domain-persistence conversions."""

from attrs import define

from src.config import get_logger
from src.domain.entities import Macro, MacroProperty, MacroType
from src.infrastructure.persistence.database.db_models import DBMacro, DBMacroProperty
from src.infrastructure.persistence.repositories.base_repo import BaseModelMapper

logger = get_logger(__name__)


@define(frozen=True, slots=True)
class MacroMapper(BaseModelMapper[DBMacro, Macro]):
    """Bidirectional mapper between domain and persistence models."""

    @staticmethod
    def get_default_relationships() -> list[str]:
        """Get default relationships to load for this model."""
        return ["properties"]

    @staticmethod
    async def to_domain(db_model: DBMacro) -> Macro:
        """Convert persistence model to domain entity."""
        if not db_model:
            return None

        db_properties = await db_model.awaitable_attrs.properties

        return Macro(
            id=db_model.id,
            alias=db_model.alias,
            name=db_model.name,
            macro_type=MacroType(db_model.macro_type),
            macro_source=db_model.macro_source,
            use_in_editor=db_model.use_in_editor,
            dont_render=db_model.dont_render,
            cache_duration=db_model.cache_duration,
            cache_by_page=db_model.cache_by_page,
            cache_by_member=db_model.cache_by_member,
            properties=[
                MacroProperty(
                    alias=p.alias,
                    name=p.name,
                    property_type_alias=p.property_type_alias,
                    sort_order=p.sort_order,
                )
                for p in sorted(db_properties, key=lambda p: p.sort_order)
            ],
        )

    @staticmethod
    def to_db(domain_model: Macro) -> DBMacro:
        """Convert domain entity to a new persistence model."""
        db_macro = DBMacro(id=domain_model.id, properties=[])
        MacroMapper.apply_to_db(db_macro, domain_model)
        return db_macro

    @staticmethod
    def apply_to_db(db_model: DBMacro, domain_model: Macro) -> DBMacro:
        """Copy domain state onto an existing persistence model.

        Property rows are matched by alias and updated in place; rows whose
        alias is gone are orphaned and removed on flush. Requires the
        ``properties`` relationship to be loaded.
        """
        db_model.alias = domain_model.alias
        db_model.name = domain_model.name
        db_model.macro_type = domain_model.macro_type.value
        db_model.macro_source = domain_model.macro_source
        db_model.use_in_editor = domain_model.use_in_editor
        db_model.dont_render = domain_model.dont_render
        db_model.cache_duration = domain_model.cache_duration
        db_model.cache_by_page = domain_model.cache_by_page
        db_model.cache_by_member = domain_model.cache_by_member

        existing = {p.alias: p for p in db_model.properties}
        properties = []
        for prop in domain_model.properties:
            db_prop = existing.get(prop.alias) or DBMacroProperty(alias=prop.alias)
            db_prop.name = prop.name
            db_prop.sort_order = prop.sort_order
            db_prop.property_type_alias = prop.property_type_alias
            properties.append(db_prop)

        db_model.properties = properties
        return db_model
