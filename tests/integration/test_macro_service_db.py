"""End-to-end MacroService tests against an in-memory database."""

import pytest

from src.application.services.macro_service import MacroService
from src.domain.entities import Macro, MacroProperty
from src.infrastructure.macro_property_types import MacroPropertyTypeResolver


@pytest.fixture
async def service(uow_provider):
    return await MacroService.create(provider=uow_provider)


async def test_create_on_empty_database(uow_provider):
    service = await MacroService.create(provider=uow_provider)
    assert await service.get_all() == []


async def test_uses_current_resolver_by_default(uow_provider):
    service = MacroService(provider=uow_provider)

    assert service.get_macro_property_types() == (
        MacroPropertyTypeResolver.current().macro_property_types
    )
    assert service.get_macro_property_type_by_alias("contentPicker").name == "Content picker"
    assert service.get_macro_property_type_by_alias("unknownEditor") is None


async def test_save_then_read_back(service, macro_with_properties):
    saved = await service.save(macro_with_properties)

    loaded = await service.get_by_alias("newsList")

    assert loaded == saved
    assert loaded.id is not None
    assert [p.alias for p in loaded.properties] == ["startNode", "count"]


async def test_save_updates_existing(service, macro):
    first = await service.save(macro)
    second = await service.save(
        macro.with_properties([MacroProperty("year", "Year", "number")])
    )

    assert second.id == first.id
    assert (await service.get_by_alias("footer")).properties == [
        MacroProperty("year", "Year", "number")
    ]


async def test_get_all_filters(service, macro, macro_with_properties):
    await service.save(macro)
    await service.save(macro_with_properties)

    assert [m.alias for m in await service.get_all()] == ["footer", "newsList"]
    assert [m.alias for m in await service.get_all("newsList")] == ["newsList"]
    assert await service.get_all("missing") == []


async def test_delete(service, macro):
    saved = await service.save(macro)

    await service.delete(saved)

    assert await service.get_by_alias("footer") is None


async def test_delete_unsaved_macro_is_silent(service):
    await service.delete(Macro(alias="ghost"))
    assert await service.get_all() == []


async def test_failed_save_leaves_nothing_behind(service, macro):
    with pytest.raises(ValueError):
        await service.save(macro.with_id(12))

    assert await service.get_all() == []
