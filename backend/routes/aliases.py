from fastapi import APIRouter

import store
from errors import AliasNotFoundError
from models.alias import Alias, AliasUpdate
from storage.catalog import is_builtin, predefined_commands

router = APIRouter(tags=["aliases"])


class CatalogEntry(Alias):
    builtin: bool


@router.get("/aliases", response_model=list[Alias], response_model_exclude_none=True)
async def list_aliases():
    return await store.alias_registry.list()


@router.put("/aliases", response_model=list[Alias], response_model_exclude_none=True)
async def replace_aliases(body: list[Alias]):
    """Bulk replace. No capacity or duplicate checks are applied."""
    await store.alias_registry.save(body)
    return body


@router.post("/aliases", response_model=Alias, status_code=201, response_model_exclude_none=True)
async def add_alias(body: Alias):
    """Adds an alias. An empty `id` is generated from the target."""
    return await store.alias_registry.add(body)


@router.get("/aliases/{alias_id}", response_model=Alias, response_model_exclude_none=True)
async def get_alias(alias_id: str):
    alias = await store.alias_registry.get(alias_id)
    if alias is None:
        raise AliasNotFoundError(f"Alias not found: {alias_id}")
    return alias


@router.patch("/aliases/{alias_id}", response_model=Alias, response_model_exclude_none=True)
async def update_alias(alias_id: str, body: AliasUpdate):
    return await store.alias_registry.update(alias_id, body)


@router.delete("/aliases/{alias_id}", status_code=204)
async def remove_alias(alias_id: str):
    await store.alias_registry.remove(alias_id)


@router.get("/catalog", response_model=list[CatalogEntry], response_model_exclude_none=True)
async def catalog():
    """Predefined commands offered during onboarding, built-in ones flagged."""
    return [
        CatalogEntry(**alias.model_dump(), builtin=is_builtin(alias))
        for alias in predefined_commands()
    ]
