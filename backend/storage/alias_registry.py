"""
Alias registry: a small, bounded set of launch-target aliases persisted as
one pretty-printed JSON array (``aliases.json``).

Every mutation re-reads the document, changes it and writes the whole thing
back. No cache survives between calls and nothing is locked, so two
processes mutating at once resolve as last-writer-wins.
"""

import asyncio
import json
import logging
import os
import time
from typing import Callable, Optional

import pydantic

from errors import (
    AliasNotFoundError,
    CapacityExceededError,
    DuplicateAliasError,
    ImmutableFieldError,
    ValidationError,
)
from models.alias import Alias, AliasUpdate
from models.event import LaunchTarget

logger = logging.getLogger(__name__)

ALIASES_FILENAME = "aliases.json"
MAX_ALIASES = 20

DEFAULT_ALIASES: list[Alias] = [
    Alias(
        id="file-search",
        title="File Search",
        target=LaunchTarget(owner="raycast", extension="file-search", command="search-files"),
    ),
    Alias(
        id="clipboard-history",
        title="Clipboard History",
        target=LaunchTarget(owner="raycast", extension="clipboard-history", command="clipboard-history"),
    ),
    Alias(
        id="window-management",
        title="Window Management",
        target=LaunchTarget(owner="raycast", extension="window-management", command="tile-window"),
    ),
]

_alias_list_adapter = pydantic.TypeAdapter(list[Alias])


def default_aliases() -> list[Alias]:
    """Fresh copies, so callers can't mutate the module-level defaults."""
    return [alias.model_copy(deep=True) for alias in DEFAULT_ALIASES]


def _check_target_free(aliases: list[Alias], target: LaunchTarget) -> None:
    for existing in aliases:
        if existing.target.key() == target.key():
            raise DuplicateAliasError(
                f"{existing.title!r} already launches "
                f"{target.owner}/{target.extension}/{target.command}"
            )


class AliasRegistry:
    def __init__(
        self,
        support_path: str,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.support_path = support_path
        self.path = os.path.join(support_path, ALIASES_FILENAME)
        self._clock = clock or time.time

    # ─── Document I/O ──────────────────────────────────────────────────

    def _write(self, aliases: list[Alias]) -> None:
        os.makedirs(self.support_path, exist_ok=True)
        data = [alias.model_dump(by_alias=True, exclude_none=True) for alias in aliases]
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def _read(self) -> list[Alias]:
        if not os.path.exists(self.path):
            aliases = default_aliases()
            try:
                self._write(aliases)
            except OSError as exc:
                logger.warning("Could not seed %s with default aliases: %s", self.path, exc)
            return aliases

        try:
            with open(self.path, encoding="utf-8") as f:
                return _alias_list_adapter.validate_json(f.read())
        except (OSError, UnicodeDecodeError, pydantic.ValidationError) as exc:
            logger.warning("Could not read %s, using default aliases: %s", self.path, exc)
            return default_aliases()

    def _save(self, aliases: list[Alias]) -> None:
        try:
            self._write(aliases)
        except OSError:
            logger.exception("Failed to save aliases to %s", self.path)
            raise

    # ─── Public API ────────────────────────────────────────────────────

    async def get(self, alias_id: str) -> Optional[Alias]:
        for alias in await self.list():
            if alias.id == alias_id:
                return alias
        return None

    async def save(self, aliases: list[Alias]) -> None:
        """Overwrite the document with ``aliases`` as given."""
        await asyncio.to_thread(self._save, aliases)

    async def add(self, alias: Alias) -> Alias:
        aliases = await self.list()

        if len(aliases) >= MAX_ALIASES:
            raise CapacityExceededError(
                f"Alias limit reached ({MAX_ALIASES}). Remove an alias before adding another."
            )

        for existing in aliases:
            if alias.id and existing.id == alias.id:
                raise DuplicateAliasError(f"An alias with id {alias.id!r} already exists")
        _check_target_free(aliases, alias.target)

        alias = alias.model_copy(deep=True)
        if not alias.id:
            alias.id = f"{alias.target.extension}_{alias.target.command}_{int(self._clock() * 1000)}"

        aliases.append(alias)
        await self.save(aliases)
        logger.info("Added alias %s", alias.id)
        return alias

    async def update(self, alias_id: str, update: AliasUpdate) -> Alias:
        aliases = await self.list()

        for index, existing in enumerate(aliases):
            if existing.id == alias_id:
                break
        else:
            raise AliasNotFoundError(f"Alias not found: {alias_id}")

        changes = update.changes()
        if changes.get("id") is not None and changes["id"] != alias_id:
            raise ImmutableFieldError("An alias id cannot be changed once created")
        changes.pop("id", None)

        try:
            merged = Alias.model_validate({**existing.model_dump(), **changes})
        except pydantic.ValidationError as exc:
            fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err["loc"])
            raise ValidationError(f"Invalid update for alias {alias_id!r}: {fields or exc}") from exc

        others = aliases[:index] + aliases[index + 1:]
        _check_target_free(others, merged.target)

        aliases[index] = merged
        await self.save(aliases)
        return merged

    async def remove(self, alias_id: str) -> None:
        aliases = await self.list()
        remaining = [alias for alias in aliases if alias.id != alias_id]
        if len(remaining) == len(aliases):
            raise AliasNotFoundError(f"Alias not found: {alias_id}")
        await self.save(remaining)
        logger.info("Removed alias %s", alias_id)

    # Kept last: from here on, ``list`` in this class body is the method.
    async def list(self) -> list[Alias]:
        """
        All aliases. A missing document is seeded with the three defaults;
        an unreadable one yields the defaults without touching the file.
        """
        return await asyncio.to_thread(self._read)
