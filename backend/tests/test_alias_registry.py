"""
Tests for the alias registry: seeding, fallbacks, CRUD invariants.
"""

import asyncio
import json
import shutil
import tempfile

import pytest

from errors import (
    AliasNotFoundError,
    CapacityExceededError,
    DuplicateAliasError,
    ImmutableFieldError,
    ValidationError,
)
from models.alias import Alias, AliasUpdate
from models.event import LaunchTarget
from storage.alias_registry import MAX_ALIASES, AliasRegistry
from storage.catalog import BUILTIN_COMMANDS, is_builtin, predefined_commands


def run_async(coro):
    return asyncio.run(coro)


def _alias(n: int, alias_id=None) -> Alias:
    return Alias(
        id=f"alias-{n}" if alias_id is None else alias_id,
        title=f"Alias {n}",
        target=LaunchTarget(owner="raycast", extension=f"ext-{n}", command=f"cmd-{n}"),
    )


class RegistryCase:
    def setup_method(self):
        self.tmpdir = tempfile.mkdtemp(prefix="clinic_aliases_")
        self.registry = AliasRegistry(self.tmpdir, clock=lambda: 1_700_000_000.5)

    def teardown_method(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def _on_disk(self) -> list[dict]:
        with open(self.registry.path, encoding="utf-8") as f:
            return json.load(f)

    def _fill(self, count: int) -> None:
        run_async(self.registry.save([_alias(i) for i in range(count)]))


# ── list ──────────────────────────────────────────────────────────────────

class TestList(RegistryCase):

    def test_missing_document_seeds_three_defaults_in_order(self):
        aliases = run_async(self.registry.list())

        assert [a.id for a in aliases] == ["file-search", "clipboard-history", "window-management"]
        assert [a["id"] for a in self._on_disk()] == ["file-search", "clipboard-history", "window-management"]

    def test_document_is_pretty_printed(self):
        run_async(self.registry.list())
        with open(self.registry.path, encoding="utf-8") as f:
            text = f.read()
        assert text.startswith("[\n  {")

    def test_loads_existing_document(self):
        with open(self.registry.path, "w", encoding="utf-8") as f:
            json.dump([{
                "id": "gh",
                "title": "GitHub",
                "target": {"owner": "raycast", "extension": "github", "command": "search-repositories"},
                "suggestHotkey": "⌥⌘G",
            }], f)

        aliases = run_async(self.registry.list())

        assert len(aliases) == 1
        assert aliases[0].suggest_hotkey == "⌥⌘G"

    def test_corrupted_document_falls_back_to_defaults(self):
        with open(self.registry.path, "w", encoding="utf-8") as f:
            f.write("{ not json")

        aliases = run_async(self.registry.list())

        assert [a.id for a in aliases] == ["file-search", "clipboard-history", "window-management"]
        with open(self.registry.path, encoding="utf-8") as f:
            assert f.read() == "{ not json"

    def test_non_utf8_document_falls_back_to_defaults(self):
        with open(self.registry.path, "wb") as f:
            f.write(b"\xff\xfe[garbage")

        aliases = run_async(self.registry.list())

        assert [a.id for a in aliases] == ["file-search", "clipboard-history", "window-management"]
        with open(self.registry.path, "rb") as f:
            assert f.read() == b"\xff\xfe[garbage"

    def test_wrong_shape_falls_back_to_defaults(self):
        with open(self.registry.path, "w", encoding="utf-8") as f:
            json.dump([{"id": "missing-target"}], f)

        assert len(run_async(self.registry.list())) == 3

    def test_get_by_id(self):
        assert run_async(self.registry.get("clipboard-history")).title == "Clipboard History"
        assert run_async(self.registry.get("nope")) is None


# ── add ───────────────────────────────────────────────────────────────────

class TestAdd(RegistryCase):

    def test_added_alias_listed_exactly_once(self):
        run_async(self.registry.add(_alias(1)))

        aliases = run_async(self.registry.list())
        assert [a.id for a in aliases].count("alias-1") == 1
        assert len(aliases) == 4

    def test_duplicate_id_rejected_and_set_unchanged(self):
        self._fill(2)
        before = self._on_disk()

        duplicate = _alias(99, alias_id="alias-0")
        with pytest.raises(DuplicateAliasError):
            run_async(self.registry.add(duplicate))

        assert self._on_disk() == before

    def test_duplicate_target_rejected_and_set_unchanged(self):
        self._fill(2)
        before = self._on_disk()

        same_target = Alias(
            id="fresh-id",
            title="Other title",
            target=LaunchTarget(owner="raycast", extension="ext-1", command="cmd-1", args={"q": "x"}),
        )
        with pytest.raises(DuplicateAliasError):
            run_async(self.registry.add(same_target))

        assert self._on_disk() == before

    def test_capacity_exceeded_at_twenty(self):
        self._fill(MAX_ALIASES)
        before = self._on_disk()

        with pytest.raises(CapacityExceededError):
            run_async(self.registry.add(_alias(100)))

        assert self._on_disk() == before

    def test_nineteen_allows_one_more(self):
        self._fill(MAX_ALIASES - 1)
        run_async(self.registry.add(_alias(100)))
        assert len(run_async(self.registry.list())) == MAX_ALIASES

    def test_errors_are_validation_errors(self):
        self._fill(MAX_ALIASES)
        with pytest.raises(ValidationError):
            run_async(self.registry.add(_alias(100)))

    def test_empty_id_is_generated_from_target(self):
        self._fill(0)
        added = run_async(self.registry.add(_alias(7, alias_id="")))

        assert added.id == "ext-7_cmd-7_1700000000500"
        assert self._on_disk()[0]["id"] == "ext-7_cmd-7_1700000000500"


# ── update / remove ───────────────────────────────────────────────────────

class TestUpdateRemove(RegistryCase):

    def setup_method(self):
        super().setup_method()
        self._fill(3)

    def test_update_merges_partial_fields(self):
        updated = run_async(self.registry.update("alias-1", AliasUpdate(title="Renamed")))

        assert updated.title == "Renamed"
        assert updated.target.extension == "ext-1"
        assert self._on_disk()[1]["title"] == "Renamed"

    def test_update_can_change_target_keeping_id(self):
        new_target = LaunchTarget(owner="notion", extension="notion", command="search-page")
        updated = run_async(self.registry.update("alias-2", AliasUpdate(target=new_target)))

        assert updated.id == "alias-2"
        assert run_async(self.registry.get("alias-2")).target.owner == "notion"

    def test_update_with_same_id_is_allowed(self):
        updated = run_async(self.registry.update("alias-0", AliasUpdate(id="alias-0", suggest_hotkey="⌥⌘1")))
        assert updated.suggest_hotkey == "⌥⌘1"

    def test_update_rejects_id_change_and_leaves_record(self):
        before = self._on_disk()

        with pytest.raises(ImmutableFieldError):
            run_async(self.registry.update("alias-0", AliasUpdate(id="other", title="x")))

        assert self._on_disk() == before

    def test_update_rejects_target_of_another_alias(self):
        before = self._on_disk()
        taken = _alias(1).target

        with pytest.raises(DuplicateAliasError):
            run_async(self.registry.update("alias-2", AliasUpdate(target=taken)))

        assert self._on_disk() == before

    def test_update_keeping_own_target_is_allowed(self):
        own = _alias(2).target
        updated = run_async(self.registry.update("alias-2", AliasUpdate(target=own, title="Two")))
        assert updated.title == "Two"

    def test_update_with_null_required_field_is_validation_error(self):
        before = self._on_disk()

        with pytest.raises(ValidationError) as excinfo:
            run_async(self.registry.update("alias-1", AliasUpdate.model_validate({"title": None})))

        assert "title" in excinfo.value.message
        assert self._on_disk() == before

    def test_update_unknown_id(self):
        with pytest.raises(AliasNotFoundError):
            run_async(self.registry.update("ghost", AliasUpdate(title="x")))

    def test_remove(self):
        run_async(self.registry.remove("alias-1"))
        assert [a.id for a in run_async(self.registry.list())] == ["alias-0", "alias-2"]

    def test_remove_unknown_id_is_validation_error(self):
        with pytest.raises(ValidationError):
            run_async(self.registry.remove("ghost"))

    def test_remove_all_persists_empty_set(self):
        for alias_id in ("alias-0", "alias-1", "alias-2"):
            run_async(self.registry.remove(alias_id))

        assert self._on_disk() == []
        assert run_async(self.registry.list()) == []

    def test_crud_lifecycle(self):
        run_async(self.registry.add(_alias(10)))
        run_async(self.registry.update("alias-10", AliasUpdate(title="Ten")))
        assert run_async(self.registry.get("alias-10")).title == "Ten"
        run_async(self.registry.remove("alias-10"))
        assert run_async(self.registry.get("alias-10")) is None


# ── catalog ───────────────────────────────────────────────────────────────

class TestCatalog:

    def test_ids_and_targets_unique(self):
        commands = predefined_commands()
        assert len({a.id for a in commands}) == len(commands)
        assert len({a.target.key() for a in commands}) == len(commands)

    def test_builtin_detection(self):
        assert all(is_builtin(a) for a in BUILTIN_COMMANDS)
        assert not is_builtin(_alias(1))
        assert not any(is_builtin(a) for a in predefined_commands()[len(BUILTIN_COMMANDS):])

    def test_catalog_entries_can_be_added(self):
        tmpdir = tempfile.mkdtemp(prefix="clinic_catalog_")
        try:
            registry = AliasRegistry(tmpdir)
            run_async(registry.save([]))
            for alias in predefined_commands()[:MAX_ALIASES]:
                run_async(registry.add(alias))
            assert len(run_async(registry.list())) == MAX_ALIASES
        finally:
            shutil.rmtree(tmpdir, ignore_errors=True)
