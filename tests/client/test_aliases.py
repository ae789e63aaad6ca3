"""Unit tests for the alias store.

This module tests AliasStore defined in translate_center/aliases.py.
The tests verify:

1. Basic mapping operations (set, get, has, overwrite)
2. Atomic multi-alias writes
3. Template resolution, including the all-or-nothing failure mode
4. Consistency under concurrent readers and writers
"""

import threading

import pytest

from translate_center.aliases import AliasStore
from translate_center.exceptions import TranslateClientError, UnknownAliasError


# =============================================================================
# Mapping Operations
# =============================================================================

class TestAliasMapping:
    """Tests for storing and reading alias values."""

    def test_empty_store_has_no_aliases(self) -> None:
        """A new store holds nothing."""
        store = AliasStore()
        assert not store.has_alias("authToken")
        assert len(store) == 0

    def test_initial_values(self) -> None:
        """Initial values are available immediately."""
        store = AliasStore({"authToken": "abc"})
        assert store.get_alias("authToken") == "abc"

    def test_initial_mapping_is_copied(self) -> None:
        """Mutating the mapping passed in does not affect the store."""
        initial = {"authToken": "abc"}
        store = AliasStore(initial)
        initial["authToken"] = "changed"
        assert store.get_alias("authToken") == "abc"

    def test_set_then_get(self) -> None:
        """set_alias stores a value readable by get_alias."""
        store = AliasStore()
        store.set_alias("userUuid", "42")

        assert store.has_alias("userUuid")
        assert store.get_alias("userUuid") == "42"
        assert "userUuid" in store

    def test_set_overwrites(self) -> None:
        """A second set_alias replaces the first value."""
        store = AliasStore()
        store.set_alias("authToken", "old")
        store.set_alias("authToken", "new")
        assert store.get_alias("authToken") == "new"

    def test_empty_string_is_a_value(self) -> None:
        """An empty string counts as present."""
        store = AliasStore()
        store.set_alias("blank", "")
        assert store.has_alias("blank")
        assert store.get_alias("blank") == ""

    def test_get_missing_raises(self) -> None:
        """get_alias on a missing name raises UnknownAliasError."""
        store = AliasStore()
        with pytest.raises(UnknownAliasError) as exc_info:
            store.get_alias("authToken")

        assert exc_info.value.names == ["authToken"]
        assert isinstance(exc_info.value, TranslateClientError)

    def test_has_aliases_requires_all(self) -> None:
        """has_aliases is true only when every name is present."""
        store = AliasStore()
        store.set_alias("authToken", "abc")

        assert store.has_aliases("authToken")
        assert not store.has_aliases("authToken", "userUuid")

        store.set_alias("userUuid", "42")
        assert store.has_aliases("authToken", "userUuid")

    def test_set_aliases_stores_all(self) -> None:
        """set_aliases writes every entry."""
        store = AliasStore()
        store.set_aliases({"authToken": "abc", "userUuid": "42"})
        assert store.get_alias("authToken") == "abc"
        assert store.get_alias("userUuid") == "42"

    def test_names_and_iteration(self) -> None:
        """names() and iteration list the stored names."""
        store = AliasStore({"a": "1", "b": "2"})
        assert sorted(store.names()) == ["a", "b"]
        assert sorted(store) == ["a", "b"]

    def test_repr_hides_values(self) -> None:
        """The repr lists names but never values."""
        store = AliasStore({"authToken": "very-secret"})
        assert "authToken" in repr(store)
        assert "very-secret" not in repr(store)


# =============================================================================
# Template Resolution
# =============================================================================

class TestResolve:
    """Tests for AliasStore.resolve."""

    def test_resolve_single_placeholder(self) -> None:
        """A lone placeholder resolves to the exact stored value."""
        store = AliasStore({"authToken": "Bearer abc.def"})
        assert store.resolve("{authToken}") == "Bearer abc.def"

    def test_resolve_inside_uri(self) -> None:
        """Placeholders inside a longer string are substituted in place."""
        store = AliasStore({"userUuid": "u-1", "project": "p9"})
        assert store.resolve("users/{userUuid}/projects/{project}") == "users/u-1/projects/p9"

    def test_resolve_repeated_placeholder(self) -> None:
        """The same placeholder may appear several times."""
        store = AliasStore({"x": "1"})
        assert store.resolve("{x}-{x}") == "1-1"

    def test_resolve_without_placeholders(self) -> None:
        """Strings without placeholders come back unchanged."""
        store = AliasStore()
        assert store.resolve("projects?page=2") == "projects?page=2"

    def test_braces_that_are_not_placeholders(self) -> None:
        """Braces around characters outside the name pattern are left alone."""
        store = AliasStore()
        assert store.resolve("{ not an alias }") == "{ not an alias }"
        assert store.resolve("{}") == "{}"

    def test_resolve_missing_raises(self) -> None:
        """A missing alias raises UnknownAliasError."""
        store = AliasStore()
        with pytest.raises(UnknownAliasError) as exc_info:
            store.resolve("{missing}")
        assert exc_info.value.names == ["missing"]

    def test_resolve_is_all_or_nothing(self) -> None:
        """One missing alias fails the whole resolution and names every gap."""
        store = AliasStore({"userUuid": "42"})
        with pytest.raises(UnknownAliasError) as exc_info:
            store.resolve("users/{userUuid}/{project}/{task}/{project}")

        assert exc_info.value.names == ["project", "task"]
        assert "project" in str(exc_info.value)

    def test_resolved_values_are_not_resolved_again(self) -> None:
        """A value containing braces is inserted literally."""
        store = AliasStore({"a": "{b}", "b": "nope"})
        assert store.resolve("{a}") == "{b}"

    def test_resolve_sees_latest_value(self) -> None:
        """Resolution reflects overwrites."""
        store = AliasStore({"authToken": "token-1"})
        store.set_alias("authToken", "token-2")
        assert store.resolve("{authToken}") == "token-2"


# =============================================================================
# Concurrency
# =============================================================================

class TestAliasStoreConcurrency:
    """Tests for consistency under concurrent use."""

    def test_paired_writes_are_never_torn(self) -> None:
        """Readers never see a token from one write and a user from another."""
        store = AliasStore({"authToken": "token-0", "userUuid": "user-0"})
        torn: list[str] = []
        stop = threading.Event()

        def writer(offset: int) -> None:
            for i in range(offset, offset + 500):
                store.set_aliases({"authToken": f"token-{i}", "userUuid": f"user-{i}"})

        def reader() -> None:
            while not stop.is_set():
                value = store.resolve("{authToken}|{userUuid}")
                token, user = value.split("|")
                if token.split("-")[1] != user.split("-")[1]:
                    torn.append(value)

        readers = [threading.Thread(target=reader) for _ in range(3)]
        writers = [threading.Thread(target=writer, args=(n * 1000,)) for n in range(3)]
        for thread in readers + writers:
            thread.start()
        for thread in writers:
            thread.join()
        stop.set()
        for thread in readers:
            thread.join()

        assert torn == []
