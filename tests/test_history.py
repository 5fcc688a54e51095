"""Tests for the no-repeat history stores and scope keys."""

import json

import pytest

from passmint import GenerationRequest, JsonHistoryStore, MemoryHistoryStore, Policy, fingerprint, scope_key


class TestMemoryHistoryStore:
    def test_remember_and_has(self):
        store = MemoryHistoryStore()
        store.remember("s", "abc")
        assert store.has("s", "abc")
        assert not store.has("s", "def")

    def test_scopes_are_independent(self):
        store = MemoryHistoryStore()
        store.remember("one", "abc")
        assert not store.has("two", "abc")

    def test_oldest_evicted_over_cap(self):
        store = MemoryHistoryStore(cap=3)
        for d in ["a", "b", "c", "d"]:
            store.remember("s", d)
        assert store.size("s") == 3
        assert not store.has("s", "a")
        assert store.has("s", "d")

    def test_re_remember_refreshes_age(self):
        store = MemoryHistoryStore(cap=2)
        store.remember("s", "a")
        store.remember("s", "b")
        store.remember("s", "a")
        store.remember("s", "c")
        assert store.has("s", "a")
        assert not store.has("s", "b")

    def test_clear(self):
        store = MemoryHistoryStore()
        store.remember("one", "a")
        store.remember("two", "a")
        store.clear("one")
        assert not store.has("one", "a")
        assert store.has("two", "a")

    def test_invalid_cap(self):
        with pytest.raises(ValueError):
            MemoryHistoryStore(cap=0)


class TestJsonHistoryStore:
    def test_survives_restart(self, tmp_path):
        path = tmp_path / "history.json"
        JsonHistoryStore(path).remember("s", "abc")
        assert JsonHistoryStore(path).has("s", "abc")

    def test_file_layout(self, tmp_path):
        path = tmp_path / "history.json"
        store = JsonHistoryStore(path)
        store.remember("s", "a")
        store.remember("s", "b")
        assert json.loads(path.read_text()) == {"s": ["a", "b"]}

    def test_cap_applied_on_load(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text(json.dumps({"s": ["a", "b", "c", "d"]}))
        store = JsonHistoryStore(path, cap=2)
        assert store.size("s") == 2
        assert store.has("s", "d")
        assert not store.has("s", "a")

    def test_unreadable_file_starts_empty(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text("{not json")
        store = JsonHistoryStore(path)
        assert store.size("s") == 0
        store.remember("s", "a")
        assert JsonHistoryStore(path).has("s", "a")


class TestScopeKey:
    def test_stable(self):
        assert scope_key(GenerationRequest()) == scope_key(GenerationRequest())

    def test_changes_with_settings(self):
        assert scope_key(GenerationRequest(length=8)) != scope_key(GenerationRequest(length=9))
        assert scope_key(GenerationRequest()) != scope_key(
            GenerationRequest(policy=Policy(min_length=4))
        )

    def test_ignores_attempts_and_switch(self):
        assert scope_key(GenerationRequest()) == scope_key(
            GenerationRequest(no_repeat=True, max_attempts=10)
        )

    def test_fingerprint_is_sha256(self):
        assert fingerprint("password") == (
            "5e884898da28047151d0e56f8dc6292773603d0d6aabbdd62a11ef721d1542d8"
        )
