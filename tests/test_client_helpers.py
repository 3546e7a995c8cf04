"""Tests for debounce, local storage, session context and infinite loading."""

import json
import tempfile
import threading
from pathlib import Path
from unittest.mock import MagicMock

from django.test import SimpleTestCase

from quezi_core.adapters.context.session_context import TOKEN_KEY, USER_KEY, SessionContext
from quezi_core.adapters.storage.local_storage import LocalStorage, StoredValue
from quezi_core.core.application.cqrs import PagedResult
from quezi_core.core.application.services.debouncer import Debouncer, DebouncedValue
from quezi_core.core.application.services.infinite_loader import InfiniteLoader


class DebouncerTests(SimpleTestCase):
    def test_only_last_call_runs_after_quiet_period(self) -> None:
        calls = []
        done = threading.Event()

        def callback(value):
            calls.append(value)
            done.set()

        debounced = Debouncer(callback, delay=0.05)
        for term in ("m", "ma", "mar", "mari"):
            debounced(term)

        self.assertTrue(done.wait(timeout=2))
        self.assertEqual(calls, ["mari"])
        self.assertFalse(debounced.pending)

    def test_cancel_discards_pending_call(self) -> None:
        callback = MagicMock()
        debounced = Debouncer(callback, delay=0.05)
        debounced.call("x")
        self.assertTrue(debounced.pending)
        debounced.cancel()
        self.assertFalse(debounced.pending)
        self.assertIsNone(debounced.flush())
        callback.assert_not_called()

    def test_flush_runs_pending_call_immediately(self) -> None:
        callback = MagicMock(return_value="ok")
        debounced = Debouncer(callback, delay=10)
        debounced.call(1, key="v")
        self.assertEqual(debounced.flush(), "ok")
        callback.assert_called_once_with(1, key="v")
        self.assertFalse(debounced.pending)

    def test_callback_errors_do_not_escape_timer_thread(self) -> None:
        done = threading.Event()

        def boom():
            done.set()
            raise RuntimeError("falhou")

        debounced = Debouncer(boom, delay=0.01)
        debounced.call()
        self.assertTrue(done.wait(timeout=2))

    def test_debounced_value_settles_to_last_value(self) -> None:
        settled = MagicMock()
        value = DebouncedValue("", delay=10, on_settle=settled)
        value.set("cor")
        value.set("corte")
        self.assertEqual(value.value, "")
        self.assertEqual(value.flush(), "corte")
        settled.assert_called_once_with("corte")

    def test_debounced_value_does_not_notify_unchanged_value(self) -> None:
        settled = MagicMock()
        value = DebouncedValue("a", delay=10, on_settle=settled)
        value.set("a")
        value.flush()
        settled.assert_not_called()


class LocalStorageTests(SimpleTestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "storage.json"

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_missing_key_returns_default(self) -> None:
        storage = LocalStorage(self.path)
        self.assertEqual(storage.get("test-key", "default-value"), "default-value")

    def test_values_are_json_serialized_and_persisted(self) -> None:
        storage = LocalStorage(self.path)
        storage.set("user-data", {"name": "Maria", "age": 30})
        storage.set("numbers", [1, 2, 3])

        reloaded = LocalStorage(self.path)
        self.assertEqual(reloaded.get("user-data"), {"name": "Maria", "age": 30})
        self.assertEqual(reloaded.get("numbers"), [1, 2, 3])
        raw = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual(raw["numbers"], "[1, 2, 3]")

    def test_invalid_json_entry_falls_back_to_default(self) -> None:
        storage = LocalStorage(self.path)
        storage.set_raw("test-key", "invalid-json")
        self.assertEqual(storage.get("test-key", "default-value"), "default-value")

    def test_unreadable_file_starts_empty(self) -> None:
        self.path.write_text("{not json", encoding="utf-8")
        storage = LocalStorage(self.path)
        self.assertEqual(storage.get("anything", 1), 1)

    def test_remove_and_clear(self) -> None:
        storage = LocalStorage(self.path)
        storage.set("a", 1)
        storage.set("b", 2)
        storage.remove("a")
        self.assertNotIn("a", storage)
        storage.clear()
        self.assertNotIn("b", storage)
        self.assertEqual(LocalStorage(self.path).get("b"), None)

    def test_in_memory_storage_without_path(self) -> None:
        storage = LocalStorage()
        storage.set("k", "v")
        self.assertEqual(storage.get("k"), "v")

    def test_stored_value_set_with_updater_and_clear(self) -> None:
        storage = LocalStorage(self.path)
        counter = StoredValue(storage, "counter", 0)
        counter.set(lambda prev: prev + 1)
        counter.set(lambda prev: prev + 1)
        self.assertEqual(counter.value, 2)
        self.assertEqual(StoredValue(storage, "counter", 0).value, 2)

        counter.clear()
        self.assertEqual(counter.value, 0)
        self.assertNotIn("counter", storage)

    def test_stored_value_with_none_default(self) -> None:
        value = StoredValue(LocalStorage(), "k", None)
        self.assertIsNone(value.value)
        value.set("not-null-value")
        self.assertEqual(value.value, "not-null-value")


class SessionContextTests(SimpleTestCase):
    def test_init_restores_persisted_token_and_user(self) -> None:
        storage = LocalStorage()
        storage.set(TOKEN_KEY, "jwt-token")
        storage.set(USER_KEY, {"id": "u1", "name": "Maria"})

        session = SessionContext(storage)
        self.assertFalse(session.is_authenticated)
        session.init()
        self.assertTrue(session.initialized)
        self.assertTrue(session.is_authenticated)
        self.assertEqual(session.token, "jwt-token")
        self.assertEqual(session.user["name"], "Maria")

    def test_init_without_token_ignores_orphan_user(self) -> None:
        storage = LocalStorage()
        storage.set(USER_KEY, {"id": "u1"})
        session = SessionContext(storage)
        session.init()
        self.assertFalse(session.is_authenticated)
        self.assertIsNone(session.user)

    def test_start_persists_and_clear_removes(self) -> None:
        storage = LocalStorage()
        session = SessionContext(storage)
        session.start("abc", {"id": "u1"})
        self.assertEqual(storage.get(TOKEN_KEY), "abc")

        session.clear()
        self.assertFalse(session.is_authenticated)
        self.assertNotIn(TOKEN_KEY, storage)
        self.assertNotIn(USER_KEY, storage)

    def test_listeners_are_notified_and_errors_contained(self) -> None:
        session = SessionContext(LocalStorage())
        seen = []
        session.subscribe(lambda s: seen.append(s.is_authenticated))
        session.subscribe(MagicMock(side_effect=RuntimeError("x")))
        session.start("abc")
        session.clear()
        self.assertEqual(seen, [True, False])


class InfiniteLoaderTests(SimpleTestCase):
    @staticmethod
    def _fetcher(total: int):
        data = list(range(total))

        def fetch(page: int, limit: int) -> PagedResult[int]:
            start = (page - 1) * limit
            return PagedResult(items=data[start:start + limit], total=total, page=page, page_size=limit)

        return fetch

    def test_loads_pages_until_exhausted(self) -> None:
        loader = InfiniteLoader(self._fetcher(25), page_size=10)
        self.assertEqual(len(loader.load_more()), 10)
        self.assertEqual(len(loader.load_more()), 10)
        self.assertTrue(loader.has_more)
        self.assertEqual(len(loader.load_more()), 5)
        self.assertFalse(loader.has_more)
        self.assertEqual(loader.load_more(), [])
        self.assertEqual(loader.items, list(range(25)))
        self.assertEqual(loader.pagination.total_items, 25)
        self.assertEqual(loader.pagination.current_page, 3)

    def test_disabled_loader_does_not_fetch(self) -> None:
        fetch = MagicMock()
        loader = InfiniteLoader(fetch, enabled=False)
        self.assertEqual(loader.load_more(), [])
        fetch.assert_not_called()

    def test_fetch_error_is_recorded_and_items_kept(self) -> None:
        ok = self._fetcher(30)
        fetch = MagicMock(side_effect=[ok(1, 10), RuntimeError("rede"), ok(2, 10)])
        loader = InfiniteLoader(fetch, page_size=10)

        loader.load_more()
        self.assertEqual(loader.load_more(), [])
        self.assertIsInstance(loader.error, RuntimeError)
        self.assertFalse(loader.is_loading)
        self.assertEqual(len(loader.items), 10)

        loader.load_more()
        self.assertIsNone(loader.error)
        self.assertEqual(len(loader.items), 20)

    def test_reset_starts_over(self) -> None:
        loader = InfiniteLoader(self._fetcher(5), page_size=10)
        loader.load_more()
        self.assertFalse(loader.has_more)
        loader.reset()
        self.assertTrue(loader.has_more)
        self.assertEqual(loader.items, [])
        self.assertEqual(len(loader.load_more()), 5)
