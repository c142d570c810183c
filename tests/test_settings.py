import json
import tempfile
import unittest
from pathlib import Path

from speech_session.errors import SettingsStoreError
from speech_session.settings import (
    LANGUAGE_KEY,
    SOUND_ON_KEY,
    InMemorySettingsStore,
    JsonFileSettingsStore,
    SessionSettings,
    SettingsStore,
    SettingsStoreFactory,
)


class TestInMemorySettingsStore(unittest.TestCase):
    def test_get_missing_key_returns_none(self):
        self.assertIsNone(InMemorySettingsStore().get("language"))

    def test_read_after_write(self):
        store = InMemorySettingsStore()
        store.set("language", "en_GB")
        self.assertEqual(store.get("language"), "en_GB")

    def test_initial_values_are_copied(self):
        initial = {"sound_on": True}
        store = InMemorySettingsStore(initial)
        store.set("sound_on", False)

        self.assertTrue(initial["sound_on"])
        self.assertFalse(store.get("sound_on"))


class TestJsonFileSettingsStore(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "nested" / "settings.json"

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_file_is_empty(self):
        store = JsonFileSettingsStore(self.path)

        self.assertIsNone(store.get("language"))
        self.assertFalse(self.path.exists())

    def test_set_writes_through_to_disk(self):
        store = JsonFileSettingsStore(self.path)
        store.set("language", "it_IT")
        store.set("sound_on", True)

        with open(self.path, "r", encoding="utf-8") as f:
            self.assertEqual(json.load(f), {"language": "it_IT", "sound_on": True})

        reopened = JsonFileSettingsStore(str(self.path))
        self.assertEqual(reopened.get("language"), "it_IT")
        self.assertIs(reopened.get("sound_on"), True)
        self.assertEqual(reopened.path, self.path)

    def test_no_temporary_files_left_behind(self):
        store = JsonFileSettingsStore(self.path)
        store.set("language", "it_IT")

        self.assertEqual([p.name for p in self.path.parent.iterdir()], ["settings.json"])

    def test_corrupted_file_raises(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json", encoding="utf-8")

        with self.assertRaises(SettingsStoreError):
            JsonFileSettingsStore(self.path)

    def test_non_object_file_raises(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text("[1, 2]", encoding="utf-8")

        with self.assertRaises(SettingsStoreError):
            JsonFileSettingsStore(self.path)

    def test_unserializable_value_raises(self):
        store = JsonFileSettingsStore(self.path)

        with self.assertRaises(SettingsStoreError):
            store.set("language", object())


class DummyStore(InMemorySettingsStore):
    NAME = "DummyStoreForTest"

    @classmethod
    def name(cls):
        return cls.NAME


class TestSettingsStoreFactory(unittest.TestCase):
    def setUp(self):
        try:
            SettingsStoreFactory.unregister_store(DummyStore.NAME)
        except KeyError:
            pass

    def tearDown(self):
        try:
            SettingsStoreFactory.unregister_store(DummyStore.NAME)
        except KeyError:
            pass

    def test_builtin_stores_registered(self):
        self.assertIn("memory", SettingsStoreFactory.list_stores())
        self.assertIn("json", SettingsStoreFactory.list_stores())

    def test_create_json_store_with_path(self):
        with tempfile.TemporaryDirectory() as tmp:
            store = SettingsStoreFactory.create("json", path=Path(tmp) / "s.json")
            self.assertIsInstance(store, JsonFileSettingsStore)

    def test_register_create_and_unregister(self):
        SettingsStoreFactory.register_store(DummyStore.NAME, DummyStore)

        inst = SettingsStoreFactory.create(DummyStore.NAME)
        self.assertIsInstance(inst, SettingsStore)

        SettingsStoreFactory.unregister_store(DummyStore.NAME)
        with self.assertRaises(RuntimeError):
            SettingsStoreFactory.create(DummyStore.NAME)

    def test_unregister_unknown_raises(self):
        with self.assertRaises(KeyError):
            SettingsStoreFactory.unregister_store(DummyStore.NAME)


class TestSessionSettings(unittest.TestCase):
    def setUp(self):
        self.store = InMemorySettingsStore()
        self.settings = SessionSettings(self.store, lambda: "en_US")

    def test_defaults(self):
        self.assertEqual(self.settings.language, "en_US")
        self.assertIs(self.settings.sound_on, False)

    def test_stored_values_win(self):
        self.store.set(LANGUAGE_KEY, "zh_CN")
        self.store.set(SOUND_ON_KEY, True)

        self.assertEqual(self.settings.language, "zh_CN")
        self.assertIs(self.settings.sound_on, True)

    def test_setters_write_to_store(self):
        self.settings.set_language("ko_KR")
        self.settings.set_sound_on(True)

        self.assertEqual(self.store.get("language"), "ko_KR")
        self.assertIs(self.store.get("sound_on"), True)

    def test_default_language_is_read_lazily(self):
        defaults = iter(["en_US", "en_GB"])
        settings = SessionSettings(self.store, lambda: next(defaults))

        self.assertEqual(settings.language, "en_US")
        self.assertEqual(settings.language, "en_GB")

    def test_sound_on_requires_a_stored_boolean(self):
        for stored in ("false", "true", 1, 0, "on"):
            self.store.set(SOUND_ON_KEY, stored)
            self.assertIs(self.settings.sound_on, False, stored)

        self.store.set(SOUND_ON_KEY, True)
        self.assertIs(self.settings.sound_on, True)


if __name__ == '__main__':
    unittest.main()
