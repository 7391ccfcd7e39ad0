"""
Test suite for editor settings loading.
"""

import json
import os
import tempfile
import unittest

from cljeval.editor.config import EditorConfig, find_settings_file, load_config


class TestEditorConfigFromDict(unittest.TestCase):
    def test_defaults(self):
        config = EditorConfig.from_dict({})
        self.assertFalse(config.effective_alert_on_eval())
        self.assertFalse(config.auto_reload_namespace_on_save())

    def test_extension_flag(self):
        config = EditorConfig.from_dict({"clojureVSCode.alertOnEval": True})
        self.assertTrue(config.effective_alert_on_eval())

    def test_legacy_key(self):
        config = EditorConfig.from_dict({"clojureVSCode.aletOnEval": True})
        self.assertTrue(config.effective_alert_on_eval())

    def test_current_key_wins_over_legacy(self):
        config = EditorConfig.from_dict(
            {"clojureVSCode.alertOnEval": False, "clojureVSCode.aletOnEval": True}
        )
        self.assertFalse(config.effective_alert_on_eval())

    def test_editor_alias(self):
        """The editor-wide alias only counts when exactly true."""
        self.assertTrue(
            EditorConfig.from_dict({"editor.alertOnEval": True}).effective_alert_on_eval()
        )
        self.assertFalse(
            EditorConfig.from_dict({"editor.alertOnEval": "yes"}).effective_alert_on_eval()
        )

    def test_auto_reload(self):
        config = EditorConfig.from_dict({"clojureVSCode.autoReloadNamespaceOnSave": True})
        self.assertTrue(config.auto_reload_namespace_on_save())

    def test_non_boolean_rejected(self):
        with self.assertRaises(ValueError):
            EditorConfig.from_dict({"clojureVSCode.alertOnEval": "true"})


class TestEditorConfigLoad(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = self.tmp.name
        os.makedirs(os.path.join(self.root, ".vscode"))
        self.settings_path = os.path.join(self.root, ".vscode", "settings.json")

    def tearDown(self):
        self.tmp.cleanup()

    def write_settings(self, content):
        with open(self.settings_path, "w", encoding="utf-8") as f:
            f.write(content)

    def test_find_from_nested_file(self):
        self.write_settings("{}")
        src = os.path.join(self.root, "src", "my")
        os.makedirs(src)
        source_file = os.path.join(src, "core.clj")
        with open(source_file, "w", encoding="utf-8") as f:
            f.write("(ns my.core)")

        self.assertEqual(
            find_settings_file(source_file), os.path.abspath(self.settings_path)
        )

    def test_load(self):
        self.write_settings(
            json.dumps(
                {
                    "clojureVSCode.alertOnEval": True,
                    "clojureVSCode.autoReloadNamespaceOnSave": True,
                }
            )
        )
        config = EditorConfig.load(self.root)
        self.assertTrue(config.effective_alert_on_eval())
        self.assertTrue(config.auto_reload_namespace_on_save())
        self.assertEqual(config.settings_path, os.path.abspath(self.settings_path))

    def test_load_settings_file_directly(self):
        self.write_settings('{"editor.alertOnEval": true}')
        config = EditorConfig.load(self.settings_path)
        self.assertTrue(config.effective_alert_on_eval())

    def test_invalid_json(self):
        self.write_settings("{not json")
        with self.assertRaises(ValueError):
            EditorConfig.load(self.root)

    def test_not_an_object(self):
        self.write_settings("[]")
        with self.assertRaises(ValueError):
            EditorConfig.load(self.root)

    def test_missing_path(self):
        with self.assertRaises(FileNotFoundError):
            EditorConfig.load(os.path.join(self.root, "does-not-exist"))

    def test_load_config_falls_back_to_defaults(self):
        with tempfile.TemporaryDirectory() as empty:
            config = load_config(empty)
        self.assertFalse(config.effective_alert_on_eval())
        self.assertIsNone(config.settings_path)


if __name__ == "__main__":
    unittest.main()
