"""
cljeval.editor.config - Editor settings for the evaluation client

Settings use the editor's flat, dotted JSON layout, normally found in
.vscode/settings.json:

    {"clojureVSCode.alertOnEval": true,
     "clojureVSCode.autoReloadNamespaceOnSave": false,
     "editor.alertOnEval": false}

The alert flag lives under two sections (the extension's own and the
editor-wide one). EditorConfig resolves both into the single boolean the
evaluation code asks for, effective_alert_on_eval().
"""

import json
import os
from dataclasses import dataclass, field
from typing import Any, Optional

SETTINGS_DIR = ".vscode"
SETTINGS_FILENAME = "settings.json"

SECTION = "clojureVSCode"
EDITOR_SECTION = "editor"

ALERT_ON_EVAL = "alertOnEval"
# Key name shipped by earlier releases, still honoured when present
LEGACY_ALERT_ON_EVAL = "aletOnEval"
AUTO_RELOAD_NAMESPACE_ON_SAVE = "autoReloadNamespaceOnSave"


def find_settings_file(start_path: Optional[str] = None) -> Optional[str]:
    """
    Find .vscode/settings.json by walking up from start_path.

    Args:
        start_path: File or directory to start from. If None, uses the
                    current working directory.

    Returns:
        Absolute path of the settings file, or None if not found.
    """
    if start_path is None:
        current = os.getcwd()
    elif os.path.isfile(start_path):
        current = os.path.dirname(os.path.abspath(start_path))
    else:
        current = os.path.abspath(start_path)

    while True:
        candidate = os.path.join(current, SETTINGS_DIR, SETTINGS_FILENAME)
        if os.path.isfile(candidate):
            return candidate

        parent = os.path.dirname(current)
        if parent == current:
            return None
        current = parent


def _read_bool(settings: dict[str, Any], key: str) -> Optional[bool]:
    value = settings.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be a boolean, got {type(value).__name__}")
    return value


@dataclass
class EditorConfig:
    """
    Boolean settings read by the evaluation commands.

    Fields:
        alert_on_eval: clojureVSCode.alertOnEval
        editor_alert_on_eval: editor.alertOnEval, the editor-wide alias
        reload_namespace_on_save: clojureVSCode.autoReloadNamespaceOnSave
        settings_path: file the settings were loaded from, if any
    """

    alert_on_eval: bool = False
    editor_alert_on_eval: bool = False
    reload_namespace_on_save: bool = False
    settings_path: Optional[str] = None

    _raw: dict[str, Any] = field(default_factory=dict, repr=False)

    def effective_alert_on_eval(self) -> bool:
        """True when results of silent evaluations are reported as toasts."""
        return self.alert_on_eval or self.editor_alert_on_eval

    def auto_reload_namespace_on_save(self) -> bool:
        return self.reload_namespace_on_save

    @classmethod
    def from_dict(
        cls, settings: dict[str, Any], settings_path: Optional[str] = None
    ) -> "EditorConfig":
        """
        Build a config from a flat settings mapping.

        Raises:
            ValueError: If a known key holds a non-boolean value.
        """
        alert = _read_bool(settings, f"{SECTION}.{ALERT_ON_EVAL}")
        if alert is None:
            alert = _read_bool(settings, f"{SECTION}.{LEGACY_ALERT_ON_EVAL}")

        # The editor section is shared with other extensions; anything but
        # an explicit true is treated as off.
        editor_alert = settings.get(f"{EDITOR_SECTION}.{ALERT_ON_EVAL}") is True

        auto_reload = _read_bool(settings, f"{SECTION}.{AUTO_RELOAD_NAMESPACE_ON_SAVE}")

        return cls(
            alert_on_eval=bool(alert),
            editor_alert_on_eval=editor_alert,
            reload_namespace_on_save=bool(auto_reload),
            settings_path=settings_path,
            _raw=dict(settings),
        )

    @classmethod
    def load(cls, path: Optional[str] = None) -> "EditorConfig":
        """
        Load settings from a settings.json file.

        Args:
            path: The settings file itself, or a file or directory to search
                  upward from. None searches from the current directory.

        Raises:
            FileNotFoundError: If no settings file can be found.
            ValueError: If the file is not a JSON object or holds invalid values.
        """
        if path is not None and os.path.isfile(path) and path.endswith(".json"):
            settings_path = os.path.abspath(path)
        else:
            if path is not None and not os.path.exists(path):
                raise FileNotFoundError(f"Path does not exist: {path}")
            settings_path = find_settings_file(path)
            if settings_path is None:
                raise FileNotFoundError(
                    f"Could not find {SETTINGS_DIR}/{SETTINGS_FILENAME} "
                    f"starting from {path or os.getcwd()}"
                )

        with open(settings_path, encoding="utf-8") as f:
            content = f.read()

        try:
            settings = json.loads(content) if content.strip() else {}
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse {settings_path}: {e}") from e

        if not isinstance(settings, dict):
            raise ValueError(
                f"{settings_path} must contain an object, got {type(settings).__name__}"
            )

        return cls.from_dict(settings, settings_path=settings_path)


def load_config(path: Optional[str] = None) -> EditorConfig:
    """
    Load an EditorConfig, falling back to defaults when no settings exist.

    Invalid settings files still raise ValueError.
    """
    try:
        return EditorConfig.load(path)
    except FileNotFoundError:
        return EditorConfig()
