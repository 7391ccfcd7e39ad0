"""
cljeval.editor - Editor-facing state, output and settings

Modules:
- document.py: EvalContext and Selection
- output.py: output channel and toast notifications
- config.py: settings loading and the alert-on-eval flag
"""

from cljeval.editor.config import EditorConfig, find_settings_file, load_config
from cljeval.editor.document import (
    CLOJURE_EXTENSIONS,
    EvalContext,
    Selection,
    position_to_offset,
)
from cljeval.editor.output import (
    ConsoleNotifier,
    MemoryNotifier,
    MemoryOutputChannel,
    Notifier,
    OutputChannel,
    Severity,
    StreamOutputChannel,
)

__all__ = [
    # Document
    "EvalContext",
    "Selection",
    "CLOJURE_EXTENSIONS",
    "position_to_offset",
    # Output
    "OutputChannel",
    "StreamOutputChannel",
    "MemoryOutputChannel",
    "Notifier",
    "ConsoleNotifier",
    "MemoryNotifier",
    "Severity",
    # Config
    "EditorConfig",
    "load_config",
    "find_settings_file",
]
