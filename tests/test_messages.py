"""
Test suite for the response data model, documents and output rendering.
"""

import io
import unittest

from cljeval.editor.document import EvalContext, Selection, position_to_offset
from cljeval.editor.output import ConsoleNotifier, MemoryOutputChannel, StreamOutputChannel
from cljeval.eval.interpreter import format_stacktrace, rebase_position, render_responses
from cljeval.nrepl.messages import (
    ResponseObject,
    Session,
    SessionKind,
    StacktraceInfo,
    decode_responses,
)


class TestResponseObject(unittest.TestCase):
    def test_from_dict(self):
        resp = ResponseObject.from_dict(
            {
                "id": "7",
                "session": "s1",
                "ex": "class clojure.lang.ExceptionInfo",
                "root-ex": "class java.lang.ArithmeticException",
                "status": ["eval-error"],
            }
        )
        self.assertTrue(resp.is_exception)
        self.assertEqual(resp.root_ex, "class java.lang.ArithmeticException")
        self.assertEqual(resp.status, ("eval-error",))
        self.assertIsNone(resp.value)

    def test_several_fields_on_one_message(self):
        resp = ResponseObject.from_dict({"out": "hi", "value": "1", "status": "done"})
        self.assertEqual((resp.out, resp.value), ("hi", "1"))
        self.assertTrue(resp.is_done)
        self.assertFalse(resp.is_exception)

    def test_decode_keeps_order_and_objects(self):
        existing = ResponseObject(value="2")
        decoded = decode_responses([{"value": "1"}, existing])
        self.assertEqual([r.value for r in decoded], ["1", "2"])
        self.assertIs(decoded[1], existing)


class TestSession(unittest.TestCase):
    def test_parse_kind(self):
        self.assertEqual(SessionKind.parse("ClojureScript"), SessionKind.CLOJURESCRIPT)
        self.assertEqual(SessionKind.parse("clojure"), SessionKind.CLOJURE)
        with self.assertRaises(ValueError):
            SessionKind.parse("Scheme")

    def test_is_clojurescript(self):
        self.assertTrue(Session("a", SessionKind.CLOJURESCRIPT).is_clojurescript)
        self.assertFalse(Session("a").is_clojurescript)


class TestStacktrace(unittest.TestCase):
    def make_info(self, **overrides):
        data = {
            "class": "clojure.lang.ExceptionInfo",
            "message": "bad input",
            "file": "core.clj",
            "line": 3,
            "column": 7,
            "stacktrace": [
                {"class": "a", "method": "one", "file": "a.clj", "line": 1, "flags": ["tooling"]},
                {"class": "b", "method": "two", "file": "b.clj", "line": 2, "flags": ["clj", "project"]},
                {"class": "c", "method": "three", "file": "c.clj", "line": 3, "flags": ["java", "tooling"]},
                {"class": "d", "method": "four", "file": "d.clj", "line": 4},
            ],
        }
        data.update(overrides)
        return StacktraceInfo.from_dict(data)

    def test_only_tooling_frames_in_order(self):
        lines = format_stacktrace(self.make_info())
        self.assertEqual(
            lines,
            [
                "clojure.lang.ExceptionInfo bad input",
                " at core.clj:2:6",
                "    a.one (a.clj:1)",
                "    c.three (c.clj:3)",
            ],
        )

    def test_missing_position_defaults_to_zero(self):
        info = self.make_info(line=None, column=None)
        self.assertEqual(rebase_position(info), (0, 0))

    def test_rebase_on_selection(self):
        info = self.make_info(line=2, column=1)
        self.assertEqual(rebase_position(info, Selection(3, 5, 4, 0)), (4, 5))

    def test_rebase_on_reversed_selection(self):
        """A selection made right to left is shifted by its earlier end."""
        info = self.make_info(line=2, column=1)
        self.assertEqual(rebase_position(info, Selection(3, 12, 3, 5)), (4, 5))
        self.assertEqual(rebase_position(info, Selection(4, 0, 3, 5)), (4, 5))

    def test_empty_selection_not_rebased(self):
        info = self.make_info(line=2, column=1)
        self.assertEqual(rebase_position(info, Selection(3, 5, 3, 5)), (1, 0))


class TestRenderResponses(unittest.TestCase):
    def test_bare_responses_render_nothing(self):
        responses = decode_responses([{"status": ["done"]}, {"session": "s1", "ns": "user"}])
        self.assertEqual(render_responses(responses), [])

    def test_out_err_value_order_within_one_message(self):
        responses = decode_responses([{"value": "1", "err": "e", "out": "o"}])
        self.assertEqual(render_responses(responses), ["o", "e", "=> 1\n"])


class TestEvalContext(unittest.TestCase):
    def test_selected_text_multiline(self):
        text = "(ns a)\n(defn f []\n  42)\n"
        ctx = EvalContext(full_text=text, file_name="a.clj", selection=Selection(1, 0, 2, 5))
        self.assertEqual(ctx.selected_text, "(defn f []\n  42)")
        self.assertTrue(ctx.has_selection)

    def test_reversed_selection(self):
        sel = Selection(2, 5, 1, 0)
        self.assertEqual((sel.begin, sel.end), ((1, 0), (2, 5)))
        text = "(ns a)\n(defn f []\n  42)\n"
        ctx = EvalContext(full_text=text, file_name="a.clj", selection=sel)
        self.assertEqual(ctx.selected_text, "(defn f []\n  42)")

    def test_no_selection(self):
        ctx = EvalContext(full_text="(+ 1 2)", file_name="a.clj")
        self.assertFalse(ctx.has_selection)
        self.assertEqual(ctx.selected_text, "")

    def test_position_clamped(self):
        self.assertEqual(position_to_offset("ab\ncd", 0, 10), 2)
        self.assertEqual(position_to_offset("ab\ncd", 9, 0), 5)

    def test_clojure_file(self):
        self.assertTrue(EvalContext("", "src/app.CLJS").is_clojure_file)
        self.assertFalse(EvalContext("", "deps.edn").is_clojure_file)


class TestOutputChannels(unittest.TestCase):
    def test_stream_channel(self):
        stream = io.StringIO()
        channel = StreamOutputChannel(stream)
        channel.append("a")
        channel.append_line("b")
        channel.write_block(["c", "d\n"])
        channel.show()
        channel.show()
        self.assertEqual(stream.getvalue(), "ab\ncd\n")
        self.assertTrue(channel.visible)

    def test_memory_channel_lines(self):
        channel = MemoryOutputChannel()
        self.assertEqual(channel.lines(), [])
        channel.append_line("one")
        channel.append("two")
        self.assertEqual(channel.lines(), ["one", "two"])

    def test_console_notifier(self):
        stream = io.StringIO()
        ConsoleNotifier(stream).show_warning("careful")
        self.assertEqual(stream.getvalue(), "[warning] careful\n")


if __name__ == "__main__":
    unittest.main()
