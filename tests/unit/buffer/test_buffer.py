"""Tests for the single editor buffer and its file association."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from codepad.buffer import EditorBuffer, NoAssociatedPath
from codepad.source_pane import SyntaxMode


class EditorBufferLoadTests(unittest.TestCase):
    def test_load_replaces_text_path_and_mode(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            first = root / "a.txt"
            second = root / "b.java"
            first.write_text("plain words\n", encoding="utf-8")
            second.write_text("class B {}\n", encoding="utf-8")
            buffer = EditorBuffer()

            buffer.load(first)
            self.assertEqual((buffer.text, buffer.path, buffer.mode), ("plain words\n", first, SyntaxMode.PLAIN))

            buffer.text = "unsaved edits are discarded"
            buffer.load(second)
            self.assertEqual((buffer.text, buffer.path, buffer.mode), ("class B {}\n", second, SyntaxMode.JAVA))

    def test_failed_load_preserves_previous_state(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            current = root / "keep.py"
            current.write_text("x = 1\n", encoding="utf-8")
            buffer = EditorBuffer()
            buffer.load(current)
            buffer.text = "x = 2\n"

            with self.assertRaises(OSError):
                buffer.load(root / "missing.js")

            self.assertEqual(buffer.text, "x = 2\n")
            self.assertEqual(buffer.path, current)
            self.assertEqual(buffer.mode, SyntaxMode.PYTHON)

    def test_loading_a_directory_raises_oserror(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            buffer = EditorBuffer(text="kept")

            with self.assertRaises(OSError):
                buffer.load(Path(tmp))
            self.assertEqual(buffer.text, "kept")
            self.assertIsNone(buffer.path)


class EditorBufferSaveTests(unittest.TestCase):
    def test_save_without_path_raises(self) -> None:
        with self.assertRaises(NoAssociatedPath):
            EditorBuffer(text="orphan").save()

    def test_save_overwrites_associated_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "notes.txt"
            target.write_text("old content that is longer than the new one\n", encoding="utf-8")
            buffer = EditorBuffer()
            buffer.load(target)
            buffer.text = "new\n"

            self.assertEqual(buffer.save(), target)
            self.assertEqual(target.read_text(encoding="utf-8"), "new\n")

    def test_save_as_associates_path_for_later_saves(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "Main.java"
            buffer = EditorBuffer(text="class Main {}\n")

            buffer.save_as(target)
            buffer.text = "class Main { int x; }\n"
            buffer.save()

            self.assertEqual(buffer.path, target)
            self.assertEqual(buffer.mode, SyntaxMode.JAVA)
            self.assertEqual(target.read_text(encoding="utf-8"), "class Main { int x; }\n")

    def test_save_then_load_round_trips_exact_text(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "crlf.txt"
            text = "a\r\nb\r\n\r\nno trailing newline"
            writer = EditorBuffer(text=text)
            writer.save_as(target)

            reader = EditorBuffer()
            reader.load(target)

            self.assertEqual(reader.text, text)


class EditorBufferEncodingTests(unittest.TestCase):
    def test_unedited_latin1_file_saves_identical_bytes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "legacy.txt"
            target.write_bytes(b"caf\xe9\n")
            buffer = EditorBuffer()

            buffer.load(target)
            buffer.save()

            self.assertEqual(buffer.encoding, "latin-1")
            self.assertEqual(target.read_bytes(), b"caf\xe9\n")

    def test_text_outside_loaded_encoding_is_saved_as_utf8(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "legacy.txt"
            target.write_bytes(b"caf\xe9\n")
            buffer = EditorBuffer()
            buffer.load(target)
            buffer.text = "café ☃\n"

            with self.assertLogs("codepad.buffer", level="WARNING"):
                buffer.save()

            self.assertEqual(buffer.encoding, "utf-8")
            self.assertEqual(target.read_bytes(), "café ☃\n".encode("utf-8"))


class EditorBufferViewTextTests(unittest.TestCase):
    def test_crlf_file_is_shown_with_lf_and_saved_with_crlf(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "dos.txt"
            target.write_bytes(b"one\r\ntwo\r\n")
            buffer = EditorBuffer()
            buffer.load(target)

            self.assertEqual(buffer.newline, "\r\n")
            self.assertEqual(buffer.view_text(), "one\ntwo\n")

            buffer.set_view_text("one\ntwo\nthree\n")
            buffer.save()

            self.assertEqual(target.read_bytes(), b"one\r\ntwo\r\nthree\r\n")

    def test_lf_file_view_text_is_unchanged(self) -> None:
        buffer = EditorBuffer(text="a\nb\n")

        self.assertEqual(buffer.newline, "\n")
        self.assertEqual(buffer.view_text(), "a\nb\n")
        buffer.set_view_text("c\n")
        self.assertEqual(buffer.text, "c\n")


if __name__ == "__main__":
    unittest.main()
