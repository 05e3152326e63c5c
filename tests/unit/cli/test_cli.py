"""CLI argument handling tests.

Verifies how ``codepad.cli.main`` validates the project path and forwards
options to the Qt runtime without starting it.
"""

from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from codepad import cli


class CliTests(unittest.TestCase):
    def _run(self, argv: list[str]) -> tuple[mock.MagicMock, SystemExit]:
        with mock.patch("codepad.cli.run_editor", return_value=0) as run_editor, mock.patch(
            "codepad.cli.configure_logging"
        ):
            with self.assertRaises(SystemExit) as caught:
                cli.main(argv)
        return run_editor, caught.exception

    def test_without_path_defers_directory_choice_to_runtime(self) -> None:
        run_editor, exit_info = self._run([])

        run_editor.assert_called_once_with(None, None)
        self.assertEqual(exit_info.code, 0)

    def test_directory_argument_and_style_are_forwarded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            run_editor, _exit_info = self._run([tmp, "--style", "friendly"])

        run_editor.assert_called_once_with(Path(tmp), "friendly")

    def test_non_directory_path_exits_before_runtime(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "file.txt"
            target.write_text("x", encoding="utf-8")

            run_editor, exit_info = self._run([str(target)])

        run_editor.assert_not_called()
        self.assertIn("Not a directory", str(exit_info.code))

    def test_exit_status_comes_from_runtime(self) -> None:
        with mock.patch("codepad.cli.run_editor", return_value=3), mock.patch("codepad.cli.configure_logging"):
            with self.assertRaises(SystemExit) as caught:
                cli.main([])
        self.assertEqual(caught.exception.code, 3)

    def test_debug_flag_selects_debug_log_level(self) -> None:
        with mock.patch("codepad.cli.logging.basicConfig") as basic_config:
            cli.configure_logging(True)
            cli.configure_logging(False)

        levels = [call.kwargs["level"] for call in basic_config.call_args_list]
        self.assertEqual(levels, [logging.DEBUG, logging.INFO])

    def test_parser_accepts_debug(self) -> None:
        args = cli.build_parser().parse_args(["--debug"])
        self.assertTrue(args.debug)
        self.assertIsNone(args.path)


if __name__ == "__main__":
    unittest.main()
