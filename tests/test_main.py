import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

import main


class MainTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmpdir.name)
        self.words = self.tmp / "words.txt"
        self.words.write_text("bat\nare\nten\n", encoding="utf-8")

    def tearDown(self) -> None:
        self._tmpdir.cleanup()

    def run_main(self, *argv: str) -> tuple:
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            code = main.main(list(argv))
        return code, stdout.getvalue()

    def test_solves_and_writes_json(self) -> None:
        output = self.tmp / "square.json"
        code, stdout = self.run_main(
            "--dictionary", str(self.words),
            "--pattern", "b__",
            "--rows", "3",
            "--output", str(output),
            "--log-level", "ERROR",
        )
        self.assertEqual(code, 0)
        self.assertIn("BATARETEN", stdout)
        payload = json.loads(output.read_text(encoding="utf-8"))
        self.assertTrue(payload["ok"])
        self.assertEqual(payload["grid"]["rows"], ["bat", "are", "ten"])
        self.assertEqual(payload["hardened"], [[0, 0, "b"]])
        self.assertEqual(payload["validation"], [])

    def test_unsolvable_exits_with_one(self) -> None:
        output = self.tmp / "square.json"
        code, stdout = self.run_main(
            "--dictionary", str(self.words),
            "--pattern", "__",
            "--rows", "2",
            "--output", str(output),
            "--log-level", "ERROR",
        )
        self.assertEqual(code, 1)
        self.assertIn("Could not fill square", stdout)
        payload = json.loads(output.read_text(encoding="utf-8"))
        self.assertFalse(payload["ok"])
        self.assertEqual(payload["failed_cell"], [0, 0])

    def test_cols_without_pattern_sizes_the_grid(self) -> None:
        output = self.tmp / "square.json"
        code, stdout = self.run_main(
            "--dictionary", str(self.words),
            "--rows", "3",
            "--cols", "3",
            "--alphabetic-only",
            "--output", str(output),
            "--log-level", "ERROR",
        )
        self.assertEqual(code, 0)
        self.assertIn("BATARETEN", stdout)
        payload = json.loads(output.read_text(encoding="utf-8"))
        self.assertEqual(payload["grid"]["rows"], ["bat", "are", "ten"])
        self.assertEqual(payload["hardened"], [])

    def test_default_pattern_is_five_columns_wide(self) -> None:
        args = main.build_parser().parse_args([])
        self.assertIsNone(args.pattern)
        output = self.tmp / "square.json"
        code, stdout = self.run_main(
            "--dictionary", str(self.words),
            "--output", str(output),
            "--log-level", "ERROR",
        )
        self.assertEqual(code, 1)
        self.assertIn("Could not fill square", stdout)
        payload = json.loads(output.read_text(encoding="utf-8"))
        self.assertEqual(payload["grid"]["rows"], ["_____"] * 4)

    def test_render_draws_progress(self) -> None:
        code, stdout = self.run_main(
            "--dictionary", str(self.words),
            "--pattern", "___",
            "--rows", "3",
            "--render",
            "--render-interval", "1",
            "--log-level", "ERROR",
        )
        self.assertEqual(code, 0)
        self.assertIn("\x1b[2J", stdout)

    def test_missing_dictionary_is_a_usage_error(self) -> None:
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            self.run_main("--dictionary", str(self.tmp / "missing.txt"), "--log-level", "ERROR")
        self.assertEqual(ctx.exception.code, 2)

    def test_bad_pattern_is_a_usage_error(self) -> None:
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            self.run_main(
                "--dictionary", str(self.words),
                "--pattern", "bat/are/ten",
                "--rows", "2",
                "--log-level", "ERROR",
            )
        self.assertEqual(ctx.exception.code, 2)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
