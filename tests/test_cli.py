import json
import tempfile
import unittest
from pathlib import Path

from click.testing import CliRunner

from caged_explorer.cli.main import cli


class TestCli(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.config_dir = self._tmp.name
        self.runner = CliRunner()

    def tearDown(self):
        self._tmp.cleanup()

    def invoke(self, *args):
        return self.runner.invoke(cli, ["--config-dir", self.config_dir, *args])

    def test_scale_intervals(self):
        result = self.invoke("scale", "A", "--scale", "pentaMin")
        self.assertEqual(result.exit_code, 0, result.output)
        lines = result.output.splitlines()
        self.assertEqual(lines[0], "A pentaMin")
        self.assertEqual(lines[1].split()[-1], "15")
        self.assertIn("♭3", result.output)

    def test_scale_note_names(self):
        result = self.invoke("scale", "A", "--scale", "pentaMin", "--notes")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertNotIn("♭3", result.output)

    def test_scale_frets_from_config(self):
        Path(self.config_dir, "fretboard.json").write_text(json.dumps({"num_frets": 12}))
        result = self.invoke("scale", "C")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.splitlines()[1].split()[-1], "12")

        result = self.invoke("scale", "C", "--frets", "5")
        self.assertEqual(result.output.splitlines()[1].split()[-1], "5")

    def test_unknown_key(self):
        result = self.invoke("scale", "H")
        self.assertEqual(result.exit_code, 2)
        self.assertIn("Unknown key", result.output)

    def test_shapes(self):
        result = self.invoke("shapes", "C")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("C major", result.output)
        self.assertIn("C: 0-3, 12-15", result.output)
        self.assertIn("C[0] frets 0-3: hover 0 to", result.output)
        self.assertIn("A/C", result.output)

    def test_shapes_minor(self):
        result = self.invoke("shapes", "A", "--minor")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("A minor", result.output)
        self.assertIn("Hover regions:", result.output)

    def test_pans(self):
        result = self.invoke("pans", "C", "--direction", "left")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("pan on strings 6/5, frets 10-12, handle on string 6 at fret 8", result.output)
        self.assertIn("3-note bar: string 6, frets 8-12", result.output)
        self.assertNotIn("right pan", result.output)

    def test_pans_for_one_shape(self):
        result = self.invoke("pans", "C", "--shape", "E")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("left pan on strings 6/5, frets 10-12", result.output)
        self.assertNotIn("right pan", result.output)

    def test_pans_shape_and_direction_conflict(self):
        result = self.invoke("pans", "C", "--shape", "E", "--direction", "right")
        self.assertEqual(result.exit_code, 2)
        self.assertIn("handle on the left", result.output)

    def test_pans_handle_only(self):
        result = self.invoke("pans", "C#", "--direction", "right")
        self.assertIn("frets -3--1, handle on string 1 at fret 1 (handle only)", result.output)

    def test_pans_minor_uses_relative_major(self):
        major = self.invoke("pans", "C").output.splitlines()[1:]
        minor = self.invoke("pans", "A", "--minor").output.splitlines()[1:]
        self.assertEqual(major, minor)

    def test_view(self):
        result = self.invoke("view", "C", "--shape", "C")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("[R]", result.output)
        self.assertIn("C: 0-3, 12-15", result.output)
        self.assertNotIn("A: ", result.output)
        self.assertNotIn("Frying pans:", result.output)

    def test_view_frying_pans(self):
        result = self.invoke("view", "A", "--minor", "--frying-pan", "--no-triads")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertNotIn("[", result.output)
        self.assertIn("Frying pans:", result.output)
        self.assertIn("pan on strings 6/5, frets 10-12", result.output)

    def test_view_blues(self):
        result = self.invoke("view", "E", "--minor", "--scale-mode", "blues")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("♭5", result.output)

    def test_invalid_config_value_falls_back(self):
        Path(self.config_dir, "fretboard.json").write_text(json.dumps({"num_frets": "lots"}))
        result = self.invoke("scale", "C")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn(" 15", result.output.splitlines()[-7])

    def test_unknown_banner_font_falls_back(self):
        Path(self.config_dir, "display.json").write_text(json.dumps({"banner_font": "no_such_font"}))
        result = self.invoke("--banner", "scale", "C")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertGreater(len(result.output.splitlines()), 8)

    def test_banner(self):
        result = self.invoke("--banner", "pans", "G")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertGreater(len(result.output.splitlines()), 3)


if __name__ == "__main__":
    unittest.main()
