"""
Tests for the i18n-interpolate command line.
"""

import io
import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

CATALOG_YAML = """\
default:
  GREETING: Hello ${name}
  BYE: Bye
  list: Items ${items}
fr:
  GREETING: Bonjour ${name}
"""


class TestCLI(unittest.TestCase):
    """Tests for main() and InterpolatorCLI."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)
        self.catalog = self.root / "catalog.yaml"
        self.catalog.write_text(CATALOG_YAML, encoding="utf-8")

        self.home_patch = patch("pathlib.Path.home", return_value=self.root)
        self.home_patch.start()
        self.env_patch = patch.dict(os.environ, {}, clear=True)
        self.env_patch.start()

    def tearDown(self):
        self.env_patch.stop()
        self.home_patch.stop()
        self.temp_dir.cleanup()

    def _run(self, *argv):
        from i18n_interpolator.cli import main

        with patch("sys.stdout", new_callable=io.StringIO) as stdout:
            code = main(list(argv))
        return code, stdout.getvalue()

    def test_render_text(self):
        """Test rendering a literal string."""
        code, out = self._run(
            "--catalog", str(self.catalog), "render", "--text", '>> ${i18n("GREETING", {name: "Ada"})} <<'
        )
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), ">> Hello Ada <<")

    def test_render_text_with_language(self):
        """Test the global --language flag."""
        code, out = self._run(
            "--catalog", str(self.catalog), "--language", "fr",
            "render", "--text", '${i18n("GREETING", {name: "Ada"})}',
        )
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "Bonjour Ada")

    def test_render_file_to_output(self):
        """Test rendering a document file into an output file."""
        document = self.root / "page.json"
        document.write_text(
            json.dumps({"title": '${i18n("BYE")}', "list": ['${i18n("list", {items: [1, 2]})}', 3]}),
            encoding="utf-8",
        )
        output = self.root / "out.json"

        code, _ = self._run("--catalog", str(self.catalog), "render", str(document), "-o", str(output))

        self.assertEqual(code, 0)
        self.assertEqual(
            json.loads(output.read_text(encoding="utf-8")),
            {"title": "Bye", "list": ["Items [1, 2]", 3]},
        )

    def test_render_syntax_error(self):
        """Test that a malformed marker exits with 1."""
        code, _ = self._run("--catalog", str(self.catalog), "render", "--text", '${i18n("BYE", {a: 1}')
        self.assertEqual(code, 1)

    def test_render_without_catalog(self):
        """Test that a missing catalog configuration is reported."""
        code, _ = self._run("render", "--text", "x")
        self.assertEqual(code, 1)

    def test_translate(self):
        """Test translating one key, with nested markers in the variables."""
        code, out = self._run(
            "--catalog", str(self.catalog), "translate", "GREETING", "--vars", '{name: "${i18n(\\"BYE\\")}"}'
        )
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "Hello Bye")

    def test_languages(self):
        """Test listing catalog languages."""
        code, out = self._run("--catalog", str(self.catalog), "languages")
        self.assertEqual(code, 0)
        self.assertIn("default", out)
        self.assertIn("fr", out)

    def test_missing(self):
        """Test reporting untranslated keys."""
        code, out = self._run("--catalog", str(self.catalog), "missing", "fr")
        self.assertEqual(code, 1)
        self.assertIn("BYE", out)
        self.assertIn("list", out)

    def test_missing_complete(self):
        """Test a language with no missing keys."""
        code, _ = self._run("--catalog", str(self.catalog), "missing", "default", "--reference", "fr")
        self.assertEqual(code, 0)

    def test_missing_unknown_language(self):
        """Test an unknown language."""
        code, _ = self._run("--catalog", str(self.catalog), "missing", "xx")
        self.assertEqual(code, 1)

    def test_config_set_catalog_and_language(self):
        """Test persisting preferences and using them."""
        code, _ = self._run("config", "--catalog", str(self.catalog), "--language", "fr")
        self.assertEqual(code, 0)

        from i18n_interpolator.config import InterpolatorConfig

        config = InterpolatorConfig()
        self.assertEqual(config.get_language({"default", "fr"}), "fr")

        code, out = self._run("render", "--text", '${i18n("GREETING", {name: "Ada"})}')
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "Bonjour Ada")

    def test_config_invalid_language(self):
        """Test setting a language the catalog does not have."""
        self._run("config", "--catalog", str(self.catalog))
        code, _ = self._run("config", "--language", "xx")
        self.assertEqual(code, 1)

    def test_config_auto_clears_language(self):
        """Test that 'auto' removes the saved language."""
        self._run("config", "--catalog", str(self.catalog), "--language", "fr")
        code, _ = self._run("config", "--language", "auto")
        self.assertEqual(code, 0)

        from i18n_interpolator.config import InterpolatorConfig

        self.assertEqual(InterpolatorConfig().get_language({"default", "fr"}), "default")

    def test_config_info(self):
        """Test showing the configuration."""
        code, out = self._run("config", "--info")
        self.assertEqual(code, 0)
        self.assertIn("I18N INTERPOLATOR CONFIG", out)

    def test_no_command_shows_help(self):
        """Test running without a command."""
        code, out = self._run()
        self.assertEqual(code, 0)
        self.assertIn("usage", out.lower())


if __name__ == "__main__":
    unittest.main()
