"""
Tests for the CLI commands.

Uses Python's unittest module.
Tests argument parsing, filter parsing, and the list/config/export commands.
"""

from __future__ import annotations

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import MagicMock, patch

from ddexport.cli import cmd_config, cmd_export, cmd_list, create_parser, parse_filters
from ddexport.config.settings import ConfigurationError
from ddexport.provider.errors import MissingCredentialError


class TestArgumentParser(unittest.TestCase):
    """Tests for CLI argument parsing."""

    def setUp(self) -> None:
        self.parser = create_parser()

    def test_version_argument(self) -> None:
        with self.assertRaises(SystemExit) as cm:
            with redirect_stdout(io.StringIO()):
                self.parser.parse_args(["--version"])
        self.assertEqual(cm.exception.code, 0)

    def test_no_command_defaults(self) -> None:
        args = self.parser.parse_args([])
        self.assertIsNone(args.command)
        self.assertEqual(args.verbose, 0)
        self.assertFalse(args.quiet)

    def test_export_arguments(self) -> None:
        args = self.parser.parse_args(
            [
                "export",
                "--resources", "monitor,dashboard",
                "--api-key", "K1",
                "--app-key", "K2",
                "--api-url", "https://api.example.com",
                "--format", "yaml",
                "--filter", "monitor=1:2",
                "--filter", "dashboard=abc",
            ]
        )

        self.assertIs(args.func, cmd_export)
        self.assertEqual(args.resources, "monitor,dashboard")
        self.assertEqual(args.api_key, "K1")
        self.assertEqual(args.api_url, "https://api.example.com")
        self.assertEqual(args.format, "yaml")
        self.assertEqual(args.filter, ["monitor=1:2", "dashboard=abc"])

    def test_credentials_default_to_empty(self) -> None:
        """Test that missing credential options fall back to the environment."""
        args = self.parser.parse_args(["config"])
        self.assertEqual((args.api_key, args.app_key, args.api_url), ("", "", ""))

    def test_invalid_format_rejected(self) -> None:
        with self.assertRaises(SystemExit):
            with redirect_stderr(io.StringIO()):
                self.parser.parse_args(["export", "--format", "hcl"])


class TestParseFilters(unittest.TestCase):
    """Tests for --filter parsing."""

    def test_parse(self) -> None:
        self.assertEqual(
            parse_filters(["monitor=1:2", "monitor=3", "role=abc"]),
            {"monitor": ["1", "2", "3"], "role": ["abc"]},
        )

    def test_malformed(self) -> None:
        for value in ("monitor", "=1", "monitor="):
            with self.subTest(value=value):
                with self.assertRaises(ConfigurationError):
                    parse_filters([value])


class CommandTestCase(unittest.TestCase):
    """Base class running commands in an isolated environment."""

    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.temp_dir.cleanup)
        self.root = Path(self.temp_dir.name)
        self.env = patch.dict(
            os.environ,
            {
                "DDEXPORT_CONFIG": str(self.root / "missing.yaml"),
                "DATADOG_API_KEY": "env-api-key",
                "DATADOG_APP_KEY": "env-app-key",
            },
            clear=True,
        )
        self.env.start()
        self.addCleanup(self.env.stop)
        self.parser = create_parser()

    def run_command(self, argv: list[str]) -> tuple[int, str, str]:
        args = self.parser.parse_args(argv)
        stdout, stderr = io.StringIO(), io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            code = args.func(args)
        return code, stdout.getvalue(), stderr.getvalue()


class TestListCommand(CommandTestCase):
    """Tests for the list command."""

    def test_list(self) -> None:
        code, out, _ = self.run_command(["list"])

        self.assertIs(self.parser.parse_args(["list"]).func, cmd_list)
        self.assertEqual(code, 0)
        self.assertIn("monitor", out)
        self.assertIn("datadog_monitor", out)

    def test_list_json(self) -> None:
        code, out, _ = self.run_command(["list", "--json"])

        kinds = json.loads(out)
        self.assertEqual(code, 0)
        self.assertEqual(len(kinds), 27)
        self.assertEqual(kinds["synthetics"], "datadog_synthetics_test")


class TestConfigCommand(CommandTestCase):
    """Tests for the config command."""

    def test_keys_are_masked(self) -> None:
        code, out, _ = self.run_command(["config"])

        self.assertIs(self.parser.parse_args(["config"]).func, cmd_config)
        self.assertEqual(code, 0)
        self.assertNotIn("env-api-key", out)
        self.assertIn("-key", out)
        self.assertIn("api_url: (default)", out)

    def test_missing_key_raises(self) -> None:
        with patch.dict(os.environ, {"DATADOG_API_KEY": ""}):
            with self.assertRaises(MissingCredentialError):
                self.run_command(["config"])


class TestExportCommand(CommandTestCase):
    """Tests for the export command."""

    @patch("ddexport.generators.monitors.MonitorsApi")
    def test_export_monitors(self, mock_api_class: MagicMock) -> None:
        mock_api_class.return_value.list_monitors.return_value = [
            {"id": 1, "name": "cpu"},
            {"id": 2, "name": "mem"},
        ]
        output_dir = self.root / "out"

        code, out, err = self.run_command(
            ["export", "-r", "monitor", "-o", str(output_dir), "--filter", "monitor=2"]
        )

        self.assertEqual(code, 0, err)
        self.assertIn("monitor: 1 resources", out)
        with open(output_dir / "datadog" / "monitor" / "import.json") as f:
            self.assertEqual(json.load(f), {"datadog_monitor.tfer--mem_2": "2"})
        self.assertTrue((output_dir / "datadog" / "monitor" / "provider.tf.json").exists())

    @patch("ddexport.generators.monitors.MonitorsApi")
    def test_unsupported_kind_fails_only_that_kind(self, mock_api_class: MagicMock) -> None:
        mock_api_class.return_value.list_monitors.return_value = []
        output_dir = self.root / "out"

        code, out, err = self.run_command(
            ["export", "-r", "bogus,monitor", "-o", str(output_dir), "--no-provider-file"]
        )

        self.assertEqual(code, 1)
        self.assertIn("datadog: bogus not supported service", err)
        self.assertIn("monitor: 0 resources", out)
        self.assertFalse((output_dir / "datadog" / "monitor" / "provider.tf.json").exists())

    def test_no_kinds_selected(self) -> None:
        code, _, err = self.run_command(["export"])
        self.assertEqual(code, 2)
        self.assertIn("No resource kinds selected", err)


if __name__ == "__main__":
    unittest.main()
