"""Tests for configuration settings."""

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import yaml

from ddexport.config.settings import (
    DEFAULT_CONFIG_FILE,
    ConfigurationError,
    ExportConfig,
    Settings,
    _apply_environment_overrides,
    _set_nested_attr,
    _validate_config,
    get_config_path,
    load_config,
)


class TestSettingsDefaults(unittest.TestCase):
    """Tests for default settings values."""

    def test_defaults(self) -> None:
        settings = Settings()

        self.assertEqual(settings.log_level, "INFO")
        self.assertEqual(settings.api_url, "")
        self.assertIsInstance(settings.export, ExportConfig)
        self.assertEqual(settings.export.output_format, "json")
        self.assertEqual(settings.export.page_size, 100)
        self.assertEqual(settings.export.resources, [])
        self.assertEqual(settings.export.filters, {})


class TestConfigPath(unittest.TestCase):
    """Tests for config path resolution."""

    def test_default_path(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(get_config_path(), DEFAULT_CONFIG_FILE)

    def test_env_override(self) -> None:
        with patch.dict(os.environ, {"DDEXPORT_CONFIG": "/tmp/custom.yaml"}, clear=True):
            self.assertEqual(get_config_path(), Path("/tmp/custom.yaml"))


class TestLoadConfig(unittest.TestCase):
    """Tests for loading configuration files."""

    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.temp_dir.cleanup)
        self.config_path = Path(self.temp_dir.name) / "config.yaml"
        self.env = patch.dict(os.environ, {}, clear=True)
        self.env.start()
        self.addCleanup(self.env.stop)

    def _write(self, data: object) -> None:
        with open(self.config_path, "w") as f:
            yaml.safe_dump(data, f)

    def test_missing_file_uses_defaults(self) -> None:
        settings = load_config(self.config_path)
        self.assertEqual(settings.export.output_dir, "generated")

    def test_load_values(self) -> None:
        self._write(
            {
                "ddexport": {"log_level": "debug"},
                "datadog": {"api_url": "https://api.datadoghq.eu"},
                "export": {
                    "output_dir": "out",
                    "format": "YAML",
                    "page_size": 50,
                    "resources": ["monitor", "dashboard"],
                    "filters": {"monitor": [1, 2]},
                },
            }
        )

        settings = load_config(self.config_path)

        self.assertEqual(settings.log_level, "DEBUG")
        self.assertEqual(settings.api_url, "https://api.datadoghq.eu")
        self.assertEqual(settings.export.output_dir, "out")
        self.assertEqual(settings.export.output_format, "yaml")
        self.assertEqual(settings.export.page_size, 50)
        self.assertEqual(settings.export.resources, ["monitor", "dashboard"])
        self.assertEqual(settings.export.filters, {"monitor": ["1", "2"]})

    def test_invalid_yaml(self) -> None:
        with open(self.config_path, "w") as f:
            f.write("export: [unclosed")

        with self.assertRaises(ConfigurationError):
            load_config(self.config_path)

    def test_non_mapping_file(self) -> None:
        self._write(["not", "a", "mapping"])
        with self.assertRaises(ConfigurationError):
            load_config(self.config_path)

    def test_invalid_page_size(self) -> None:
        self._write({"export": {"page_size": "many"}})
        with self.assertRaises(ConfigurationError):
            load_config(self.config_path)

    def test_invalid_format(self) -> None:
        self._write({"export": {"format": "hcl"}})
        with self.assertRaises(ConfigurationError):
            load_config(self.config_path)

    def test_empty_sections_use_defaults(self) -> None:
        with open(self.config_path, "w") as f:
            f.write("ddexport:\ndatadog:\nexport:\n")

        settings = load_config(self.config_path)

        self.assertEqual(settings.log_level, "INFO")
        self.assertEqual(settings.api_url, "")
        self.assertEqual(settings.export.output_dir, "generated")

    def test_env_overrides_file(self) -> None:
        self._write({"export": {"output_dir": "from-file"}})
        with patch.dict(
            os.environ,
            {"DDEXPORT_OUTPUT_DIR": "from-env", "DDEXPORT_RESOURCES": "monitor,role"},
        ):
            settings = load_config(self.config_path)

        self.assertEqual(settings.export.output_dir, "from-env")
        self.assertEqual(settings.export.resources, ["monitor", "role"])


class TestEnvironmentOverrides(unittest.TestCase):
    """Tests for environment variable overrides."""

    def test_log_level_upper_cased(self) -> None:
        with patch.dict(os.environ, {"DDEXPORT_LOG_LEVEL": "warning"}, clear=True):
            settings = _apply_environment_overrides(Settings())
        self.assertEqual(settings.log_level, "WARNING")

    def test_invalid_page_size(self) -> None:
        with patch.dict(os.environ, {"DDEXPORT_PAGE_SIZE": "ten"}, clear=True):
            with self.assertRaises(ConfigurationError):
                _apply_environment_overrides(Settings())

    def test_resources_drop_empty_entries(self) -> None:
        with patch.dict(os.environ, {"DDEXPORT_RESOURCES": "monitor,, role ,"}, clear=True):
            settings = _apply_environment_overrides(Settings())
        self.assertEqual(settings.export.resources, ["monitor", "role"])

    def test_set_nested_attr(self) -> None:
        settings = Settings()
        _set_nested_attr(settings, "export.page_size", 5)
        self.assertEqual(settings.export.page_size, 5)


class TestValidateConfig(unittest.TestCase):
    """Tests for configuration validation."""

    def test_valid_defaults(self) -> None:
        _validate_config(Settings())

    def test_invalid_log_level(self) -> None:
        settings = Settings(log_level="LOUD")
        with self.assertRaises(ConfigurationError):
            _validate_config(settings)

    def test_page_size_must_be_positive(self) -> None:
        settings = Settings()
        settings.export.page_size = 0
        with self.assertRaises(ConfigurationError):
            _validate_config(settings)


if __name__ == "__main__":
    unittest.main()
