"""Unit tests for project file loading."""

from pathlib import Path

import pytest

from cabinet_mfg.application.config import ConfigError, load_config, load_config_from_dict


class TestLoadConfig:
    """Tests for load_config()."""

    def test_load_minimal(self, write_config) -> None:
        config = load_config(write_config())
        assert config.schema_version == "1.0"

    def test_load_full_cabinet(self, write_config) -> None:
        path = write_config(
            {
                "cabinet": {
                    "dimensions": {"width": 900, "height": 2100},
                    "structure": {"shelf_count": 4, "divider_count": 1},
                },
                "panel_overrides": {"shelf_1": {"design_load_kg": 12}},
                "fittings": [
                    {"fitting_id": "shelf-support-15kg", "panel_id": "shelf_1", "role": "bracket"}
                ],
            }
        )
        config = load_config(path)
        assert config.cabinet.dimensions.width == 900
        assert config.cabinet.structure.divider_count == 1
        assert config.panel_overrides["shelf_1"].design_load_kg == 12
        assert config.fittings[0].panel_id == "shelf_1"

    def test_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "missing.json")
        assert exc_info.value.error_type == "file_not_found"
        assert "Config file not found" in str(exc_info.value)

    def test_invalid_json(self, write_config) -> None:
        path = write_config(raw='{"schema_version": "1.0",\n  "cabinet": }')
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        error = exc_info.value
        assert error.error_type == "json_parse"
        assert error.path == path
        assert error.details[0]["line"] == 2
        assert "Invalid JSON" in error.message

    def test_validation_error_paths(self, write_config) -> None:
        path = write_config(
            {
                "cabinet": {"dimensions": {"width": "wide"}},
                "fittings": [{"fitting_id": "x", "panel_id": "shelf_1", "role": "clamp"}],
            }
        )
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        error = exc_info.value
        assert error.error_type == "validation"
        paths = {d["path"] for d in error.details}
        assert "cabinet.dimensions.width" in paths
        assert "fittings[0].role" in paths
        assert error.message.startswith("Configuration validation failed:")
        assert "(got: 'wide')" in error.message

    def test_unknown_machine_is_a_config_error(self, write_config) -> None:
        path = write_config({"machine": {"profile": "shopbot"}})
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.details[0]["path"] == "machine.profile"

    def test_unknown_field(self, write_config) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(write_config({"cabinet": {"colour": "red"}}))
        assert exc_info.value.details[0]["error_type"] == "extra_forbidden"


class TestLoadConfigFromDict:
    """Tests for load_config_from_dict()."""

    def test_valid(self) -> None:
        assert load_config_from_dict({"schema_version": "1.1"}).schema_version == "1.1"

    def test_invalid_has_no_path(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict({})
        assert exc_info.value.path is None
        assert exc_info.value.details[0]["path"] == "schema_version"
