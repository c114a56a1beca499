"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest
import yaml

from wakehost.config.loader import (
    ConfigError,
    HostEntry,
    apply_env_overrides,
    default_config,
    load_config,
    targets_from_config,
    validate_config,
)


def _minimal_host(**overrides: object) -> dict:
    base = {
        "name": "GamingPC",
        "mac_address": "AA:BB:CC:DD:EE:FF",
        "host_address": "192.168.4.101",
    }
    base.update(overrides)
    return base


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_valid_yaml(self, tmp_path: Path) -> None:
        config_data = {"hosts": [_minimal_host()]}
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.dump(config_data))

        result = load_config(config_file)

        assert result == config_data

    def test_load_missing_file_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(Path("/nonexistent/config.yaml"))

    def test_load_empty_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        assert load_config(config_file) is None

    def test_load_invalid_yaml_raises(self, tmp_path: Path) -> None:
        config_file = tmp_path / "invalid.yaml"
        config_file.write_text("invalid: yaml: content: [")

        with pytest.raises(yaml.YAMLError):
            load_config(config_file)


class TestValidateConfig:
    """Tests for validate_config function."""

    def test_valid_config_no_errors(self) -> None:
        assert validate_config({"hosts": [_minimal_host()]}) == []

    def test_default_config_is_valid(self) -> None:
        assert validate_config(default_config()) == []

    def test_root_must_be_mapping(self) -> None:
        assert validate_config(["nope"]) == ["Config root must be a YAML mapping"]  # type: ignore[arg-type]

    def test_missing_hosts_key(self) -> None:
        errors = validate_config({})
        assert any("hosts" in e for e in errors)

    def test_hosts_must_be_list(self) -> None:
        errors = validate_config({"hosts": {"name": "x"}})
        assert any("must be a list" in e for e in errors)

    def test_missing_required_field(self) -> None:
        host = _minimal_host()
        del host["host_address"]
        errors = validate_config({"hosts": [host]})
        assert any("host_address" in e for e in errors)

    def test_placeholder_mac_still_loads(self) -> None:
        config = {"hosts": [_minimal_host(mac_address="00:00:00:00:00:00")]}
        assert validate_config(config) == []

    def test_bad_port(self) -> None:
        errors = validate_config({"hosts": [_minimal_host(port=70000)]})
        assert any("port" in e for e in errors)

    def test_non_integer_port(self) -> None:
        errors = validate_config({"hosts": [_minimal_host(port="nine")]})
        assert any("port" in e for e in errors)

    def test_zero_attempts_in_settings(self) -> None:
        errors = validate_config({"settings": {"max_attempts": 0}, "hosts": [_minimal_host()]})
        assert any("max_attempts" in e for e in errors)

    def test_negative_interval(self) -> None:
        errors = validate_config({"hosts": [_minimal_host(interval_seconds=-5)]})
        assert any("interval_seconds" in e for e in errors)

    def test_duplicate_names(self) -> None:
        errors = validate_config({"hosts": [_minimal_host(), _minimal_host()]})
        assert any("duplicate" in e for e in errors)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_interval(self, value: float) -> None:
        errors = validate_config({"settings": {"interval_seconds": value}, "hosts": [_minimal_host()]})
        assert any("finite" in e for e in errors)

    def test_non_finite_probe_timeout(self) -> None:
        errors = validate_config({"hosts": [_minimal_host(probe_timeout=float("inf"))]})
        assert any("probe_timeout" in e and "finite" in e for e in errors)

    def test_yaml_nan_interval_rejected(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "settings:\n  interval_seconds: .nan\n"
            "hosts:\n  - mac_address: \"AA:BB:CC:DD:EE:FF\"\n    host_address: 10.0.0.5\n"
        )
        errors = validate_config(load_config(config_file))  # type: ignore[arg-type]
        assert any("interval_seconds" in e for e in errors)

    def test_unquoted_sexagesimal_mac_rejected(self, tmp_path: Path) -> None:
        """YAML 1.1 reads 10:20:30:40:50:59 as a base-60 integer."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "hosts:\n  - mac_address: 10:20:30:40:50:59\n    host_address: 10.0.0.5\n"
        )
        raw = load_config(config_file)
        assert isinstance(raw["hosts"][0]["mac_address"], int)  # type: ignore[index]

        errors = validate_config(raw)  # type: ignore[arg-type]

        assert any("mac_address" in e and "quoted string" in e for e in errors)

    def test_unhashable_name_reported_not_raised(self) -> None:
        errors = validate_config({"hosts": [_minimal_host(name=["a"]), _minimal_host(name=["a"])]})
        assert any("name" in e and "quoted string" in e for e in errors)


class TestTargetsFromConfig:
    """Tests for targets_from_config."""

    def test_creates_entry_with_defaults(self) -> None:
        entries = targets_from_config({"hosts": [_minimal_host()]})

        assert len(entries) == 1
        e = entries[0]
        assert e.name == "GamingPC"
        assert e.target.mac_address == "AA:BB:CC:DD:EE:FF"
        assert e.target.broadcast_address == "255.255.255.255"
        assert e.target.port == 9
        assert e.policy.max_attempts == 30
        assert e.policy.interval_seconds == 10

    def test_respects_global_settings(self) -> None:
        config = {
            "settings": {"max_attempts": 12, "interval_seconds": 5},
            "hosts": [_minimal_host()],
        }
        entry = targets_from_config(config)[0]
        assert entry.policy.max_attempts == 12
        assert entry.policy.interval_seconds == 5

    def test_host_overrides_settings(self) -> None:
        config = {
            "settings": {"max_attempts": 12},
            "hosts": [_minimal_host(max_attempts=3, broadcast_address="192.168.4.255", port=7)],
        }
        entry = targets_from_config(config)[0]
        assert entry.policy.max_attempts == 3
        assert entry.target.broadcast_address == "192.168.4.255"
        assert entry.target.port == 7

    def test_unnamed_host_labelled_by_address(self) -> None:
        host = _minimal_host()
        del host["name"]
        assert targets_from_config({"hosts": [host]})[0].name == "192.168.4.101"


class TestApplyEnvOverrides:
    def _entry(self) -> HostEntry:
        return targets_from_config(default_config())[0]

    def test_no_env_leaves_entry_unchanged(self) -> None:
        entry = self._entry()
        assert apply_env_overrides(entry, {}) == entry

    def test_overrides_target_and_policy(self) -> None:
        env = {
            "WAKEHOST_MAC": "11:22:33:44:55:66",
            "WAKEHOST_HOST": "10.0.0.9",
            "WAKEHOST_BROADCAST": "10.0.0.255",
            "WAKEHOST_PORT": "7",
            "WAKEHOST_MAX_ATTEMPTS": "3",
            "WAKEHOST_INTERVAL": "0.5",
        }

        entry = apply_env_overrides(self._entry(), env)

        assert entry.target.mac_address == "11:22:33:44:55:66"
        assert entry.target.host_address == "10.0.0.9"
        assert entry.target.broadcast_address == "10.0.0.255"
        assert entry.target.port == 7
        assert entry.policy.max_attempts == 3
        assert entry.policy.interval_seconds == 0.5
        assert entry.target.name == "GamingPC"

    def test_bad_number_raises_config_error(self) -> None:
        with pytest.raises(ConfigError):
            apply_env_overrides(self._entry(), {"WAKEHOST_PORT": "nine"})

    def test_zero_attempts_raises_config_error(self) -> None:
        with pytest.raises(ConfigError):
            apply_env_overrides(self._entry(), {"WAKEHOST_MAX_ATTEMPTS": "0"})

    @pytest.mark.parametrize("value", ["nan", "inf"])
    def test_non_finite_interval_raises_config_error(self, value: str) -> None:
        with pytest.raises(ConfigError):
            apply_env_overrides(self._entry(), {"WAKEHOST_INTERVAL": value})
