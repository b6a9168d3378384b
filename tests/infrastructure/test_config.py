"""Tests for configuration module."""

import json
import logging
import os
import pytest
from unittest.mock import patch

from shipyard.infrastructure.config import (
    ConnectivityConfig,
    DeployConfig,
    ShipyardConfig,
    SshConfig,
    TelemetryConfig,
    load_config,
)


class TestDefaultConfig:
    def test_defaults(self):
        config = load_config(path="/nonexistent/shipyard.json")
        assert config.log_level == "WARNING"
        assert config.ssh.connect_timeout == 30
        assert config.connectivity.port == 22
        assert config.connectivity.poll_interval == 5.0
        assert config.connectivity.max_polls == 14
        assert config.deploy.containers_dir == "/home/ubuntu/containers"
        assert config.deploy.operation_timeout == 0.0
        assert config.telemetry.endpoint == ""

    def test_all_sections_present(self):
        config = load_config(path="/nonexistent/shipyard.json")
        assert isinstance(config.ssh, SshConfig)
        assert isinstance(config.connectivity, ConnectivityConfig)
        assert isinstance(config.deploy, DeployConfig)
        assert isinstance(config.telemetry, TelemetryConfig)


class TestFileConfig:
    def test_load_from_file(self, tmp_path):
        config_file = tmp_path / "shipyard.json"
        config_file.write_text(json.dumps({
            "log_level": "DEBUG",
            "ssh": {"key_path": "/keys/deploy.pem"},
            "connectivity": {"max_polls": 3, "poll_interval": 0.5},
            "deploy": {"namespace": "acme", "containers_dir": "/opt/containers"},
        }))

        config = load_config(path=str(config_file))
        assert config.log_level == "DEBUG"
        assert config.ssh.key_path == "/keys/deploy.pem"
        assert config.connectivity.max_polls == 3
        assert config.connectivity.poll_interval == 0.5
        assert config.deploy.namespace == "acme"
        assert config.deploy.containers_dir == "/opt/containers"

    def test_unknown_keys_ignored(self, tmp_path):
        config_file = tmp_path / "shipyard.json"
        config_file.write_text(json.dumps({"ssh": {"unknown": 1, "connect_timeout": 5}}))

        config = load_config(path=str(config_file))
        assert config.ssh.connect_timeout == 5

    def test_invalid_json_falls_back_to_defaults(self, tmp_path):
        config_file = tmp_path / "shipyard.json"
        config_file.write_text("{not json")

        config = load_config(path=str(config_file))
        assert config == ShipyardConfig()


class TestEnvOverride:
    def test_section_override_with_type_conversion(self):
        env = {
            "SHIPYARD_CONNECTIVITY_MAX_POLLS": "2",
            "SHIPYARD_CONNECTIVITY_POLL_INTERVAL": "0.25",
            "SHIPYARD_TELEMETRY_INSECURE": "true",
            "SHIPYARD_SSH_KEY_PATH": "/keys/id_rsa",
        }
        with patch.dict(os.environ, env):
            config = load_config(path="/nonexistent/shipyard.json")

        assert config.connectivity.max_polls == 2
        assert config.connectivity.poll_interval == 0.25
        assert config.telemetry.insecure is True
        assert config.ssh.key_path == "/keys/id_rsa"

    def test_env_beats_file(self, tmp_path):
        config_file = tmp_path / "shipyard.json"
        config_file.write_text(json.dumps({"deploy": {"namespace": "file"}}))

        with patch.dict(os.environ, {"SHIPYARD_DEPLOY_NAMESPACE": "env"}):
            config = load_config(path=str(config_file))
        assert config.deploy.namespace == "env"

    def test_top_level_log_level(self):
        with patch.dict(os.environ, {"SHIPYARD_LOG_LEVEL": "INFO"}):
            config = load_config(path="/nonexistent/shipyard.json")
        assert config.log_level == "INFO"

    def test_custom_prefix(self):
        with patch.dict(os.environ, {"YARD_DEPLOY_NAMESPACE": "acme"}):
            config = load_config(path="/nonexistent/shipyard.json", env_prefix="YARD")
        assert config.deploy.namespace == "acme"


class TestFrozen:
    def test_config_is_immutable(self):
        config = ShipyardConfig()
        with pytest.raises(AttributeError):
            config.log_level = "DEBUG"


class TestInvalidValues:
    def test_malformed_env_number_uses_default(self, caplog):
        with patch.dict(os.environ, {"SHIPYARD_CONNECTIVITY_PORT": "abc"}), \
             caplog.at_level(logging.WARNING, logger="shipyard"):
            config = load_config(path="/nonexistent/shipyard.json")
        assert config.connectivity.port == 22
        assert "Invalid value 'abc'" in caplog.text

    def test_null_section_uses_defaults(self, tmp_path):
        config_file = tmp_path / "shipyard.json"
        config_file.write_text(json.dumps({"ssh": None, "deploy": {"namespace": "acme"}}))

        config = load_config(path=str(config_file))
        assert config.ssh == SshConfig()
        assert config.deploy.namespace == "acme"

    def test_null_section_with_env_override(self, tmp_path):
        config_file = tmp_path / "shipyard.json"
        config_file.write_text(json.dumps({"ssh": None}))

        with patch.dict(os.environ, {"SHIPYARD_SSH_KEY_PATH": "/keys/id_rsa"}):
            config = load_config(path=str(config_file))
        assert config.ssh.key_path == "/keys/id_rsa"

    def test_non_object_file_uses_defaults(self, tmp_path):
        config_file = tmp_path / "shipyard.json"
        config_file.write_text(json.dumps(["not", "an", "object"]))
        assert load_config(path=str(config_file)) == ShipyardConfig()


class TestLogFormat:
    def test_default_text(self):
        assert load_config(path="/nonexistent/shipyard.json").log_format == "text"

    def test_from_file(self, tmp_path):
        config_file = tmp_path / "shipyard.json"
        config_file.write_text(json.dumps({"log_format": "json"}))
        assert load_config(path=str(config_file)).log_format == "json"

    def test_from_env(self):
        with patch.dict(os.environ, {"SHIPYARD_LOG_FORMAT": "json"}):
            config = load_config(path="/nonexistent/shipyard.json")
        assert config.log_format == "json"
