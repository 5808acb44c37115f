"""Tests for driverimages.config module."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from driverimages.config import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_WORKERS,
    DEFAULT_READ_TIMEOUT,
    ConfigError,
    DriverImagesConfig,
)


def _write(path: Path, data) -> Path:
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


def test_config_defaults_no_file(tmp_path: Path):
    """Missing config file means every value falls back to its default."""
    config = DriverImagesConfig(config_path=tmp_path / "nonexistent" / "config.yaml")

    assert config.aws_region is None
    assert config.aws_profile is None
    assert config.owners == []
    assert config.max_workers == DEFAULT_MAX_WORKERS
    assert config.connect_timeout == DEFAULT_CONNECT_TIMEOUT
    assert config.read_timeout == DEFAULT_READ_TIMEOUT
    assert config.max_attempts == DEFAULT_MAX_ATTEMPTS


def test_config_loads_yaml(tmp_path: Path):
    """Values are read from the YAML file."""
    path = _write(tmp_path / "config.yaml", {
        "aws": {
            "region": "eu-central-1",
            "profile": "drivers",
            "owners": ["self", "123456789012"],
            "connect_timeout": 3,
            "read_timeout": 60,
            "max_attempts": 5,
        },
        "concurrency": {"max_workers": 16},
    })
    config = DriverImagesConfig(config_path=path)

    assert config.aws_region == "eu-central-1"
    assert config.aws_profile == "drivers"
    assert config.owners == ["self", "123456789012"]
    assert config.connect_timeout == 3
    assert config.read_timeout == 60
    assert config.max_attempts == 5
    assert config.max_workers == 16


def test_config_single_owner_string(tmp_path: Path):
    path = _write(tmp_path / "config.yaml", {"aws": {"owners": "self"}})
    assert DriverImagesConfig(config_path=path).owners == ["self"]


def test_config_empty_file(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    config = DriverImagesConfig(config_path=path)
    assert config.max_workers == DEFAULT_MAX_WORKERS


def test_config_get_dotted(tmp_path: Path):
    path = _write(tmp_path / "config.yaml", {"aws": {"region": "us-east-2"}})
    config = DriverImagesConfig(config_path=path)
    assert config.get("aws.region") == "us-east-2"
    assert config.get("aws.missing", "fallback") == "fallback"
    assert config.get("aws.region.deeper") is None


@pytest.mark.parametrize("value", [0, -1, "eight", True, 2.5])
def test_config_invalid_max_workers(tmp_path: Path, value):
    path = _write(tmp_path / "config.yaml", {"concurrency": {"max_workers": value}})
    with pytest.raises(ConfigError, match="concurrency.max_workers"):
        DriverImagesConfig(config_path=path)


def test_config_not_a_mapping(tmp_path: Path):
    path = _write(tmp_path / "config.yaml", ["a", "b"])
    with pytest.raises(ConfigError, match="YAML mapping"):
        DriverImagesConfig(config_path=path)


@pytest.mark.parametrize("key", ["connect_timeout", "read_timeout", "max_attempts"])
def test_config_invalid_aws_int_rejected_at_load(tmp_path: Path, key):
    """Bad values are reported when the file is loaded, not on first use."""
    path = _write(tmp_path / "config.yaml", {"aws": {key: "soon"}})
    with pytest.raises(ConfigError, match="aws.%s" % key):
        DriverImagesConfig(config_path=path)


def test_config_empty_owners_key(tmp_path: Path):
    """``owners:`` with no value is the same as no owner filter."""
    path = tmp_path / "config.yaml"
    path.write_text("aws:\n  owners:\n")
    assert DriverImagesConfig(config_path=path).owners == []


@pytest.mark.parametrize("value", [123, ["self", 42], {"id": "self"}])
def test_config_invalid_owners(tmp_path: Path, value):
    path = _write(tmp_path / "config.yaml", {"aws": {"owners": value}})
    with pytest.raises(ConfigError, match="aws.owners"):
        DriverImagesConfig(config_path=path)
