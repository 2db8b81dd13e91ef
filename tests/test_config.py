"""Tests for sandfix_core.config: models and YAML loader."""

import os
import pytest
from unittest.mock import patch
from pydantic import ValidationError

from sandfix_core.config.models import SandfixConfig, SnapshotConfig, StoreConfig
from sandfix_core.config.loader import DEFAULT_CONFIG_TEMPLATE, load_config, _expand_env_vars


# ── Defaults ─────────────────────────────────────────────────────────


class TestSandfixConfigDefaults:
    def test_default_log_level(self, sample_config):
        assert sample_config.log_level == "info"

    def test_default_not_verbose(self, sample_config):
        assert sample_config.verbose is False

    def test_default_trusted_is_global(self, sample_config):
        assert sample_config.store.default_package_dbs == ["global"]

    def test_default_suffixes(self, sample_config):
        assert sample_config.store.db_suffix == ".conf.d"
        assert sample_config.store.record_suffix == ".conf"

    def test_default_snapshot(self, sample_config):
        assert sample_config.snapshot.ignore_patterns == []
        assert sample_config.snapshot.follow_symlinks is True


class TestValidation:
    def test_bad_log_level(self):
        with pytest.raises(ValidationError):
            SandfixConfig(log_level="loud")

    def test_ghc_timeout_positive(self):
        with pytest.raises(ValidationError):
            StoreConfig(ghc_timeout=0)

    def test_nested_dict(self):
        cfg = SandfixConfig(snapshot={"ignore_patterns": [".git"]})
        assert isinstance(cfg.snapshot, SnapshotConfig)
        assert cfg.snapshot.ignore_patterns == [".git"]


# ── Loader ───────────────────────────────────────────────────────────


class TestLoadConfig:
    def test_defaults_when_no_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with patch("sandfix_core.config.loader.Path.home", return_value=tmp_path):
            cfg = load_config()
        assert cfg == SandfixConfig()

    def test_cli_path_wins(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "sandfix.yaml").write_text("log_level: error\n")
        explicit = tmp_path / "other.yaml"
        explicit.write_text("log_level: debug\n")
        assert load_config(str(explicit)).log_level == "debug"
        assert load_config().log_level == "error"

    def test_user_global_fallback(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        home_cfg = tmp_path / ".sandfix" / "config.yaml"
        home_cfg.parent.mkdir()
        home_cfg.write_text("verbose: true\n")
        with patch("sandfix_core.config.loader.Path.home", return_value=tmp_path):
            assert load_config().verbose is True

    def test_empty_file_skipped(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "sandfix.yaml").write_text("")
        with patch("sandfix_core.config.loader.Path.home", return_value=tmp_path):
            assert load_config() == SandfixConfig()

    def test_invalid_yaml(self, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("store: [oops")
        with pytest.raises(ValueError, match="not valid YAML"):
            load_config(str(bad))

    def test_invalid_schema(self, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("log_level: shouting\n")
        with pytest.raises(ValueError, match="invalid sandfix config"):
            load_config(str(bad))

    def test_non_mapping_rejected(self, tmp_path):
        bad = tmp_path / "list.yaml"
        bad.write_text("- global\n- user\n")
        with pytest.raises(ValueError, match="invalid sandfix config"):
            load_config(str(bad))

    def test_env_expansion(self, tmp_path):
        f = tmp_path / "c.yaml"
        f.write_text("store:\n  global_db: ${SANDFIX_TEST_GHC}/package.conf.d\n")
        with patch.dict(os.environ, {"SANDFIX_TEST_GHC": "/opt/ghc"}):
            cfg = load_config(str(f))
        assert cfg.store.global_db == "/opt/ghc/package.conf.d"

    def test_default_template_loads(self, tmp_path):
        f = tmp_path / "sandfix.yaml"
        f.write_text(DEFAULT_CONFIG_TEMPLATE)
        assert load_config(str(f)) == SandfixConfig()


def test_expand_env_vars_nested():
    with patch.dict(os.environ, {"X": "1"}, clear=False):
        assert _expand_env_vars({"a": ["${X}", 2], "b": "${MISSING_VAR_Q}"}) == {
            "a": ["1", 2],
            "b": "",
        }
