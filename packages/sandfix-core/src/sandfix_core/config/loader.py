"""Find and read the sandfix.yaml that applies to a run."""

from __future__ import annotations

import os
import re
from collections.abc import Iterator
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import SandfixConfig

_ENV_REF_RE = re.compile(r"\$\{(\w+)\}")


def _config_candidates(cli_path: str | None) -> Iterator[Path]:
    if cli_path:
        yield Path(cli_path)
    yield Path("sandfix.yaml")
    yield Path.home() / ".sandfix" / "config.yaml"


def load_config(cli_path: str | None = None) -> SandfixConfig:
    """Return the settings from the first non-empty config file found.

    *cli_path* is tried first, then ``./sandfix.yaml``, then
    ``~/.sandfix/config.yaml``; with none of them present the defaults apply.
    Raises ValueError when a file is not YAML or holds values the models
    reject.
    """
    for path in _config_candidates(cli_path):
        if not path.is_file():
            continue
        try:
            raw = yaml.safe_load(path.read_text())
        except yaml.YAMLError as e:
            raise ValueError(f"not valid YAML in {path}: {e}") from e
        if not raw:
            continue
        try:
            return SandfixConfig.model_validate(_expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"invalid sandfix config in {path}: {e}") from e

    return SandfixConfig()


def _expand_env_vars(value: object) -> object:
    """Substitute ``${NAME}`` in string values; unset variables become empty."""
    if isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env_vars(v) for v in value]
    if isinstance(value, str):
        return _ENV_REF_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    return value


# Written by `sandfix config init`
DEFAULT_CONFIG_TEMPLATE = """\
# sandfix.yaml

# Package stores
store:
  db_suffix: ".conf.d"         # sandbox databases are <root>/*<db_suffix>
  record_suffix: ".conf"
  default_package_dbs:         # trusted stores when no --package-db is given
    - "global"
  # global_db: "/usr/lib/ghc/package.conf.d"
  # user_db: "${HOME}/.ghc/x86_64-linux-7.10.3/package.conf.d"
  ghc_path: "ghc"              # used to locate the global/user databases
  ghc_timeout: 30

# Sandbox tree snapshot
snapshot:
  ignore_patterns: []          # entry names skipped while walking the sandbox
  follow_symlinks: true

# Logging
verbose: false
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
