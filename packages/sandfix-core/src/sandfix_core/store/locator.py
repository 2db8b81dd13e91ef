"""Locate sandbox databases and resolve ``--package-db`` selectors."""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path

from sandfix_core.config.models import StoreConfig
from sandfix_core.errors import StoreNotFoundError
from sandfix_core.store.loader import load_store
from sandfix_core.store.models import PackageStore

logger = logging.getLogger(__name__)

GLOBAL_DB = "global"
USER_DB = "user"

# ghc --info prints a Haskell list of string pairs
_PAIR_RE = re.compile(r'\("([^"]*)","([^"]*)"\)')


def find_broken_dbs(
    root: str | Path, pkg_dir: str | None, config: StoreConfig
) -> list[Path]:
    """Return the database directories to repair under *root*.

    With *pkg_dir* that single location is returned as-is; otherwise every
    direct child of *root* ending in ``config.db_suffix``.
    """
    root = Path(root)
    if pkg_dir is not None:
        return [root / pkg_dir]
    if not root.is_dir():
        return []
    return sorted(
        p for p in root.iterdir() if p.name.endswith(config.db_suffix) and p.is_dir()
    )


def _run_ghc(config: StoreConfig, *args: str) -> str:
    """Run the configured ghc and return its stripped stdout."""
    cmd = [config.ghc_path, *args]
    try:
        result = subprocess.run(
            cmd, capture_output=True, text=True, timeout=config.ghc_timeout
        )
    except FileNotFoundError as e:
        raise StoreNotFoundError(config.ghc_path, "ghc not found") from e
    except subprocess.TimeoutExpired as e:
        raise StoreNotFoundError(config.ghc_path, "ghc timed out") from e
    if result.returncode != 0:
        raise StoreNotFoundError(
            config.ghc_path,
            f"{' '.join(cmd)} exited {result.returncode}: {result.stderr[:200]}",
        )
    return result.stdout.strip()


def _ghc_info(config: StoreConfig) -> dict[str, str]:
    """Parse ``ghc --info`` (a list of string pairs) into a dict."""
    raw = _run_ghc(config, "--info")
    info: dict[str, str] = {}
    for key, value in _PAIR_RE.findall(raw):
        info[key] = value
    return info


def global_db_path(config: StoreConfig) -> Path:
    if config.global_db:
        return Path(config.global_db)
    return Path(_run_ghc(config, "--print-libdir")) / "package.conf.d"


def user_db_path(config: StoreConfig) -> Path:
    if config.user_db:
        return Path(config.user_db)
    target = _ghc_info(config).get("Target platform", "")
    version = _run_ghc(config, "--numeric-version")
    parts = target.split("-")
    platform = f"{parts[0]}-{parts[-1]}"
    return Path.home() / ".ghc" / f"{platform}-{version}" / "package.conf.d"


def resolve_package_db(selector: str, config: StoreConfig) -> Path:
    """Map ``global``, ``user`` or a filesystem path to a database directory."""
    if selector == GLOBAL_DB:
        return global_db_path(config)
    if selector == USER_DB:
        return user_db_path(config)
    return Path(selector)


def load_package_db(selector: str, config: StoreConfig) -> PackageStore:
    """Load a trusted store named by *selector*.

    A user database that does not exist yet is treated as empty.
    """
    path = resolve_package_db(selector, config)
    if selector == USER_DB and not path.exists():
        logger.warning("user package db %s does not exist, treating as empty", path)
        return PackageStore(location=str(path))
    return load_store(path, config)

