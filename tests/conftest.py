"""Shared test fixtures for sandfix."""

import pytest

from helpers import HASH_A, HASH_B, HASH_BASE, make_conf, make_sandbox
from sandfix_core.config.models import SandfixConfig


@pytest.fixture
def sample_config():
    return SandfixConfig()


@pytest.fixture
def global_db(tmp_path):
    """A trusted database holding only base."""
    db = tmp_path / "global" / "package.conf.d"
    db.mkdir(parents=True)
    (db / f"base-4.8.2.0-{HASH_BASE}.conf").write_text(
        make_conf("base", "4.8.2.0", HASH_BASE, root="/usr/lib/ghc")
    )
    return db


@pytest.fixture
def sandbox(tmp_path):
    """A sandbox holding a (depends on b and base) and b, moved from OLD_ROOT."""
    root = make_sandbox(
        tmp_path / "new-home" / ".cabal-sandbox",
        [("a", "1.0", HASH_A), ("b", "2.1.3", HASH_B)],
    )
    db = root / "x86_64-linux-ghc-7.10.3-packages.conf.d"
    db.mkdir()
    (db / f"a-1.0-{HASH_A}.conf").write_text(
        make_conf(
            "a", "1.0", HASH_A,
            depends=[f"b-2.1.3-{HASH_B}", f"base-4.8.2.0-{HASH_BASE}"],
        )
    )
    (db / f"b-2.1.3-{HASH_B}.conf").write_text(
        make_conf("b", "2.1.3", HASH_B, depends=[f"base-4.8.2.0-{HASH_BASE}"])
    )
    return root
