"""Record and sandbox builders shared by the test modules."""

from pathlib import Path

HASH_A = "0123456789abcdef0123456789abcdef"
HASH_B = "fedcba9876543210fedcba9876543210"
HASH_BASE = "bfd89587617e381ae01b8dd7b6c7f1c1"

OLD_ROOT = "/home/builder/old-project/.cabal-sandbox"


def make_conf(
    name: str,
    version: str,
    pkg_hash: str,
    depends: list[str] | None = None,
    lib: str | None = None,
    root: str = OLD_ROOT,
) -> str:
    """Render a record file the way the package tool writes them."""
    ident = f"{name}-{version}"
    lib = lib or f"{root}/lib/x86_64-linux-ghc-7.10.3/{ident}-{pkg_hash[:6]}"
    deps = depends or []
    dep_lines = "depends:" + "".join(f"\n    {d}" for d in deps)
    return (
        f"name: {name}\n"
        f"version: {version}\n"
        f"id: {ident}-{pkg_hash}\n"
        "license: BSD3\n"
        "exposed: True\n"
        "exposed-modules:\n"
        f"    {name.capitalize()}\n"
        f"import-dirs: {lib}\n"
        f"library-dirs: {lib}\n"
        f"include-dirs:\n"
        "hs-libraries: HS" + ident + "\n"
        f"{dep_lines}\n"
        f"haddock-interfaces: {root}/share/doc/x86_64-linux-ghc-7.10.3/{ident}/html/{name}.haddock\n"
        f"haddock-html: {root}/share/doc/x86_64-linux-ghc-7.10.3/{ident}/html\n"
    )


def make_sandbox(root: Path, packages: list[tuple[str, str, str]]) -> Path:
    """Lay out a relocated sandbox with library and doc dirs for *packages*."""
    for name, version, pkg_hash in packages:
        ident = f"{name}-{version}"
        lib = root / "lib" / "x86_64-linux-ghc-7.10.3" / f"{ident}-{pkg_hash[:6]}"
        lib.mkdir(parents=True)
        (lib / f"libHS{ident}.a").write_text("")
        html = root / "share" / "doc" / "x86_64-linux-ghc-7.10.3" / ident / "html"
        html.mkdir(parents=True)
        (html / f"{name}.haddock").write_text("")
    return root
