"""Pytest configuration and fixtures."""
import textwrap
from pathlib import Path

import pytest

ONE_FEATURE_SOURCE = """
#[cfg(feature = "hidden-feature")]
pub fn hidden() {}
"""

FOUR_FEATURES_SOURCE = """
#[cfg(feature = "alpha")]
fn a() {}

#[cfg(feature = "beta")]
fn b() {}

#[cfg(feature = "gamma")]
fn c() {}

#[cfg(feature = "delta-x")]
fn d() {}
"""

FOUR_FEATURES_ONE_LINE_SOURCE = """
#[cfg(all(feature = "alpha", feature = "beta", any(feature="gamma", feature = "delta-x")))]
fn all_four() {}
"""


def write_manifest(crate_dir: Path, name: str = "demo", features: dict | None = None) -> Path:
    """Write a minimal Cargo.toml, with a [features] table if features is given."""
    crate_dir.mkdir(parents=True, exist_ok=True)
    lines = ["[package]", f'name = "{name}"', 'version = "0.1.0"', 'edition = "2021"', ""]
    if features is not None:
        lines.append("[features]")
        for feature, enables in features.items():
            items = ", ".join(f'"{e}"' for e in enables)
            lines.append(f'"{feature}" = [{items}]')
    manifest = crate_dir / "Cargo.toml"
    manifest.write_text("\n".join(lines) + "\n")
    return manifest


def write_source(path: Path, source: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(source))
    return path


@pytest.fixture
def make_crate():
    """Factory: make_crate(dir, features=None, sources={"src/lib.rs": "..."})."""

    def _make(crate_dir: Path, features: dict | None = None, sources: dict | None = None,
              name: str = "demo") -> Path:
        manifest = write_manifest(crate_dir, name=name, features=features)
        for rel, source in (sources or {}).items():
            write_source(crate_dir / rel, source)
        return manifest

    return _make


@pytest.fixture
def one_feature_crate(tmp_path, make_crate):
    """A crate whose lib.rs uses "hidden-feature" and declares an empty [features]."""
    crate = tmp_path / "one_feature"
    make_crate(crate, features={}, sources={"src/lib.rs": ONE_FEATURE_SOURCE})
    return crate


@pytest.fixture
def workspace(tmp_path, make_crate):
    """Two-crate workspace: root crate plus a nested member crate.

    Layout:
        Cargo.toml            declares "std"
        src/lib.rs            uses "std" and "root-only"
        crates/member/Cargo.toml   declares "fast"
        crates/member/src/lib.rs   uses "fast" and "member-only"
        crates/member/src/deep/mod.rs uses "member-only" again
    """
    make_crate(
        tmp_path,
        name="root",
        features={"default": ["std"], "std": []},
        sources={
            "src/lib.rs": """
                #[cfg(feature = "std")]
                extern crate std;
                #[cfg(feature = "root-only")]
                mod extra;
            """,
        },
    )
    make_crate(
        tmp_path / "crates" / "member",
        name="member",
        features={"fast": []},
        sources={
            "src/lib.rs": """
                #[cfg(feature = "fast")]
                mod fast;
                #[cfg(feature = "member-only")]
                mod only;
            """,
            "src/deep/mod.rs": """
                #[cfg(feature = "member-only")]
                fn deep() {}
            """,
        },
    )
    return tmp_path
