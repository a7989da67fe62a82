"""Tests for declared-feature loading from Cargo.toml."""

import pytest

from featcheck.exceptions import ManifestParseError
from featcheck.manifest_parser import ManifestParser, load_declared_features
from featcheck.models import ExposedFeature


class TestDeclaredFeatures:

    def test_keys_of_feature_table_are_declared(self, tmp_path, make_crate):
        manifest = make_crate(tmp_path, features={"default": ["std"], "std": [], "serde-1": []})
        declared = load_declared_features(manifest)
        assert set(declared) == {"default", "std", "serde-1"}
        assert declared["std"] == ExposedFeature(name="std")

    def test_values_are_ignored(self, tmp_path):
        manifest = tmp_path / "Cargo.toml"
        manifest.write_text(
            '[package]\nname = "x"\n\n[features]\n'
            'full = ["a", "b/c", "dep:d"]\nweird = 3\n'
        )
        assert set(load_declared_features(manifest)) == {"full", "weird"}

    def test_missing_table_declares_nothing(self, tmp_path, make_crate):
        manifest = make_crate(tmp_path)
        assert load_declared_features(manifest) == {}

    def test_non_table_features_key_declares_nothing(self, tmp_path):
        manifest = tmp_path / "Cargo.toml"
        manifest.write_text('features = "not a table"\n')
        assert load_declared_features(manifest) == {}

    def test_nested_features_table_is_not_top_level(self, tmp_path):
        manifest = tmp_path / "Cargo.toml"
        manifest.write_text('[package.metadata.features]\nsneaky = []\n')
        assert load_declared_features(manifest) == {}

    def test_excluded_features_are_dropped(self, tmp_path, make_crate):
        manifest = make_crate(tmp_path, features={"keep": [], "drop": []})
        assert set(load_declared_features(manifest, excluded_features={"drop"})) == {"keep"}

    def test_invalid_toml_is_fatal(self, tmp_path):
        manifest = tmp_path / "Cargo.toml"
        manifest.write_text("[features\nbroken")
        with pytest.raises(ManifestParseError) as exc:
            load_declared_features(manifest)
        assert exc.value.details["path"] == str(manifest)

    def test_unreadable_manifest_is_fatal(self, tmp_path):
        with pytest.raises(ManifestParseError):
            ManifestParser().declared_features(tmp_path / "missing" / "Cargo.toml")
