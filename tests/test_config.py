"""Tests for maven_install YAML configuration loading."""

from __future__ import annotations

import pytest

from mavenforge.config import InstallConfig, config_from_dict, load_config
from mavenforge.core.coordinates import ArtifactCoordinate
from mavenforge.exceptions import ConfigurationError


class TestLoadConfig:
    def test_minimal(self, write_config) -> None:
        config = load_config(write_config())
        assert config.name == "maven"
        assert config.repositories == ("https://repo1.maven.org/maven2",)
        assert config.artifacts[0].coordinate == ArtifactCoordinate("junit", "junit", "4.12")
        assert config.lockfile is None
        assert config.fail_on_missing_checksum is True
        assert config.resolver == ("coursier",)

    def test_yaml_document(self, tmp_path) -> None:
        path = tmp_path / "maven_install.yaml"
        path.write_text(
            "name: deps\n"
            "artifacts:\n"
            "  - group: com.google.guava\n"
            "    artifact: guava\n"
            "    version: 28.0-jre\n"
            "    neverlink: true\n"
            "    exclusions:\n"
            "      - com.google.code.findbugs:jsr305\n"
            "lockfile: locks/deps_install.json\n"
            "fetch_sources: true\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.name == "deps"
        assert config.neverlink == frozenset({"com.google.guava:guava"})
        assert config.artifacts[0].exclusions == ("com.google.code.findbugs:jsr305",)
        assert config.lockfile == tmp_path / "locks" / "deps_install.json"
        assert config.fetch_sources is True

    def test_empty_file_gives_defaults(self, tmp_path) -> None:
        path = tmp_path / "maven_install.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == InstallConfig()

    def test_malformed_yaml(self, tmp_path) -> None:
        path = tmp_path / "maven_install.yaml"
        path.write_text("artifacts: [", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Failed to parse"):
            load_config(path)

    def test_resolver_string(self, write_config) -> None:
        assert load_config(write_config(resolver="cs")).resolver == ("cs",)

    def test_pom_only_artifacts_extend_builtin(self, write_config) -> None:
        config = load_config(write_config(pom_only_artifacts=["g:parent"]))
        assert "g:parent" in config.all_pom_only_artifacts
        assert "org.apache.arrow:arrow-memory" in config.all_pom_only_artifacts


class TestValidation:
    @pytest.mark.parametrize("data, match", [
        ([], "mapping"),
        ({"name": "1maven"}, "repository name"),
        ({"version_conflict_policy": "newest"}, "version_conflict_policy"),
        ({"fetch_sources": "yes"}, "fetch_sources"),
        ({"excluded_artifacts": ["x"]}, "group:artifact"),
        ({"artifacts": ["junit"]}, "Invalid artifact coordinate"),
        ({"artifacts": [{"group": "g", "artifact": "a"}]}, "missing: version"),
        ({"artifacts": "junit:junit:4.12"}, "must be a list"),
        ({"repositories": [1]}, "list of strings"),
        ({"resolver": []}, "resolver"),
    ])
    def test_invalid(self, data, match: str) -> None:
        with pytest.raises(ConfigurationError, match=match):
            config_from_dict(data)
