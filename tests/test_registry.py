"""
Test source registry loading
"""
import logging
from pathlib import Path

import pytest

from paperlearner.core.errors import ConfigError
from paperlearner.core.registry import (
    Registry,
    bundled_config_dir,
    config_files,
    load_registry,
)


USER_SOURCE = """\
name: {name}
base_url: https://{name}.example
endpoint_template: https://{name}.example/api/{{identifier}}
pattern: '{pattern}'
response_format:
  type: json
  field_maps:
    title: {{path: title}}
    authors: {{path: authors}}
    publication_date: {{path: date}}
"""


def _write_source(directory: Path, filename: str, name: str, pattern: str = r"^local:(\d+)$") -> Path:
    path = directory / filename
    path.write_text(USER_SOURCE.format(name=name, pattern=pattern), encoding="utf-8")
    return path


class TestBundledSources:
    """Test sources shipped with the package"""

    def test_bundled_directory_exists(self):
        assert bundled_config_dir().is_dir()

    def test_default_registry(self, registry):
        assert registry.names == ["arxiv", "doi", "iacr"]
        assert len(registry) == 3
        assert "arxiv" in registry
        assert registry.skipped == ()

    def test_lookup(self, registry):
        assert registry.get("missing") is None
        with pytest.raises(KeyError):
            registry["missing"]

    def test_repr(self, registry):
        assert repr(registry) == "Registry(arxiv, doi, iacr)"


class TestUserSources:
    """Test loading user configuration directories"""

    def test_user_sources_follow_bundled(self, tmp_path):
        _write_source(tmp_path, "b_local.yaml", "local_b", r"^b:(\d+)$")
        _write_source(tmp_path, "a_local.yml", "local_a", r"^a:(\d+)$")
        registry = load_registry(user_dir=tmp_path)
        assert registry.names == ["arxiv", "doi", "iacr", "local_a", "local_b"]

        source, identifier = registry.classify("a:17")
        assert source.name == "local_a"
        assert identifier == "17"

    def test_missing_user_dir(self, tmp_path):
        registry = load_registry(user_dir=tmp_path / "does-not-exist")
        assert registry.names == ["arxiv", "doi", "iacr"]

    def test_other_files_ignored(self, tmp_path):
        (tmp_path / "notes.txt").write_text("not a source", encoding="utf-8")
        _write_source(tmp_path, "local.yaml", "local")
        assert [path.name for path in config_files(tmp_path)] == ["local.yaml"]

    def test_bad_file_skipped(self, tmp_path, caplog):
        (tmp_path / "broken.yaml").write_text("name: broken\n", encoding="utf-8")
        _write_source(tmp_path, "local.yaml", "local")

        with caplog.at_level(logging.WARNING, logger="paperlearner.core.registry"):
            registry = load_registry(user_dir=tmp_path)

        assert "local" in registry
        assert "broken" not in registry
        assert len(registry.skipped) == 1
        assert registry.skipped[0].file.endswith("broken.yaml")
        assert "broken.yaml" in caplog.text

    def test_bad_file_strict(self, tmp_path):
        (tmp_path / "broken.yaml").write_text("name: broken\n", encoding="utf-8")
        with pytest.raises(ConfigError) as excinfo:
            load_registry(user_dir=tmp_path, strict=True)
        assert excinfo.value.file.endswith("broken.yaml")

    def test_redefinition_replaces_in_place(self, tmp_path):
        _write_source(tmp_path, "arxiv.yaml", "arxiv", r"^mirror:(\d+)$")
        registry = load_registry(user_dir=tmp_path)

        assert registry.names == ["arxiv", "doi", "iacr"]
        assert registry["arxiv"].base_url == "https://arxiv.example"
        assert registry.classify("mirror:1")[0].name == "arxiv"

    def test_invalid_bundled_file_raises(self, tmp_path):
        (tmp_path / "bad.yaml").write_text("- not\n- a mapping\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_registry(bundled_dir=tmp_path)


class TestRegistry:
    """Test Registry container"""

    def test_empty(self):
        registry = Registry()
        assert len(registry) == 0
        assert list(registry) == []

    def test_from_sources_keeps_order(self, arxiv_source, iacr_source):
        registry = Registry.from_sources([iacr_source, arxiv_source])
        assert registry.names == ["iacr", "arxiv"]
        assert registry.sources == (iacr_source, arxiv_source)
