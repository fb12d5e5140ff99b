"""
Tests for configuration loading — layerkit.yml parsing and validation.
"""

import textwrap
from pathlib import Path

import pytest

from layerkit.core.config.loader import ConfigError, find_config_file, load_config
from layerkit.core.models.config import LayerkitConfig


@pytest.fixture
def valid_config_yml(tmp_path: Path) -> Path:
    """Create a valid layerkit.yml in a temp directory."""
    content = textwrap.dedent("""\
        root_namespace: Acme
        source_root: src/acme
        extension: py
        stubs_path: templates
        companions:
          interface: "{stem}Contract"
        kinds:
          repository:
            directory: data/repos
    """)
    path = tmp_path / "layerkit.yml"
    path.write_text(content)
    return path


class TestFindConfigFile:
    def test_in_start_dir(self, valid_config_yml: Path):
        assert find_config_file(valid_config_yml.parent) == valid_config_yml.resolve()

    def test_walks_up(self, valid_config_yml: Path):
        nested = valid_config_yml.parent / "src" / "acme" / "deep"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == valid_config_yml.resolve()

    def test_not_found(self, tmp_path: Path):
        # tmp_path has no layerkit.yml, but an ancestor might — only
        # assert that the result, if any, is outside tmp_path
        found = find_config_file(tmp_path)
        assert found is None or tmp_path.resolve() not in found.parents


class TestLoadConfig:
    def test_valid(self, valid_config_yml: Path):
        config = load_config(valid_config_yml)
        assert config.root_namespace == "Acme"
        assert config.extension == ".py"
        assert config.project_root == valid_config_yml.parent.resolve()
        assert config.source_dir == valid_config_yml.parent.resolve() / "src" / "acme"
        assert config.stubs_dir == valid_config_yml.parent.resolve() / "templates"
        assert config.companions.interface == "{stem}Contract"
        assert config.companions.service == "{stem}Service"

    def test_partial_kind_merges_defaults(self, valid_config_yml: Path):
        config = load_config(valid_config_yml)
        repo = config.kind("repository")
        assert repo.directory == "data/repos"
        assert repo.namespace == "Repositories"
        assert repo.suffix == "Repository"
        assert config.kind("service").directory == "services"

    def test_defaults_without_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = load_config()
        assert config.project_root == tmp_path.resolve()
        assert config.root_namespace == "App"
        assert config.source_dir == tmp_path.resolve() / "app"

    def test_discovered_from_cwd(self, valid_config_yml: Path, monkeypatch):
        monkeypatch.chdir(valid_config_yml.parent)
        assert load_config().root_namespace == "Acme"

    def test_wrapped_under_layerkit_key(self, tmp_path: Path):
        path = tmp_path / "layerkit.yml"
        path.write_text("layerkit:\n  root_namespace: Wrapped\n")
        assert load_config(path).root_namespace == "Wrapped"

    def test_empty_file_is_defaults(self, tmp_path: Path):
        path = tmp_path / "layerkit.yml"
        path.write_text("")
        config = load_config(path)
        assert config.root_namespace == "App"
        assert config.project_root == tmp_path.resolve()

    def test_project_root_not_overridable(self, tmp_path: Path):
        path = tmp_path / "layerkit.yml"
        path.write_text("project_root: /somewhere/else\n")
        assert load_config(path).project_root == tmp_path.resolve()

    def test_missing_explicit_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "layerkit.yml"
        path.write_text("root_namespace: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "layerkit.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_unknown_kind(self, tmp_path: Path):
        path = tmp_path / "layerkit.yml"
        path.write_text("kinds:\n  widget:\n    namespace: Widgets\n    directory: widgets\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_duplicate_kind_namespace(self, tmp_path: Path):
        path = tmp_path / "layerkit.yml"
        path.write_text(textwrap.dedent("""\
            kinds:
              service:
                namespace: Repositories
                directory: services
        """))
        with pytest.raises(ConfigError, match="share namespace"):
            load_config(path)

    def test_duplicate_namespace_any_delimiter(self):
        with pytest.raises(ValueError, match="share namespace"):
            LayerkitConfig(kinds={"trait": {"namespace": "Repositories/Interfaces"}})

    def test_bad_naming_pattern(self, tmp_path: Path):
        path = tmp_path / "layerkit.yml"
        path.write_text('companions:\n  service: "{model}Service"\n')
        with pytest.raises(ConfigError, match="model"):
            load_config(path)

    def test_bad_separator(self, tmp_path: Path):
        path = tmp_path / "layerkit.yml"
        path.write_text('namespace_separator: "::"\n')
        with pytest.raises(ConfigError):
            load_config(path)


class TestLayerkitConfig:
    def test_defaults(self, tmp_path: Path):
        config = LayerkitConfig(project_root=tmp_path)
        assert config.kind("interface").namespace == "Repositories\\Interfaces"
        assert config.kind("interface").directory == "repositories/interfaces"
        assert config.namespace_separator == "\\"

    def test_overrides_disabled(self, tmp_path: Path):
        config = LayerkitConfig(project_root=tmp_path, stubs_path=None)
        assert config.stubs_dir is None
