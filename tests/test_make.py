"""
Tests for the make use case — primary artifacts, companions, conflicts.
"""

from pathlib import Path

import pytest

from layerkit.core.errors import StubPlaceholderError
from layerkit.core.models.config import CompanionNaming, LayerkitConfig
from layerkit.core.services.generators.names import NameResolver
from layerkit.core.services.generators.stubs import StubStore, builtin_stub_path
from layerkit.core.use_cases.make import build_request, companion_name, make_artifact


def _expected(kind: str, cls: str, namespace: str) -> str:
    body = builtin_stub_path(kind).read_text(encoding="utf-8")
    return body.replace("{{ class }}", cls).replace("{{ namespace }}", namespace)


def _by_kind(result) -> dict:
    return {o.kind: o for o in result.outcomes}


class TestMakePrimary:
    @pytest.mark.parametrize(
        "kind, name, rel_path",
        [
            ("trait", "Loggable", "app/traits/Loggable.py"),
            ("interface", "PostRepositoryInterface",
             "app/repositories/interfaces/PostRepositoryInterface.py"),
            ("repository", "PostRepository", "app/repositories/PostRepository.py"),
            ("service", "PostService", "app/services/PostService.py"),
        ],
    )
    def test_each_kind(self, config: LayerkitConfig, tmp_path: Path, kind, name, rel_path):
        result = make_artifact(kind, name, config=config)
        assert result.ok
        assert [o.status for o in result.outcomes] == ["created"]
        assert result.outcomes[0].path == tmp_path / rel_path
        assert (tmp_path / rel_path).is_file()

    def test_second_run_conflicts(self, config: LayerkitConfig, tmp_path: Path):
        first = make_artifact("service", "PostService", config=config)
        path = tmp_path / "app" / "services" / "PostService.py"
        path.write_text("# edited by hand\n")

        second = make_artifact("service", "PostService", config=config)
        assert first.ok
        assert not second.ok
        assert second.outcomes[0].status == "exists"
        assert path.read_text() == "# edited by hand\n"

    @pytest.mark.parametrize("raw", ["", "   "])
    def test_empty_name_touches_nothing(self, config: LayerkitConfig, tmp_path: Path, raw):
        result = make_artifact("repository", raw, config=config, with_service=True)
        assert result.error
        assert result.outcomes == []
        assert not result.ok
        assert list(tmp_path.iterdir()) == []

    def test_unwritable_target_is_failed(self, config: LayerkitConfig, tmp_path: Path):
        (tmp_path / "app").write_text("not a directory")
        result = make_artifact("trait", "Loggable", config=config)
        assert not result.ok
        assert result.outcomes[0].status == "failed"
        assert "Cannot write" in result.outcomes[0].error

    def test_project_stub_override(self, config: LayerkitConfig, tmp_path: Path):
        (tmp_path / "stubs").mkdir()
        (tmp_path / "stubs" / "trait.stub").write_text("# {{ namespace }}\nclass {{ class }}: ...\n")
        make_artifact("trait", "Loggable", config=config)
        content = (tmp_path / "app" / "traits" / "Loggable.py").read_text()
        assert content == "# App\\Traits\nclass Loggable: ...\n"

    def test_repository_cannot_take_interface_file(self, config: LayerkitConfig, tmp_path: Path):
        shadow = make_artifact("repository", "interfaces/Foo", config=config)
        interface = make_artifact("interface", "Foo", config=config)

        assert not shadow.ok
        assert "reserved for another kind" in shadow.error
        assert shadow.outcomes == []
        assert interface.ok
        assert interface.outcomes[0].path == tmp_path / "app/repositories/interfaces/Foo.py"

    def test_broken_override_is_fatal(self, config: LayerkitConfig, tmp_path: Path):
        (tmp_path / "stubs").mkdir()
        (tmp_path / "stubs" / "service.stub").write_text("{{ entity }}\n")
        with pytest.raises(StubPlaceholderError):
            make_artifact("service", "PostService", config=config)
        assert not (tmp_path / "app").exists()


class TestMakeCompanions:
    def test_end_to_end_with_interface(self, config: LayerkitConfig, tmp_path: Path):
        result = make_artifact("repository", "Blog/PostRepository", config=config, with_interface=True)
        assert result.ok

        repo = tmp_path / "app" / "repositories" / "Blog" / "PostRepository.py"
        iface = tmp_path / "app" / "repositories" / "interfaces" / "Blog" / "PostRepositoryInterface.py"
        assert [o.path for o in result.outcomes] == [repo, iface]
        assert repo.read_text() == _expected("repository", "PostRepository", "App\\Repositories\\Blog")
        assert iface.read_text() == _expected(
            "interface", "PostRepositoryInterface", "App\\Repositories\\Interfaces\\Blog"
        )

    def test_service_companion(self, config: LayerkitConfig, tmp_path: Path):
        result = make_artifact("repository", "Blog/PostRepository", config=config, with_service=True)
        service = _by_kind(result)["service"]
        assert service.status == "created"
        assert service.name == "App\\Services\\Blog\\PostService"
        assert service.path == tmp_path / "app" / "services" / "Blog" / "PostService.py"

    def test_companions_are_independent(self, config: LayerkitConfig, tmp_path: Path):
        iface = tmp_path / "app" / "repositories" / "interfaces" / "PostRepositoryInterface.py"
        iface.parent.mkdir(parents=True)
        iface.write_text("# already here\n")

        result = make_artifact(
            "repository", "PostRepository", config=config,
            with_service=True, with_interface=True,
        )
        outcomes = _by_kind(result)
        assert [o.kind for o in result.outcomes] == ["repository", "service", "interface"]
        assert outcomes["repository"].status == "created"
        assert outcomes["service"].status == "created"
        assert outcomes["interface"].status == "exists"
        assert iface.read_text() == "# already here\n"
        assert result.ok

    def test_primary_conflict_does_not_block_companions(self, config: LayerkitConfig, tmp_path: Path):
        make_artifact("repository", "PostRepository", config=config)
        result = make_artifact("repository", "PostRepository", config=config, with_service=True)
        outcomes = _by_kind(result)
        assert outcomes["repository"].status == "exists"
        assert outcomes["service"].status == "created"
        assert result.ok

    def test_all_exist_is_not_ok(self, config: LayerkitConfig):
        make_artifact("repository", "PostRepository", config=config, with_service=True)
        result = make_artifact("repository", "PostRepository", config=config, with_service=True)
        assert {o.status for o in result.outcomes} == {"exists"}
        assert not result.ok

    def test_custom_naming(self, tmp_path: Path):
        config = LayerkitConfig(
            project_root=tmp_path,
            companions=CompanionNaming(interface="I{stem}", service="{stem}Manager"),
        )
        result = make_artifact(
            "repository", "PostRepository", config=config,
            with_service=True, with_interface=True,
        )
        outcomes = _by_kind(result)
        assert outcomes["interface"].path.name == "IPost.py"
        assert outcomes["service"].path.name == "PostManager.py"

    def test_unsupported_flag(self, config: LayerkitConfig):
        with pytest.raises(ValueError, match="--service"):
            make_artifact("service", "PostService", config=config, with_service=True)

    def test_stub_store_reused(self, config: LayerkitConfig, stubs: StubStore):
        result = make_artifact(
            "repository", "PostRepository", config=config, stubs=stubs, with_interface=True,
        )
        assert result.created == 2


class TestCompanionName:
    def _spec(self, config: LayerkitConfig, raw: str):
        return NameResolver.from_config(config).resolve(raw, "App", "Repositories")

    def test_strips_suffix_for_service(self, config: LayerkitConfig):
        spec = self._spec(config, "Blog/PostRepository")
        assert companion_name(spec, "repository", "service", config) == "Blog/PostService"

    def test_keeps_name_for_interface(self, config: LayerkitConfig):
        spec = self._spec(config, "Blog/PostRepository")
        assert companion_name(spec, "repository", "interface", config) == "Blog/PostRepositoryInterface"

    def test_name_without_suffix(self, config: LayerkitConfig):
        spec = self._spec(config, "Post")
        assert companion_name(spec, "repository", "service", config) == "PostService"
        assert companion_name(spec, "repository", "interface", config) == "PostInterface"

    def test_name_equal_to_suffix(self, config: LayerkitConfig):
        spec = self._spec(config, "Repository")
        assert companion_name(spec, "repository", "service", config) == "RepositoryService"


class TestBuildRequest:
    def test_flags(self, config: LayerkitConfig):
        request = build_request(
            "repository", "PostRepository", config,
            with_service=True, with_interface=True,
        )
        assert request.with_service and request.with_interface
        assert request.ordered_companions() == ["service", "interface"]
        assert request.class_spec.namespace == "App\\Repositories"

    def test_no_flags(self, config: LayerkitConfig):
        request = build_request("trait", "Loggable", config)
        assert request.companions == frozenset()
        assert request.ordered_companions() == []
