"""清单加载测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from nlpm.core.dep.manifest import ManifestLoader, parse_manifest
from nlpm.core.dep.models import PackageDependency
from nlpm.core.exceptions import ManifestLoadFailed, ManifestMissing, ValidationError


class TestManifestLoader:
    def test_absent_returns_none(self, tmp_path: Path) -> None:
        assert ManifestLoader().load(tmp_path) is None

    def test_load_dependencies_and_scripts(self, tmp_path: Path, make_manifest) -> None:
        make_manifest(
            tmp_path,
            dependencies=[
                {"name": "foo", "repo": "https://x/foo.git", "version": "v1.2.0"},
                {"name": "bar", "repo": "https://x/bar.git"},
            ],
            scripts={"test": "nelua test.nelua"},
        )
        m = ManifestLoader().load(tmp_path)
        assert m is not None
        assert m.dependencies == [
            PackageDependency("foo", "https://x/foo.git", "v1.2.0"),
            PackageDependency("bar", "https://x/bar.git", None),
        ]
        assert m.scripts == {"test": "nelua test.nelua"}

    def test_empty_file_is_empty_manifest(self, tmp_path: Path) -> None:
        (tmp_path / "nlpm_package.yml").write_text("")
        m = ManifestLoader().load(tmp_path)
        assert m is not None
        assert m.dependencies == [] and m.scripts == {}

    def test_commit_version_quoted(self, tmp_path: Path) -> None:
        (tmp_path / "nlpm_package.yml").write_text(
            "dependencies:\n"
            "  - name: foo\n"
            "    repo: https://x/foo.git\n"
            "    version: \"#deadbeef\"\n"
        )
        m = ManifestLoader().load(tmp_path)
        assert m is not None
        assert m.dependencies[0].version == "#deadbeef"

    def test_broken_yaml_is_load_failure(self, tmp_path: Path) -> None:
        (tmp_path / "nlpm_package.yml").write_text("dependencies: [\n  - name: ")
        with pytest.raises(ManifestLoadFailed, match="解析失败"):
            ManifestLoader().load(tmp_path)

    def test_non_mapping_top_level_is_load_failure(self, tmp_path: Path) -> None:
        (tmp_path / "nlpm_package.yml").write_text("- a\n- b\n")
        with pytest.raises(ManifestLoadFailed):
            ManifestLoader().load(tmp_path)

    def test_missing_repo_is_load_failure(self, tmp_path: Path, make_manifest) -> None:
        make_manifest(tmp_path, dependencies=[{"name": "foo"}])
        with pytest.raises(ManifestLoadFailed, match="repo"):
            ManifestLoader().load(tmp_path)

    def test_custom_filename(self, tmp_path: Path) -> None:
        (tmp_path / "deps.yml").write_text("dependencies: []\n")
        assert ManifestLoader("deps.yml").load(tmp_path) is not None
        assert ManifestLoader().load(tmp_path) is None

    def test_load_root_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestMissing, match="nlpm_package.yml"):
            ManifestLoader().load_root(tmp_path)

    def test_write_template_roundtrip(self, tmp_path: Path) -> None:
        loader = ManifestLoader()
        path = loader.write_template(tmp_path)
        assert path.name == "nlpm_package.yml"
        m = loader.load_root(tmp_path)
        assert m.dependencies == [] and m.scripts == {}

    def test_write_template_refuses_overwrite(self, tmp_path: Path) -> None:
        (tmp_path / "nlpm_package.yml").write_text("scripts: {a: b}\n")
        with pytest.raises(ValidationError, match="已存在"):
            ManifestLoader().write_template(tmp_path)
        assert "scripts" in (tmp_path / "nlpm_package.yml").read_text()


class TestParseManifest:
    @pytest.mark.parametrize("data", [
        {"dependencies": {"foo": "bar"}},
        {"dependencies": ["foo"]},
        {"dependencies": [{"name": "", "repo": "r"}]},
        {"dependencies": [{"name": "a", "repo": "r", "version": 1.0}]},
        {"scripts": ["a"]},
        {"scripts": {"a": 1}},
    ])
    def test_invalid_shapes(self, data: dict) -> None:
        with pytest.raises(ValidationError):
            parse_manifest(data)

    def test_null_sections(self) -> None:
        m = parse_manifest({"dependencies": None, "scripts": None})
        assert m.dependencies == [] and m.scripts == {}
