"""测试共享 fixture — 假 VCS 适配器 + 清单写入

FakeVcs 不访问网络：clone 时在目标目录下生成 .git 目录、一个源文件，
以及（可选的）嵌套清单，足以驱动安装器和清理器的全部分支。

  fake_vcs.add_repo("https://x/a.git", dependencies=[{...}])
  fake_vcs.fail_checkout.add("https://x/a.git")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
import yaml

from nlpm.core.config import reset_config
from nlpm.core.dep.models import ResolvedVersion

MANIFEST_NAME = "nlpm_package.yml"


def write_manifest(directory: Path, dependencies: list[dict] | None = None,
                   scripts: dict[str, str] | None = None) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    data: dict[str, Any] = {}
    if dependencies is not None:
        data["dependencies"] = dependencies
    if scripts is not None:
        data["scripts"] = scripts
    path = directory / MANIFEST_NAME
    path.write_text(yaml.dump(data, allow_unicode=True), encoding="utf-8")
    return path


@dataclass
class FakeVcs:
    """记录调用的内存 VCS 适配器"""

    repos: dict[str, list[dict] | None] = field(default_factory=dict)
    fail_clone: set[str] = field(default_factory=set)
    partial_clone: bool = False
    fail_fetch: set[str] = field(default_factory=set)
    fail_checkout: set[str] = field(default_factory=set)
    calls: list[tuple[str, str]] = field(default_factory=list)
    _origin: dict[Path, str] = field(default_factory=dict)

    def add_repo(self, url: str, dependencies: list[dict] | None = None) -> None:
        self.repos[url] = dependencies

    def clone(self, repo: str, dest: Path, depth: int = 1) -> bool:
        self.calls.append(("clone", dest.name))
        if repo in self.fail_clone:
            if self.partial_clone:
                (dest / ".git").mkdir(parents=True)
            return False
        (dest / ".git").mkdir(parents=True)
        (dest / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
        (dest / "init.nelua").write_text(f"-- {repo}\n")
        nested = self.repos.get(repo)
        if nested is not None:
            write_manifest(dest, dependencies=nested)
        self._origin[dest] = repo
        return True

    def fetch_ref(self, workdir: Path, version: ResolvedVersion) -> bool:
        self.calls.append(("fetch", workdir.name))
        return self._origin.get(workdir) not in self.fail_fetch

    def checkout_ref(self, workdir: Path, version: ResolvedVersion) -> bool:
        self.calls.append(("checkout", workdir.name))
        if self._origin.get(workdir) in self.fail_checkout:
            return False
        (workdir / "CHECKED_OUT").write_text(version.ref)
        return True

    def cloned(self) -> list[str]:
        return [name for op, name in self.calls if op == "clone"]


@pytest.fixture()
def fake_vcs() -> FakeVcs:
    return FakeVcs()


@pytest.fixture()
def store(tmp_path: Path) -> Path:
    d = tmp_path / "nlpm_packages"
    d.mkdir()
    return d


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch):
    """每个用例使用干净的全局配置"""
    monkeypatch.delenv("NLPM_PACKAGES_PATH", raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture()
def make_manifest():
    """清单写入工厂: make_manifest(dir, dependencies=[...], scripts={...})"""
    return write_manifest
