"""Tests for please.git.scanner module."""

from __future__ import annotations

from pathlib import Path

import pytest

from please.core.result import Err, Ok
from please.git.directory import DirectoryReader
from please.git.scanner import Project, ProjectScanner


def _repo(path: Path) -> Path:
    (path / ".git").mkdir(parents=True)
    return path


def _scan(root: Path) -> list[Project]:
    result = ProjectScanner(DirectoryReader()).scan(root)
    assert isinstance(result, Ok), result
    return result.value


def _by_name(projects: list[Project]) -> dict[str, Project]:
    return {p.name: p for p in projects}


class TestParentLevel:
    def test_root_is_repository(self, tmp_path: Path) -> None:
        root = _repo(tmp_path / "workspace")
        (root / "src").mkdir()

        projects = _scan(root)

        assert projects == [Project(name="workspace", path=root, repos=None)]
        assert projects[0].is_parent_level

    def test_nested_repositories_below_a_repo_root_are_ignored(self, tmp_path: Path) -> None:
        root = _repo(tmp_path / "workspace")
        _repo(root / "vendor" / "lib")

        projects = _scan(root)

        assert len(projects) == 1
        assert projects[0].repos is None


class TestAggregators:
    def test_repositories_directly_under_root(self, tmp_path: Path) -> None:
        _repo(tmp_path / "alpha")
        _repo(tmp_path / "beta")
        (tmp_path / "notes").mkdir()

        projects = _scan(tmp_path)

        assert len(projects) == 1
        assert projects[0].path == tmp_path
        assert sorted(projects[0].repo_names) == ["alpha", "beta"]

    def test_mixed_levels(self, tmp_path: Path) -> None:
        _repo(tmp_path / "groupA")
        _repo(tmp_path / "groupB" / "repo1")
        _repo(tmp_path / "groupB" / "repo2")

        projects = _by_name(_scan(tmp_path))

        assert set(projects) == {tmp_path.name, "groupB"}
        assert projects[tmp_path.name].repo_names == ["groupA"]
        assert sorted(projects["groupB"].repo_names) == ["repo1", "repo2"]
        assert projects["groupB"].path == tmp_path / "groupB"

    def test_deeper_projects_are_not_folded_into_parent(self, tmp_path: Path) -> None:
        _repo(tmp_path / "a" / "b" / "c" / "repo")

        projects = _scan(tmp_path)

        assert len(projects) == 1
        assert projects[0].name == "c"
        assert projects[0].repo_names == ["repo"]

    def test_does_not_descend_into_repositories(self, tmp_path: Path) -> None:
        outer = _repo(tmp_path / "group" / "outer")
        _repo(outer / "inner")
        _repo(outer / "more" / "deep")

        projects = _scan(tmp_path)

        assert len(projects) == 1
        assert projects[0].repo_names == ["outer"]

    def test_deeper_projects_come_first(self, tmp_path: Path) -> None:
        _repo(tmp_path / "top")
        _repo(tmp_path / "nested" / "repo")

        projects = _scan(tmp_path)

        assert [p.name for p in projects] == ["nested", tmp_path.name]

    def test_sibling_aggregators(self, tmp_path: Path) -> None:
        _repo(tmp_path / "work" / "api")
        _repo(tmp_path / "work" / "web")
        _repo(tmp_path / "personal" / "dotfiles")

        projects = _by_name(_scan(tmp_path))

        assert set(projects) == {"work", "personal"}
        assert projects["personal"].repos is not None
        assert len(projects["personal"].repos) == 1

    def test_deep_tree_does_not_recurse(self, tmp_path: Path) -> None:
        deep = tmp_path
        for i in range(60):
            deep = deep / f"d{i}"
        _repo(deep / "repo")

        projects = _scan(tmp_path)

        assert projects[0].name == "d59"

    def test_each_scan_builds_fresh_values(self, tmp_path: Path) -> None:
        _repo(tmp_path / "alpha")
        first = _scan(tmp_path)
        _repo(tmp_path / "beta")
        second = _scan(tmp_path)

        assert first is not second
        assert len(first[0].repo_names) == 1
        assert len(second[0].repo_names) == 2


class TestErrors:
    def test_no_marker_anywhere(self, tmp_path: Path) -> None:
        (tmp_path / "a" / "b").mkdir(parents=True)
        (tmp_path / "c").mkdir()

        result = ProjectScanner(DirectoryReader()).scan(tmp_path)

        assert isinstance(result, Err)
        assert result.error.kind == "no_projects_found"

    def test_empty_root(self, tmp_path: Path) -> None:
        result = ProjectScanner(DirectoryReader()).scan(tmp_path)

        assert isinstance(result, Err)
        assert result.error.kind == "no_projects_found"

    def test_missing_root(self, tmp_path: Path) -> None:
        result = ProjectScanner(DirectoryReader()).scan(tmp_path / "missing")

        assert isinstance(result, Err)
        assert result.error.kind == "unreadable_root"

    def test_marker_file_is_not_a_repository(self, tmp_path: Path) -> None:
        # .git as a file (worktrees, submodules) is not the marker directory
        (tmp_path / "repo").mkdir()
        (tmp_path / "repo" / ".git").write_text("gitdir: ../elsewhere\n")

        result = ProjectScanner(DirectoryReader()).scan(tmp_path)

        assert isinstance(result, Err)
        assert result.error.kind == "no_projects_found"


def test_custom_marker(tmp_path: Path) -> None:
    (tmp_path / "hgrepo" / ".hg").mkdir(parents=True)
    _repo(tmp_path / "gitrepo")

    result = ProjectScanner(DirectoryReader(marker=".hg")).scan(tmp_path)

    assert isinstance(result, Ok)
    assert result.value[0].repo_names == ["hgrepo"]


@pytest.mark.parametrize("name", ["Project", "project"])
def test_project_repo_names_for_parent_level(name: str) -> None:
    assert Project(name=name, path=Path("/p")).repo_names == []
