"""
GitVcs against a real temporary repository.
"""

from pathlib import Path

import pytest

from affected.changes import detect_changed, get_tracked
from affected.errors import VcsError
from affected.vcs import GitVcs
from tests.infrastructure import commit_all, git, init_repo, requires_git, write, write_tree

pytestmark = requires_git


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """master has src/a.js + src/b.js; branch `feature` changes b.js and adds c.js."""
    root = init_repo(tmp_path / "repo")
    write_tree(root, {
        "src/a.js": "import './b';\n",
        "src/b.js": "export default 1;\n",
        "README.md": "# repo\n",
    })
    commit_all(root, "init")
    git(root, "checkout", "-q", "-b", "feature")
    write(root / "src" / "b.js", "export default 2;\n")
    write(root / "src" / "c.js", "export default 3;\n")
    commit_all(root, "feature work")
    return root


def test_tracked_lists_whole_tree(repo: Path):
    assert get_tracked(GitVcs(), repo) == {
        str(repo / "src" / "a.js"),
        str(repo / "src" / "b.js"),
        str(repo / "src" / "c.js"),
        str(repo / "README.md"),
    }


def test_branch_commits_since_merge_base(repo: Path):
    changed = detect_changed(GitVcs(), repo, "master")
    assert changed == {str(repo / "src" / "b.js"), str(repo / "src" / "c.js")}


def test_uncommitted_changes_are_included(repo: Path):
    write(repo / "README.md", "# changed\n")
    git(repo, "add", "README.md")
    write(repo / "src" / "a.js", "import './c';\n")  # unstaged
    changed = detect_changed(GitVcs(), repo, "master")
    assert str(repo / "README.md") in changed
    assert str(repo / "src" / "a.js") in changed


def test_deleted_in_branch_is_not_changed(repo: Path):
    git(repo, "rm", "-q", "src/c.js")
    commit_all(repo, "drop c")
    changed = detect_changed(GitVcs(), repo, "master")
    assert changed == {str(repo / "src" / "b.js")}


def test_subdirectory_cwd_resolves_against_repo_top(repo: Path):
    cwd = repo / "src"
    assert GitVcs().repo_root(cwd) == repo
    assert str(repo / "README.md") in get_tracked(GitVcs(), cwd)


def test_unknown_ref_is_fatal(repo: Path):
    with pytest.raises(VcsError) as exc:
        detect_changed(GitVcs(), repo, "origin/does-not-exist")
    assert "merge-base" in str(exc.value)


def test_not_a_repository_is_fatal(tmp_path: Path):
    plain = tmp_path / "plain"
    plain.mkdir()
    with pytest.raises(VcsError):
        get_tracked(GitVcs(), plain)
