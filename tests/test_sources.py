import os
from pathlib import Path

from affected.filtering import CompiledGlob, expand_glob
from affected.paths import to_abs
from affected.sources import select_sources
from tests.infrastructure import write_tree


def _tracked(root: Path, *rels: str):
    return {to_abs(r, root) for r in rels}


def test_sources_are_tracked_files_matching_pattern(js_project: Path, js_tracked):
    sources = select_sources("./src/**/*", js_project, _tracked(js_project, *js_tracked))
    assert sources == [str(js_project / "src" / n) for n in ("a.js", "b.js", "c.js")]


def test_untracked_files_are_never_candidates(js_project: Path):
    tracked = _tracked(js_project, "src/a.js", "dist/a.js")
    assert select_sources("**/a.js", js_project, tracked) == [
        str(js_project / "dist" / "a.js"),
        str(js_project / "src" / "a.js"),
    ]
    assert select_sources("src/*.js", js_project, tracked) == [str(js_project / "src" / "a.js")]


def test_tracked_but_deleted_files_are_not_sources(js_project: Path):
    tracked = _tracked(js_project, "src/a.js", "src/gone.js")
    assert select_sources("src/*.js", js_project, tracked) == [str(js_project / "src" / "a.js")]


def test_single_star_skips_nested_and_hidden_files(tmp_path: Path):
    write_tree(tmp_path, {"src/a.js": "", "src/sub/deep.js": "", "src/.hidden.js": ""})
    tracked = _tracked(tmp_path, "src/a.js", "src/sub/deep.js", "src/.hidden.js")
    assert select_sources("src/*", tmp_path, tracked) == [str(tmp_path / "src" / "a.js")]
    assert select_sources("src/**/*", tmp_path, tracked) == [
        str(tmp_path / "src" / "a.js"),
        str(tmp_path / "src" / "sub" / "deep.js"),
    ]


def test_untracked_trees_are_not_listed(tmp_path: Path, monkeypatch):
    files = {f"node_modules/pkg{i}/index.js": "" for i in range(50)}
    files["src/a.js"] = ""
    write_tree(tmp_path, files)
    tracked = _tracked(tmp_path, "src/a.js")

    def no_walk(*args, **kwargs):
        raise AssertionError("the working tree must not be walked")

    monkeypatch.setattr(os, "walk", no_walk)
    assert select_sources("**/*.js", tmp_path, tracked) == [str(tmp_path / "src" / "a.js")]


def test_tracked_files_outside_cwd_are_ignored(tmp_path: Path):
    write_tree(tmp_path, {"pkg/src/a.js": "", "other/src/b.js": ""})
    cwd = tmp_path / "pkg"
    tracked = _tracked(tmp_path, "pkg/src/a.js", "other/src/b.js")
    assert select_sources("**/*", cwd, tracked) == [str(cwd / "src" / "a.js")]


def test_expansion_order_is_by_path_segments(tmp_path: Path):
    rels = ("b/2.js", "b/1.js", "a/z.js", "c.js", "a-b.js")
    write_tree(tmp_path, {r: "" for r in rels})
    found = expand_glob(CompiledGlob.compile("**/*.js", tmp_path), tmp_path, _tracked(tmp_path, *rels))
    assert found == [
        str(tmp_path / "a" / "z.js"),
        str(tmp_path / "a-b.js"),
        str(tmp_path / "b" / "1.js"),
        str(tmp_path / "b" / "2.js"),
        str(tmp_path / "c.js"),
    ]
