from pathlib import Path

import pytest
from pydantic import ValidationError

from affected.config import (
    DEFAULT_MERGE_BASE,
    DEFAULT_PATTERN,
    AffectedOptions,
    read_config_file,
    resolve_options,
)
from affected.errors import ConfigError
from tests.infrastructure import write


def _cfg(root: Path, text: str) -> Path:
    return write(root / "affected-files.yaml", text)


def test_missing_file_means_defaults(tmp_path: Path):
    assert read_config_file(tmp_path) == {}
    opts = resolve_options(cwd=tmp_path)
    assert opts == AffectedOptions(cwd=tmp_path)
    assert opts.pattern == DEFAULT_PATTERN
    assert opts.merge_base == DEFAULT_MERGE_BASE
    assert opts.changed is None and opts.tracked is None and opts.superleaves is None
    assert opts.missing == ()
    assert opts.absolute is False


def test_empty_file_means_defaults(tmp_path: Path):
    _cfg(tmp_path, "")
    assert read_config_file(tmp_path) == {}
    _cfg(tmp_path, "# nothing here\n")
    assert read_config_file(tmp_path) == {}


def test_file_values_and_aliases(tmp_path: Path):
    _cfg(tmp_path, """\
        pattern: "./app/**/*.{ts,tsx}"
        abs: true
        mergeBase: origin/main
        missing:
          - "* >>> virtual:env"
        superleaves:
          - app/globals.d.ts
    """)
    assert read_config_file(tmp_path) == {
        "pattern": "./app/**/*.{ts,tsx}",
        "absolute": True,
        "merge_base": "origin/main",
        "missing": ("* >>> virtual:env",),
        "superleaves": ("app/globals.d.ts",),
    }


def test_call_site_overrides_file(tmp_path: Path):
    _cfg(tmp_path, "pattern: lib/**\nmissing: ['* >>> a']\n")
    opts = resolve_options("src/*.py", cwd=tmp_path, missing=["* >>> b"])
    assert opts.pattern == "src/*.py"
    assert opts.missing == ("* >>> b",)


def test_none_call_site_values_do_not_override(tmp_path: Path):
    _cfg(tmp_path, "merge_base: origin/develop\n")
    opts = resolve_options(None, cwd=tmp_path, merge_base=None, absolute=None)
    assert opts.merge_base == "origin/develop"
    assert opts.absolute is False


def test_cwd_is_made_absolute(tmp_path: Path, monkeypatch):
    (tmp_path / "pkg").mkdir()
    monkeypatch.chdir(tmp_path)
    assert resolve_options(cwd="pkg").cwd == tmp_path / "pkg"
    assert resolve_options().cwd == tmp_path
    # `cwd` inside an options mapping works as well
    assert resolve_options({"cwd": "pkg"}).cwd == tmp_path / "pkg"


def test_config_is_read_from_cwd_only(tmp_path: Path):
    _cfg(tmp_path, "pattern: from-parent/**\n")
    child = tmp_path / "child"
    child.mkdir()
    assert resolve_options(cwd=child).pattern == DEFAULT_PATTERN


@pytest.mark.parametrize("text, needle", [
    ("pattern: [unclosed\n", "Failed to parse"),
    ("- just\n- a list\n", "must be a mapping"),
    ("patern: src/**\n", "patern"),
    ("cwd: /elsewhere\n", "cwd"),
    ("absolute: 'yes'\n", "absolute"),
    ("missing: '* >>> x'\n", "missing"),
    ("changed: [1, 2]\n", "changed[0]"),
])
def test_invalid_file_is_fatal(tmp_path: Path, text, needle):
    _cfg(tmp_path, text)
    with pytest.raises(ConfigError) as exc:
        resolve_options(cwd=tmp_path)
    assert needle in str(exc.value)


def test_unknown_call_site_option(tmp_path: Path):
    with pytest.raises(ConfigError) as exc:
        resolve_options(cwd=tmp_path, superleaf=["x"])
    assert "superleaf" in str(exc.value)


def test_path_objects_in_lists(tmp_path: Path):
    opts = resolve_options(cwd=tmp_path, changed=[Path("src/a.js")], tracked=("src/a.js",))
    assert opts.changed == ("src/a.js",)
    assert opts.tracked == ("src/a.js",)


def test_validation_errors_are_reported_as_config_errors(tmp_path: Path):
    with pytest.raises(ConfigError) as exc:
        resolve_options({"abs": 1, "pattern": ["src/*"]}, cwd=tmp_path)
    assert isinstance(exc.value.__cause__, ValidationError)
    message = str(exc.value)
    assert message.startswith("options: ")
    assert "abs" in message and "pattern" in message
