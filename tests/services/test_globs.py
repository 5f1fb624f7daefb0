from __future__ import annotations

import pytest
from result import Err, Ok

from dinf.models.dir_info import ScanErrorCode
from dinf.services.patterns import _expand_braces, _syntax_error, compile_globs


# ── _expand_braces ──────────────────────────────────────────────────


def test_expand_braces_no_braces() -> None:
    assert _expand_braces("*.rs") == ("*.rs",)


def test_expand_braces_simple() -> None:
    assert _expand_braces("*.{a,b,c}") == ("*.a", "*.b", "*.c")


def test_expand_braces_two_groups() -> None:
    assert set(_expand_braces("{src,lib}/*.{c,h}")) == {"src/*.c", "src/*.h", "lib/*.c", "lib/*.h"}


# ── _syntax_error ───────────────────────────────────────────────────


@pytest.mark.parametrize("pattern", ["*.rs", "a[bc]d", "[!x]*", "[]]", "{a,b}", "x\\*", ""])
def test_syntax_ok(pattern: str) -> None:
    assert _syntax_error(pattern) is None


@pytest.mark.parametrize(
    ("pattern", "fragment"),
    [
        ("a[bc", "unclosed character class"),
        ("*.{rs", "unclosed alternate group"),
        ("*.rs}", "unopened alternate group"),
        ("{a,{b,c}}", "nested alternate groups"),
        ("abc\\", "dangling"),
    ],
)
def test_syntax_errors(pattern: str, fragment: str) -> None:
    problem = _syntax_error(pattern)
    assert problem is not None
    assert fragment in problem


# ── compile_globs ───────────────────────────────────────────────────


def test_star_crosses_separators() -> None:
    globs = compile_globs(["*.rs"]).unwrap()

    assert globs.is_match("./src/main.rs")
    assert globs.is_match("main.rs")
    assert not globs.is_match("./src/main.rsx")


def test_or_semantics_across_patterns() -> None:
    globs = compile_globs(["*.txt", "*.log"]).unwrap()

    assert globs.is_match("/root/a.txt")
    assert globs.is_match("/root/b.log")
    assert not globs.is_match("/root/c.bin")


def test_braces_and_classes() -> None:
    globs = compile_globs(["*/data/*.{csv,json}", "*/img[0-9].png"]).unwrap()

    assert globs.is_match("/root/data/x.csv")
    assert globs.is_match("/root/data/y.json")
    assert globs.is_match("/root/img3.png")
    assert not globs.is_match("/root/imgA.png")
    assert not globs.is_match("/root/other/x.csv")


def test_matching_is_case_sensitive() -> None:
    globs = compile_globs(["*.jpg"]).unwrap()

    assert globs.is_match("a.jpg")
    assert not globs.is_match("a.JPG")


def test_escaped_star_is_literal() -> None:
    globs = compile_globs(["*\\*.txt"]).unwrap()

    assert globs.is_match("/root/a*.txt")
    assert not globs.is_match("/root/ab.txt")


def test_question_mark_matches_one_char() -> None:
    globs = compile_globs(["*/?.txt"]).unwrap()

    assert globs.is_match("/root/a.txt")
    assert not globs.is_match("/root/ab.txt")


def test_invalid_pattern_is_error_naming_pattern() -> None:
    result = compile_globs(["*.rs", "src/[abc"])

    assert isinstance(result, Err)
    error = result.unwrap_err()
    assert error.code is ScanErrorCode.INVALID_GLOB_PATTERN
    assert error.target == "src/[abc"
    assert "src/[abc" in error.message


def test_empty_set_matches_nothing() -> None:
    result = compile_globs([])

    assert isinstance(result, Ok)
    assert not result.unwrap().is_match("anything")
