"""Tests for reroute.patterns — compose/decompose of a trailing parameter."""

import pytest

from reroute.patterns import compose, decompose, host_path, is_parametric


class TestHostPath:
    def test_empty(self) -> None:
        assert host_path("") == ("", "")

    def test_path_only(self) -> None:
        assert host_path("/users/") == ("", "/users/")

    def test_host_qualified(self) -> None:
        assert host_path("example.com/users/") == ("example.com", "/users/")

    def test_host_root(self) -> None:
        assert host_path("example.com/") == ("example.com", "/")

    def test_host_without_path(self) -> None:
        assert host_path("example.com") == ("example.com", "")


class TestIsParametric:
    @pytest.mark.parametrize("pattern", ["/", "/users/", "example.com/", "example.com/a/"])
    def test_subtree_patterns(self, pattern: str) -> None:
        assert is_parametric(pattern)

    @pytest.mark.parametrize("pattern", ["", "/about", "example.com", "example.com/about"])
    def test_fixed_patterns(self, pattern: str) -> None:
        assert not is_parametric(pattern)


class TestCompose:
    @pytest.mark.parametrize(
        ("pattern", "param", "expected"),
        [
            ("/", "", "/"),
            ("/", "/", "//"),
            ("/", "hello", "/hello"),
            ("/hello", "world", "/hello"),
            ("/hello/", "world", "/hello/world"),
            ("", "", ""),
            ("", "hello", ""),
        ],
    )
    def test_table(self, pattern: str, param: str, expected: str) -> None:
        assert compose(pattern, param) == expected

    @pytest.mark.parametrize("value", ["", "x", "a/b", "/hello", "/hello/"])
    def test_fixed_pattern_ignores_value(self, value: str) -> None:
        assert compose("/hello", value) == "/hello"

    def test_value_is_not_escaped(self) -> None:
        assert compose("/files/", "a b/%20?c") == "/files/a b/%20?c"

    def test_host_is_discarded(self) -> None:
        assert compose("example.com/hello/", "world") == "/hello/world"
        assert compose("example.com/hello/", "world") == compose("/hello/", "world")

    def test_host_without_path(self) -> None:
        assert compose("example.com", "world") == ""


class TestDecompose:
    @pytest.mark.parametrize(
        ("pattern", "path", "expected"),
        [
            ("/", "/", ""),
            ("/", "/hello", "hello"),
            ("/hello/", "/hello/world", "world"),
            ("/hello", "/hello/world", ""),
            ("", "", ""),
            ("", "hello", ""),
            ("/", "", ""),
        ],
    )
    def test_table(self, pattern: str, path: str, expected: str) -> None:
        assert decompose(pattern, path) == expected

    def test_path_outside_pattern(self) -> None:
        assert decompose("/hello/", "/other/world") == ""

    def test_shorter_path(self) -> None:
        assert decompose("/hello/", "/hello") == ""

    def test_nested_suffix(self) -> None:
        assert decompose("/files/", "/files/a/b/c.txt") == "a/b/c.txt"

    def test_host_is_discarded(self) -> None:
        assert decompose("example.com/hello/", "/hello/world") == "world"
        assert decompose("example.com/hello", "/hello/world") == ""


class TestRoundTrip:
    @pytest.mark.parametrize("pattern", ["/", "/hello/", "/a/b/"])
    @pytest.mark.parametrize("value", ["", "world", "a/b/c", "/", "/hello/"])
    def test_decompose_inverts_compose(self, pattern: str, value: str) -> None:
        assert decompose(pattern, compose(pattern, value)) == value

    def test_value_equal_to_pattern(self) -> None:
        assert decompose("/hello/", compose("/hello/", "/hello/")) == "/hello/"

    def test_host_qualified(self) -> None:
        pattern = "example.com/users/"
        assert decompose(pattern, compose(pattern, "42")) == "42"
