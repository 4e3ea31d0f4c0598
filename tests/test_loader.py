#!/usr/bin/env python3
"""
Tests for program path handling and loading.
"""

import pytest

from bfc.errors import ConfigError, LoadError
from bfc.loader import expand_path, load_program


def test_expands_home_prefix():
    assert expand_path("~/progs/a.bf", {"HOME": "/home/user"}) == "/home/user/progs/a.bf"


def test_missing_home_is_fatal():
    with pytest.raises(ConfigError) as exc:
        expand_path("~/a.bf", {})
    assert "HOME" in str(exc.value)


def test_only_tilde_slash_is_expanded():
    assert expand_path("~user/a.bf", {"HOME": "/home/user"}) == "~user/a.bf"
    assert expand_path("a/~/b.bf", {"HOME": "/home/user"}) == "a/~/b.bf"


def test_plain_path_does_not_need_home():
    assert expand_path("prog.bf", {}) == "prog.bf"


def test_uses_process_environment(monkeypatch):
    monkeypatch.setenv("HOME", "/tmp/somewhere")
    assert expand_path("~/x") == "/tmp/somewhere/x"


def test_long_paths_are_truncated():
    assert len(expand_path("a" * 2000, {})) == 1023
    assert expand_path("~/" + "b" * 2000, {"HOME": "/h"}) == ("/h/" + "b" * 2000)[:1023]


def test_loads_raw_bytes(tmp_path):
    path = tmp_path / "prog.bf"
    data = b"+\x00\xff\r\n[-]\xe2\x82\xac"
    path.write_bytes(data)
    assert load_program(path) == data
    assert load_program(str(path)) == data


def test_missing_file(tmp_path):
    missing = tmp_path / "nope.bf"
    with pytest.raises(LoadError) as exc:
        load_program(missing)
    assert exc.value.path == str(missing)
    assert "Could not open file" in str(exc.value)


def test_directory_is_not_a_program(tmp_path):
    with pytest.raises(LoadError):
        load_program(tmp_path)
