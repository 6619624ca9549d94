#!/usr/bin/env python3
"""Tests for output sink handling."""

import sys

import pytest

from statdump.core.errors import SinkUnavailable
from statdump.core.sink import open_sink


@pytest.mark.parametrize('path', [None, '', '-'])
def test_stdout_is_default_and_left_open(path, capsys):
    with open_sink(path) as sink:
        assert sink is sys.stdout
        sink.write("hello\n")
    assert not sys.stdout.closed
    assert capsys.readouterr().out == "hello\n"


def test_file_is_truncated_and_closed(tmp_path):
    target = tmp_path / 'dump.csv'
    target.write_text("old content that should disappear\n")

    with open_sink(str(target)) as sink:
        sink.write("pid,comm\n")
    assert sink.closed
    assert target.read_text() == "pid,comm\n"


def test_file_closed_when_body_raises(tmp_path):
    target = tmp_path / 'dump.txt'
    with pytest.raises(RuntimeError):
        with open_sink(str(target)) as sink:
            sink.write("partial")
            raise RuntimeError("renderer failed")
    assert sink.closed
    assert target.read_text() == "partial"


def test_unwritable_path(tmp_path):
    target = tmp_path / 'missing-dir' / 'dump.txt'
    with pytest.raises(SinkUnavailable) as excinfo:
        with open_sink(str(target)):
            pytest.fail("sink body must not run")
    assert excinfo.value.path == str(target)
    assert isinstance(excinfo.value.cause, OSError)
    assert str(target) in str(excinfo.value)
