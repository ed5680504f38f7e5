"""Tests for JobSpec validation and the burst-in-name convention."""

import os

import pytest
from pydantic import ValidationError

from jobs.spec import JobSpec, parse_burst_from_name


@pytest.mark.parametrize("name, expected", [
    ("p5", 5),
    ("j12x", 12),
    ("./p8", 8),
    ("/opt/jobs/t30", 30),
    ("p0", 0),
])
def test_parse_burst_from_name(name, expected):
    assert parse_burst_from_name(name) == expected


@pytest.mark.parametrize("name", ["job", "5", "p", "px9"])
def test_parse_burst_from_name_without_digits_raises(name):
    with pytest.raises(ValueError):
        parse_burst_from_name(name)


def test_negative_burst_is_rejected():
    with pytest.raises(ValidationError):
        JobSpec(name="a", command=["./a"], burst_length=-1)


def test_empty_command_is_rejected():
    with pytest.raises(ValidationError):
        JobSpec(name="a", command=[])


def test_from_program_keeps_paths_untouched():
    spec = JobSpec.from_program("/bin/true", burst_length=3)
    assert spec.name == "/bin/true"
    assert spec.command == ["/bin/true"]
    assert spec.burst_length == 3


def test_from_program_runs_local_file_from_working_directory(tmp_path, monkeypatch):
    (tmp_path / "p5").write_text("#!/bin/sh\n")
    monkeypatch.chdir(tmp_path)

    spec = JobSpec.from_program("p5")

    assert spec.name == "p5"
    assert spec.command == [os.path.join(os.curdir, "p5")]


def test_from_program_leaves_unknown_bare_names_to_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert JobSpec.from_program("sleep").command == ["sleep"]
