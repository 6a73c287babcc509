"""Shared fixtures: the bundled dispatch table and small hand-written tables."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

BUNDLED_TABLE = Path(__file__).resolve().parent.parent / "config" / "slab.toml"

SMALL_TABLE = """\
[profile.cpu-big]
region = "eu-west-3"
image_id = "ami-051942e4055555752"
instance_type = "m6i.32xlarge"

[profile.cpu-small]
region = "eu-west-3"
image_id = "ami-051942e4055555752"
instance_type = "m6i.4xlarge"

[command.cpu_test]
workflow = "aws_tfhe_tests.yml"
profile = "cpu-big"
check_run_name = "CPU AWS Tests"

[command.code_coverage]
workflow = "code_coverage.yml"
profile = "cpu-small"
check_run_name = "Code coverage"
"""


@pytest.fixture
def bundled_path() -> Path:
    return BUNDLED_TABLE


@pytest.fixture
def bundled_text() -> str:
    return BUNDLED_TABLE.read_text(encoding="utf-8")


@pytest.fixture
def small_text() -> str:
    return SMALL_TABLE


@pytest.fixture(autouse=True)
def _isolate_slab_env(monkeypatch):
    """Keep developer SLAB_* variables from leaking into tests."""
    for name in list(os.environ):
        if name.startswith("SLAB_"):
            monkeypatch.delenv(name, raising=False)
