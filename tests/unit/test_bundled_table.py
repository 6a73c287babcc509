"""The shipped config/slab.toml must stay loadable and canonical."""

from __future__ import annotations

import re

from slabconf.codec import dumps, load, loads


def test_bundled_table_loads(bundled_path):
    config = load(bundled_path)
    assert sorted(config.profiles) == ["bench", "cpu-big", "cpu-small"]
    assert len(config.commands) == 18


def test_cpu_test_runs_on_cpu_big(bundled_path):
    target = load(bundled_path).resolve("cpu_test")
    assert target.profile == "cpu-big"
    assert target.region == "eu-west-3"
    assert target.instance_type == "m6i.32xlarge"
    assert target.workflow == "aws_tfhe_tests.yml"
    assert target.check_run_name == "CPU AWS Tests"


def test_every_command_resolves(bundled_path):
    config = load(bundled_path)
    for name in config.commands:
        assert config.resolve(name).profile in config.profiles


def test_image_ids_are_ami_hex(bundled_path):
    config = load(bundled_path)
    assert all(re.fullmatch(r"ami-[0-9a-f]+", p.image_id) for p in config.profiles.values())


def test_benchmarks_run_on_bare_metal(bundled_path):
    config = load(bundled_path)
    assert config.get_profile("bench").instance_type == "m6i.metal"
    assert "integer_bench" in config.commands_for_profile("bench")


def test_no_unused_profiles_or_shared_workflows(bundled_path):
    config = load(bundled_path)
    assert config.unused_profiles() == []
    assert config.shared_workflows() == {}


def test_bundled_table_is_in_canonical_form(bundled_text):
    assert dumps(loads(bundled_text)) == bundled_text
