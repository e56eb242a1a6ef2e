# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for :mod:`packerwrap.options`."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from packerwrap.options import BuildOptions, BuildOptionsBuilder


def test_builder_without_fields_matches_defaults() -> None:
    options = BuildOptionsBuilder().build()

    assert options.debug is False
    assert options.force is False
    assert options.timestamp_ui is False
    assert options.color is True
    assert options.parallel_builds is None
    assert options.vars == ()
    assert options.var_files == ()
    assert options == BuildOptions()


def test_builder_sets_requested_fields() -> None:
    options = (
        BuildOptionsBuilder()
        .debug(True)
        .force(True)
        .parallel_builds(2)
        .vars([("key", "value")])
        .build()
    )

    assert options.debug
    assert options.force
    assert options.parallel_builds == 2
    assert options.vars == (("key", "value"),)
    assert options.color is True


def test_builder_reuse_does_not_mutate_previous_values() -> None:
    builder = BuildOptionsBuilder().var("region", "us-west-2")
    first = builder.build()

    builder.var("region", "eu-west-1").var_file("extra.pkrvars.hcl").debug(True)
    second = builder.build()

    assert first.vars == (("region", "us-west-2"),)
    assert first.var_files == ()
    assert first.debug is False
    assert second.vars == (("region", "us-west-2"), ("region", "eu-west-1"))
    assert second.var_files == ("extra.pkrvars.hcl",)


def test_var_files_accept_paths_and_keep_order() -> None:
    options = BuildOptionsBuilder().var_files([Path("b.json"), "./a.json"]).build()

    assert options.var_files == ("b.json", "./a.json")


def test_options_are_frozen() -> None:
    options = BuildOptions()

    with pytest.raises(ValidationError):
        options.debug = True  # type: ignore[misc]


def test_vars_mapping_keeps_insertion_order() -> None:
    options = BuildOptions(vars={"b": "2", "a": "1"})

    assert options.vars == (("b", "2"), ("a", "1"))
