# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the timber-rules command-line interface."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from typer.testing import CliRunner

from timber_rules.cli.app import app


def _write_config(tmp_path: Path, document: dict[str, Any]) -> Path:
    path = tmp_path / "trees.yml"
    path.write_text(yaml.safe_dump(document), encoding="utf-8")
    return path


def test_check_bundled_defaults() -> None:
    runner = CliRunner(env={"COLUMNS": "200"})
    result = runner.invoke(app, ["check", "--no-emoji", "--no-color"])
    assert result.exit_code == 0
    assert "oak" in result.stdout
    assert "tree definitions" in result.stdout


def test_check_reports_config_errors(tmp_path: Path, document: dict[str, Any]) -> None:
    document["trees"]["oak"]["log-loot"]["stick"]["chance"] = 400
    runner = CliRunner(env={"COLUMNS": "200"})
    result = runner.invoke(app, ["check", str(_write_config(tmp_path, document)), "--no-emoji", "--no-color"])
    assert result.exit_code == 1
    assert "chance" in result.stdout


def test_check_warns_about_empty_catalog(tmp_path: Path) -> None:
    runner = CliRunner(env={"COLUMNS": "200"})
    config = _write_config(tmp_path, {"trees": {}})
    result = runner.invoke(app, ["check", str(config), "--no-emoji", "--no-color"])
    assert result.exit_code == 0
    assert "--- Catalog ---" in result.stdout
    assert "no tree definitions" in result.stdout
    assert "0 tree definitions" in result.stdout


def test_check_reports_missing_file(tmp_path: Path) -> None:
    runner = CliRunner(env={"COLUMNS": "200"})
    result = runner.invoke(app, ["check", str(tmp_path / "absent.yml"), "--no-emoji", "--no-color"])
    assert result.exit_code == 1
    assert "not found" in result.stdout


def test_roll_renders_commands(tmp_path: Path, document: dict[str, Any]) -> None:
    document["trees"]["oak"]["entire-tree-loot"] = {"reward": {"command": "eco give %player% 5", "chance": 100}}
    config = _write_config(tmp_path, document)
    runner = CliRunner(env={"COLUMNS": "200"})
    result = runner.invoke(
        app,
        [
            "roll",
            "oak",
            "--config",
            str(config),
            "--entire-tree",
            "--player",
            "Notch",
            "--seed",
            "7",
            "--times",
            "2",
            "--no-emoji",
            "--no-color",
        ],
    )
    assert result.exit_code == 0
    assert "eco give Notch 5" in result.stdout
    assert "2/2 rounds granted loot" in result.stdout


def test_roll_unknown_tree_fails(tmp_path: Path, document: dict[str, Any]) -> None:
    runner = CliRunner(env={"COLUMNS": "200"})
    result = runner.invoke(
        app,
        ["roll", "maple", "--config", str(_write_config(tmp_path, document)), "--no-emoji", "--no-color"],
    )
    assert result.exit_code == 1
    assert "unknown tree 'maple'" in result.stdout
