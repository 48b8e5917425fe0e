from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List

import pytest

from zeroprep.adapters.application_catalog import FilesystemApplicationCatalog
from zeroprep.adapters.git_source_control import GitSourceControl
from zeroprep.adapters.homebrew import HomebrewPackageManager
from zeroprep.ports.package_manager import PackageManagerError
from zeroprep.ports.source_control import SourceControlError


class _RecordingRunner:
    def __init__(self, outputs: dict[str, str] | None = None, fail: str | None = None) -> None:
        self.outputs = outputs or {}
        self.fail = fail
        self.commands: List[List[str]] = []

    def __call__(self, command: List[str], **_: object) -> "subprocess.CompletedProcess[str]":
        self.commands.append(command)
        joined = " ".join(command)
        if self.fail and self.fail in joined:
            return subprocess.CompletedProcess(command, 128, "", "fatal: simulated")
        for needle, stdout in self.outputs.items():
            if needle in joined:
                return subprocess.CompletedProcess(command, 0, stdout, "")
        return subprocess.CompletedProcess(command, 0, "", "")


def test_application_catalog_scans_one_level(tmp_path: Path) -> None:
    system = tmp_path / "Applications"
    user = tmp_path / "home" / "Applications"
    (system / "Safari.app").mkdir(parents=True)
    (system / "Utilities" / "Terminal.app").mkdir(parents=True)
    (system / "README.txt").write_text("x", encoding="utf-8")
    (user / "iTerm.app").mkdir(parents=True)
    (user / "Safari.app").mkdir()

    catalog = FilesystemApplicationCatalog([system, tmp_path / "missing", user])

    assert catalog.list_applications() == ["Safari", "iTerm"]


def test_homebrew_availability_and_dump(tmp_path: Path) -> None:
    runner = _RecordingRunner()
    brew = HomebrewPackageManager(runner=runner, which=lambda name: f"/opt/homebrew/bin/{name}")

    assert brew.is_available()
    brew.export_manifest(tmp_path / "Brewfile")

    assert runner.commands == [["brew", "bundle", "dump", f"--file={tmp_path / 'Brewfile'}"]]


def test_homebrew_absent() -> None:
    assert not HomebrewPackageManager(which=lambda name: None).is_available()


def test_homebrew_dump_failure_raises(tmp_path: Path) -> None:
    brew = HomebrewPackageManager(runner=_RecordingRunner(fail="bundle"), which=lambda name: "/usr/local/bin/brew")

    with pytest.raises(PackageManagerError, match="simulated"):
        brew.export_manifest(tmp_path / "Brewfile")


def test_git_latest_tag_describes_newest_tagged_revision(tmp_path: Path) -> None:
    runner = _RecordingRunner({"rev-list": "abc123\n", "describe": "v0.5.0\n"})
    git = GitSourceControl(runner=runner, which=lambda name: "/usr/bin/git")

    assert git.latest_tag(tmp_path) == "v0.5.0"
    assert runner.commands[0] == ["git", "-C", str(tmp_path), "rev-list", "--tags", "--date-order", "--max-count=1"]
    assert runner.commands[1] == ["git", "-C", str(tmp_path), "describe", "--tags", "abc123"]


def test_git_latest_tag_without_tags(tmp_path: Path) -> None:
    runner = _RecordingRunner({"rev-list": ""})
    git = GitSourceControl(runner=runner, which=lambda name: "/usr/bin/git")

    assert git.latest_tag(tmp_path) is None
    assert len(runner.commands) == 1


def test_git_clone_pull_checkout_commands(tmp_path: Path) -> None:
    runner = _RecordingRunner()
    git = GitSourceControl(runner=runner, which=lambda name: "/usr/bin/git")
    target = tmp_path / "zero"

    git.clone("https://github.com/zero-sh/zero.sh", target)
    git.pull(target)
    git.checkout(target, "v0.5.0")

    assert runner.commands == [
        ["git", "clone", "https://github.com/zero-sh/zero.sh", str(target)],
        ["git", "-C", str(target), "fetch", "--tags", "--prune", "origin"],
        ["git", "-C", str(target), "checkout", "--quiet", "v0.5.0"],
    ]
    assert not git.is_working_copy(target)


def test_git_failure_raises(tmp_path: Path) -> None:
    git = GitSourceControl(runner=_RecordingRunner(fail="clone"), which=lambda name: "/usr/bin/git")

    with pytest.raises(SourceControlError, match="simulated"):
        git.clone("https://example.invalid/repo", tmp_path / "zero")
