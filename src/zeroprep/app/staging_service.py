"""Application service sequencing a full snapshot into a workspace layout."""

from __future__ import annotations

import shutil
import stat
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List

from zeroprep.app.bootstrap_service import NEW_MACHINE_HINT, ToolBootstrapService
from zeroprep.app.capture import PreferenceCaptureService
from zeroprep.domain.layout import WorkspaceLayout, materialize
from zeroprep.domain.shell import ShellKind
from zeroprep.ports.application_catalog import ApplicationCatalog
from zeroprep.ports.package_manager import PackageManager, PackageManagerError
from zeroprep.ports.preference_store import PreferenceStore
from zeroprep.ports.source_control import SourceControl
from zeroprep.resources import load_script_template
from zeroprep.settings import RuntimeSettings
from zeroprep.utils.telemetry import record_event

RUN_SCRIPTS = (("before", "01-before.sh"), ("after", "01-after.sh"))
SCRIPT_MODE = 0o755
_LEVELS = {"ok": "info", "skipped": "info", "missing": "warn", "failed": "error"}


def _stderr(message: str) -> None:
    print(message, file=sys.stderr)


def _is_special(path: Path) -> bool:
    # sockets, fifos and devices; symlinks are recreated as links by copytree
    mode = path.lstat().st_mode
    return not (stat.S_ISDIR(mode) or stat.S_ISREG(mode) or stat.S_ISLNK(mode))


@dataclass(frozen=True)
class StagingContext:
    """Everything a run needs, resolved once from arguments and settings."""

    settings: RuntimeSettings
    layout: WorkspaceLayout
    shell: ShellKind
    shell_name: str
    user_home: Path
    bootstrap: bool = False


@dataclass(frozen=True)
class StepResult:
    name: str
    status: str
    message: str


@dataclass
class StagingReport:
    root: Path
    steps: List[StepResult] = field(default_factory=list)

    def add(self, result: StepResult) -> StepResult:
        self.steps.append(result)
        return result

    def status_of(self, name: str) -> str:
        for step in self.steps:
            if step.name == name:
                return step.status
        raise KeyError(name)

    def by_status(self) -> Dict[str, List[str]]:
        grouped: Dict[str, List[str]] = {}
        for step in self.steps:
            grouped.setdefault(step.status, []).append(step.name)
        return grouped


@dataclass
class StagingService:
    package_manager: PackageManager
    preference_store: PreferenceStore
    application_catalog: ApplicationCatalog
    source_control: SourceControl
    echo: Callable[[str], None] = field(default=print)
    warn: Callable[[str], None] = field(default=_stderr)

    def run(self, context: StagingContext) -> StagingReport:
        layout = context.layout
        if layout.workspace:
            self.echo(f"Creating workspace: {layout.workspace}")
        materialize(layout)
        self.echo(f"Using directory: {layout.root}")
        report = StagingReport(root=layout.root)

        steps: List[Callable[[], List[StepResult]]] = [
            lambda: [self._export_manifest(layout)],
            lambda: [self._capture_preferences(context)],
            lambda: self._stage_shell(context),
            lambda: [self._stage_file("git:.gitconfig", context.user_home / ".gitconfig", layout.git_dir / ".gitconfig")],
            lambda: [self._stage_config_tree(context)],
            lambda: self._create_run_scripts(layout),
        ]
        if context.bootstrap:
            steps.append(lambda: [self._bootstrap_tool(context)])

        for step in steps:
            started = time.monotonic()
            for result in step():
                report.add(result)
                self._announce(result)
                record_event(
                    context.settings,
                    "stage.step",
                    {"step": result.name, "root": str(layout.root)},
                    level=_LEVELS.get(result.status, "info"),
                    status=result.status,
                    component="staging",
                    duration_ms=(time.monotonic() - started) * 1000.0,
                )
        return report

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _export_manifest(self, layout: WorkspaceLayout) -> StepResult:
        self.echo("Generating Brewfile...")
        if not self.package_manager.is_available():
            return StepResult("brewfile", "missing", "Homebrew is not installed on this system.")
        if layout.brewfile.exists():
            return StepResult("brewfile", "skipped", f"Brewfile already exists at {layout.brewfile}; leaving it unchanged.")
        try:
            self.package_manager.export_manifest(layout.brewfile)
        except PackageManagerError as exc:
            return StepResult("brewfile", "failed", str(exc))
        return StepResult("brewfile", "ok", f"Brewfile written to {layout.brewfile}")

    def _capture_preferences(self, context: StagingContext) -> StepResult:
        self.echo("Generating defaults.yaml from installed applications and system preferences...")
        capture = PreferenceCaptureService(
            store=self.preference_store,
            catalog=self.application_catalog,
            builtin_domains=context.settings.builtin_domains,
            match_mode=context.settings.domain_match,
            echo=self.echo,
        )
        document = capture.capture(context.layout.defaults_document)
        return StepResult(
            "defaults",
            "ok",
            f"Captured {len(document)} preference domains into {context.layout.defaults_document}",
        )

    def _stage_shell(self, context: StagingContext) -> List[StepResult]:
        if not context.shell.supported:
            return [StepResult("shell", "missing", f"Unsupported shell: {context.shell_name or 'unknown'}")]
        self.echo(f"Detected {context.shell.label} shell.")
        results = []
        for source in context.shell.config_files(context.user_home):
            results.append(
                self._stage_file(f"shell:{source.name}", source, context.layout.shell_dir / source.name)
            )
        return results

    def _stage_file(self, name: str, source: Path, destination: Path) -> StepResult:
        if not source.is_file():
            return StepResult(name, "missing", f"{source} not found; nothing to copy.")
        if destination.exists():
            return StepResult(name, "skipped", f"{destination} already staged.")
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, destination)
        except OSError as exc:
            return StepResult(name, "failed", f"Copying {source} failed: {exc}")
        return StepResult(name, "ok", f"Copied {source} to {destination}")

    def _stage_config_tree(self, context: StagingContext) -> StepResult:
        source = context.user_home / ".config"
        destination = context.layout.config_dir
        if not source.is_dir():
            return StepResult("config", "missing", ".config folder not found.")
        if destination.exists() and any(destination.iterdir()):
            return StepResult("config", "skipped", f"{destination} already populated.")
        self.echo("Copying .config folder to symlinks...")
        excluded = {context.layout.base.resolve(), context.layout.root.resolve()}
        target = destination.resolve()
        special: List[Path] = []

        def ignore(directory: str, names: List[str]) -> List[str]:
            skipped = []
            for item in names:
                path = Path(directory) / item
                entry = path.resolve()
                if entry in excluded or target.is_relative_to(entry):
                    skipped.append(item)
                elif _is_special(path):
                    special.append(path)
                    skipped.append(item)
            return skipped

        try:
            shutil.copytree(source, destination, symlinks=True, ignore=ignore, dirs_exist_ok=True)
        except shutil.Error as exc:
            failed = ", ".join(str(error[0] if isinstance(error, tuple) else error) for error in exc.args[0])
            return StepResult("config", "failed", f"Some entries of {source} could not be copied: {failed}")
        except OSError as exc:
            return StepResult("config", "failed", f"Copying {source} failed: {exc}")
        if special:
            names = ", ".join(str(path) for path in special)
            return StepResult("config", "ok", f"Copied {source} to {destination} (skipped special files: {names})")
        return StepResult("config", "ok", f"Copied {source} to {destination}")

    def _create_run_scripts(self, layout: WorkspaceLayout) -> List[StepResult]:
        self.echo("Creating setup scripts...")
        results = []
        directories = {"before": layout.run_before_dir, "after": layout.run_after_dir}
        for phase, filename in RUN_SCRIPTS:
            path = directories[phase] / filename
            name = f"scripts:{phase}"
            if path.exists():
                results.append(StepResult(name, "skipped", f"{path} already exists."))
                continue
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(load_script_template(filename), encoding="utf-8")
            path.chmod(SCRIPT_MODE)
            results.append(StepResult(name, "ok", f"Created {path}"))
        return results

    def _bootstrap_tool(self, context: StagingContext) -> StepResult:
        service = ToolBootstrapService(
            source_control=self.source_control,
            repo_url=context.settings.tool_repo_url,
            echo=self.echo,
        )
        result = service.stage(context.layout.tool_dir)
        if result.staged:
            return StepResult("bootstrap", "ok", f"{result.message}\n{NEW_MACHINE_HINT}")
        return StepResult("bootstrap", result.status, result.message)

    def _announce(self, result: StepResult) -> None:
        if result.status == "failed":
            self.warn(f"WARN: {result.message}")
        else:
            self.echo(result.message)


__all__ = ["StagingContext", "StagingReport", "StagingService", "StepResult"]
