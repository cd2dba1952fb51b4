import logging
from pathlib import Path
from typing import Callable, Dict, Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from vite_scaffold.commands import PackageManager
from vite_scaffold.config import ScaffoldSettings, load_settings
from vite_scaffold.errors import ScaffoldError
from vite_scaffold.models import OptionSet, RunStatus
from vite_scaffold.options import (
    OPTION_DESCRIPTIONS,
    RECOGNIZED_OPTIONS,
    option_identifiers,
    parse_options,
)
from vite_scaffold.orchestrator import ScaffoldOrchestrator
from vite_scaffold.tui import ScaffoldConsoleUI


PACKAGE_MANAGER_VALUES = [manager.value for manager in PackageManager]


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("vite_scaffold")
    logger.handlers.clear()
    handler = RichHandler(console=Console(stderr=True), show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def _common_options(func: Callable) -> Callable:
    func = click.argument("options", nargs=-1)(func)
    func = click.option(
        "--root",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Project root (defaults to the current directory).",
    )(func)
    func = click.option(
        "--package-manager",
        "package_manager",
        type=click.Choice(PACKAGE_MANAGER_VALUES, case_sensitive=False),
        default=None,
        help="Package manager used for installs.",
    )(func)
    func = click.option(
        "--config",
        "config_path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Settings file (defaults to ~/.config/vite-scaffold/config.yaml).",
    )(func)
    return func


def _resolve_root(root: Optional[Path]) -> Path:
    return (root or Path.cwd()).expanduser().resolve()


def _load_settings(
    root: Path, config_path: Optional[Path], package_manager: Optional[str], backup: Optional[bool] = None
) -> ScaffoldSettings:
    try:
        settings = load_settings(root, config_path=config_path)
    except ScaffoldError as exc:
        raise click.ClickException(str(exc))
    return settings.with_overrides(package_manager=package_manager, backup=backup)


def _collect_options(
    raw: tuple[str, ...], settings: ScaffoldSettings, interactive: bool = False
) -> OptionSet:
    identifiers = list(raw) or list(settings.default_options)
    if interactive:
        from vite_scaffold.tui.option_selector import select_options

        selected = select_options(preselected=identifiers)
        if selected is None:
            raise click.Abort()
        identifiers = selected
    try:
        return parse_options(identifiers)
    except ScaffoldError as exc:
        raise click.ClickException(str(exc))


def _mode_label(mode: str, option_set: OptionSet) -> str:
    names = option_identifiers(option_set)
    return f"{mode} ({', '.join(names)})" if names else f"{mode} (base only)"


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", is_flag=True, help="Log every action.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Scaffold folders, layout and packages into a Vite + React project."""
    ctx.obj = {"verbose": verbose}
    _configure_logging(verbose)


@cli.command(help="Build and print a dry-run plan.")
@_common_options
@click.pass_obj
def plan(
    obj: Dict[str, bool],
    options: tuple[str, ...],
    root: Optional[Path],
    package_manager: Optional[str],
    config_path: Optional[Path],
) -> None:
    ui = ScaffoldConsoleUI(Console())
    project_root = _resolve_root(root)
    settings = _load_settings(project_root, config_path, package_manager)
    option_set = _collect_options(options, settings)

    try:
        plan_result = ScaffoldOrchestrator(root=project_root, settings=settings).plan(option_set)
    except ScaffoldError as exc:
        raise click.ClickException(str(exc))

    ui.render_plan(plan_result, mode=_mode_label("plan", option_set), root=str(project_root), verbose=obj["verbose"])


@cli.command(help="Apply the scaffold plan to the project.")
@_common_options
@click.option("--backup", is_flag=True, help="Back up files before overwriting them.")
@click.option("-i", "--interactive", is_flag=True, help="Pick options in an interactive selector.")
@click.pass_obj
def apply(
    obj: Dict[str, bool],
    options: tuple[str, ...],
    root: Optional[Path],
    package_manager: Optional[str],
    config_path: Optional[Path],
    backup: bool,
    interactive: bool,
) -> None:
    ui = ScaffoldConsoleUI(Console())
    project_root = _resolve_root(root)
    settings = _load_settings(project_root, config_path, package_manager, backup=True if backup else None)
    option_set = _collect_options(options, settings, interactive=interactive)

    orchestrator = ScaffoldOrchestrator(root=project_root, settings=settings)
    try:
        plan_result = orchestrator.plan(option_set)
    except ScaffoldError as exc:
        raise click.ClickException(str(exc))

    ui.render_plan(plan_result, mode=_mode_label("apply", option_set), root=str(project_root), verbose=obj["verbose"])
    report = orchestrator.execute(plan_result)
    ui.render_report(report)

    if report.overall_status == RunStatus.ABORTED or report.has_failures:
        raise click.exceptions.Exit(1)


@cli.command("options", help="List recognized scaffold options.")
def list_options() -> None:
    ui = ScaffoldConsoleUI(Console())
    ui.render_options([(name, OPTION_DESCRIPTIONS[name]) for name in RECOGNIZED_OPTIONS])


def main() -> int:
    try:
        result = cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    except click.exceptions.Abort:
        return 130
    # non-standalone click returns the exit code of Exit instead of raising it
    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
