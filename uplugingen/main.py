"""
uplugingen — CLI entrypoint.

Usage:
    uplugingen --help
    uplugingen generate --out-dir Plugins
    uplugingen plan plugin.yml --json
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from uplugingen import __version__
from uplugingen.core.config.loader import PLUGIN_CONFIG_FILE
from uplugingen.core.observability.logging_config import (
    ENV_LOG_FILE,
    ENV_LOG_FILE_LEVEL,
    resolve_level,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="uplugingen")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, debug: bool) -> None:
    """uplugingen — generate engine plugin scaffolding."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_LOG_FILE),
        log_file_level=os.environ.get(ENV_LOG_FILE_LEVEL),
    )


def _load(config_path: Path, as_json: bool):
    """Load plugin.yml or exit with a readable error."""
    from uplugingen.core.config.loader import ConfigError, load_plugin_config

    try:
        return load_plugin_config(config_path)
    except ConfigError as e:
        _fail(str(e), as_json)


def _fail(message: str, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps({"error": message}, indent=2))
    else:
        click.secho(f"❌ {message}", fg="red")
    sys.exit(1)


@cli.command()
@click.argument("config_path", type=click.Path(path_type=Path), default=PLUGIN_CONFIG_FILE)
@click.option(
    "--out-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Output root (default: from plugin.yml or UPLUGINGEN_PROJECT_DIR/UPLUGINGEN_TARGET).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(ctx: click.Context, config_path: Path, out_dir: Path | None, as_json: bool) -> None:
    """Generate the plugin package described by CONFIG_PATH (default: plugin.yml)."""
    from uplugingen.core.config.loader import ConfigError
    from uplugingen.core.services.file_writer import GenerationIOError
    from uplugingen.core.services.template_engine import TemplateError
    from uplugingen.core.use_cases.generate import PluginBuilder

    descriptor = _load(config_path, as_json)
    builder = PluginBuilder.from_descriptor(descriptor)
    if out_dir is not None:
        builder.out_dir(out_dir)

    try:
        result = builder.generate()
    except (ConfigError, TemplateError, GenerationIOError) as e:
        _fail(str(e), as_json)
        return

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if result.skipped:
        click.secho(f"⊘ {result.name} is disabled — nothing generated", fg="yellow")
        return

    click.secho(f"\n🔌 {result.name}", fg="cyan", bold=True)
    click.echo(f"   → {result.package_dir}")
    click.echo(f"   Written: {len(result.written)} | Unchanged: {len(result.unchanged)}")
    if ctx.obj.get("verbose"):
        for path in result.written:
            click.secho(f"     ✓ {path}", fg="green")
        for path in result.unchanged:
            click.echo(f"     = {path}")
    click.echo()


@cli.command()
@click.argument("config_path", type=click.Path(path_type=Path), default=PLUGIN_CONFIG_FILE)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def plan(config_path: Path, as_json: bool) -> None:
    """Show the files CONFIG_PATH would generate, without writing anything."""
    from uplugingen.core.services.planner import plan_package

    descriptor = _load(config_path, as_json)
    package_plan = plan_package(descriptor)

    if as_json:
        click.echo(json.dumps(package_plan.to_dict(), indent=2))
        return

    click.secho(f"\n📋 {package_plan.name}", fg="cyan", bold=True)
    if not descriptor.enabled:
        click.secho("   (disabled — generate would write nothing)", fg="yellow")
    for file in package_plan.files:
        click.echo(f"   • {file.path}  [{file.mode.value}]")
    click.echo()


if __name__ == "__main__":
    cli()
