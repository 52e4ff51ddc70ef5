from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, NoReturn, Optional

import click
from tabulate import tabulate

from sitelib.config import Config, ConfigError, load_config
import sitelib.build as build_mod
import sitelib.cursors as cursors_mod
import sitelib.icons as icons_mod
from sitelib.errors import (
    IconMissingError,
    format_config_error,
    format_error_message,
    suggest_troubleshooting_steps,
)


def _load_config_or_exit(log: logging.Logger) -> Config:
    try:
        log.info("Loading config...")
        cfg = load_config()
        log.info("Loaded config from %s", cfg.source_path or "<defaults>")
    except ConfigError as e:
        click.echo(format_config_error(e), err=True)
        raise SystemExit(2)
    return cfg


def _fail(ctx: click.Context, operation: str, error: Exception, context: Dict[str, Any]) -> NoReturn:
    click.echo(format_error_message(operation, error, context), err=True)
    if ctx.obj.get("verbose"):
        suggestions = suggest_troubleshooting_steps(operation, error)
        if suggestions:
            click.echo("\nTroubleshooting suggestions:", err=True)
            for suggestion in suggestions[:3]:  # Show top 3 suggestions
                click.echo(f"  • {suggestion}", err=True)
    raise SystemExit(2)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--json-output",
    "json_output",
    is_flag=True,
    help="Output JSON instead of tables (pretty-printed)",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose logging to stderr (what the CLI is doing)",
)
@click.pass_context
def cli(ctx: click.Context, json_output: bool, verbose: bool) -> None:
    """Static site asset builder.

    Renders icons from an installed icon package, writes cursor SVGs and
    exposes the site metadata record. Configuration is read from
    SITECTL_CONFIG, ./sitectl.yaml or XDG dirs, falling back to defaults.
    """
    ctx.ensure_object(dict)
    ctx.obj["json"] = json_output
    ctx.obj["verbose"] = verbose

    # Configure logging once per process
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


# ICONS commands


@cli.group()
@click.pass_context
def icons(ctx: click.Context) -> None:  # noqa: D401
    """Icon-related commands."""
    pass


@icons.command("show")
@click.argument("icon_name")
@click.option("--size", type=click.IntRange(min=1), default=None, help="Pixel size; config default if omitted")
@click.option("--cursor", is_flag=True, help="Render the recoloured cursor variant")
@click.pass_context
def icons_show(ctx: click.Context, icon_name: str, size: Optional[int], cursor: bool) -> None:
    """Print the rewritten SVG markup for one icon."""
    log = logging.getLogger("sitectl.icons")
    cfg = _load_config_or_exit(log)

    variant = icons_mod.IconVariant.CURSOR if cursor else icons_mod.IconVariant.INLINE
    if size is None:
        size = cfg.cursor_size if cursor else cfg.inline_size

    result = icons_mod.load_icon(
        icon_name,
        size,
        icons_dir=cfg.icons_dir,
        variant=variant,
        inline_class=cfg.inline_class,
    )
    if not result.ok:
        _fail(ctx, "load icon", result.error, {"icon": icon_name, "icons_dir": cfg.icons_dir})

    if ctx.obj.get("json"):
        out = {"name": icon_name, "variant": variant.value, "size": size, "markup": result.markup}
        click.echo(json.dumps(out, indent=2, sort_keys=True))
        return

    click.echo(result.markup)


@icons.command("list")
@click.pass_context
def icons_list(ctx: click.Context) -> None:
    """List the exported inline icons and whether each one resolves."""
    log = logging.getLogger("sitectl.icons")
    cfg = _load_config_or_exit(log)

    results = icons_mod.collect_icon_results(cfg)
    rows = [[key, r.name, r.status.value, cfg.inline_size] for key, r in results.items()]

    if ctx.obj.get("json"):
        out = {
            "icons_dir": str(cfg.icons_dir),
            "icons": [
                {"key": r[0], "source": r[1], "status": r[2], "size": r[3]}
                for r in rows
            ],
        }
        click.echo(json.dumps(out, indent=2, sort_keys=True))
        return

    if not rows:
        click.echo("No icons configured")
        return

    log.info("Rendering %d icons", len(rows))
    click.echo(tabulate(rows, headers=["KEY", "ICON", "STATUS", "SIZE"]))


# CURSORS commands


@cli.group()
@click.pass_context
def cursors(ctx: click.Context) -> None:  # noqa: D401
    """Cursor file commands."""
    pass


@cursors.command("generate")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory to write cursor SVGs to; output_dir from config if omitted",
)
@click.pass_context
def cursors_generate(ctx: click.Context, output_dir: Optional[Path]) -> None:
    """Write the cursor SVG files, overwriting existing ones."""
    log = logging.getLogger("sitectl.cursors")
    cfg = _load_config_or_exit(log)
    target = output_dir or cfg.output_dir

    try:
        log.info("Generating %d cursors into %s", len(cfg.cursors), target)
        written = cursors_mod.generate_cursor_files(cfg, target)
    except OSError as e:
        _fail(ctx, "write cursor files", e, {"output_dir": target})

    if ctx.obj.get("json"):
        out = {
            "output_dir": str(target),
            "cursors": [
                {
                    "name": c.name,
                    "source": c.source,
                    "path": str(c.path),
                    "bytes": c.size_bytes,
                    "status": c.result.status.value,
                }
                for c in written
            ],
        }
        click.echo(json.dumps(out, indent=2, sort_keys=True))
        return

    rows = [[c.name, c.source, str(c.path), c.size_bytes, c.result.status.value] for c in written]
    click.echo(tabulate(rows, headers=["NAME", "SOURCE", "PATH", "BYTES", "STATUS"]))


# METADATA / CONFIG commands


@cli.group()
@click.pass_context
def metadata(ctx: click.Context) -> None:  # noqa: D401
    """Site metadata commands."""
    pass


@metadata.command("show")
@click.pass_context
def metadata_show(ctx: click.Context) -> None:
    """Show the site metadata record."""
    log = logging.getLogger("sitectl.metadata")
    cfg = _load_config_or_exit(log)
    data = cfg.metadata.to_dict()

    if ctx.obj.get("json"):
        click.echo(json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False))
        return

    rows = []
    for key, value in data.items():
        if isinstance(value, dict):
            rows.extend([f"{key}.{k}", v] for k, v in value.items())
        elif isinstance(value, list):
            rows.append([key, ", ".join(value) or "—"])
        else:
            rows.append([key, value or "—"])
    click.echo(tabulate(rows, headers=["FIELD", "VALUE"]))


@cli.group("config")
@click.pass_context
def config_group(ctx: click.Context) -> None:  # noqa: D401
    """Configuration commands."""
    pass


@config_group.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show the effective configuration."""
    log = logging.getLogger("sitectl.config")
    cfg = _load_config_or_exit(log)

    if ctx.obj.get("json"):
        click.echo(cfg.to_json())
        return

    rows = [
        ["source", str(cfg.source_path) if cfg.source_path else "(defaults)"],
        ["icons_dir", str(cfg.icons_dir)],
        ["output_dir", str(cfg.output_dir)],
        ["data_dir", str(cfg.data_dir) if cfg.data_dir else "—"],
        ["inline_size", cfg.inline_size],
        ["cursor_size", cfg.cursor_size],
        ["inline_class", cfg.inline_class],
        ["inline_icons", ", ".join(f"{k}={v}" for k, v in cfg.inline_icons.items()) or "—"],
        ["cursors", ", ".join(f"{k}={v}" for k, v in cfg.cursors.items()) or "—"],
    ]
    click.echo(tabulate(rows, headers=["FIELD", "VALUE"]))


# BUILD


@cli.command("build")
@click.option("--strict", is_flag=True, help="Fail the build if any icon is missing or unreadable")
@click.pass_context
def build(ctx: click.Context, strict: bool) -> None:
    """Generate cursor files and, if data_dir is set, the template data files."""
    log = logging.getLogger("sitectl.build")
    cfg = _load_config_or_exit(log)

    try:
        report = build_mod.run_build(cfg, strict=strict)
    except IconMissingError as e:
        _fail(ctx, "build site assets", e, {"icons_dir": cfg.icons_dir})
    except OSError as e:
        _fail(ctx, "build site assets", e, {"output_dir": cfg.output_dir})

    if ctx.obj.get("json"):
        out = {
            "cursors": [str(c.path) for c in report.cursor_files],
            "icons": {key: r.status.value for key, r in report.icons.items()},
            "data_files": [str(p) for p in report.data_files],
            "failures": report.failures,
        }
        click.echo(json.dumps(out, indent=2, sort_keys=True))
        return

    rows = [["cursor", str(c.path), c.result.status.value] for c in report.cursor_files]
    rows.extend(["icon", key, r.status.value] for key, r in report.icons.items())
    rows.extend(["data", str(p), "ok"] for p in report.data_files)
    click.echo(tabulate(rows, headers=["KIND", "TARGET", "STATUS"]))
    if report.failures:
        click.echo(f"{len(report.failures)} icon(s) missing: {', '.join(report.failures)}", err=True)


def main() -> None:  # entry point
    cli(standalone_mode=True)


if __name__ == "__main__":  # pragma: no cover
    main()
