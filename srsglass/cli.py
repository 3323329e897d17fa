#!filepath: srsglass/cli.py
from pathlib import Path
from typing import Optional

import pydantic
import typer
from rich import print
from rich.markup import escape
from rich.table import Table

from srsglass import logs, __version__
from srsglass.config.app_config import AppConfig
from srsglass.config.update_config import UpdateConfig
from srsglass.utils.errors import SrsglassError, UserInputError

app = typer.Typer(help="Generate NationStates region update timesheets")


def _load_config(
    config: Optional[Path],
    major: Optional[int],
    minor: Optional[int],
    precision: Optional[int],
) -> AppConfig:
    cfg = AppConfig.load(str(config) if config else None)
    logs.reconfigure(cfg.log.dir, cfg.log.rotation, cfg.log.retention, cfg.log.level)

    overrides = {
        "major_length": major,
        "minor_length": minor,
        "precision": precision,
    }
    merged = cfg.update.model_dump()
    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        cfg.update = UpdateConfig(**merged)
    except pydantic.ValidationError as e:
        raise UserInputError(f"invalid update configuration: {e}") from e
    return cfg


def _fail(e: SrsglassError) -> None:
    logs.error(f"[CLI] {type(e).__name__}: {e}")
    print(f"[red]{type(e).__name__}: {escape(str(e))}[/red]")
    raise typer.Exit(code=1)


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def run(
    nation: Optional[str] = typer.Option(
        None, "--nation", "-n", help="Your nation, to identify you to NationStates"
    ),
    outfile: Optional[Path] = typer.Option(
        None, "--outfile", "-o", help="Output file [default: spyglassYYYY-MM-DD.xlsx]"
    ),
    major: Optional[int] = typer.Option(None, "--major", help="Length of major update, in seconds"),
    minor: Optional[int] = typer.Option(None, "--minor", help="Length of minor update, in seconds"),
    use_dump: bool = typer.Option(
        False, "--dump", "-d", help="Use the existing data dump instead of downloading"
    ),
    path: Optional[Path] = typer.Option(None, "--path", "-p", help="Path to the data dump"),
    precision: Optional[int] = typer.Option(
        None, "--precision", help="Number of fractional second digits in timestamps"
    ),
    parallel: bool = typer.Option(False, "--parallel", help="Compute major and minor on two threads"),
    config: Optional[Path] = typer.Option(None, "--config", help="Alternative YAML config"),
):
    """
    下载（或复用）dump，计算 major / minor 时间表并写出 timesheet
    """
    from srsglass.engines.dump_source_engine import DumpSourceEngine
    from srsglass.workflows.timesheet import run_timesheet

    try:
        cfg = _load_config(config, major, minor, precision)
        user_nation = DumpSourceEngine.require_nation(nation or cfg.secret.user_nation)

        print(f"[green]Running srsglass with user nation {user_nation}[/green]")

        ctx = run_timesheet(
            cfg,
            user_nation=user_nation,
            dump_path=path,
            use_existing=use_dump or None,
            out_path=outfile,
            parallel=parallel,
        )
    except SrsglassError as e:
        _fail(e)
        return

    print(f"[green]Saved timesheet to {ctx.output_file}[/green]")


@app.command()
def schedule(
    path: Path = typer.Argument(..., help="Local regions.xml.gz"),
    major: Optional[int] = typer.Option(None, "--major"),
    minor: Optional[int] = typer.Option(None, "--minor"),
    precision: Optional[int] = typer.Option(None, "--precision"),
    limit: int = typer.Option(20, "--limit", help="Rows to print"),
    config: Optional[Path] = typer.Option(None, "--config"),
):
    """
    只解码本地 dump 并打印前几行时间表（不联网，不写文件）
    """
    from srsglass.engines.dump_parser_engine import DumpParserEngine
    from srsglass.engines.timesheet_engine import format_offset
    from srsglass.engines.update_schedule_engine import UpdateScheduleEngine

    try:
        cfg = _load_config(config, major, minor, precision)
        if not path.exists():
            raise UserInputError(f"dump not found: {path}")

        regions = tuple(DumpParserEngine().parse_file(path))
        major_sched, minor_sched = UpdateScheduleEngine().schedule(
            regions, cfg.update.major(), cfg.update.minor()
        )
    except SrsglassError as e:
        _fail(e)
        return

    p = cfg.update.precision
    table = Table(title=f"{path.name}: {len(regions)} regions")
    for col in ("#", "Region", "Population", "Minor", "Major"):
        table.add_column(col)

    for major_entry, minor_entry in list(zip(major_sched, minor_sched))[:limit]:
        region = major_entry.region
        table.add_row(
            str(region.order_index),
            region.name,
            str(region.nation_count),
            format_offset(minor_entry.start_offset, p),
            format_offset(major_entry.start_offset, p),
        )
    print(table)


if __name__ == "__main__":
    app()

# python -m srsglass.cli run -n "My Nation"
