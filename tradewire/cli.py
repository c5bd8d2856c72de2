from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer

from tradewire.config import AppConfig, load_config
from tradewire.core.contracts import StructuralValidationError
from tradewire.core.serdes import CODECS, WireCodec, get_codec
from tradewire.logging_setup import setup_logging


app = typer.Typer(add_completion=False, help="Validate and convert trading entity wire JSON.")

log = logging.getLogger("tradewire.cli")


def _codec_or_exit(entity: str) -> WireCodec:
    try:
        return get_codec(entity)
    except KeyError:
        typer.echo(f"unknown entity {entity!r}; known: {', '.join(sorted(CODECS))}", err=True)
        raise typer.Exit(code=2)


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        typer.echo(f"cannot read {path}: {e}", err=True)
        raise typer.Exit(code=2)


def _echo_violations(err: StructuralValidationError) -> None:
    for v in err.violations:
        typer.echo(f"  {v.field}: [{v.constraint}] {v.message}")


def _check_file(codec: WireCodec, path: Path) -> bool:
    data = _load_json(path)
    try:
        lost = codec.lost_fields(data)
    except StructuralValidationError as e:
        typer.echo(f"FAIL {path.name} ({codec.entity}): {len(e.violations)} violation(s)")
        _echo_violations(e)
        return False
    if lost:
        typer.echo(f"FAIL {path.name} ({codec.entity}): round trip changed {', '.join(lost)}")
        return False
    typer.echo(f"ok   {path.name} ({codec.entity})")
    return True


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", help="YAML config file"),
) -> None:
    cfg = load_config(config)
    setup_logging(cfg.log)
    ctx.obj = cfg


@app.command()
def validate(
    entity: str = typer.Argument(..., help="Entity name, e.g. order"),
    path: Path = typer.Argument(..., help="JSON file with one wire object"),
) -> None:
    """Validate a wire JSON file and list every violation."""
    codec = _codec_or_exit(entity)
    data = _load_json(path)
    try:
        codec.validate(data)
    except StructuralValidationError as e:
        typer.echo(f"invalid {entity}: {len(e.violations)} violation(s)")
        _echo_violations(e)
        raise typer.Exit(code=1)
    typer.echo(f"valid {entity}")


@app.command()
def roundtrip(
    entity: str = typer.Argument(..., help="Entity name, e.g. position"),
    path: Path = typer.Argument(..., help="JSON file with one wire object"),
    indent: int = typer.Option(2, "--indent", help="JSON indent for output"),
) -> None:
    """Decode a wire JSON file to the runtime model and encode it back."""
    codec = _codec_or_exit(entity)
    data = _load_json(path)
    try:
        model = codec.parse(data)
    except StructuralValidationError as e:
        typer.echo(f"invalid {entity}: {len(e.violations)} violation(s)")
        _echo_violations(e)
        raise typer.Exit(code=1)
    typer.echo(codec.dump_json(model, indent=indent, sort_keys=True))
    lost = codec.lost_fields(data)
    if lost:
        typer.echo(f"round trip changed: {', '.join(lost)}", err=True)
        raise typer.Exit(code=1)


@app.command()
def schema(entity: str = typer.Argument(..., help="Entity name, e.g. fill")) -> None:
    """Print the JSON Schema of an entity."""
    codec = _codec_or_exit(entity)
    typer.echo(json.dumps(codec.validator.schema, indent=2))


@app.command("check-fixtures")
def check_fixtures(
    ctx: typer.Context,
    directory: Optional[Path] = typer.Argument(None, help="Fixture directory (default from config)"),
) -> None:
    """Validate and round-trip every <entity>.json fixture in a directory."""
    cfg: AppConfig = ctx.obj or AppConfig()
    fixtures_dir = directory or Path(cfg.fixtures_dir)
    if not fixtures_dir.is_dir():
        typer.echo(f"fixture directory not found: {fixtures_dir}", err=True)
        raise typer.Exit(code=2)

    checked = 0
    failed = 0
    for path in sorted(fixtures_dir.glob("*.json")):
        if path.stem not in CODECS:
            log.info("fixture_skipped", extra={"file": path.name})
            continue
        checked += 1
        if not _check_file(CODECS[path.stem], path):
            failed += 1

    typer.echo(f"{checked} fixture(s) checked, {failed} failed")
    if failed or not checked:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
