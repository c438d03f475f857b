"""
crop-planner: CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load and validate input records.
  4. Run the recommendation engine.
  5. Report result to stdout (and optionally write report files).

Install and run::

    pip install -e .
    crop-planner --help
    crop-planner validate-config
    crop-planner list-crops --category vegetable
    crop-planner recommend --field field.json --plantings plantings.json
    crop-planner avoid --field field.json --plantings plantings.json
    crop-planner alternatives --field field.json
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="crop-planner",
    help="Crop rotation and planting recommendations for a field.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from crop_planner.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from crop_planner.utils.logging import configure_logging
    configure_logging(config.logging)


def _parse_as_of(as_of: Optional[str]) -> Optional[date]:
    if as_of is None:
        return None
    try:
        return date.fromisoformat(as_of)
    except ValueError:
        typer.echo(f"[ERROR] Invalid --as-of date '{as_of}'. Use YYYY-MM-DD.", err=True)
        raise typer.Exit(code=1)


def _load_inputs_or_exit(
    field_file: str,
    plantings_file: Optional[str],
    catalog_file: Optional[str],
    config,
):
    """Load field, plantings and catalog, exiting with code 1 on any error."""
    from crop_planner.catalog.loader import resolve_catalog
    from crop_planner.ingestion.records import load_field, load_plantings

    try:
        field = load_field(Path(field_file))
        plantings = load_plantings(Path(plantings_file)) if plantings_file else []
        crops = resolve_catalog(catalog_file or config.catalog.path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] File not found: {exc.filename or exc}", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    return field, plantings, crops


def _report_write_failed(exc: OSError) -> None:
    typer.echo(f"[ERROR] Could not write report: {exc}", err=True)
    raise typer.Exit(code=1)


def _echo_recommendation(rank: int, rec) -> None:
    typer.echo(f"{rank:>3}. {rec.crop_name:<24} score {rec.score:>3}")
    for reason in rec.reasons:
        typer.echo(f"       + {reason}")
    for benefit in rec.benefits:
        typer.echo(f"       * {benefit}")
    for warning in rec.warnings:
        typer.echo(f"       ! {warning}")


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)
    rec = config.recommendations

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Catalog:            {config.catalog.path or '(packaged)'}")
    typer.echo(f"  Recent plantings:   {rec.recent_plantings_window}")
    typer.echo(f"  Replant warning:    {rec.replant_warning_months} months")
    typer.echo(f"  Avoid look-back:    {rec.avoid_history_months} months")
    typer.echo(f"  Log level:          {config.logging.level}")
    typer.echo(f"  Debug mode:         {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("list-crops")
def list_crops(
    catalog_file: Optional[str] = typer.Option(
        None, "--catalog", help="Crop catalog JSON (default: packaged catalog)."
    ),
    category: Optional[str] = typer.Option(
        None, "--category", help="Only show crops in this category (e.g. vegetable)."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """List the crops the engine can recommend."""
    from crop_planner.catalog.loader import resolve_catalog

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        crops = resolve_catalog(catalog_file or config.catalog.path)
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    shown = [c for c in crops if category is None or c.category.value == category.lower()]
    for crop in shown:
        typer.echo(
            f"  {crop.crop_id:<16} {crop.name:<20} {crop.category.value:<10} "
            f"pH {crop.ph_range_label()}"
        )
    typer.echo(f"{len(shown)} crop(s).")


@app.command("recommend")
def recommend(
    field_file: str = typer.Option(..., "--field", "-f", help="Field JSON file."),
    plantings_file: Optional[str] = typer.Option(
        None, "--plantings", "-p", help="Plantings JSON array (any field)."
    ),
    catalog_file: Optional[str] = typer.Option(
        None, "--catalog", help="Crop catalog JSON (default: packaged catalog)."
    ),
    top: Optional[int] = typer.Option(
        None, "--top", "-n", help="Rows to print (default: config top_n)."
    ),
    as_of: Optional[str] = typer.Option(
        None, "--as-of", help="Reference date YYYY-MM-DD (default: today)."
    ),
    output_dir: Optional[str] = typer.Option(
        None, "--output-dir", "-o", help="Also write CSV + JSON reports here."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Score every catalog crop for a field and print the best matches."""
    from crop_planner.recommendations.engine import get_recommendations
    from crop_planner.recommendations.reporter import (
        write_recommendations_csv,
        write_recommendations_json,
    )

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    ref_date = _parse_as_of(as_of)

    field, plantings, crops = _load_inputs_or_exit(
        field_file, plantings_file, catalog_file, config
    )
    results = get_recommendations(
        field, plantings, crops, as_of=ref_date, config=config.recommendations
    )

    limit = top if top is not None else config.recommendations.top_n
    typer.echo(f"Recommendations for field {field.field_id} (pH {field.current_ph:.1f}):")
    for rank, rec in enumerate(results[:limit], start=1):
        _echo_recommendation(rank, rec)

    if output_dir:
        out = Path(output_dir)
        try:
            csv_path = write_recommendations_csv(results, out, field.field_id, ref_date)
            json_path = write_recommendations_json(results, out, field.field_id, ref_date)
        except OSError as exc:
            _report_write_failed(exc)
        typer.echo(f"  CSV:  {csv_path}")
        typer.echo(f"  JSON: {json_path}")


@app.command("avoid")
def avoid(
    field_file: str = typer.Option(..., "--field", "-f", help="Field JSON file."),
    plantings_file: Optional[str] = typer.Option(
        None, "--plantings", "-p", help="Plantings JSON array (any field)."
    ),
    catalog_file: Optional[str] = typer.Option(
        None, "--catalog", help="Crop catalog JSON (default: packaged catalog)."
    ),
    as_of: Optional[str] = typer.Option(
        None, "--as-of", help="Reference date YYYY-MM-DD (default: today)."
    ),
    output_dir: Optional[str] = typer.Option(
        None, "--output-dir", "-o", help="Also write a JSON report here."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """List crops that should not be planted in a field, highest risk first."""
    from crop_planner.recommendations.engine import get_crops_to_avoid
    from crop_planner.recommendations.reporter import write_crops_to_avoid_json

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    ref_date = _parse_as_of(as_of)

    field, plantings, crops = _load_inputs_or_exit(
        field_file, plantings_file, catalog_file, config
    )
    results = get_crops_to_avoid(
        field, plantings, crops, as_of=ref_date, config=config.recommendations
    )

    if not results:
        typer.echo(f"No crops to avoid for field {field.field_id}.")
    for entry in results:
        typer.echo(f"  [{entry.risk_level.value.upper():<6}] {entry.crop_name}")
        for reason in entry.reasons:
            typer.echo(f"           - {reason}")

    if output_dir:
        try:
            json_path = write_crops_to_avoid_json(
                results, Path(output_dir), field.field_id, ref_date
            )
        except OSError as exc:
            _report_write_failed(exc)
        typer.echo(f"  JSON: {json_path}")


@app.command("alternatives")
def alternatives(
    field_file: str = typer.Option(..., "--field", "-f", help="Field JSON file."),
    catalog_file: Optional[str] = typer.Option(
        None, "--catalog", help="Crop catalog JSON (default: packaged catalog)."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Show crops resistant to every active pest/disease issue in a field."""
    from crop_planner.recommendations.engine import get_resistant_alternatives

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    field, _, crops = _load_inputs_or_exit(field_file, None, catalog_file, config)
    if not field.active_issues:
        typer.echo(f"Field {field.field_id} has no active pest/disease issues.")
        return

    results = get_resistant_alternatives(field, crops)
    if not results:
        typer.echo("Every catalog crop is susceptible to at least one active issue.")
    for rank, rec in enumerate(results, start=1):
        _echo_recommendation(rank, rec)


if __name__ == "__main__":
    app()
