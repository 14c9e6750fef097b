"""CLI interface for the technology trend engine."""

import csv
import json
import logging
from datetime import date, timedelta
from pathlib import Path

import typer
from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.table import Table

from trend_engine.analysis.anomaly import detect_anomalies, signals_from_row
from trend_engine.analysis.momentum import analyze_momentum, compute_legacy_momentum
from trend_engine.consts import DEFAULT_DATA_DIR, HISTORY_WINDOW_DAYS
from trend_engine.models.model_analysis import AnomalySeverity
from trend_engine.models.model_metrics import RawMetric, Technology
from trend_engine.models.model_scores import ScorePoint, ScoreRow
from trend_engine.pipeline import run_scoring_pipeline
from trend_engine.storage.file_store import FileScoreStore

app = typer.Typer(
    name="trend",
    help="Technology trend engine - score, track and flag technology popularity signals",
)

console = Console()

# Days between a data point and the prior reading used for download growth
PRIOR_OFFSET_DAYS = 7

SEVERITY_COLORS = {
    AnomalySeverity.INFO: "dim",
    AnomalySeverity.NOTABLE: "yellow",
    AnomalySeverity.SIGNIFICANT: "red",
    AnomalySeverity.CRITICAL: "bold red",
}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _get_score_color(score: float) -> str:
    """Get color for score display."""
    if score >= 70:
        return "green"
    elif score >= 40:
        return "yellow"
    else:
        return "red"


def _fmt(score: float | None) -> str:
    return "-" if score is None else f"{score:.1f}"


def _parse_date(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        console.print(f"[red]Error:[/red] Invalid date '{value}'. Use YYYY-MM-DD.")
        raise typer.Exit(1)


def _load_json_list(path: Path, model: type) -> list:
    """Load a JSON array file into a list of pydantic models."""
    if not path.exists():
        console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(1)
    try:
        return TypeAdapter(list[model]).validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        console.print(f"[red]Error:[/red] Invalid records in {path}:\n{e}")
        raise typer.Exit(1)


def _resolve_date(store: FileScoreStore, value: str | None) -> date:
    """Use the given date, or the latest stored one."""
    parsed = _parse_date(value)
    if parsed is not None:
        return parsed
    latest = store.latest_date()
    if latest is None:
        console.print("[yellow]No stored scores found. Run 'trend score' first.[/yellow]")
        raise typer.Exit(1)
    return latest


@app.command()
def score(
    data_points_file: Path = typer.Argument(..., help="JSON array of raw metrics"),
    technologies_file: Path = typer.Option(
        ..., "--technologies", "-t", help="JSON array of technologies"
    ),
    score_date: str = typer.Option(
        None, "--date", "-d", help="Date to score (YYYY-MM-DD). Defaults to latest data point."
    ),
    data_dir: Path = typer.Option(DEFAULT_DATA_DIR, "--data-dir", help="Score store directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Score a day of raw metrics and store the results.

    Data points measured one week before the scoring date are used as the
    prior reading for download growth.
    """
    _configure_logging(verbose)

    technologies = _load_json_list(technologies_file, Technology)
    data_points = _load_json_list(data_points_file, RawMetric)

    if not data_points:
        console.print("[yellow]No data points to score.[/yellow]")
        raise typer.Exit(1)

    day = _parse_date(score_date) or max(dp.measured_at for dp in data_points)
    prior_day = day - timedelta(days=PRIOR_OFFSET_DAYS)
    today_points = [dp for dp in data_points if dp.measured_at == day]
    prior_points = [dp for dp in data_points if dp.measured_at == prior_day]

    store = FileScoreStore(data_dir)
    history = store.load_all_history([t.id for t in technologies], day, HISTORY_WINDOW_DAYS)

    console.print(f"\n[bold]Scoring {len(technologies)} technologies for {day}...[/bold]\n")

    result = run_scoring_pipeline(
        technologies,
        today_points,
        day,
        history=history,
        prior_data_points=prior_points,
    )

    store.save_scores(day, result.rows)
    store.save_momentum(day, result.momentum_records)

    table = Table(title=f"Scores for {day}")
    table.add_column("Technology", style="cyan")
    table.add_column("Composite", justify="right")
    table.add_column("Hosting", justify="right")
    table.add_column("Community", justify="right")
    table.add_column("Jobs", justify="right")
    table.add_column("Ecosystem", justify="right")
    table.add_column("Momentum", justify="right")
    table.add_column("Complete", justify="right")

    for row in sorted(result.rows, key=lambda r: r.composite_score, reverse=True):
        color = _get_score_color(row.composite_score)
        table.add_row(
            row.technology_id,
            f"[{color}]{row.composite_score:.1f}[/{color}]",
            _fmt(row.code_hosting_score),
            _fmt(row.community_score),
            _fmt(row.jobs_score),
            _fmt(row.ecosystem_score),
            f"{row.momentum:+.1f}",
            f"{row.data_completeness:.0%}",
        )

    console.print(table)
    console.print(f"\nAnomalies detected: {result.anomaly_count}")

    if result.errors:
        console.print(f"\n[yellow]Failed technologies ({len(result.errors)}):[/yellow]")
        for error in result.errors:
            console.print(f"  [dim]{error.technology_id} ({error.stage}):[/dim] {error.message[:80]}")
        raise typer.Exit(1)


@app.command()
def momentum(
    technology_id: str = typer.Argument(..., help="Technology to analyze"),
    score_date: str = typer.Option(None, "--date", "-d", help="Analysis date (YYYY-MM-DD)"),
    data_dir: Path = typer.Option(DEFAULT_DATA_DIR, "--data-dir", help="Score store directory"),
) -> None:
    """Show momentum analysis for a technology from stored history."""
    store = FileScoreStore(data_dir)
    day = _resolve_date(store, score_date)

    rows = store.load_history(technology_id, day + timedelta(days=1), HISTORY_WINDOW_DAYS)
    if not rows:
        console.print(f"[yellow]No history found for '{technology_id}'[/yellow]")
        raise typer.Exit(1)

    analysis = analyze_momentum([ScorePoint(date=r.score_date, score=r.composite_score) for r in rows])

    table = Table(title=f"Momentum for {technology_id} ({len(rows)} days to {day})")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Trend", analysis.trend.value)
    table.add_row("Short term (7d)", f"{analysis.short_term:+.3f}")
    table.add_row("Medium term (30d)", f"{analysis.medium_term:+.3f}")
    table.add_row("Long term (90d)", f"{analysis.long_term:+.3f}")
    table.add_row("Acceleration", f"{analysis.acceleration:+.3f}")
    table.add_row("Volatility", f"{analysis.volatility:.3f}")
    table.add_row("Streak", str(analysis.streak))
    table.add_row("Confidence", f"{analysis.confidence:.2f}")
    table.add_row("Legacy momentum", f"{compute_legacy_momentum(analysis):+.1f}")

    console.print(table)


@app.command()
def anomalies(
    score_date: str = typer.Option(None, "--date", "-d", help="Date to check (YYYY-MM-DD)"),
    data_dir: Path = typer.Option(DEFAULT_DATA_DIR, "--data-dir", help="Score store directory"),
) -> None:
    """Show anomalies for stored scores against their history."""
    store = FileScoreStore(data_dir)
    day = _resolve_date(store, score_date)

    rows = store.load_scores(day)
    if not rows:
        console.print(f"[yellow]No scores stored for {day}[/yellow]")
        raise typer.Exit(1)

    history = store.load_all_history([r.technology_id for r in rows], day, HISTORY_WINDOW_DAYS)

    table = Table(title=f"Anomalies for {day}")
    table.add_column("Technology", style="cyan")
    table.add_column("Type")
    table.add_column("Severity")
    table.add_column("Metric")
    table.add_column("Expected", justify="right")
    table.add_column("Actual", justify="right")
    table.add_column("Sigma", justify="right")

    found = 0
    for row in rows:
        for anomaly in detect_anomalies(row, history[row.technology_id], signals_from_row(row)):
            found += 1
            color = SEVERITY_COLORS[anomaly.severity]
            sigma = f"{anomaly.deviation_sigma:.2f}"
            if not anomaly.is_true_sigma:
                sigma += "*"
            table.add_row(
                row.technology_id,
                anomaly.type.value,
                f"[{color}]{anomaly.severity.value}[/{color}]",
                anomaly.metric,
                f"{anomaly.expected_value:.1f}",
                f"{anomaly.actual_value:.1f}",
                sigma,
            )

    if not found:
        console.print(f"[green]No anomalies for {day}[/green]")
        return

    console.print(table)
    console.print("[dim]* magnitude-based, not a true z-score[/dim]")


@app.command()
def export(
    format: str = typer.Option("json", "--format", "-f", help="Export format (json, csv)"),
    output: Path = typer.Option(Path("scores.json"), "--output", "-o", help="Output file path"),
    score_date: str = typer.Option(None, "--date", "-d", help="Date to export (YYYY-MM-DD)"),
    data_dir: Path = typer.Option(DEFAULT_DATA_DIR, "--data-dir", help="Score store directory"),
) -> None:
    """Export stored scores for a date to a file."""
    if format not in ("json", "csv"):
        console.print(f"[red]Error:[/red] Unsupported format '{format}'. Use 'json' or 'csv'.")
        raise typer.Exit(1)

    store = FileScoreStore(data_dir)
    day = _resolve_date(store, score_date)
    rows = store.load_scores(day)

    if not rows:
        console.print(f"[yellow]No scores found to export for {day}.[/yellow]")
        return

    try:
        if format == "json":
            data = [row.model_dump(mode="json") for row in rows]
            output.write_text(json.dumps(data, indent=2), encoding="utf-8")
        else:
            _write_csv(output, rows)
    except OSError as e:
        console.print(f"[red]Error exporting:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]Exported {len(rows)} scores to {output}[/green]")


def _write_csv(path: Path, rows: list[ScoreRow]) -> None:
    """Write score rows as a flat CSV."""
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)

        writer.writerow([
            "technology_id",
            "score_date",
            "composite_score",
            "code_hosting_score",
            "community_score",
            "jobs_score",
            "ecosystem_score",
            "onchain_score",
            "momentum",
            "data_completeness",
            "trend",
            "lifecycle_stage",
            "confidence_grade",
        ])

        for row in rows:
            raw = row.raw_sub_scores
            writer.writerow([
                row.technology_id,
                row.score_date.isoformat(),
                row.composite_score,
                "" if row.code_hosting_score is None else row.code_hosting_score,
                "" if row.community_score is None else row.community_score,
                "" if row.jobs_score is None else row.jobs_score,
                "" if row.ecosystem_score is None else row.ecosystem_score,
                "" if row.onchain_score is None else row.onchain_score,
                row.momentum,
                row.data_completeness,
                raw.momentum_detail.trend.value if raw.momentum_detail else "",
                raw.lifecycle.stage.value if raw.lifecycle else "",
                raw.confidence.grade.value if raw.confidence else "",
            ])


if __name__ == "__main__":
    app()
