"""Analyze CLI command wiring."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Sequence

import typer
from rich.console import Console
from rich.table import Table

from option_strategy_engine.analysis.facade import AnalysisFacade
from option_strategy_engine.cli.validation import validate_analyze_inputs
from option_strategy_engine.config.settings import load_config
from option_strategy_engine.data.ladder_loader import load_ladder
from option_strategy_engine.models.market import MarketInputs, demo_ladder, demo_market
from option_strategy_engine.models.strategy import ENTRY_KEYS, AnalysisResult, Candidate
from option_strategy_engine.utils.logging import get_logger

console = Console()
log = get_logger(__name__, component="cli.analyze")

INSUFFICIENT_STRIKES_EXIT = 3


def _candidate_table(title: str, candidates: Sequence[Candidate]) -> Table:
    table = Table(title=title)
    table.add_column("Strategy")
    table.add_column("Entry", justify="right")
    table.add_column("Max Gain", justify="right")
    table.add_column("Max Loss", justify="right")
    table.add_column("% Gain", justify="right")
    table.add_column("% Loss", justify="right")
    table.add_column("R/R", justify="right")
    for candidate in candidates:
        row = candidate.to_formatted_dict()
        gain_style = "green" if candidate.percent_gain >= 0 else "red"
        table.add_row(
            row["description"],
            f"${row[ENTRY_KEYS[candidate.entry_kind]]}",
            row["maxGain"] if candidate.is_unbounded else f"${row['maxGain']}",
            f"${row['maxLoss']}",
            f"[{gain_style}]{row['percentGain']}%[/{gain_style}]",
            f"[red]{row['percentLoss']}%[/red]",
            row["rewardRiskRatio"],
        )
    return table


def _render(result: AnalysisResult, inputs: MarketInputs, top: int) -> None:
    header = f"[bold cyan]{result.family.label}[/bold cyan]"
    if inputs.symbol:
        header += f" on {inputs.symbol}"
    console.print(
        f"{header} (spot={inputs.spot_price:.2f}, vol={inputs.implied_vol * 100:.1f}%, "
        f"days={inputs.days_to_expiration})"
    )
    if result.all:
        first = result.all[0]
        console.print(f"Scenario prices: up {first.stock_up:.2f} / down {first.stock_down:.2f}")
    console.print(_candidate_table(f"Top {top} by reward", result.by_reward[:top]))
    console.print(_candidate_table(f"Top {top} by reward/risk", result.by_ratio[:top]))
    console.print(_candidate_table(f"All candidates ({len(result.all)} shown)", result.all))


def analyze(
    family: str = typer.Option("single_call", "--family", "-f", help="Strategy family to analyze"),
    spot: Optional[float] = typer.Option(None, "--spot", help="Current stock price"),
    vol: Optional[float] = typer.Option(None, "--vol", help="Implied volatility in percent (e.g. 35)"),
    days: Optional[int] = typer.Option(None, "--days", help="Days to expiration"),
    symbol: Optional[str] = typer.Option(None, "--symbol", help="Optional ticker label"),
    ladder: Optional[Path] = typer.Option(None, "--ladder", help="CSV/JSON/YAML strike ladder"),
    config: Optional[Path] = typer.Option(None, "--config", help="Optional engine config (YAML/JSON)"),
    full: bool = typer.Option(False, "--full", help="Disable result truncation"),
    as_json: bool = typer.Option(False, "--json", help="Print the formatted result as JSON"),
    top: int = typer.Option(3, "--top", help="Rows shown in each ranked table"),
    output: Optional[Path] = typer.Option(None, "--output", help="Also write the JSON result to this file"),
) -> None:
    """Price, project and rank every candidate of one strategy family."""

    validate_analyze_inputs(spot=spot, vol=vol, days=days, top=top)
    engine_config = load_config(config)

    if spot is None:
        inputs = demo_market()
        if symbol:
            inputs = MarketInputs(inputs.spot_price, inputs.implied_vol, inputs.days_to_expiration, symbol.upper())
    else:
        inputs = MarketInputs.from_percent_vol(spot, vol, days, symbol=symbol)
    strike_ladder = load_ladder(ladder) if ladder else demo_ladder()

    result = AnalysisFacade(engine_config).analyze(inputs, strike_ladder, family, full=full)
    payload = result.to_formatted_dict()
    payload["inputs"] = {
        "symbol": inputs.symbol,
        "spotPrice": f"{inputs.spot_price:.2f}",
        "impliedVol": f"{inputs.implied_vol * 100:.1f}",
        "daysToExpiration": inputs.days_to_expiration,
    }

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json.dumps(payload, indent=2))
        log.info("analysis written", extra={"family": result.family.value})

    if as_json:
        typer.echo(json.dumps(payload, indent=2))
    elif result.ok:
        _render(result, inputs, top)

    if not result.ok:
        if not as_json:
            console.print(f"[red]{result.error}[/red]")
        raise typer.Exit(code=INSUFFICIENT_STRIKES_EXIT)
