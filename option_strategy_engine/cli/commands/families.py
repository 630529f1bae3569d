"""List the supported strategy families."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from option_strategy_engine.config.settings import default_caps
from option_strategy_engine.models.strategy import StrategyFamily

console = Console()


def families() -> None:
    """Show every strategy family with its leg count and default result caps."""

    caps = default_caps()
    table = Table(title="Strategy families")
    table.add_column("Family")
    table.add_column("Label")
    table.add_column("Category")
    table.add_column("Legs", justify="right")
    table.add_column("Caps (all/ranked)", justify="right")
    for family in StrategyFamily:
        family_caps = caps.get(family)
        limits = f"{family_caps.all_limit}/{family_caps.ranked_limit}" if family_caps else "-"
        table.add_row(family.value, family.label, family.category, str(family.leg_count), limits)
    console.print(table)
    typer.echo(f"{len(StrategyFamily)} families available")
