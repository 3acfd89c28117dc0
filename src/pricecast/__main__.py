import json
import logging
import sys

import click

from pricecast.config import Settings
from pricecast.exceptions import PricecastError
from pricecast.logging_config import setup_logging

logger = logging.getLogger(__name__)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool):
    """Pricecast - Monte Carlo price projection and investment recommendation"""
    setup_logging()
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command()
@click.option("--ticker", "-t", default="ASML", show_default=True, help="Ticker symbol")
@click.option("--price", "-p", "current_price", type=float, default=850.0, show_default=True,
              help="Current price per share")
@click.option("--investment", "-i", "investment_amount", type=float, default=10000.0,
              show_default=True, help="Amount invested")
@click.option("--target", "target_amount", type=float, default=15000.0, show_default=True,
              help="Target portfolio value")
@click.option("--simulations", "-n", "simulation_count", type=int, default=None,
              help="Number of simulated paths (default: PC_SIMULATION_DEFAULT_COUNT)")
@click.option("--mu", "drift", type=float, default=None,
              help="Override annualised drift from the asset profile")
@click.option("--sigma", "volatility", type=float, default=None,
              help="Override annualised volatility from the asset profile")
@click.option("--seed", type=click.IntRange(min=0), default=None,
              help="Random seed for a reproducible run")
@click.option("--workers", "max_workers", type=click.IntRange(min=1), default=None,
              help="Worker threads for path generation")
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON")
def simulate(ticker: str, current_price: float, investment_amount: float, target_amount: float,
             simulation_count: int | None, drift: float | None, volatility: float | None,
             seed: int | None, max_workers: int | None, as_json: bool):
    """Run a one-year Monte Carlo projection for a single asset."""
    from pricecast.analysis.simulation import run_for_ticker

    settings = Settings()
    total = simulation_count if simulation_count is not None else settings.simulation_default_count

    try:
        with click.progressbar(length=max(total, 1), label="Simulating", file=sys.stderr) as bar:
            done = 0

            def on_progress(fraction: float):
                nonlocal done
                reached = round(fraction * total)
                bar.update(reached - done)
                done = reached

            result = run_for_ticker(
                ticker,
                current_price=current_price,
                investment_amount=investment_amount,
                target_amount=target_amount,
                simulation_count=simulation_count,
                drift=drift,
                volatility=volatility,
                settings=settings,
                seed=seed,
                max_workers=max_workers,
                progress=on_progress,
            )
    except PricecastError as e:
        logger.error("Simulation failed: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    _print_summary(result)


@cli.command()
@click.argument("ticker")
def profile(ticker: str):
    """Show the asset profile used for TICKER."""
    from pricecast.analysis.assets import lookup_asset_profile

    p = lookup_asset_profile(ticker)
    click.echo(f"{p.ticker}: {p.name}")
    click.echo(f"  Sector:      {p.sector}")
    click.echo(f"  Volatility:  {p.volatility:.2%}")
    click.echo(f"  Growth:      {p.growth:+.2%}")


def _print_summary(result):
    params = result.parameters
    stats = result.statistics
    inv = result.investment
    rec = result.recommendation

    click.echo("=" * 60)
    click.echo(f"  {params.ticker} MONTE CARLO PROJECTION (1 year)")
    click.echo("=" * 60)
    if result.profile is not None:
        click.echo(f"  Asset:          {result.profile.name} ({result.profile.sector})")
    click.echo(f"  Paths:          {stats.count:,}")
    click.echo(f"  Drift (mu):     {params.drift:+.2%} annualized")
    click.echo(f"  Vol (sigma):    {params.volatility:.2%} annualized")
    click.echo(f"  Seed:           {result.seed}")
    click.echo(f"  Current Price:  ${params.current_price:>12,.2f}")
    click.echo("  " + "-" * 56)
    click.echo(f"  Mean Final:     ${stats.mean:>12,.2f}")
    click.echo(f"  Median Final:   ${stats.median:>12,.2f}")
    click.echo(f"  Std Dev:        ${stats.std:>12,.2f}  (CV {stats.coefficient_of_variation:.1f}%)")
    click.echo(f"  Min / Max:      ${stats.min:,.2f} / ${stats.max:,.2f}")
    click.echo(f"  VaR 95%:        ${stats.var_95:>12,.2f}")
    click.echo(f"  VaR 90%:        ${stats.var_90:>12,.2f}")
    click.echo(f"  Prob of Profit: {stats.prob_profit * 100:>8.1f}%")
    click.echo("  " + "-" * 56)
    for point in stats.percentile_table:
        click.echo(f"  {'P' + str(point.percentile):>14}:   ${point.value:>12,.2f}")
    click.echo("  " + "-" * 56)
    click.echo(f"  Shares:             {inv.shares:>12,.4f}")
    click.echo(f"  Avg Final Value:    ${inv.avg_final_value:>12,.2f}")
    click.echo(f"  Expected Return:    {inv.expected_return_pct:>+8.1f}%")
    click.echo(f"  Target Reached:     {inv.prob_target_reached:>8.1f}%  "
               f"(target ${inv.target_amount:,.2f})")
    click.echo(f"  Worst Case (5%):    ${inv.worst_case_5pct:>12,.2f}")
    click.echo(f"  Potential Loss:     ${inv.potential_loss:>12,.2f}")
    click.echo("=" * 60)
    click.echo(f"  Recommendation: {rec.action.label} - {rec.rationale}")


if __name__ == "__main__":
    cli()
