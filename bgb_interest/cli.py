"""CLI for base rates and default interest calculations.

Usage:
    bgb-interest --refresh rates
    bgb-interest calculate 10000 2023-01-15 2024-03-01 --business
    bgb-interest calculate 1000 2023-02-01 2023-06-01 --payment 2023-04-02:500 --split-by-year
"""

import argparse
import asyncio
import logging
import sys
from datetime import date
from decimal import Decimal, InvalidOperation

from bgb_interest.config import settings
from bgb_interest.data.provider import BaseRateProvider
from bgb_interest.engine.calculator import InterestCalculator
from bgb_interest.errors import InterestError
from bgb_interest.models.interest import CalculationResult, PartialPayment
from bgb_interest.models.rates import RateSeries


def _eur(v) -> str:
    return f"{float(v):,.2f} EUR"


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date (expected YYYY-MM-DD): {value}") from None


def _parse_amount(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {value}") from None


def _parse_payment(value: str) -> PartialPayment:
    """Parse ``YYYY-MM-DD:AMOUNT``."""
    day, sep, amount = value.partition(":")
    if not sep:
        raise argparse.ArgumentTypeError(f"invalid payment (expected YYYY-MM-DD:AMOUNT): {value}")
    try:
        return PartialPayment(date=_parse_date(day), amount=_parse_amount(amount))
    except argparse.ArgumentTypeError:
        raise argparse.ArgumentTypeError(f"invalid payment (expected YYYY-MM-DD:AMOUNT): {value}") from None


def print_rates(series: RateSeries, path) -> None:
    print(f"\n{'=' * 40}")
    print(f"  Base Rates ({len(series)} changes)")
    print(f"{'=' * 40}")
    for change in series:
        print(f"  {change.key}   {change.rate:>6}%")
    print(f"\n  Cache file: {path}\n")


def print_result(result: CalculationResult, surcharge: Decimal) -> None:
    print(f"\n{'=' * 64}")
    print("  Default Interest (§288 BGB)")
    print(f"{'=' * 64}")
    print(f"  Principal amount:       {_eur(result.amount)}")
    print(f"  Type:                   {'Consumer' if result.is_consumer else 'Business'} (base rate + {surcharge})")
    print(f"  Total days in default:  {result.total_days}")
    print(f"  Total default interest: {_eur(result.total_interest)}")
    print(f"  Total claim:            {_eur(result.total_claim)}")
    print()

    for i, p in enumerate(result.periods, start=1):
        print(f"  Period {i}: {p.start} – {p.end} ({p.days} days)")
        print(f"    Principal {_eur(p.principal)} at {p.base_rate}% + {surcharge} = {p.interest_rate}%")
        print(f"    Interest  {_eur(p.interest)}")
        if p.partial_payment:
            print(f"    Partial payment of {_eur(p.partial_payment.amount)} on {p.partial_payment.date}")
    print()
    print("  Compound interest is not charged (§289 BGB).")
    print()


async def _load_rates(provider: BaseRateProvider, refresh: bool) -> RateSeries:
    if refresh:
        return await provider.update_cache()
    return await provider.refresh_if_stale()


async def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="bgb-interest", description="Default interest per §288 BGB")
    parser.add_argument("--cache-dir", help="Directory holding base_rates.json")
    parser.add_argument("--refresh", action="store_true", help="Fetch rates from the Bundesbank first")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("rates", help="Show the cached base rate series")

    calc = sub.add_parser("calculate", help="Calculate default interest")
    calc.add_argument("amount", type=_parse_amount, help="Principal amount in EUR")
    calc.add_argument("due_date", type=_parse_date, help="Due date (YYYY-MM-DD)")
    calc.add_argument("payment_date", type=_parse_date, help="Payment date (YYYY-MM-DD)")
    calc.add_argument("--business", action="store_true", help="Business transaction (base rate + 9)")
    calc.add_argument("--split-by-year", action="store_true", help="Split periods at calendar year ends")
    calc.add_argument(
        "--payment", dest="payments", type=_parse_payment, action="append", default=[],
        help="Partial payment as YYYY-MM-DD:AMOUNT (repeatable)",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    cfg = settings.model_copy(update={"cache_directory": args.cache_dir}) if args.cache_dir else settings
    provider = BaseRateProvider(cfg)

    try:
        series = await _load_rates(provider, args.refresh)
        if args.command == "rates":
            print_rates(series, provider.cache_file_path)
            return 0

        calculator = InterestCalculator(series, cfg)
        result = calculator.calculate_with_partial_payments(
            args.amount,
            args.due_date,
            args.payment_date,
            is_consumer=not args.business,
            partial_payments=args.payments,
            split_by_year=args.split_by_year,
        )
    except InterestError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_result(result, cfg.surcharge_for(result.is_consumer))
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
