# path: scripts/preview_backoff.py
"""Print one jittered reconnect schedule.

Examples:
  python scripts/preview_backoff.py
  python scripts/preview_backoff.py --base 3 --factor 50 --retries 8
  python scripts/preview_backoff.py --fixed 250 --retries 4 --seed 7

Flags default to the configured strategy (config/default.yaml, BACKOFF_* env).
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config.settings import settings  # noqa: E402
from reconnect.backoff import BackoffPlan, exponential_backoff, fixed_interval_backoff  # noqa: E402

logger = logging.getLogger("preview_backoff")


def build_plan(args: argparse.Namespace) -> BackoffPlan:
    strategy = settings.retry_strategy
    retries = strategy.number_of_retries if args.retries is None else args.retries
    if args.fixed is not None:
        return fixed_interval_backoff(args.fixed, retries)
    if args.base is None and args.factor is None and args.retries is None:
        return BackoffPlan.from_strategy(strategy)
    base = strategy.exponent_base if args.base is None else args.base
    factor = strategy.factor if args.factor is None else args.factor
    return exponential_backoff(base, factor, retries)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--base", type=int, default=None)
    parser.add_argument("--factor", type=int, default=None, help="milliseconds")
    parser.add_argument("--retries", type=int, default=None)
    parser.add_argument("--fixed", type=int, default=None, metavar="MS", help="fixed interval instead of exponential")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    plan = build_plan(args)
    logger.info(f"[{settings.ENV}] Plan: base={plan.base} factor={plan.factor}ms attempts={plan.attempts}")
    total = 0.0
    for i, ms in enumerate(plan.delays_ms(seed=args.seed), start=1):
        total += ms
        print(f"attempt {i:>3}: {ms:12.3f} ms  (cumulative {total:12.3f} ms)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
