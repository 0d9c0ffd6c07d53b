#!/usr/bin/env python3
"""
Trade recommendation CLI.

Loads OHLCV bars from a CSV file, runs the indicator/fusion/sizing pipeline
on the latest bar and prints the resulting trade proposal.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd
import yaml

from signalbot.errors import SignalBotError
from signalbot.pipeline import TradePipeline
from signalbot.scoring import LogisticScorer, FEATURE_NAMES
from signalbot.shared.types import OHLCV_COLUMNS, TradeProposal
from signalbot.signals.config import StrategyConfig
from signalbot.signals.config_loader import load_config_from_yaml


logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """
    Setup logging to stdout.

    Args:
        verbose: If True, use DEBUG level, otherwise INFO
    """
    level = logging.DEBUG if verbose else logging.INFO

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def load_bars_csv(csv_path: Path) -> pd.DataFrame:
    """
    Load OHLCV bars from CSV.

    Column names are matched case-insensitively; a timestamp (or date) column
    becomes the index when present. Rows are sorted chronologically.

    Raises:
        FileNotFoundError: If the CSV doesn't exist
        ValueError: If an OHLCV column is missing
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Data file not found: {csv_path}")

    df = pd.read_csv(csv_path)
    df.columns = [str(c).strip().capitalize() for c in df.columns]

    for time_col in ("Timestamp", "Date", "Datetime"):
        if time_col in df.columns:
            df[time_col] = pd.to_datetime(df[time_col])
            df = df.set_index(time_col).sort_index()
            df.index.name = "timestamp"
            break

    missing = [c for c in OHLCV_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"CSV is missing columns: {', '.join(missing)}")
    return df[OHLCV_COLUMNS].astype(float)


def parse_weights(text: str) -> List[float]:
    """Comma-separated weights, one per feature."""
    weights = [float(w) for w in text.split(",") if w.strip()]
    if len(weights) != len(FEATURE_NAMES):
        raise ValueError(
            f"--weights needs {len(FEATURE_NAMES)} values ({', '.join(FEATURE_NAMES)}), got {len(weights)}"
        )
    return weights


def format_proposal(proposal: TradeProposal) -> str:
    lines = [
        f"Decision:      {proposal.decision.value.upper()}",
        f"Entry price:   {proposal.entry_price:.2f}",
        f"Position size: {proposal.position_size:.4f}",
    ]
    if proposal.is_actionable:
        lines.append(f"Stop loss:     {proposal.stop_loss_price:.2f}")
        lines.append(f"Take profit:   {proposal.take_profit_price:.2f}")
        lines.append(f"Risk/reward:   {proposal.risk_reward_ratio:.1f}")
    if proposal.reasoning:
        lines.append(f"Reasoning:     {proposal.reasoning}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for trade recommendation."""
    parser = argparse.ArgumentParser(
        description="Recommend a trade for the latest bar of an OHLCV CSV file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Baseline config, neutral predictive score
    python -m cli.recommend data/btc.csv --score 0.5

    # Custom config with a logistic scorer
    python -m cli.recommend data/btc.csv --config configs/baseline.yaml \\
        --weights 0.01,0.5,-0.5,0,0,0
        """
    )
    parser.add_argument("csv", type=Path, help="CSV with timestamp, open, high, low, close, volume columns")
    parser.add_argument("--config", type=Path, help="Strategy YAML config (default: built-in baseline)")
    score_group = parser.add_mutually_exclusive_group()
    score_group.add_argument("--score", type=float, help="Predictive score in [0, 1] used when no rule fires")
    score_group.add_argument("--weights", type=str, help="Logistic scorer weights, comma-separated")
    parser.add_argument("--bias", type=float, default=0.0, help="Logistic scorer bias (with --weights)")
    parser.add_argument("--entry", type=float, help="Entry price (default: latest close)")
    parser.add_argument("--stop-distance", type=float, help="Stop distance per unit (default: entry * stop_loss_pct)")
    parser.add_argument("--stats", type=Path, help="YAML file of historical success rates for the tuner")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = load_config_from_yaml(args.config) if args.config else StrategyConfig()
        scorer = LogisticScorer(parse_weights(args.weights), bias=args.bias) if args.weights else None
        data = load_bars_csv(args.csv)

        pipeline = TradePipeline(config, scorer=scorer)
        if args.stats:
            with open(args.stats, 'r') as f:
                stats = yaml.safe_load(f) or {}
            pipeline.update_parameters(stats)

        proposal = pipeline.propose(
            data,
            entry_price=args.entry,
            stop_loss_distance=args.stop_distance,
            predictive_score=args.score,
        )
    except (SignalBotError, FileNotFoundError, ValueError, yaml.YAMLError) as e:
        logger.error(f"{e}")
        print(f"Error: {e}")
        return 1

    print("=" * 60)
    print(f"TRADE RECOMMENDATION ({config.name})")
    print("=" * 60)
    print(f"Bars: {len(data)}  Latest: {data.index[-1]}")
    print(format_proposal(proposal))
    return 0


if __name__ == "__main__":
    sys.exit(main())
