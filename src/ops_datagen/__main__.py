"""
Command-line driver for the operations data generator.

Examples:
  python -m ops_datagen generate --config config.json --output out/
  python -m ops_datagen rollup revenue_by_month budget_variance --output out/
  python -m ops_datagen summary --seed 7 --missing null
"""

import argparse
import logging
import sys
from pathlib import Path

from ops_datagen.analytics import ExecutiveSummaryComposer, RollupEngine
from ops_datagen.config.models import GenerationConfig
from ops_datagen.generators import DatasetGenerator
from ops_datagen.services import DatasetExporter
from ops_datagen.shared.exceptions import OpsDataGenException
from ops_datagen.shared.logging_config import configure_structured_logging

logger = logging.getLogger(__name__)


def _load_config(args: argparse.Namespace) -> GenerationConfig:
    config = GenerationConfig.from_file(args.config) if args.config else GenerationConfig()

    updates = {}
    if args.seed is not None:
        updates["seed"] = args.seed
    if args.workers is not None:
        updates["performance"] = config.performance.model_copy(
            update={"parallel": args.workers > 1, "max_workers": args.workers}
        )
    return config.model_copy(update=updates) if updates else config


def _cmd_generate(args: argparse.Namespace) -> int:
    dataset = DatasetGenerator(_load_config(args)).generate()
    files = DatasetExporter(Path(args.output)).export_tables(dataset)
    for table, path in files.items():
        print(f"{table}: {len(dataset.table(table))} rows -> {path}")
    return 0


def _cmd_rollup(args: argparse.Namespace) -> int:
    dataset = DatasetGenerator(_load_config(args)).generate()
    engine = RollupEngine(dataset)
    results = engine.run_many(args.names or None, max_workers=args.workers or 4)
    files = DatasetExporter(Path(args.output)).export_rollups(results.values())
    for name, path in files.items():
        print(f"{name}: {len(results[name])} rows -> {path}")
    return 0


def _cmd_summary(args: argparse.Namespace) -> int:
    dataset = DatasetGenerator(_load_config(args)).generate()
    summary = ExecutiveSummaryComposer(RollupEngine(dataset)).compose(missing=args.missing)
    if args.output:
        path = DatasetExporter(Path(args.output)).export_rollups([summary])[summary.name]
        print(f"{summary.name}: {len(summary)} rows -> {path}")
    else:
        print(summary.frame.to_string(index=False))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ops-datagen",
        description="Generate a synthetic operations dataset and compute rollups",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    parser.add_argument(
        "--plain-logs", action="store_true", help="Human-readable log lines instead of JSON"
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", type=Path, help="JSON configuration file")
    common.add_argument("--seed", type=int, help="Override the configured seed")
    common.add_argument("--workers", type=int, help="Worker threads for generation and rollups")

    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", parents=[common], help="Generate and export all tables")
    gen.add_argument("--output", default="data", help="Output directory (default: data)")
    gen.set_defaults(func=_cmd_generate)

    roll = sub.add_parser("rollup", parents=[common], help="Compute and export named rollups")
    roll.add_argument(
        "names",
        nargs="*",
        help=f"Rollups to run (default: all). Choices: {', '.join(RollupEngine.NAMED_ROLLUPS)}",
    )
    roll.add_argument("--output", default="data", help="Output directory (default: data)")
    roll.set_defaults(func=_cmd_rollup)

    summ = sub.add_parser("summary", parents=[common], help="Compose the executive summary")
    summ.add_argument("--missing", choices=("zero", "null"), default="zero")
    summ.add_argument("--output", help="Write the summary CSV here instead of printing it")
    summ.set_defaults(func=_cmd_summary)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_structured_logging(args.log_level, json_output=not args.plain_logs)

    try:
        return args.func(args)
    except (OpsDataGenException, FileNotFoundError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
