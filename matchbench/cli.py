"""Command-line interface for matchbench."""

import argparse
import sys

from .core.registry import get_registry
from .config.schema import load_config, validate_config
from .exceptions import MatchBenchError
from .runner import MatchExperiment, run_commands, run_experiment, run_grid

REPORT_FLAGS = {
    "-display": ("display", "Show every pair"),
    "-shortDisplay": ("shortDisplay", "Show correct pairs only"),
    "-dump": ("dump", "Machine-readable dump of every pair"),
    "-graph": ("graph", "Recall / interpolated precision points"),
    "-summarize": ("summarize", "Print max F1 and average precision"),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="matchbench",
        description="matchbench: ranking evaluation for record linkage"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    run_parser = subparsers.add_parser(
        "run",
        help="Run one experiment and print reports",
        usage="%(prog)s <blocker> <distance> <matchDataFile> [commands]",
    )
    run_parser.add_argument("blocker", help="Registered blocker name")
    run_parser.add_argument("distance", help="Registered distance name")
    run_parser.add_argument("data_file", help="Tab-separated match data file")
    for flag, (command, help_text) in REPORT_FLAGS.items():
        run_parser.add_argument(
            flag, dest="reports", action="append_const", const=command, help=help_text
        )
    run_parser.add_argument("--ascending", action="store_true",
                            help="Rank low scores first")
    run_parser.add_argument("-j", "--jobs", type=int, default=1,
                            help="Worker threads for scoring")
    run_parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    config_parser = subparsers.add_parser("config", help="Run an experiment from a YAML file")
    config_parser.add_argument("config", help="Path to config YAML file")
    config_parser.add_argument("-o", "--output", default="results", help="Output directory")
    config_parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    grid_parser = subparsers.add_parser("grid", help="Run grid of experiments")
    grid_parser.add_argument("config", help="Path to grid config YAML file")
    grid_parser.add_argument("-o", "--output", default="results", help="Output directory")
    grid_parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    list_parser = subparsers.add_parser("list", help="List available components")
    list_parser.add_argument("component", choices=["datasets", "blockers", "distances"])

    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "run":
        try:
            data = get_registry("datasets").get("tsv")(args.data_file)
            blocker = get_registry("blockers").create(args.blocker)
            learner = get_registry("distances").create(args.distance)
        except KeyError as e:
            parser.error(str(e))
        except OSError as e:
            parser.error(f"cannot read {args.data_file}: {e}")

        expt = MatchExperiment(
            data,
            learner,
            blocker,
            descending=False if args.ascending else None,
            n_jobs=args.jobs,
            verbose=args.verbose,
        )
        try:
            expt.run()
        except MatchBenchError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        run_commands(expt, args.reports or [])

    elif args.command == "config":
        config = load_config(args.config)
        errors = validate_config(config)
        illegal = [e for e in errors if e.startswith("illegal command")]
        if illegal:
            parser.error("; ".join(illegal))
        if errors:
            print("Configuration errors:")
            for e in errors:
                print(f"  - {e}")
            return 1

        try:
            run_experiment(config, args.output, verbose=args.verbose)
        except KeyError as e:
            parser.error(str(e))
        except MatchBenchError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"\nResults saved to: {args.output}")

    elif args.command == "grid":
        config = load_config(args.config)
        try:
            run_grid(config, args.output, verbose=args.verbose)
        except KeyError as e:
            parser.error(str(e))
        except MatchBenchError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"\nGrid results saved to: {args.output}/grid_results.csv")

    elif args.command == "list":
        registry = get_registry(args.component)
        print(f"Available {args.component}:")
        for name in registry.list():
            print(f"  - {name}")

    else:
        parser.print_help()

    return 0


if __name__ == "__main__":
    sys.exit(main())
