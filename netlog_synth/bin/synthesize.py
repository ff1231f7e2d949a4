"""CLI interface for turning a network record fixture into a devtools log."""

import argparse
import json
import os
import sys
from collections import Counter
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from netlog_synth.bin.logger import log_level_for, setup_logging
from netlog_synth.synthesizer import records_to_devtools_log


def load_fixture(input_file: str) -> list[dict]:
    """Load a JSON array of network records."""
    input_path = Path(input_file)
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_file}")

    try:
        with input_path.open() as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in input file: {e}") from e

    if not isinstance(data, list):
        raise TypeError("Input file must contain a JSON array of network records")
    if not all(isinstance(record, dict) for record in data):
        raise TypeError("Every network record must be a JSON object")

    return data


def write_devtools_log(devtools_log: list[dict], output_file: str) -> None:
    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w") as f:
        json.dump(devtools_log, f, indent=2)


def display_event_counts(devtools_log: list[dict], console: Console) -> None:
    """Show how many events of each method were written."""
    counts = Counter(event["method"] for event in devtools_log)

    table = Table(title="Devtools log events")
    table.add_column("Method", style="cyan")
    table.add_column("Count", style="bold", justify="right")
    for method, count in counts.most_common():
        table.add_row(method, str(count))
    table.add_row("[bold]total[/bold]", str(len(devtools_log)))

    console.print(table)


def main() -> None:
    """Main CLI function."""
    parser = argparse.ArgumentParser(
        description="Synthesize a devtools log from partial network records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s fixtures/redirect.json -o logs/redirect.devtoolslog.json
  %(prog)s records.json -o log.json --verify --verbose
        """,
    )
    parser.add_argument("input_file", help="JSON array of network records")
    parser.add_argument(
        "--output", "-o", required=True, help="Output devtools log JSON file"
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Decode the log again and check it reproduces every given field",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log every record"
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true", help="Suppress output except errors"
    )
    parser.add_argument("--log_file", type=str, help="Also write logs to this file")

    args = parser.parse_args()

    setup_logging(log_level_for(args.verbose, args.quiet), args.log_file)
    console = (
        Console(file=Path(os.devnull).open("w"))  # noqa: SIM115
        if args.quiet
        else Console()
    )

    error_console = Console(stderr=True)

    try:
        network_records = load_fixture(args.input_file)
        devtools_log = records_to_devtools_log(network_records, verify=args.verify)
        write_devtools_log(devtools_log, args.output)
    except FileNotFoundError as e:
        error_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)
    except (TypeError, ValueError) as e:
        error_console.print(f"[bold red]Validation Error:[/bold red] {escape(str(e))}")
        sys.exit(1)
    except AssertionError as e:
        error_console.print(f"[bold red]Verification Error:[/bold red] {escape(str(e))}")
        sys.exit(1)
    except OSError as e:
        error_console.print(f"[bold red]File Error:[/bold red] {escape(str(e))}")
        sys.exit(1)

    console.print(
        f"[bold green]✓[/bold green] Wrote {len(devtools_log)} events for "
        f"{len(network_records)} network records to {args.output}"
    )
    display_event_counts(devtools_log, console)


if __name__ == "__main__":
    main()
