import argparse
import logging
import pathlib
import sys

from tqdm import tqdm

from netlog_synth.bin.logger import log_level_for, setup_logging
from netlog_synth.bin.synthesize import load_fixture, write_devtools_log
from netlog_synth.errors import NetlogSynthError
from netlog_synth.synthesizer import records_to_devtools_log


logger = logging.getLogger(__name__)

OUTPUT_SUFFIX = ".devtoolslog.json"


def output_path_for(fixture: pathlib.Path, output_dir: pathlib.Path) -> pathlib.Path:
    return output_dir / f"{fixture.stem}{OUTPUT_SUFFIX}"


def synthesize_all(
    fixtures_dir: pathlib.Path,
    output_dir: pathlib.Path,
    verify: bool = False,
    force: bool = False,
) -> dict[str, str]:
    """
    Convert every ``*.json`` fixture in ``fixtures_dir``.

    Returns fixture name -> error message for the fixtures that failed; the
    others are written to ``output_dir``.
    """
    fixtures = sorted(
        p for p in fixtures_dir.glob("*.json") if not p.name.endswith(OUTPUT_SUFFIX)
    )
    failures = {}

    for fixture in tqdm(fixtures, desc="Synthesizing devtools logs"):
        output_path = output_path_for(fixture, output_dir)
        if output_path.exists() and not force:
            logger.info(f"Skipping {fixture.name}, {output_path} already exists")
            continue

        try:
            network_records = load_fixture(str(fixture))
            devtools_log = records_to_devtools_log(network_records, verify=verify)
        except (NetlogSynthError, TypeError, ValueError) as e:
            logger.error(f"{fixture.name}: {e}")
            failures[fixture.name] = str(e)
            continue

        write_devtools_log(devtools_log, str(output_path))

    logger.info(
        f"Processed {len(fixtures)} fixtures, {len(failures)} failed, output in {output_dir}"
    )
    return failures


def main():
    argparser = argparse.ArgumentParser(
        description="Synthesize devtools logs for a directory of network record fixtures"
    )
    argparser.add_argument(
        "--fixtures_dir",
        type=str,
        required=True,
        help="Directory containing JSON network record fixtures",
    )
    argparser.add_argument(
        "--output_dir",
        "-o",
        type=str,
        required=True,
        help="Directory to write the devtools logs to",
    )
    argparser.add_argument(
        "--verify",
        action="store_true",
        help="Check every log round-trips to its fixture",
    )
    argparser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite logs that already exist",
    )
    argparser.add_argument("--verbose", "-v", action="store_true")
    args = argparser.parse_args()

    setup_logging(log_level_for(args.verbose))

    fixtures_dir = pathlib.Path(args.fixtures_dir)
    output_dir = pathlib.Path(args.output_dir)
    if not fixtures_dir.is_dir():
        print(f"Error: fixtures directory not found: {fixtures_dir}", file=sys.stderr)
        sys.exit(1)

    failures = synthesize_all(fixtures_dir, output_dir, args.verify, args.force)
    if failures:
        print(f"\n{len(failures)} fixtures failed:", file=sys.stderr)
        for name, error in failures.items():
            print(f"  {name}: {error}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
