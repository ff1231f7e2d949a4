import logging
import sys

from colorama import Fore, Style, init


init()


class ColoredFormatter(logging.Formatter):
    LEVEL_COLORS = {
        "DEBUG": Fore.CYAN,
        "INFO": Fore.GREEN,
        "WARNING": Fore.YELLOW,
        "ERROR": Fore.RED,
        "CRITICAL": Fore.RED + Style.BRIGHT,
    }

    def format(self, record):
        # Format a copy so other handlers still see the plain record.
        record = logging.makeLogRecord(record.__dict__)
        color = self.LEVEL_COLORS.get(record.levelname)
        if color:
            record.levelname = f"{color}{record.levelname}{Style.RESET_ALL}"

        # netlog_synth.timing.normalizer -> n.t.normalizer
        parts = record.name.split(".")
        if len(parts) > 2:
            record.name = ".".join([p[0] for p in parts[:-1]] + [parts[-1]])

        return super().format(record)


def log_level_for(verbose: bool = False, quiet: bool = False) -> int:
    """Map the common --verbose/--quiet CLI flags to a log level."""
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.INFO


def setup_logging(log_level=logging.INFO, log_file=None):
    """Send colored log lines to stderr, and plain ones to ``log_file`` if given.

    Stdout is left alone so log output never mixes with a devtools log written there.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(
        ColoredFormatter(
            "%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
