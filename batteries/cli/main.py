import argparse
import logging
import sys
from pathlib import Path

from batteries import __version__
from batteries.cli.render import render
from batteries.core import paths
from batteries.core.api import get_core
from batteries.core.upower import DeviceSourceError

# ANSI color codes for terminal output
class Colors:
    RESET = "\033[0m"
    DIM = "\033[2m"
    CYAN = "\033[36m"

    # Bright colors
    BRIGHT_RED = "\033[91m"
    BRIGHT_YELLOW = "\033[93m"
    BRIGHT_WHITE = "\033[97m"

def print_info(label: str, value: str, indent: int = 0):
    """Print formatted info line (stderr, keeps stdout for the report)"""
    spaces = "  " * indent
    print(f"{spaces}{Colors.CYAN}{label}:{Colors.RESET} {Colors.BRIGHT_WHITE}{value}{Colors.RESET}", file=sys.stderr)

def print_warning(message: str):
    """Print warning message"""
    print(f"{Colors.BRIGHT_YELLOW}!{Colors.RESET} {message}", file=sys.stderr)

def print_error(message: str):
    """Print error message"""
    print(f"{Colors.BRIGHT_RED}✗{Colors.RESET} {message}", file=sys.stderr)

def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="batteries",
        description="Battery management tool - list UPower devices with custom names and filters",
        epilog=f"Rules are read from {paths.CONFIG_FILE} (created empty if missing)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-j", "--json",
        action="store_true",
        help="Print the output in JSON format",
    )
    parser.add_argument(
        "-l", "--list",
        action="store_true",
        help="Print detailed info about each device (suppressed devices included)",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        metavar="PATH",
        help=f"Use another rules file (default: {paths.CONFIG_FILE})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Print extra debug info")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser.parse_args(argv)

def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

def main(argv: list[str] | None = None):
    args = parse_arguments(argv)
    setup_logging(args.verbose)

    if args.verbose:
        print_info("Config file", str(args.config or paths.CONFIG_FILE))
        print_info("View", "full" if args.list else "summary")
        print_info("Output", "json" if args.json else "table")

    try:
        views = get_core(args.config).report(include_suppressed=args.list)
        records = views.full if args.list else views.summary
        print(render(records, as_json=args.json, full=args.list, color=sys.stdout.isatty()))

    except KeyboardInterrupt:
        print(file=sys.stderr)
        print_warning("Operation cancelled by user")
        raise SystemExit(130)
    except DeviceSourceError as e:
        print_error(f"UPower: {e}")
        if args.verbose:
            logging.getLogger(__name__).debug("Device source failure", exc_info=True)
        raise SystemExit(1)
    except Exception as e:
        print_error(f"Error: {e}")
        if args.verbose:
            import traceback
            print(f"{Colors.DIM}{traceback.format_exc()}{Colors.RESET}", file=sys.stderr)
        raise SystemExit(1)

if __name__ == "__main__":
    main()
