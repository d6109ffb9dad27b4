"""Command-line interface for the terminal Gopher client."""

import argparse
import logging
import signal
import sys
from dataclasses import replace

from .config import Config, load_config
from .core import MenuView
from .providers import InternalProvider
from .terminal import Terminal
from .transport import TcpTransport
from .browser import Browser

# Columns used for print mode when stdout isn't a terminal.
PRINT_COLS = 80


def setup_logging(verbose: bool = False, log_file: str | None = None) -> None:
    """Configure logging, to `log_file` if given or stderr otherwise."""
    level = logging.DEBUG if verbose else logging.INFO
    kwargs = {"filename": log_file} if log_file else {}
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        **kwargs,
    )


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Terminal Gopher - Browse gopherspace from the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                              # Open the start page
  %(prog)s gopher.floodgap.com          # Open a server's main menu
  %(prog)s -c config.yaml               # Use specific config file
  %(prog)s -p gopher://bitreich.org/1/  # Print a menu and exit
  %(prog)s -r gopher://bitreich.org/1/  # Print the raw response and exit
""",
    )

    parser.add_argument(
        "url",
        nargs="?",
        help="Gopher URL to open (default: start page)",
    )

    parser.add_argument(
        "-c", "--config",
        metavar="FILE",
        help="Path to YAML configuration file",
    )

    parser.add_argument(
        "-w", "--wide",
        action="store_true",
        help="Don't center menus",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    parser.add_argument(
        "-l", "--log-file",
        metavar="FILE",
        help="Write logs to FILE",
    )

    # Output modes (mutually exclusive)
    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        "-r", "--raw",
        action="store_true",
        help="Print the raw response and exit",
    )
    mode_group.add_argument(
        "-p", "--print",
        action="store_true",
        help="Print the rendered menu and exit",
    )

    return parser.parse_args()


def render_for_print(view) -> str:
    """Render a whole view for non-interactive output."""
    if not isinstance(view, MenuView):
        return view.raw()
    view.show_cursor = False
    cols = Terminal().size()[0] if sys.stdout.isatty() else PRINT_COLS
    view.set_viewport(cols, len(view.lines) + 1)
    return view.render_lines().replace("\r\n", "\n")


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logger = logging.getLogger(__name__)

    # Load configuration
    if args.config:
        try:
            config = load_config(args.config)
        except FileNotFoundError:
            setup_logging(args.verbose, args.log_file)
            logger.error(f"Config file not found: {args.config}")
            return 1
    else:
        config = Config()

    # Override config with command line arguments
    if args.wide:
        config = replace(config, wide=True)
    if args.log_file:
        config = replace(config, log_file=args.log_file)

    setup_logging(args.verbose, config.log_file)

    url = args.url or config.start_url
    terminal = Terminal()
    browser = Browser(
        TcpTransport(timeout=config.timeout_seconds, encoding=config.encoding),
        terminal,
        config,
        InternalProvider(),
    )

    if args.raw or args.print:
        try:
            view = browser.fetch(url)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to fetch {url}: {e}")
            return 1
        sys.stdout.write(view.raw() if args.raw else render_for_print(view))
        return 0

    if not sys.stdin.isatty():
        logger.error("Interactive mode needs a terminal; use -r or -p to print instead")
        return 1

    if not config.log_file:
        # stderr shares the screen with the browser
        logging.disable(logging.CRITICAL)

    # Set up signal handler for shutdown; leaving the terminal context
    # restores the screen
    def signal_handler(sig, frame):
        logger.info("Shutdown signal received")
        browser.stop()
        sys.exit(0)

    signal.signal(signal.SIGTERM, signal_handler)

    logger.info(f"Starting browser at {url}")
    try:
        with terminal:
            browser.run(url)
    except EOFError:
        logger.info("Input closed")
    except Exception as e:
        logger.error(f"Browser error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
