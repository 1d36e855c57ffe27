import argparse
import sys

from methodscanner.core.config import (
    DEFAULT_METHODS, DEFAULT_USER_AGENT, OUTPUT_FORMATS, VIEW_MODES,
    ConfigurationError, ScanConfig,
)
from methodscanner.core.engine import Engine
from methodscanner.parsers.lists import normalize_url, read_lines
from methodscanner.reporters.console import Log
from methodscanner.reporters.report import render, write_report


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="methodscanner",
        description="Concurrent HTTP method scanner (dangerous methods, XST, verb tampering)")
    p.add_argument("-u", dest="url", help="Single URL to test")
    p.add_argument("-f", dest="url_file",
                   help="File containing URLs to test (one per line)")
    p.add_argument("-m", dest="methods_file",
                   help="File containing HTTP methods to test")
    p.add_argument("-o", dest="output", help="Output file for results")
    p.add_argument("--format", default="txt",
                   help="Output format: " + ", ".join(OUTPUT_FORMATS))
    p.add_argument("-c", dest="concurrency", type=int, default=10,
                   help="Number of concurrent requests per URL")
    p.add_argument("-t", dest="timeout", type=float, default=10,
                   help="Request timeout in seconds")
    p.add_argument("-L", dest="follow_redirects", action="store_true",
                   help="Follow redirects")
    p.add_argument("-k", dest="insecure", action="store_true",
                   help="Allow insecure TLS connections")
    p.add_argument("-v", dest="verbose", action="store_true",
                   help="Verbose output (one line per probe)")
    p.add_argument("-q", dest="quiet", action="store_true",
                   help="Quiet mode: no banner, results only written to -o")
    p.add_argument("--silent", action="store_true",
                   help="Silent mode, only output results")
    p.add_argument("--nc", dest="no_color", action="store_true",
                   help="No color output")
    p.add_argument("--view", default="all",
                   help="View mode: " + ", ".join(VIEW_MODES))
    p.add_argument("--proxy", help="Use proxy (ej: http://127.0.0.1:8080)")
    p.add_argument("--ua", dest="user_agent", default=DEFAULT_USER_AGENT,
                   help="User agent string")
    p.add_argument("--auth", help="Basic authentication (username:password)")
    p.add_argument("-H", dest="headers", action="append", default=[],
                   help="Custom header, repeatable ('Name: Value')")
    p.add_argument("--cookie", dest="cookies", action="append", default=[],
                   help="Cookie to include, repeatable ('name=value')")
    p.add_argument("--ordered", action="store_true",
                   help="Sort each URL's results in method list order")
    return p


def load_targets(args):
    """Resolve URLs and methods from flags/files; -u wins over -f."""
    if args.url:
        urls = [args.url]
    elif args.url_file:
        try:
            urls = read_lines(args.url_file)
        except OSError as e:
            raise ConfigurationError(f"Error reading URL file: {e}") from e
    else:
        raise ConfigurationError(
            "Either a URL (-u) or a file containing URLs (-f) must be specified")

    if args.methods_file:
        try:
            methods = read_lines(args.methods_file)
        except OSError as e:
            raise ConfigurationError(f"Error reading methods file: {e}") from e
    else:
        methods = list(DEFAULT_METHODS)

    return [normalize_url(u) for u in urls], methods


def emit(text: str, config: ScanConfig, quiet: bool, log: Log) -> None:
    if config.output_file:
        try:
            write_report(config.output_file, text)
        except OSError as e:
            log.fail(f"Error writing to output file: {e}")
        else:
            if not quiet:
                log.ok(f"Results written to {config.output_file}")

    if not quiet:
        print(text)


def main(argv=None, transport=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.quiet or args.silent:
        verbosity = 0
    elif args.verbose:
        verbosity = 2
    else:
        verbosity = 1
    log = Log(verbose=verbosity, color=not args.no_color)

    try:
        config = ScanConfig.from_args(args)
        urls, methods = load_targets(args)
    except ConfigurationError as e:
        log.fail(f"Error: {e}")
        parser.print_usage(sys.stderr)
        return 1

    if not args.quiet and not args.silent:
        log.banner()

    with Engine(config, logger=log, transport=transport) as engine:
        report = engine.run(urls, methods)

    # colour only ever goes into the text table
    text = render(report, config.output_format, color=not args.no_color)
    emit(text, config, args.quiet, log)
    return 0


if __name__ == "__main__":
    sys.exit(main())
