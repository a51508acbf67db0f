"""
Main Entry Point

Reflinks - fills in bare references in wikitext.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

from .config.loader import load_config, options_from_mapping
from .exceptions import ConfigurationError
from .fixer import Reflinks
from .models import FailureCode, ReflinksResult, ResultStatus, get_skipped_reason
from .utils.logging_config import setup_logging

# Wikitext goes to stdout, everything else to stderr
console = Console(stderr=True)

FAILURE_MESSAGES = {
    FailureCode.NOSOURCE: "No source given: pass --text-file or --page",
    FailureCode.PAGENOTFOUND: "The page could not be found",
}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="reflinks",
        description="Reflinks - fill in bare references in wikitext",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--text-file",
        type=str,
        help="Read wikitext from this file ('-' for stdin)",
    )
    source.add_argument("--page", type=str, help="Title of a wiki page to fix")

    parser.add_argument(
        "--wiki",
        type=str,
        default=None,
        help="Wiki code for --page (default: options.default_wiki, usually 'en')",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file (default: $REFLINKS_CONFIG or config/reflinks.yaml)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the fixed wikitext to this file instead of stdout",
    )
    parser.add_argument(
        "--plain", action="store_true", help="Use plain CS1-style citations instead of {{cite web}}"
    )
    parser.add_argument(
        "--no-captioned", action="store_true", help="Do not fix '[url caption]' references"
    )
    parser.add_argument(
        "--no-uncaptioned", action="store_true", help="Do not fix '[url]' references"
    )
    parser.add_argument(
        "--no-template", action="store_true", help="Do not fix '{{cite web|url=...}}' references"
    )
    parser.add_argument(
        "--no-remove-tag", action="store_true", help="Keep {{Bare URLs}} cleanup templates"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug mode")
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write logs to this file",
    )

    return parser.parse_args(argv)


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def print_result(result: ReflinksResult) -> None:
    """Print the fixed and skipped references as rich tables."""
    log = result.log
    if log is None:
        return

    if log.fixed:
        fixed_table = Table(title="Fixed references", title_style="bold green")
        fixed_table.add_column("#", justify="right", style="dim")
        fixed_table.add_column("URL", style="cyan")
        for number, entry in enumerate(log.fixed, start=1):
            fixed_table.add_row(str(number), escape(entry.url))
        console.print(fixed_table)

    if log.skipped:
        skipped_table = Table(title="Skipped references", title_style="bold yellow")
        skipped_table.add_column("Reference", style="cyan", overflow="fold")
        skipped_table.add_column("Reason", style="yellow")
        skipped_table.add_column("Details")
        for entry in log.skipped:
            details = entry.description or ""
            if entry.status is not None and not details:
                details = f"HTTP status {entry.status}" if entry.status else ""
            skipped_table.add_row(escape(entry.ref), get_skipped_reason(entry.reason), escape(details))
        console.print(skipped_table)

    console.print(
        Panel(
            escape(result.summary or ""),
            title="[bold]Summary[/bold]",
            border_style="green" if log.fixed else "yellow",
        )
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    load_dotenv()
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ConfigurationError, ValidationError) as e:
        console.print(f"[bold red]Configuration error:[/bold red] {e}")
        return 1

    log_to_file = args.log_file is not None or config.logging.log_to_file
    setup_logging(
        level=config.logging.level,
        log_to_file=log_to_file,
        log_file=args.log_file or config.logging.log_file,
        verbose=args.verbose,
        debug=args.debug,
    )

    flags = {
        "plainlink": args.plain,
        "nofixcplain": args.no_captioned,
        "nofixuplain": args.no_uncaptioned,
        "nofixutemplate": args.no_template,
        "noremovetag": args.no_remove_tag,
    }
    options = options_from_mapping({k: v for k, v in flags.items() if v}, base=config.options)

    if args.debug:
        console.print(Rule("[bold yellow]DEBUG MODE ENABLED[/bold yellow]", style="yellow"))
    elif args.verbose:
        console.print(Rule("[bold cyan]VERBOSE MODE ENABLED[/bold cyan]", style="cyan"))

    text = None
    if args.text_file:
        try:
            text = _read_text(args.text_file)
        except OSError as e:
            console.print(f"[bold red]Error:[/bold red] Cannot read {args.text_file}: {e}")
            return 1

    fixer = Reflinks(options)
    try:
        result = fixer.get_result(text=text, page=args.page, wiki=args.wiki)
    finally:
        fixer.spider.close()

    if result.status != ResultStatus.SUCCESS:
        if result.failure is not None:
            message = FAILURE_MESSAGES[result.failure]
        else:
            message = f"Unknown wiki: {args.wiki or options.default_wiki}"
        console.print(f"[bold red]Error:[/bold red] {message}")
        return 1

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(result.new, encoding="utf-8")
        console.print(f"[green]Wrote fixed wikitext to {output_path}[/green]")
    else:
        sys.stdout.write(result.new)

    print_result(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
