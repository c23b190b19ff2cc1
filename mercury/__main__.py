"""CLI entry point: python -m mercury URL [URL ...] [options]"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markdown import Markdown
from rich.rule import Rule

from mercury.client import Mercury
from mercury.errors import ConfigurationError, MercuryError
from mercury.render import format_article, html_to_text
from mercury.settings import load_api_key, load_endpoint

if TYPE_CHECKING:
    from mercury.items import Article

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mercury",
        description="Read articles in your terminal. Powered by the Mercury Parser.",
    )
    parser.add_argument("urls", nargs="+", metavar="URL",
                        help="URL of an article to read")
    parser.add_argument("--format", choices=["markdown", "text", "json"],
                        default="markdown",
                        help="Output format (default: markdown)")
    parser.add_argument("--env-file", default=None, metavar="PATH",
                        help="Load MERCURY_API_KEY from this .env file")
    parser.add_argument("--endpoint", default=None, metavar="URL",
                        help="Parser endpoint (default: $MERCURY_ENDPOINT or the public service)")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help="Logging level (default: WARNING)")
    return parser


async def _parse_all(
    key: str, endpoint: str, urls: list[str],
) -> list[Article | BaseException]:
    async with Mercury(key, endpoint=endpoint) as client:
        return await asyncio.gather(
            *(client.parse(url) for url in urls), return_exceptions=True,
        )


def _as_text(article: Article) -> str:
    lines = [article.title or article.url]
    if article.author:
        lines.append(article.author)
    lines.append("")
    lines.append(html_to_text(article.content))
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    try:
        key = load_api_key(args.env_file)
        endpoint = args.endpoint or load_endpoint()
        results = asyncio.run(_parse_all(key, endpoint, args.urls))
    except ConfigurationError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    console = Console()
    failures = 0
    shown = 0
    for url, result in zip(args.urls, results):
        if isinstance(result, MercuryError):
            failures += 1
            print(f"ERROR: {url}: {str(result) or type(result).__name__}", file=sys.stderr)
            continue
        if isinstance(result, BaseException):
            raise result

        if args.format == "json":
            print(result.model_dump_json())
            continue
        if args.format == "markdown":
            if shown:
                console.print(Rule())
            console.print(Markdown(format_article(result)))
        else:
            print(_as_text(result))
        shown += 1

    logger.info("Parsed %d of %d article(s)", len(args.urls) - failures, len(args.urls))
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
