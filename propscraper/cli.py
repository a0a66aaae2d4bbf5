"""Command line entry point: scrape listing URLs from a file or stdin."""
import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional

from propscraper.config import config
from propscraper.layers.archive import ArchiveBuilder, save_to_directory
from propscraper.layers.orchestrator import ScrapeOrchestrator
from propscraper.layers.summarization import SummarizationLayer
from propscraper.utils.logger import set_trace_id
from propscraper.utils.urls import parse_url_lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Scrape images and details from listing pages")
    parser.add_argument("file", help="File with one URL per line, or - for stdin")
    parser.add_argument("--archive", action="store_true", help="Download each listing's images as a zip")
    parser.add_argument("--summarize", action="store_true", help="Print an AI summary of each listing")
    parser.add_argument("--out", type=Path, default=Path(config.ARCHIVE_DIR), help="Directory for zip archives")
    return parser


async def run(
    urls: List[str],
    archive: bool = False,
    summarize: bool = False,
    out: Optional[Path] = None,
) -> int:
    set_trace_id()
    orchestrator = ScrapeOrchestrator()
    scrape_run = await orchestrator.run(urls)

    for status in scrape_run.statuses:
        line = f"[{status.state.value}] {status.source_url}"
        if status.message:
            line += f" - {status.message}"
        print(line)

    print(json.dumps([r.model_dump() for r in scrape_run.results], indent=2))

    if archive:
        builder = ArchiveBuilder()
        save = save_to_directory(out or Path(config.ARCHIVE_DIR))
        for result in scrape_run.results:
            path = await builder.build_and_save(result, save)
            if path is not None:
                print(f"Saved {path}")

    if summarize:
        summarizer = SummarizationLayer(store=orchestrator.store)
        for result in scrape_run.results:
            entry = await summarizer.summarize(result.source_url, result.body_text)
            if entry is not None:
                print(f"\n## {result.title}\n{entry.summary}")

    return 0 if all(r.ok for r in scrape_run.results) else 1


def main() -> None:
    args = build_parser().parse_args()
    raw = sys.stdin.read() if args.file == "-" else Path(args.file).read_text(encoding="utf-8")
    urls = parse_url_lines(raw)
    if not urls:
        print("Please enter valid URLs.", file=sys.stderr)
        sys.exit(2)
    sys.exit(asyncio.run(run(urls, archive=args.archive, summarize=args.summarize, out=args.out)))


if __name__ == "__main__":
    main()
