from __future__ import annotations

import argparse
import sys
from pathlib import Path

from translation_seo.adapters.llm_translate import FatalUpstreamError
from translation_seo.workers.analyze import run as analyze_scores
from translation_seo.workers.score_urls import run as score_urls
from translation_seo.workers.scrape_topics import run as scrape_topics


def _positive_int(value: str) -> int:
    parsed = int(value)
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be positive")
    return parsed


def _add_score(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("score", help="Translate article descriptions and score their SEO trend signal")
    parser.add_argument("-u", "--urls", type=Path, required=True, help="File with one article URL per line")
    parser.add_argument("-p", "--prompts", type=Path, required=True, help="JSON file of named chat prompts")
    parser.add_argument("-f", "--function-words", type=Path, default=None, help="Optional file of function words to ignore")
    parser.add_argument("-o", "--output", type=Path, required=True, help="Output CSV path")
    parser.add_argument("-l", "--limit", type=_positive_int, default=None, help="Max number of URLs to process")


def _add_analyze(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("analyze", help="Compare score columns with pairwise Z tests")
    parser.add_argument("-i", "--input", type=Path, required=True, help="Scores CSV produced by the score command")
    parser.add_argument("--output-dir", type=Path, default=None, help="Directory for analysis.csv, z_scores.csv and p_values.csv")


def _add_scrape_topics(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("scrape-topics", help="Collect article URLs from paginated topic pages")
    parser.add_argument("-t", "--topics", type=Path, required=True, help="File of '<topic url> <pages>' lines")
    parser.add_argument("-o", "--output", type=Path, required=True, help="Output file for the article URLs")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="translation-seo", description="Translation SEO research pipeline")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_score(subparsers)
    _add_analyze(subparsers)
    _add_scrape_topics(subparsers)
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    command = args.command
    try:
        if command == "score":
            score_urls(
                args.urls,
                args.prompts,
                args.output,
                function_words_path=args.function_words,
                limit=args.limit,
            )
        elif command == "analyze":
            analyze_scores(args.input, output_dir=args.output_dir)
        elif command == "scrape-topics":
            scrape_topics(args.topics, args.output)
        else:
            parser.error(f"Unknown command: {command}")
    except FatalUpstreamError as exc:
        print(f"fatal upstream error, aborting: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


__all__ = ["build_parser", "main"]


if __name__ == "__main__":
    main()
