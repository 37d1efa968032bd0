#!/usr/bin/env python3
"""Convenience launcher that forwards to the translation_seo.cli.main entry point."""
from __future__ import annotations

from translation_seo.cli.main import main as cli_main


def main() -> None:
    cli_main()


if __name__ == "__main__":
    main()
