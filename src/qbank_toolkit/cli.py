"""
Command-line entry point: ``qbank-gen``.

Compiles LaTeX question sources into ``bank.public.v1.json`` and
``bank.answers.v1.json``.

Usage:
    qbank-gen [--sources-config PATH] [--input-dir DIR] [--out-dir DIR]
              [--language vi|en] [--verbose] [FILES ...]
"""

from __future__ import annotations

import argparse
import logging
from collections import Counter
from pathlib import Path
from typing import List, Optional, Sequence

from . import __version__
from .common.sources import discover_tex_files, load_sources_config
from .common.topics import get_topic_title
from .compiler.assembler import BuildResult, assemble_banks, build_banks_from_files, read_source
from .compiler.config import SUPPORTED_LANGUAGES, CompilerConfig
from .compiler.figures import apply_figure_references, collect_sequential_labels, make_reference_resolver
from .compiler.scanner import strip_comments
from .compiler.writer import write_banks
from .core.errors import BankBuildError

logger = logging.getLogger("qbank_toolkit")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qbank-gen",
        description="Generate bank JSON files from LaTeX sources",
    )
    parser.add_argument("files", nargs="*", type=Path, help="LaTeX files to compile (default: discover under --input-dir)")
    parser.add_argument("--sources-config", type=Path, help="Path to sources config JSON (raw or exported)")
    parser.add_argument("--input-dir", type=Path, default=Path("src"), help="Directory searched for **/*.tex (default: src)")
    parser.add_argument("--out-dir", type=Path, default=Path("dist"), help="Output directory for bank JSON (default: dist)")
    parser.add_argument("--language", choices=SUPPORTED_LANGUAGES, default="vi", help="Language for figure/table captions")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_figure_references(built: BuildResult, files: Sequence[Path], config: CompilerConfig) -> BuildResult:
    """
    Rewrite figure/table references in every question and re-validate.

    Labels are numbered over all files in build order.
    """
    contents = [strip_comments(read_source(path)) for path in files]
    labels = collect_sequential_labels(contents)
    resolver = make_reference_resolver(labels, config.language)
    rewritten = [apply_figure_references(result, resolver) for result in built.questions]
    return assemble_banks(rewritten, config, generated_at=built.public_bank.generated_at)


def _log_summary(built: BuildResult) -> None:
    topics = Counter(result.public_question.topic for result in built.questions)
    for topic, count in sorted(topics.items()):
        logger.info(f"  {get_topic_title(topic)} ({topic}): {count}")
    logger.info(f"Generated {len(built.questions)} questions")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        if args.sources_config:
            config = load_sources_config(args.sources_config).to_compiler_config(args.language)
        else:
            config = CompilerConfig(language=args.language)

        files = list(args.files) or discover_tex_files(args.input_dir)
        if files:
            logger.info(f"Compiling {len(files)} file(s) for {config.course_code}/{config.subject}")
            built = build_banks_from_files(files, config)
            built = resolve_figure_references(built, files, config)
        else:
            logger.warning(f"No .tex files found under {args.input_dir}; writing empty banks")
            built = assemble_banks([], config)
        write_banks(built.public_bank, built.answers_bank, args.out_dir)
    except BankBuildError as exc:
        logger.error(f"Error ({exc.kind}): {exc}")
        return 1

    _log_summary(built)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
