# src/faleproxy/cli.py
from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse

from tqdm.auto import tqdm

from faleproxy.controllers.fetch_controller import FetchController
from faleproxy.core.managers.config_manager import config_manager
from faleproxy.core.utils.configure_logging import configure_logger
from fetcher.model import FetchError
from rewriter.model import TransformResult

logger = logging.getLogger(__name__)


def is_url(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


def output_name(source: str) -> str:
    """Derives a filesystem-safe .html file name from a URL or file path."""
    if is_url(source):
        parsed = urlparse(source)
        raw = f"{parsed.netloc}{parsed.path}".rstrip("/") or parsed.netloc
    else:
        raw = Path(source).stem
    slug = re.sub(r"[^A-Za-z0-9._-]+", "_", raw).strip("_") or "page"
    return f"{slug}.html"


def rewrite_source(controller: FetchController, source: str) -> TransformResult:
    """Loads one URL or local file and rewrites it."""
    if is_url(source):
        html = controller.fetch_service.fetch(source).content
    else:
        html = Path(source).read_text(encoding="utf-8", errors="replace")
    return controller.transform(html)


def run(sources: List[str], out_dir: Optional[Path], controller: FetchController, show_progress: bool = True) -> int:
    """
    Rewrites every source. Results are written to `out_dir`, or to stdout
    when no directory is given. Returns 0 when every source succeeded.
    """
    if out_dir is not None:
        out_dir.mkdir(parents=True, exist_ok=True)

    failures = 0
    iterator = sources
    if show_progress and len(sources) > 1:
        iterator = tqdm(sources, desc="Rewriting", unit="page")

    for source in iterator:
        try:
            result = rewrite_source(controller, source)
        except (FetchError, OSError) as e:
            failures += 1
            logger.error("Failed to rewrite %s: %s", source, e)
            continue

        if out_dir is None:
            sys.stdout.write(result.html)
            sys.stdout.write("\n")
        else:
            target = out_dir / output_name(source)
            target.write_text(result.html, encoding="utf-8")
            logger.info("Wrote %s (%d node(s) changed, title=%r)", target, result.replacements, result.title)

    return 1 if failures else 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="faleproxy-rewrite",
        description="Rewrite Yale to Fale in local HTML files or remote pages.",
    )
    parser.add_argument("sources", nargs="+", help="URLs (http/https) or paths to HTML files.")
    parser.add_argument("--out-dir", type=Path, default=None,
                        help="Directory for rewritten files. Required for more than one source.")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors.")
    args = parser.parse_args(argv)

    if args.out_dir is None and len(args.sources) > 1:
        parser.error("--out-dir is required when rewriting more than one source")

    configure_logger(
        "WARNING" if args.quiet else config_manager.get_nested("debug.level", "INFO"),
        silenced_loggers=config_manager.get_nested("debug.silenced_loggers", {}),
    )

    controller = FetchController.from_config(config_manager)
    try:
        return run(args.sources, args.out_dir, controller, show_progress=not args.quiet)
    finally:
        controller.fetch_service.close()


if __name__ == "__main__":
    sys.exit(main())
