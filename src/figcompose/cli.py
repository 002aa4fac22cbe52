# figcompose
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import matplotlib

from .logging_config import setup_logging
from .vignettes import bundled_paths, bundled_vignettes, check_vignettes, init_vignettes, render_vignette


def cmd_list(args: argparse.Namespace) -> int:
    for vignette in bundled_vignettes():
        line = f"{vignette.name:<26} {vignette.title}"
        print(line.rstrip())
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    written = init_vignettes(args.dest, overwrite=args.force)
    for path in written:
        print(f"Wrote {path}")
    if not written:
        print("Nothing to do; pass --force to overwrite existing files")
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    for path in args.paths:
        out = render_vignette(path, args.out, dpi=args.dpi)
        print(f"Rendered {out}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    paths = args.paths or bundled_paths()
    reports = check_vignettes(paths, dpi=args.dpi)
    failed = 0
    for report in reports:
        if report.ok:
            print(f"ok    {report.name} ({report.images} image(s))")
        else:
            failed += 1
            print(f"FAIL  {report.name}: {report.error}")
    print(f"{len(reports) - failed} passed, {failed} failed")
    return 1 if failed else 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser("figcompose")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-dir", default=None, help="directory for log files")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("list", help="list bundled vignettes")
    sp.set_defaults(func=cmd_list)

    sp = sub.add_parser("init", help="copy bundled vignettes into DEST/vignettes")
    sp.add_argument("dest")
    sp.add_argument("--force", action="store_true", help="overwrite existing files")
    sp.set_defaults(func=cmd_init)

    sp = sub.add_parser("render", help="run vignettes and write Markdown with figures")
    sp.add_argument("paths", nargs="+")
    sp.add_argument("--out", required=True)
    sp.add_argument("--dpi", type=float, default=None)
    sp.set_defaults(func=cmd_render)

    sp = sub.add_parser("check", help="smoke-test that every vignette chunk runs")
    sp.add_argument("paths", nargs="*")
    sp.add_argument("--dpi", type=float, default=72.0)
    sp.set_defaults(func=cmd_check)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    matplotlib.use("Agg")
    log_dir = Path(args.log_dir) if args.log_dir else None
    setup_logging(console_level=getattr(logging, args.log_level), log_dir=log_dir)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
