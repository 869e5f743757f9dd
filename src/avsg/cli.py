from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__, crypto
from .achievements import Achievements
from .errors import AvsgError, SaveIOError
from .logging_config import configure_logging
from .report import render_hacker, render_progress
from .savefile import load_save
from .settings import Settings

logger = logging.getLogger(__name__)


def _print_lines(lines: List[str]) -> None:
    for line in lines:
        print(line)


def _load(args: argparse.Namespace, settings: Settings):
    unencrypted = settings.input.unencrypted if args.unencrypted is None else args.unencrypted
    return load_save(args.input, unencrypted=unencrypted, strict=settings.decoder.strict)


def _cmd_achievements(args: argparse.Namespace, settings: Settings) -> int:
    savedata = _load(args, settings)
    _print_lines(render_progress(Achievements(savedata).progress()))
    return 0


def _cmd_hacker(args: argparse.Namespace, settings: Settings) -> int:
    savedata = _load(args, settings)
    _print_lines(render_hacker(Achievements(savedata).hacker_requires()))
    return 0


def _cmd_decrypt(args: argparse.Namespace, settings: Settings) -> int:
    if args.output is not None and Path(args.output).exists():
        # Checked up front so nothing is decrypted for a doomed write.
        raise SaveIOError(f"Refusing to overwrite existing file: {args.output}")
    data = crypto.decrypt_file(args.input)
    if args.output is None:
        sys.stdout.buffer.write(data)
        sys.stdout.flush()
    else:
        crypto.write_new_file(args.output, data)
        logger.info("Decrypted %s to %s", args.input, args.output)
    return 0


def _cmd_encrypt(args: argparse.Namespace, settings: Settings) -> int:
    crypto.encrypt_file(args.input, args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="avsg",
        description="Inspect Axiom Verge save files: decrypt Steam saves and report achievement progress.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    p.add_argument(
        "--config",
        dest="config_path",
        type=Path,
        default=None,
        help="Path to a settings YAML file to override defaults.",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    a = sub.add_parser("achievements", help="Show achievement progress for a save game")
    a.add_argument(
        "-u", "--unencrypted", action=argparse.BooleanOptionalAction, default=None, help="Input is an unencrypted save game"
    )
    a.add_argument("input", metavar="INPUT", help="Save game to analyse")
    a.set_defaults(func=_cmd_achievements)

    d = sub.add_parser("decrypt", help="Decrypt an Axiom Verge Steam file")
    d.add_argument("input", metavar="INPUT", help="File to decrypt")
    d.add_argument("output", metavar="OUTPUT", nargs="?", default=None, help="File to output to (default: stdout)")
    d.set_defaults(func=_cmd_decrypt)

    e = sub.add_parser("encrypt", help="Encrypt a file for Axiom Verge on Steam")
    e.add_argument("input", metavar="INPUT", help="File to encrypt")
    e.add_argument("output", metavar="OUTPUT", help="File to output encrypted content to")
    e.set_defaults(func=_cmd_encrypt)

    h = sub.add_parser("hacker", help="List creatures that need glitching for the Hacker achievement")
    h.add_argument(
        "-u", "--unencrypted", action=argparse.BooleanOptionalAction, default=None, help="Input is an unencrypted save game"
    )
    h.add_argument("input", metavar="INPUT", help="Save game to analyse")
    h.set_defaults(func=_cmd_hacker)

    return p


def _log_level(verbosity: int, settings: Settings) -> int:
    if verbosity == 1:
        return logging.INFO
    if verbosity >= 2:
        return logging.DEBUG
    return settings.logging.level_number


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = Settings.load(user_path=args.config_path)
        configure_logging(_log_level(args.verbose, settings))
        return args.func(args, settings)
    except AvsgError as e:
        logger.debug("Command %s failed", args.cmd, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
