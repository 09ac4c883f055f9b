"""CLI interface for sbxai_annotation.

Each subcommand lives in its own ``cli/<name>/__init__.py`` exposing
``COMMAND_DESCRIPTION`` and ``command(subparser)``; they are discovered at
startup.
"""

import sbxai_annotation.utils.i18n  # noqa: F401

import argparse
import logging
import sys
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser
from gettext import gettext as _
from pathlib import Path

from sbxai_annotation.errors import SbxaiError
from sbxai_annotation.utils.misc import load_module

logger = logging.getLogger(__name__)


def add_subcommand(subparsers, name: str, submodule):
    subparser = subparsers.add_parser(name, help=submodule.COMMAND_DESCRIPTION)
    common_flags(subparser)
    handler = submodule.command(subparser)
    subparser.set_defaults(fn=handler)


def common_flags(parser):
    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        action="store_true",
        help=_("Give more details about what is happening"),
    )  # noqa: E501
    parser.add_argument(
        "-V",
        "--version",
        dest="is_show_version",
        action="store_true",
        help=_("Print version and exit"),
    )  # noqa: E501
    parser.add_argument(
        "--base-url",
        dest="base_url",
        default=argparse.SUPPRESS,
        help=_("Base URL of the annotation service (overrides SBXAI_API__BASE_URL)"),
    )


def build_parser():
    parser = ArgumentParser(
        prog="sbxai_annotation", formatter_class=ArgumentDefaultsHelpFormatter
    )
    common_flags(parser)
    subparsers = parser.add_subparsers()

    for module in sorted(Path(__file__).parent.glob("*/__init__.py")):
        if str(module).find("pycache") > 0:
            continue
        module_name = module.parent.name
        subcommand_module = load_module(
            module, module_name=f"sbxai_annotation.cli.{module_name}"
        )
        add_subcommand(subparsers, module_name, subcommand_module)
    return parser


def main(argv=None):  # pragma: no cover
    """
    Entry point for `python -m sbxai_annotation` and `$ sbxai_annotation`.
    """
    logging.basicConfig()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.root.setLevel(logging.DEBUG)

    version = (Path(__file__).parent.parent / "VERSION").read_text().strip()
    if args.is_show_version:
        print(version)
        sys.exit(0)
    logger.debug(f"{_('Starting')} sbxai_annotation v{version}")

    fn = args.__dict__.get("fn")
    args.__dict__["fn"] = None
    if fn is None:
        parser.print_help()
        sys.exit(2)
    try:
        fn(args)
    except SbxaiError as e:
        logger.error("%s", e)
        sys.exit(1)
