import argparse
from typing import List, Optional

from zcf.constants import CODE_TOOL_TYPES, SUPPORTED_LANGS


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="zcf",
        description="Inspect and update the zcf preferences file.",
        epilog=(
            "Examples:\n"
            "  zcf --show\n"
            "  zcf --migrate\n"
            "  zcf --lang zh-CN --ai-output-lang zh-CN\n"
            "  zcf --code-type codex\n"
            "  zcf --output-styles engineer-professional nekomata-engineer "
            "--default-output-style engineer-professional\n"
            "  zcf --output-styles --default-output-style none\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Configuration location
    parser.add_argument(
        "--config-dir",
        type=str,
        default=None,
        help="Directory holding config.toml (defaults to ~/.ufomiao/zcf).",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Print the current configuration as JSON.",
    )
    parser.add_argument(
        "--migrate",
        action="store_true",
        help="Move legacy configuration files into the current location.",
    )

    # Preferences
    parser.add_argument("--lang", choices=SUPPORTED_LANGS, default=None, help="Interface language.")
    parser.add_argument(
        "--template-lang",
        choices=SUPPORTED_LANGS,
        default=None,
        help="Language of installed workflow templates.",
    )
    parser.add_argument(
        "--ai-output-lang",
        type=str,
        default=None,
        help="Language the assistant should answer in.",
    )
    parser.add_argument(
        "--code-type",
        choices=CODE_TOOL_TYPES,
        default=None,
        help="Tool that zcf commands operate on.",
    )

    # Output styles
    parser.add_argument(
        "--output-styles",
        nargs="*",
        default=None,
        metavar="STYLE",
        help="Output styles to install (pass no values to install none).",
    )
    parser.add_argument(
        "--default-output-style",
        type=str,
        default=None,
        help="Output style Claude Code uses by default ('none' to clear).",
    )
    parser.add_argument(
        "--templates-dir",
        type=str,
        default=None,
        help="Directory containing output-style templates to copy.",
    )

    # Logging
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument("--log-file", type=str, default=None, help="Write logs to this file as well.")
    color_group = parser.add_mutually_exclusive_group()
    color_group.add_argument(
        "--color",
        dest="force_color",
        action="store_const",
        const=True,
        default=None,
        help="Always color log output.",
    )
    color_group.add_argument(
        "--no-color",
        dest="force_color",
        action="store_const",
        const=False,
        help="Never color log output.",
    )

    args = parser.parse_args(argv)

    if args.output_styles and args.default_output_style is None:
        args.default_output_style = args.output_styles[0]
    if args.output_styles is not None and not args.output_styles and args.default_output_style is None:
        parser.error("--default-output-style is required when no output styles are given")

    return args
