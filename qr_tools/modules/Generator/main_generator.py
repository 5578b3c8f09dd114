"""Generator entry point: ``qr-generator [-t TEXT] [-o FILE]``."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from qr_tools.cli.common import (
    add_common_cli_arguments,
    install_exception_handlers,
    log_program_shutdown,
    log_program_startup,
    setup_cli_logging,
)
from qr_tools.core.logging_utils import get_module_logger
from qr_tools.modules.base.exit_control import ExitFlag, install_exit_signal_handlers

from .config import GeneratorConfig
from .generator_core.app import GeneratorApp, GeneratorWindow, OpenCVWindow

DISPLAY_NAME = "QR Generator"
PROG = "qr-generator"

logger = get_module_logger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Interactively build a QR code and save it as a PNG.",
    )
    parser.add_argument(
        "-t",
        "--text",
        default=None,
        help="Initial payload (default: \"Hello, QR!\")",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="File to write on save; without it a name is derived from the parameters",
    )
    add_common_cli_arguments(parser)
    return parser.parse_args(list(argv) if argv is not None else None)


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    window: Optional[GeneratorWindow] = None,
    flag: Optional[ExitFlag] = None,
) -> int:
    args = parse_args(argv)
    setup_cli_logging(args)
    install_exception_handlers(logger)

    config = GeneratorConfig.load(args.config, args)
    state = config.initial_state()

    log_program_startup(
        logger,
        DISPLAY_NAME,
        text=state.text,
        output=state.output if state.output is not None else "auto",
    )

    flag = flag if flag is not None else ExitFlag()
    app = GeneratorApp(
        state,
        window if window is not None else OpenCVWindow(config.window_title),
        flag=flag,
        poll_interval_ms=config.poll_interval_ms,
    )
    with install_exit_signal_handlers(flag):
        reason = app.run()

    log_program_shutdown(logger, DISPLAY_NAME, reason=reason, saved=len(app.saved_paths))
    return 0


def run(argv: Optional[Sequence[str]] = None) -> None:
    sys.exit(main(argv))


if __name__ == "__main__":
    run()
