"""Allow ``python -m qr_tools scanner|generator [args...]``."""

from __future__ import annotations

import importlib
import sys
from typing import Optional, Sequence

PROGRAMS = {
    "scanner": "qr_tools.modules.Scanner.main_scanner",
    "generator": "qr_tools.modules.Generator.main_generator",
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args or args[0] not in PROGRAMS:
        print("usage: python -m qr_tools {scanner,generator} [args...]", file=sys.stderr)
        print(f"Available programs: {', '.join(PROGRAMS)}", file=sys.stderr)
        return 2

    module = importlib.import_module(PROGRAMS[args[0]])
    return module.main(args[1:])


if __name__ == "__main__":
    sys.exit(main())
