"""
__main__ provides the console-script entrypoint for the playpen package.
"""
from __future__ import annotations

import sys
import traceback

from playpen.cli import main as cli_main


def main(argv: list[str] | None = None) -> None:
    """
    main is the entrypoint for the `playpen` console script.
    """
    try:
        code = cli_main(argv)
    except SystemExit as e:
        code = int(e.code) if isinstance(e.code, int) else 1
        if code == 0:
            raise
    except Exception as e:
        print(f"unexpected error: {type(e).__name__}: {e}", file=sys.stderr)
        traceback.print_exc()
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
