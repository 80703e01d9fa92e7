"""Module entry point.

Why it exists:
- Allows running the CLI with `python -m apiary` during development.
- Keeps a simple entrypoint alongside the `apiary` console script.
"""

from __future__ import annotations

import sys

# Workaround for UnicodeEncodeError on Windows terminals/CI (cp1252 vs utf-8).
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from apiary.cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
