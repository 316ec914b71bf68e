"""Package entry point.

Preferred invocation is via the installed console script:

    analyst-report ...

For convenience we also support:

    python -m analyst_report ...
"""

from __future__ import annotations

from .cli import app


def main() -> None:
    """Entry point used by `python -m analyst_report`."""

    app()


if __name__ == "__main__":
    main()
