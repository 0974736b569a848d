"""Run sqlhook from a source checkout.

`python -m main run --name ... --reg-no ... --email ...` behaves like the
installed `sqlhook` script: the packages live under `src/`, which is put on
`sys.path` before importing the CLI.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    project_root = Path(__file__).resolve().parent
    src = project_root / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
