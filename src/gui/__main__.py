"""Module entrypoint for `python -m gui`.

An optional first argument overrides the data source (URL or file path).
"""

from __future__ import annotations

import sys

from . import launcher as _launcher


def main():  # pragma: no cover - runtime delegation
    source = sys.argv[1] if len(sys.argv) > 1 else None
    sys.exit(_launcher.main(source))


if __name__ == "__main__":  # pragma: no cover
    main()
