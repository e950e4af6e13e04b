"""Module entrypoint.

Allows:
    python -m termlog
"""

from __future__ import annotations

from termlog.cli import main

if __name__ == "__main__":
    main()
