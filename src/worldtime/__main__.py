"""Allow running WORLDTIME with ``python -m worldtime``."""

from __future__ import annotations

# Local Imports
from . import main

if __name__ == "__main__":
    main()
