"""Allow running tsx-guard with ``python -m tsx_guard``."""

from .cli_full import main

main()
