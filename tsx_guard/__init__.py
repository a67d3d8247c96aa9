"""tsx-guard: rule-based static analysis and rewriting for TSX/JSX sources."""

__version__ = "0.1.0"
