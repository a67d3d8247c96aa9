"""
Structural simplification rules.

Rules in this module:
- SIMPLIFICATION.UNNECESSARY_WRAPPER - Wrapper element around a single child
- SIMPLIFICATION.REDUNDANT_DEFAULT_PROPS - Props set to their default value
- SIMPLIFICATION.SINGLE_LINE_ARROW - Arrow functions with a one-statement block body
"""

# Rules will be auto-discovered from this directory
