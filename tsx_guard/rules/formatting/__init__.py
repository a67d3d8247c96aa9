"""
Formatting rules for markup layout.

Rules in this module:
- FORMATTING.JSX_MULTILINE_SPACING - Blank line before multi-line elements
- FORMATTING.JSX_EXPRESSION_SPACING - Blank line between elements and {expressions}
"""

# Rules will be auto-discovered from this directory
