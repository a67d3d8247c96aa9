"""
Styling rules for class name handling.

Rules in this module:
- STYLING.PREFER_CN_FOR_CLASSNAME - Template strings in className rewritten to cn()
"""

# Rules will be auto-discovered from this directory
