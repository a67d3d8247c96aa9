"""
Component usage diagnostics.

Rules in this module:
- COMPONENTS.PREFER_UI_COMPONENTS - Raw HTML elements with inherent styling
- COMPONENTS.REACT_FC_PATTERN - Arrow function components without React.FC
"""

# Rules will be auto-discovered from this directory
