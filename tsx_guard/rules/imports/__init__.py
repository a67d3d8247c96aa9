"""
Import and export consolidation rules.

Rules in this module:
- IMPORTS.DUPLICATE_IMPORTS - Several imports from one module
- IMPORTS.CONSOLIDATE_TYPE_IMPORTS - Separate type-only and value imports from one module
- IMPORTS.DUPLICATE_EXPORTS - Several re-exports from one module
"""

# Rules will be auto-discovered from this directory
