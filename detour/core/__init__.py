"""
Core configuration and shared state.

Modules:
- settings: Environment-backed application settings
- id_map: Legacy bib ID to Ex Libris ID map
- rule_sets: Per-platform redirect rule tables
"""
