"""
Routers module - API endpoint handlers organized by feature.

- letters: letter generation, section drafting, catalog, PDF export, stats
"""
