"""
Templates Module - letter template catalog, placeholder substitution and
section breakdowns.
"""

from lettercraft.templates.catalog import (
    Template,
    TemplateCatalog,
    TemplateCatalogError,
    get_catalog,
    load_templates,
)
from lettercraft.templates.prompt_builder import (
    build_variable_map,
    extract_variables,
    fill_template,
)

__all__ = [
    "Template",
    "TemplateCatalog",
    "TemplateCatalogError",
    "get_catalog",
    "load_templates",
    "build_variable_map",
    "extract_variables",
    "fill_template",
]
