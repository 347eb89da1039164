"""
Catalog Context

Responsibilities:
- Loads the template seed file
- Reads the template catalog in download order
- Filters templates by category and search term

Owns: Template catalog reads
Never: Writes templates (rating and downloads are seed data)
"""

from resumekit.contexts.catalog.template_catalog import (
    ALL_CATEGORIES,
    SEED_TEMPLATES_PATH,
    Template,
    filter_templates,
    get_template,
    list_templates,
    load_seed_templates,
    template_categories,
)

__all__ = [
    "Template",
    "ALL_CATEGORIES",
    "SEED_TEMPLATES_PATH",
    "load_seed_templates",
    "list_templates",
    "get_template",
    "filter_templates",
    "template_categories",
]
