"""
Template catalog.

Read-only list of styling presets. Templates are seeded once from
seed_templates.yaml and are never written by the application; rating and
downloads are seed values.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from omegaconf import OmegaConf

from resumekit.contexts.store import Identity, ResumeStore

SEED_TEMPLATES_PATH = Path(__file__).parent / "seed_templates.yaml"
ALL_CATEGORIES = "all"


@dataclass(frozen=True)
class Template:
    """
    A catalog entry.

    Attributes:
        id: Stable identifier referenced by resumes (e.g., "modern-minimal")
        name: Display name
        category: Category label (e.g., "Creative")
        preview_url: Optional preview image reference
        is_premium: Whether the template is a premium offering
        rating: 0-5, one decimal
        downloads: Download counter
        template_data: Template-specific styling (layout, colors, ...)
    """
    id: str
    name: str
    category: str
    preview_url: Optional[str] = None
    is_premium: bool = False
    rating: float = 4.5
    downloads: int = 0
    template_data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Template":
        return cls(
            id=row["id"],
            name=row["name"],
            category=row["category"],
            preview_url=row.get("preview_url"),
            is_premium=row.get("is_premium", False),
            rating=row.get("rating", 4.5),
            downloads=row.get("downloads", 0),
            template_data=row.get("template_data") or {},
        )

    @property
    def layout(self) -> str:
        return self.template_data.get("layout", "minimal")


def load_seed_templates(yaml_path: Path = SEED_TEMPLATES_PATH) -> List[Dict[str, Any]]:
    """
    Load template seed rows from YAML.

    Args:
        yaml_path: Seed file (default: bundled seed_templates.yaml)

    Returns:
        List of row dicts ready for ResumeStore.create(template_seeds=...)

    Raises:
        FileNotFoundError: If yaml_path does not exist
        ValueError: If an entry is missing required keys or has an out-of-range rating
    """
    yaml_path = Path(yaml_path)
    if not yaml_path.exists():
        raise FileNotFoundError(f"Template seed file not found: {yaml_path}")

    data = OmegaConf.to_container(OmegaConf.load(yaml_path), resolve=True)
    if "templates" not in data:
        raise ValueError(f"Invalid seed file: missing 'templates' key in {yaml_path}")

    seeds = []
    for entry in data["templates"]:
        missing = [key for key in ("id", "name", "category") if key not in entry]
        if missing:
            raise ValueError(f"Template seed missing {', '.join(missing)}: {entry}")

        rating = round(float(entry.get("rating", 4.5)), 1)
        if not 0 <= rating <= 5:
            raise ValueError(f"Template {entry['id']} rating out of range: {rating}")

        seeds.append({**entry, "rating": rating})
    return seeds


def list_templates(store: ResumeStore, identity: Optional[Identity] = None) -> List[Template]:
    """Fetch the full catalog ordered by download count, most downloaded first."""
    rows = store.select("resume_templates", identity, order_by="downloads", descending=True)
    return [Template.from_row(row) for row in rows]


def get_template(store: ResumeStore, template_id: str, identity: Optional[Identity] = None) -> Template:
    """
    Fetch one template.

    Raises:
        RecordNotFoundError: If no template has this id
    """
    row = store.select_one("resume_templates", identity, {"id": template_id})
    return Template.from_row(row)


def filter_templates(
    templates: List[Template], category: str = ALL_CATEGORIES, search: str = ""
) -> List[Template]:
    """
    Filter templates the way the gallery does.

    Category matches by case-insensitive equality ("all" disables it); search
    is a case-insensitive substring of the name or category. Input order is kept.

    Args:
        templates: Catalog (typically from list_templates)
        category: Category to keep, or "all"
        search: Search term (empty disables it)

    Returns:
        Filtered list
    """
    filtered = templates

    if category and category.lower() != ALL_CATEGORIES:
        filtered = [t for t in filtered if t.category.lower() == category.lower()]

    if search:
        term = search.lower()
        filtered = [t for t in filtered if term in t.name.lower() or term in t.category.lower()]

    return filtered


def template_categories(templates: List[Template]) -> List[str]:
    """Category choices for the gallery: "all" followed by each category in first-seen order."""
    categories = [ALL_CATEGORIES]
    for template in templates:
        if template.category not in categories:
            categories.append(template.category)
    return categories
