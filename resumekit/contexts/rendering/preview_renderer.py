"""
Markdown preview of a resume.

Preview templates live in resumekit/contexts/rendering/layouts/{layout}.md.jinja.
A catalog template's styling data names its layout; layouts without a
dedicated file fall back to default.md.jinja.
"""

from pathlib import Path
from typing import Dict, Optional

from jinja2 import Environment, FileSystemLoader, Template, TemplateNotFound

LAYOUTS_PATH = Path(__file__).parent / "layouts"
DEFAULT_LAYOUT = "default"
PRESENT = "Present"


def format_period(start_date: str, end_date: str) -> str:
    """
    Format an entry period for display.

    Examples:
        format_period("2020-01", "2022-06")  # "2020-01 – 2022-06"
        format_period("2020-01", "")         # "2020-01 – Present"
        format_period("", "")                # ""
    """
    if not start_date and not end_date:
        return ""
    return f"{start_date or '?'} – {end_date or PRESENT}"


class PreviewRenderer:
    """
    Loads and caches preview templates by layout name.
    """

    def __init__(self, layouts_path: Path = LAYOUTS_PATH):
        self.layouts_path = layouts_path
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(layouts_path)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["period"] = lambda entry: format_period(entry.start_date, entry.end_date)

    def get_template(self, layout: str) -> Template:
        """
        Get the template for a layout, falling back to the default layout.

        Raises:
            TemplateNotFound: If neither the layout nor the default template exists
        """
        if layout in self._cache:
            return self._cache[layout]

        try:
            template = self.env.get_template(f"{layout}.md.jinja")
        except TemplateNotFound:
            if layout == DEFAULT_LAYOUT:
                raise TemplateNotFound(
                    f"Default preview template missing at {self.layouts_path / 'default.md.jinja'}"
                )
            template = self.get_template(DEFAULT_LAYOUT)

        self._cache[layout] = template
        return template

    def is_cached(self, layout: str) -> bool:
        return layout in self._cache

    def clear_cache(self):
        self._cache.clear()

    def render(self, record, template=None) -> str:
        """
        Render a resume record as Markdown.

        Args:
            record: ResumeRecord to render
            template: Catalog Template styling the resume (optional)

        Returns:
            Markdown text
        """
        layout = template.layout if template is not None else DEFAULT_LAYOUT
        colors = template.template_data.get("colors", {}) if template is not None else {}
        return self.get_template(layout).render(
            title=record.title,
            content=record.content,
            template_name=template.name if template is not None else None,
            colors=colors,
        )


_default_renderer: Optional[PreviewRenderer] = None


def render_preview(record, template=None) -> str:
    """Render a resume with the shared renderer."""
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = PreviewRenderer()
    return _default_renderer.render(record, template)
