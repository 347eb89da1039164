"""
Rendering Context

Responsibilities:
- Renders a resume as a Markdown preview, styled by its catalog template's layout

Owns: Preview templates
Never: Exports PDF or other document formats
"""

from resumekit.contexts.rendering.preview_renderer import (
    PreviewRenderer,
    format_period,
    render_preview,
)

__all__ = ["PreviewRenderer", "format_period", "render_preview"]
