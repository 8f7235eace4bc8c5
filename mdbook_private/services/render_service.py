"""Render service implementation.

Provides an HTML preview of a transformed chapter using the markdown
library, so authors can check how private sections will look without
running a full book build.
"""

import html

import markdown
from markdown.extensions.fenced_code import FencedCodeExtension
from markdown.extensions.tables import TableExtension

from .section_service import CONTAINER_CLASS

# HTML template for previews
HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>{title}</title>
    <style>
        body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; max-width: 800px; margin: 0 auto; padding: 2rem; }}
        .{container} {{ border-left: 4px solid #ddd; margin: 1rem 0; color: #666; }}
        .{container} blockquote {{ margin: 0; }}
    </style>
</head>
<body>
    <article>
        {content}
    </article>
</body>
</html>"""


class RenderService:
    """Service for rendering transformed chapters to HTML."""

    def __init__(self) -> None:
        self._md = markdown.Markdown(
            extensions=[TableExtension(), FencedCodeExtension(), "md_in_html"],
            output_format="html5",
        )

    def render(self, content: str) -> str:
        """Render transformed markdown content to an HTML fragment.

        Private containers are flagged so the markdown inside them is
        rendered rather than passed through as raw HTML.

        Args:
            content: Markdown that has already been transformed.

        Returns:
            The rendered HTML (body only, not full document).
        """
        content = content.replace(
            f'<div class="{CONTAINER_CLASS}"',
            f'<div markdown="1" class="{CONTAINER_CLASS}"',
        )
        self._md.reset()
        return self._md.convert(content)

    def render_page(self, content: str, title: str) -> str:
        """Render content as a complete standalone HTML page."""
        return HTML_TEMPLATE.format(
            title=html.escape(title),
            container=CONTAINER_CLASS,
            content=self.render(content),
        )
