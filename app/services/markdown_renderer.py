import logging

import markdown
from pygments.formatters import HtmlFormatter
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from app.errors import MarkdownRenderError

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "dracula"
DEFAULT_CSS_CLASS = "highlight"


class MarkdownRenderer:
    """Converts markdown to an HTML fragment, highlighting fenced code blocks.

    The extension configuration is built once; each :meth:`render` call gets
    its own ``markdown.Markdown`` instance because converters keep state
    between calls and are not safe to share across concurrent requests.
    """

    def __init__(self, style: str = DEFAULT_STYLE, css_class: str = DEFAULT_CSS_CLASS) -> None:
        try:
            get_style_by_name(style)
        except ClassNotFound as exc:
            raise ValueError(f"Unknown highlight style '{style}'.") from exc

        self.style = style
        self.css_class = css_class
        self.extensions = ["fenced_code", "codehilite"]
        self.extension_configs = {
            "codehilite": {
                "css_class": css_class,
                "pygments_style": style,
                "guess_lang": False,
            },
        }

    def render(self, body: str) -> str:
        md = markdown.Markdown(
            extensions=self.extensions,
            extension_configs=self.extension_configs,
            output_format="html",
        )
        try:
            return md.convert(body)
        except Exception as exc:
            logger.error("Markdown conversion failed: %s", exc)
            raise MarkdownRenderError(str(exc)) from exc

    def stylesheet(self) -> str:
        """Return the theme's CSS rules scoped to the highlight class."""
        return HtmlFormatter(style=self.style).get_style_defs(f".{self.css_class}")
