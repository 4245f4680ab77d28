import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape
from markupsafe import Markup

from app.errors import TemplateRenderError
from app.models.post import Post

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "post.html"


class PageRenderer:
    """Renders a :class:`Post` into the HTML layout template.

    ``post.content`` is injected verbatim as trusted HTML; every other field
    is autoescaped. This is only safe while posts come from trusted sources:
    markdown passes raw HTML through, so an untrusted content source would
    turn the layout into an XSS vector.

    With ``reload=True`` the layout is read and parsed on every call; with
    ``reload=False`` it is parsed once and reused.
    """

    def __init__(
        self,
        template_dir: Path,
        template_name: str = DEFAULT_TEMPLATE,
        reload: bool = True,
        stylesheet: str = "",
    ) -> None:
        self.template_name = template_name
        self.stylesheet = stylesheet
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(default=True),
            cache_size=0 if reload else 1,
            auto_reload=reload,
        )

    def render(self, post: Post) -> str:
        """Return the full HTML page for *post*.

        The page is rendered to a string so that a failure never leaves
        partial output behind.

        Raises:
            TemplateRenderError: the template cannot be loaded, parsed or
                executed.
        """
        try:
            template = self.env.get_template(self.template_name)
        except TemplateError as exc:
            logger.error("Cannot load template %s: %s", self.template_name, exc)
            raise TemplateRenderError(str(exc)) from exc

        try:
            return template.render(
                post=post,
                title=post.title,
                author=post.author,
                content=Markup(post.content),
                highlight_css=Markup(self.stylesheet),
            )
        except TemplateError as exc:
            logger.error("Cannot render template %s: %s", self.template_name, exc)
            raise TemplateRenderError(str(exc)) from exc
