"""Errors raised by the post rendering pipeline.

Each error carries the HTTP status and the short plain-text message the
client receives; the application-level handler in :mod:`app.main` turns
them into terminal responses.
"""


class PostError(Exception):
    status_code = 500
    message = "Internal Server Error"

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail or self.message)
        self.detail = detail


class PostNotFound(PostError):
    """No content exists for the requested slug (or it could not be read)."""

    status_code = 404
    message = "Post not found"


class FrontmatterError(PostError):
    """A frontmatter block is present but cannot be parsed."""

    message = "Error parsing frontmatter"


class MarkdownRenderError(PostError):
    message = "Error converting markdown"


class TemplateRenderError(PostError):
    """The layout template failed to load or execute."""

    message = "Error parsing template"
