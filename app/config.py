"""Process configuration read from ``SLUGPRESS_*`` environment variables."""

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field

ENV_PREFIX = "SLUGPRESS_"
DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class Settings(BaseModel):
    content_dir: Path = Path(".")
    content_url: Optional[str] = None
    """Base URL of a remote content store. When set, posts are fetched from
    ``{content_url}/{slug}.md`` instead of the local filesystem."""

    template_dir: Path = DEFAULT_TEMPLATE_DIR
    template_name: str = "post.html"
    reload_templates: bool = True
    """Re-parse the layout template on every request (edit-and-refresh).
    Set to false to parse it once and reuse it."""

    highlight_style: str = "dracula"
    rate_limit: str = "60/minute"
    host: str = "0.0.0.0"
    port: int = Field(default=3030, ge=1, le=65535)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from *environ* (defaults to ``os.environ``).

        Only variables that are present and non-empty override the defaults;
        pydantic handles the coercion (``"false"`` → ``False``, ``"8080"`` →
        ``8080``) and raises ``ValidationError`` for bad values.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw:
                values[name] = raw
        return cls(**values)
