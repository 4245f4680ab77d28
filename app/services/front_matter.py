"""Split a post's raw text into its metadata block and markdown body.

Three block formats are recognised when they open the very first line:

* ``+++`` … ``+++`` – TOML
* ``---`` … ``---`` – YAML
* ``{`` … ``}`` – JSON (braces alone on their lines)

Text that does not start with one of these delimiters has no metadata; the whole
input is the markdown body.
"""

import logging
from typing import Tuple

import yaml
from frontmatter.default_handlers import JSONHandler, TOMLHandler, YAMLHandler
from pydantic import ValidationError

from app.errors import FrontmatterError
from app.models.post import FrontMatter

logger = logging.getLogger(__name__)

# Checked in order; the first handler whose delimiter opens the text wins.
_HANDLERS = (TOMLHandler(), YAMLHandler(), JSONHandler())


def extract_frontmatter(raw: str) -> Tuple[FrontMatter, str]:
    """Return ``(metadata, body)`` for *raw*.

    Raises:
        FrontmatterError: the text opens a metadata block that is not
            terminated, cannot be parsed, or does not describe a post.
    """
    for handler in _HANDLERS:
        if handler.detect(raw):
            break
    else:
        return FrontMatter(), raw

    try:
        block, body = handler.split(raw)
    except ValueError as exc:
        raise FrontmatterError("unterminated frontmatter block") from exc

    try:
        data = handler.load(block)
    except (ValueError, yaml.YAMLError) as exc:
        raise FrontmatterError(f"invalid frontmatter: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontmatterError("frontmatter must be a key/value table")

    try:
        metadata = FrontMatter.model_validate(data)
    except ValidationError as exc:
        raise FrontmatterError(f"invalid frontmatter fields: {exc}") from exc

    logger.debug("Parsed %s frontmatter: %s", type(handler).__name__, sorted(data))
    return metadata, body
