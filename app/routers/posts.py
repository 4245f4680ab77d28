import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import Settings
from app.models.post import Post
from app.services.content_source import ContentSource, build_content_source
from app.services.front_matter import extract_frontmatter
from app.services.markdown_renderer import MarkdownRenderer
from app.services.page_renderer import PageRenderer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Collaborators – built once per process, overridable via
# ``app.dependency_overrides``.
# ---------------------------------------------------------------------------

@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()


@lru_cache
def get_content_source() -> ContentSource:
    return build_content_source(get_settings())


@lru_cache
def get_markdown_renderer() -> MarkdownRenderer:
    return MarkdownRenderer(style=get_settings().highlight_style)


@lru_cache
def get_page_renderer() -> PageRenderer:
    settings = get_settings()
    return PageRenderer(
        settings.template_dir,
        template_name=settings.template_name,
        reload=settings.reload_templates,
        stylesheet=get_markdown_renderer().stylesheet(),
    )


limiter = Limiter(key_func=get_remote_address)
router = APIRouter(tags=["Posts"])


@router.get(
    "/posts/{slug}",
    response_class=HTMLResponse,
    summary="Render a blog post",
    responses={
        404: {"description": "Post not found", "content": {"text/plain": {}}},
        500: {"description": "Rendering failed", "content": {"text/plain": {}}},
    },
)
@limiter.limit(get_settings().rate_limit)
async def show_post(
    request: Request,
    slug: str,
    source: ContentSource = Depends(get_content_source),
    markdown_renderer: MarkdownRenderer = Depends(get_markdown_renderer),
    page_renderer: PageRenderer = Depends(get_page_renderer),
) -> HTMLResponse:
    """Load ``{slug}.md``, render its markdown and return the full HTML page.

    Each step hands its result to the next one and any failure stops the
    pipeline; the raised :class:`~app.errors.PostError` is turned into a
    plain-text 404/500 response by the application's error handler.
    """
    logger.info("Post request received", extra={"slug": slug})

    # ── Step 1: load raw content ──────────────────────────────────────────────
    raw = await source.read(slug)

    # ── Step 2: split off the frontmatter ─────────────────────────────────────
    metadata, body = extract_frontmatter(raw)

    # ── Step 3: markdown → HTML fragment ──────────────────────────────────────
    content = markdown_renderer.render(body)

    # ── Step 4: render the layout ─────────────────────────────────────────────
    post = Post(
        slug=metadata.slug or slug,
        title=metadata.title,
        author=metadata.author,
        content=content,
    )
    page = page_renderer.render(post)

    return HTMLResponse(page)
