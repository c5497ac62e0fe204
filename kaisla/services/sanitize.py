"""HTML sanitization and slug generation for editor-supplied content."""

import nh3
from slugify import slugify

# Rich text allowed in blog articles.
ARTICLE_TAGS = {"p", "br", "strong", "em", "ul", "ol", "li", "h2", "h3", "hr", "a", "span"}
ARTICLE_ATTRIBUTES = {
    "a": {"href", "target"},
    "span": {"style"},
}
ARTICLE_STYLE_PROPERTIES = {"color"}

# Page content blocks: structure only, no attributes.
PAGE_CONTENT_TAGS = {"p", "br", "strong", "em", "ul", "ol", "li", "h2", "h3", "hr"}


def sanitize_article_html(content: str) -> str:
    """Strip everything but the article allow-list; span keeps only a color style."""
    return nh3.clean(
        content,
        tags=ARTICLE_TAGS,
        attributes=ARTICLE_ATTRIBUTES,
        filter_style_properties=ARTICLE_STYLE_PROPERTIES,
        link_rel="noopener noreferrer",
    )


def sanitize_page_html(content: str | None) -> str | None:
    if not content:
        return content
    return nh3.clean(content, tags=PAGE_CONTENT_TAGS, attributes={})


def generate_slug(text: str) -> str:
    """Lowercase ASCII slug: accents stripped, runs of other characters become '-'."""
    return slugify(text)
