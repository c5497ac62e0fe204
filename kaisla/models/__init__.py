"""SQLAlchemy ORM models."""

from kaisla.models.base import Base
from kaisla.models.blog import BlogArticle, BlogArticleImage, BlogTag, blog_articles_tags
from kaisla.models.content import AboutSection, ContactLink, PageContent
from kaisla.models.product import Product, ProductImage
from kaisla.models.user import User

__all__ = [
    "AboutSection",
    "Base",
    "BlogArticle",
    "BlogArticleImage",
    "BlogTag",
    "ContactLink",
    "PageContent",
    "Product",
    "ProductImage",
    "User",
    "blog_articles_tags",
]
