"""API routes. Every route passes through jwt_guard; reads meant for the storefront are marked @public."""

from fastapi import APIRouter, Depends

from kaisla.api.deps import jwt_guard
from kaisla.api.routes import about_sections, auth, blog, contact_links, health, page_content, products

router = APIRouter(dependencies=[Depends(jwt_guard)])
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(blog.router, prefix="/blog", tags=["blog"])
router.include_router(about_sections.router, prefix="/about-sections", tags=["about-sections"])
router.include_router(contact_links.router, prefix="/contact-links", tags=["contact-links"])
router.include_router(page_content.router, prefix="/page-content", tags=["page-content"])
