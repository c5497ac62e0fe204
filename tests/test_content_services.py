"""Unit tests for about sections, contact links and page content services."""

import unittest
import uuid
from unittest.mock import MagicMock, patch

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from kaisla.core.errors import BadRequestError, ConflictError, NotFoundError
from kaisla.models import AboutSection, ContactLink, PageContent
from kaisla.schemas.content import (
    AboutSectionUpdate,
    ContactLinkCreate,
    ContactLinkUpdate,
    PageContentCreate,
    PageContentUpdate,
)
from kaisla.services import about_sections as about_service
from kaisla.services import contact_links as contact_service
from kaisla.services import page_content as page_service
from kaisla.services.uploads import SUBDIR_ABOUT_SECTIONS, SUBDIR_PAGE_CONTENT, StoredFile

BASE_URL = "http://localhost:4000"


def _stored(name: str, subdir: str) -> StoredFile:
    return StoredFile(filename=name, original_name=name, content_type="image/png", size=1, subdir=subdir)


def _session_first(result: object) -> MagicMock:
    session = MagicMock()
    session.query.return_value.filter.return_value.first.return_value = result
    return session


class TestAboutSections(unittest.TestCase):
    def _section(self) -> AboutSection:
        return AboutSection(
            id=uuid.uuid4(),
            title="L'atelier",
            paragraphs=["Premier"],
            image=f"{BASE_URL}/uploads/about-sections/old.png",
            image_alt="Atelier",
            sort_order=0,
            is_published=True,
        )

    def test_unpublished_section_is_hidden(self) -> None:
        session = _session_first(None)
        with self.assertRaises(NotFoundError):
            about_service.find_published_by_id(session, uuid.uuid4())

    def test_update_applies_fields(self) -> None:
        section = self._section()
        session = _session_first(section)
        about_service.update(
            session, section.id, AboutSectionUpdate.model_validate({"paragraphs": ["Un", "Deux"]})
        )
        self.assertEqual(section.paragraphs, ["Un", "Deux"])
        self.assertEqual(section.title, "L'atelier")

    def test_update_image_replaces_url_then_discards_old_file(self) -> None:
        section = self._section()
        session = _session_first(section)
        with patch("kaisla.services.uploads.discard_file_for_url") as discard:
            about_service.update_image(
                session, section.id, _stored("new.png", SUBDIR_ABOUT_SECTIONS), BASE_URL
            )
        self.assertEqual(section.image, f"{BASE_URL}/uploads/about-sections/new.png")
        discard.assert_called_once_with(
            f"{BASE_URL}/uploads/about-sections/old.png", SUBDIR_ABOUT_SECTIONS
        )

    def test_update_image_of_missing_section_cleans_new_file(self) -> None:
        session = _session_first(None)
        stored = _stored("new.png", SUBDIR_ABOUT_SECTIONS)
        with patch("kaisla.services.uploads.cleanup_stored") as cleanup:
            with self.assertRaises(NotFoundError):
                about_service.update_image(session, uuid.uuid4(), stored, BASE_URL)
        cleanup.assert_called_once_with([stored])

    def test_remove_with_missing_file_succeeds(self) -> None:
        section = self._section()
        session = _session_first(section)
        about_service.remove(session, section.id)
        session.delete.assert_called_once_with(section)
        session.commit.assert_called_once()

    def test_remove_discards_image_after_commit(self) -> None:
        section = self._section()
        session = _session_first(section)
        with patch("kaisla.services.uploads.discard_file_for_url") as discard:
            about_service.remove(session, section.id)
        discard.assert_called_once_with(section.image, SUBDIR_ABOUT_SECTIONS)

    def test_failed_remove_keeps_image(self) -> None:
        section = self._section()
        session = _session_first(section)
        session.commit.side_effect = SQLAlchemyError("connection lost")
        with patch("kaisla.services.uploads.discard_file_for_url") as discard:
            with self.assertRaises(BadRequestError):
                about_service.remove(session, section.id)
        discard.assert_not_called()
        session.rollback.assert_called_once()


class TestContactLinks(unittest.TestCase):
    def test_duplicate_platform_and_url_is_conflict(self) -> None:
        existing = ContactLink(id=uuid.uuid4(), platform="instagram", url="https://instagram.com/k")
        session = _session_first(existing)
        body = ContactLinkCreate.model_validate({"platform": "instagram", "url": "https://instagram.com/k"})
        with self.assertRaises(ConflictError):
            contact_service.create(session, body)
        session.add.assert_not_called()

    def test_unique_violation_on_commit_is_conflict(self) -> None:
        session = _session_first(None)
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))
        body = ContactLinkCreate.model_validate({"platform": "email", "url": "mailto:a@kaisla.fr"})
        with self.assertRaises(ConflictError):
            contact_service.create(session, body)
        session.rollback.assert_called_once()

    def test_update_can_clear_label(self) -> None:
        link = ContactLink(
            id=uuid.uuid4(),
            platform="email",
            url="mailto:a@kaisla.fr",
            label="Email",
            sort_order=0,
            is_active=True,
        )
        session = _session_first(link)
        contact_service.update(
            session, link.id, ContactLinkUpdate.model_validate({"label": None, "isActive": False})
        )
        self.assertIsNone(link.label)
        self.assertFalse(link.is_active)
        self.assertEqual(session.query.return_value.filter.return_value.first.call_count, 1)


class TestPageContent(unittest.TestCase):
    def test_missing_section_message(self) -> None:
        session = _session_first(None)
        with self.assertRaises(NotFoundError) as ctx:
            page_service.find_by_page_and_section(session, "home", "hero")
        self.assertEqual(ctx.exception.message, 'Page content "home/hero" not found')

    def test_create_sanitizes_content(self) -> None:
        session = _session_first(None)
        body = PageContentCreate.model_validate(
            {"page": "home", "section": "intro", "content": '<p style="x">Hi</p><img src=x>'}
        )
        block = page_service.create(session, body)
        self.assertEqual(block.content, "<p>Hi</p>")
        self.assertIsNone(block.image)
        session.add.assert_called_once_with(block)

    def test_duplicate_page_section_is_conflict(self) -> None:
        session = _session_first(PageContent(id=uuid.uuid4(), page="home", section="hero"))
        body = PageContentCreate.model_validate({"page": "home", "section": "hero"})
        with self.assertRaises(ConflictError) as ctx:
            page_service.create(session, body)
        self.assertEqual(ctx.exception.message, 'Page content "home/hero" already exists')

    def test_create_with_image_conflict_cleans_file(self) -> None:
        session = _session_first(PageContent(id=uuid.uuid4(), page="home", section="hero"))
        body = PageContentCreate.model_validate({"page": "home", "section": "hero"})
        stored = _stored("hero.png", SUBDIR_PAGE_CONTENT)
        with patch("kaisla.services.uploads.cleanup_stored") as cleanup:
            with self.assertRaises(ConflictError):
                page_service.create_with_image(session, body, stored, BASE_URL)
        cleanup.assert_called_once_with([stored])

    def test_create_with_image_sets_url_and_metadata(self) -> None:
        session = _session_first(None)
        body = PageContentCreate.model_validate(
            {"page": "home", "section": "hero", "metadata": {"cta": "/shop"}}
        )
        block = page_service.create_with_image(
            session, body, _stored("hero.png", SUBDIR_PAGE_CONTENT), BASE_URL
        )
        self.assertEqual(block.image, f"{BASE_URL}/uploads/page-content/hero.png")
        self.assertEqual(block.page_metadata, {"cta": "/shop"})

    def test_update_resanitizes_and_clears_metadata(self) -> None:
        block = PageContent(
            id=uuid.uuid4(),
            page="home",
            section="hero",
            content="<p>old</p>",
            page_metadata={"a": 1},
            is_published=True,
            sort_order=0,
        )
        session = _session_first(block)
        page_service.update(
            session,
            block.id,
            PageContentUpdate.model_validate({"content": "<h2 class='x'>New</h2>", "metadata": None}),
        )
        self.assertEqual(block.content, "<h2>New</h2>")
        self.assertIsNone(block.page_metadata)
