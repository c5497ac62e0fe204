"""Unit tests for kaisla.services.products with mocked sessions."""

import tempfile
import unittest
import uuid
from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock, patch

from sqlalchemy.exc import SQLAlchemyError

from kaisla.core.errors import BadRequestError, NotFoundError
from kaisla.models import Product, ProductImage
from kaisla.schemas.products import ProductCreate, ProductImageUpdate, ProductUpdate
from kaisla.services import products as product_service
from kaisla.services.uploads import SUBDIR_PRODUCTS, StoredFile

BASE_URL = "http://localhost:4000"


def _product(**kwargs: object) -> Product:
    defaults: dict = {
        "id": uuid.uuid4(),
        "name": "Tapis berbère",
        "category": "rug",
        "price": Decimal("120.00"),
        "status": "available",
        "stock_quantity": 1,
    }
    defaults.update(kwargs)
    return Product(**defaults)


def _stored(name: str) -> StoredFile:
    return StoredFile(
        filename=name,
        original_name=name,
        content_type="image/png",
        size=1,
        subdir=SUBDIR_PRODUCTS,
    )


class TempUploadDirMixin:
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.upload_dir = Path(self._tmp.name) / SUBDIR_PRODUCTS
        self.upload_dir.mkdir()
        settings = MagicMock()
        settings.UPLOAD_DIR = self._tmp.name
        patcher = patch("kaisla.services.uploads.get_settings", return_value=settings)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)


class TestFindById(unittest.TestCase):
    def test_missing_product_is_not_found(self) -> None:
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = None
        product_id = uuid.uuid4()
        with self.assertRaises(NotFoundError) as ctx:
            product_service.find_by_id(session, product_id)
        self.assertEqual(ctx.exception.message, f'Product with ID "{product_id}" not found')


class TestFindAll(unittest.TestCase):
    def test_pagination_counters(self) -> None:
        session = MagicMock()
        query = session.query.return_value
        query.filter.return_value = query
        query.count.return_value = 25
        paged = query.order_by.return_value.offset.return_value.limit.return_value
        paged.all.return_value = []

        result = product_service.find_all(session, category="rug", page=2, limit=10)

        self.assertEqual(result.total, 25)
        self.assertEqual(result.page, 2)
        self.assertEqual(result.limit, 10)
        self.assertEqual(result.total_pages, 3)
        query.order_by.return_value.offset.assert_called_once_with(10)
        query.order_by.return_value.offset.return_value.limit.assert_called_once_with(10)

    def test_no_filters_means_no_where_clause(self) -> None:
        session = MagicMock()
        query = session.query.return_value
        query.count.return_value = 0
        query.order_by.return_value.offset.return_value.limit.return_value.all.return_value = []
        result = product_service.find_all(session)
        query.filter.assert_not_called()
        self.assertEqual(result.total_pages, 0)


class TestStatistics(unittest.TestCase):
    def test_counts_fill_missing_buckets_with_zero(self) -> None:
        session = MagicMock()
        session.query.return_value.group_by.return_value.all.side_effect = [
            [("rug", 2)],
            [("available", 1), ("draft", 1)],
        ]
        stats = product_service.get_statistics(session)
        self.assertEqual(stats.total, 2)
        self.assertEqual(stats.by_category, {"wall-hanging": 0, "rug": 2})
        self.assertEqual(stats.by_status, {"available": 1, "sold": 0, "draft": 1})


class TestUpdate(unittest.TestCase):
    def test_null_clears_optional_fields_only(self) -> None:
        product = _product(description="old")
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = product
        body = ProductUpdate.model_validate({"name": None, "description": None, "stockQuantity": 4})
        product_service.update(session, product.id, body)
        self.assertEqual(product.name, "Tapis berbère")
        self.assertIsNone(product.description)
        self.assertEqual(product.stock_quantity, 4)
        session.commit.assert_called_once()

    def test_dimensions_stored_as_plain_dict(self) -> None:
        product = _product()
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = product
        body = ProductUpdate.model_validate({"dimensions": {"width": 80, "height": 120, "unit": "cm"}})
        product_service.update(session, product.id, body)
        self.assertEqual(product.dimensions, {"width": 80.0, "height": 120.0, "unit": "cm"})


class TestCreateWithImages(TempUploadDirMixin, unittest.TestCase):
    def test_images_get_urls_order_and_home_flags(self) -> None:
        session = MagicMock()
        body = ProductCreate.model_validate({"name": "Suspension", "category": "wall-hanging", "price": "80"})
        product = product_service.create_with_images(
            session, body, [_stored("a.png"), _stored("b.png")], BASE_URL, show_on_home=[True]
        )
        images = product.product_images
        self.assertEqual([i.url for i in images], [
            f"{BASE_URL}/uploads/products/a.png",
            f"{BASE_URL}/uploads/products/b.png",
        ])
        self.assertEqual([i.sort_order for i in images], [0, 1])
        self.assertEqual([i.show_on_home for i in images], [True, False])
        session.add.assert_called_once_with(product)
        session.commit.assert_called_once()

    def test_database_failure_removes_written_files(self) -> None:
        (self.upload_dir / "a.png").write_bytes(b"x")
        session = MagicMock()
        session.commit.side_effect = SQLAlchemyError("connection lost")
        body = ProductCreate.model_validate({"name": "Suspension", "category": "wall-hanging", "price": "80"})
        with self.assertRaises(BadRequestError) as ctx:
            product_service.create_with_images(session, body, [_stored("a.png")], BASE_URL)
        self.assertEqual(ctx.exception.message, "Failed to create product")
        self.assertFalse((self.upload_dir / "a.png").exists())
        session.rollback.assert_called_once()


class TestImages(TempUploadDirMixin, unittest.TestCase):
    def test_add_images_continue_after_highest_sort_order(self) -> None:
        product = _product(
            product_images=[
                ProductImage(url="u0", sort_order=0, show_on_home=False),
                ProductImage(url="u3", sort_order=3, show_on_home=False),
            ]
        )
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = product
        images = product_service.add_images(
            session, product.id, [_stored("c.png"), _stored("d.png")], BASE_URL
        )
        self.assertEqual([i.sort_order for i in images], [4, 5])
        self.assertTrue(all(i.product_id == product.id for i in images))

    def test_add_images_to_missing_product_removes_files(self) -> None:
        (self.upload_dir / "c.png").write_bytes(b"x")
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = None
        with self.assertRaises(NotFoundError):
            product_service.add_images(session, uuid.uuid4(), [_stored("c.png")], BASE_URL)
        self.assertFalse((self.upload_dir / "c.png").exists())

    def test_update_image_ignores_null_flags(self) -> None:
        image = ProductImage(id=uuid.uuid4(), url="u", show_on_home=True, sort_order=2)
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = image
        product_service.update_image(
            session,
            uuid.uuid4(),
            image.id,
            ProductImageUpdate.model_validate({"showOnHome": None, "sortOrder": 5}),
        )
        self.assertTrue(image.show_on_home)
        self.assertEqual(image.sort_order, 5)
        session.commit.assert_called_once()

    def test_missing_image_is_not_found(self) -> None:
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = None
        image_id = uuid.uuid4()
        with self.assertRaises(NotFoundError) as ctx:
            product_service.remove_image(session, uuid.uuid4(), image_id)
        self.assertEqual(ctx.exception.message, f'Product image with ID "{image_id}" not found')


class TestRemove(TempUploadDirMixin, unittest.TestCase):
    def test_remove_deletes_files_that_exist(self) -> None:
        (self.upload_dir / "a.png").write_bytes(b"x")
        product = _product(
            product_images=[ProductImage(url=f"{BASE_URL}/uploads/products/a.png", sort_order=0)]
        )
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = product
        product_service.remove(session, product.id)
        self.assertFalse((self.upload_dir / "a.png").exists())
        session.delete.assert_called_once_with(product)
        session.commit.assert_called_once()

    def test_remove_with_file_already_missing_succeeds(self) -> None:
        product = _product(
            product_images=[ProductImage(url=f"{BASE_URL}/uploads/products/gone.png", sort_order=0)]
        )
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = product
        product_service.remove(session, product.id)
        session.delete.assert_called_once_with(product)
        session.commit.assert_called_once()

    def test_remove_image_with_file_already_missing_succeeds(self) -> None:
        image = ProductImage(id=uuid.uuid4(), url=f"{BASE_URL}/uploads/products/gone.png", sort_order=0)
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = image
        product_service.remove_image(session, uuid.uuid4(), image.id)
        session.delete.assert_called_once_with(image)

    def test_failed_delete_keeps_files(self) -> None:
        (self.upload_dir / "a.png").write_bytes(b"x")
        product = _product(
            product_images=[ProductImage(url=f"{BASE_URL}/uploads/products/a.png", sort_order=0)]
        )
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = product
        session.commit.side_effect = SQLAlchemyError("connection lost")
        with self.assertRaises(BadRequestError) as ctx:
            product_service.remove(session, product.id)
        self.assertEqual(ctx.exception.message, "Failed to delete product")
        self.assertTrue((self.upload_dir / "a.png").exists())
        session.rollback.assert_called_once()

    def test_failed_image_delete_keeps_file(self) -> None:
        (self.upload_dir / "a.png").write_bytes(b"x")
        image = ProductImage(id=uuid.uuid4(), url=f"{BASE_URL}/uploads/products/a.png", sort_order=0)
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = image
        session.commit.side_effect = SQLAlchemyError("connection lost")
        with self.assertRaises(BadRequestError):
            product_service.remove_image(session, uuid.uuid4(), image.id)
        self.assertTrue((self.upload_dir / "a.png").exists())
