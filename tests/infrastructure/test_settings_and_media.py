"""Tests for runtime settings and the local image store."""

from pathlib import Path

import pytest

from storefront.domain.model.shipping import Coordinates
from storefront.infrastructure.media import LocalImageStore
from storefront.infrastructure.settings import DEFAULT_DATA_DIR, load_settings


class TestLoadSettings:

    def test_defaults(self):
        cfg = load_settings({})
        assert cfg.data_dir == DEFAULT_DATA_DIR
        assert cfg.whatsapp_number == "6287833415425"
        assert cfg.cart_key == "sayur-yunur-cart"
        assert cfg.orders_key == "sayur-yunur-orders"
        assert cfg.customer_key == "sayur-yunur-customer"
        assert cfg.page_key == "sayur-yunur-current-page"
        assert cfg.mongo_url is None
        assert cfg.debug is False

    def test_overrides(self):
        cfg = load_settings({
            "STOREFRONT_DATA_DIR": "/tmp/shop",
            "STOREFRONT_NAMESPACE": "toko",
            "STOREFRONT_STORE_LAT": "-7.0",
            "STOREFRONT_STORE_LNG": "110.0",
            "STOREFRONT_MONGO_URL": "mongodb://localhost:27017",
            "STOREFRONT_DEBUG": "yes",
        })
        assert cfg.data_dir == Path("/tmp/shop")
        assert cfg.cart_key == "toko-cart"
        assert cfg.store_location == Coordinates(-7.0, 110.0)
        assert cfg.mongo_url == "mongodb://localhost:27017"
        assert cfg.debug is True


class TestLocalImageStore:

    def test_owns_by_prefix(self, tmp_path):
        images = LocalImageStore(tmp_path, "/media/")
        assert images.owns("/media/bayam.jpg")
        assert not images.owns("https://cdn.example.com/bayam.jpg")

    def test_delete(self, tmp_path):
        (tmp_path / "bayam.jpg").write_bytes(b"jpeg")
        LocalImageStore(tmp_path, "/media/").delete("/media/bayam.jpg")
        assert not (tmp_path / "bayam.jpg").exists()

    def test_refuses_paths_outside_media_dir(self, tmp_path):
        media = tmp_path / "media"
        media.mkdir()
        (tmp_path / "secret.txt").write_text("x")
        with pytest.raises(OSError):
            LocalImageStore(media, "/media/").delete("/media/../secret.txt")
        assert (tmp_path / "secret.txt").exists()
