"""
Tests for the object store implementations
"""
import io
import os
import pytest
import requests
from unittest.mock import MagicMock
from werkzeug.datastructures import FileStorage


def image_file(name="poster.jpg", data=b"\xff\xd8\xffimage"):
    return FileStorage(stream=io.BytesIO(data), filename=name, content_type="image/jpeg")


class TestParsePublicUrl:
    """Tests for mapping public URLs to storage paths"""

    def test_matches_public_object_url(self):
        from storage import StoragePath, parse_public_url

        url = "https://abc.supabase.co/storage/v1/object/public/posters/c1/a.jpg"

        assert parse_public_url(url) == StoragePath("posters", "c1/a.jpg")

    def test_query_string_is_ignored(self):
        from storage import parse_public_url

        assert parse_public_url("https://h/storage/v1/object/public/posters/a.jpg?v=2").path == "a.jpg"

    def test_encoded_path_is_decoded(self):
        from storage import parse_public_url

        assert parse_public_url("https://h/storage/v1/object/public/posters/my%20poster.jpg").path == "my poster.jpg"

    @pytest.mark.parametrize("url", [
        None,
        "",
        "https://img.example.com/poster.jpg",
        "https://h/storage/v1/object/sign/posters/a.jpg",
        "https://h/storage/v1/object/public/posters/",
    ])
    def test_other_shapes_yield_none(self, url):
        from storage import parse_public_url

        assert parse_public_url(url) is None

    def test_group_by_bucket_keeps_order(self):
        from storage import StoragePath, group_by_bucket

        grouped = group_by_bucket([
            StoragePath("posters", "a.jpg"),
            StoragePath("banners", "b.jpg"),
            StoragePath("posters", "c.jpg"),
        ])

        assert list(grouped.items()) == [("posters", ["a.jpg", "c.jpg"]), ("banners", ["b.jpg"])]


class TestGenerateObjectName:
    """Tests for generated object names"""

    def test_keeps_extension(self):
        from storage import generate_object_name

        name = generate_object_name("Poster.PNG")

        assert name.endswith(".png")
        assert len(name) == 32 + 4

    def test_rejects_non_images(self):
        from exceptions import ValidationException
        from storage import generate_object_name

        with pytest.raises(ValidationException):
            generate_object_name("script.exe")


class TestSupabaseStorage:
    """Tests for SupabaseStorage with a mocked HTTP session"""

    def make_store(self, response=None, error=None):
        from storage import SupabaseStorage

        session = MagicMock(spec=requests.Session)
        if error:
            session.post.side_effect = error
            session.delete.side_effect = error
        else:
            session.post.return_value = response
            session.delete.return_value = response
        return SupabaseStorage("https://abc.supabase.co/", "service-key", session=session), session

    def test_store_uploads_and_returns_public_url(self):
        store, session = self.make_store(MagicMock(ok=True, status_code=200))

        url = store.store(image_file(), "posters")

        called_url = session.post.call_args[0][0]
        assert called_url.startswith("https://abc.supabase.co/storage/v1/object/posters/")
        assert session.post.call_args[1]["headers"]["Authorization"] == "Bearer service-key"
        assert session.post.call_args[1]["data"] == b"\xff\xd8\xffimage"
        assert url == called_url.replace("/object/posters/", "/object/public/posters/")

    def test_store_error_status(self):
        from exceptions import StorageException

        store, _ = self.make_store(MagicMock(ok=False, status_code=413, text="Payload too large"))

        with pytest.raises(StorageException):
            store.store(image_file(), "posters")

    def test_remove_one_call_per_bucket(self):
        from storage import StoragePath

        store, session = self.make_store(MagicMock(ok=True, status_code=200))

        store.remove([
            StoragePath("posters", "a.jpg"),
            StoragePath("posters", "b.jpg"),
            StoragePath("banners", "c.jpg"),
        ])

        assert session.delete.call_count == 2
        first, second = session.delete.call_args_list
        assert first[0][0] == "https://abc.supabase.co/storage/v1/object/posters"
        assert first[1]["json"] == {"prefixes": ["a.jpg", "b.jpg"]}
        assert second[1]["json"] == {"prefixes": ["c.jpg"]}

    def test_remove_network_error(self):
        from exceptions import StorageException
        from storage import StoragePath

        store, _ = self.make_store(error=requests.ConnectionError("reset"))

        with pytest.raises(StorageException):
            store.remove([StoragePath("posters", "a.jpg")])

    def test_path_of_round_trips_public_url(self):
        from storage import StoragePath

        store, _ = self.make_store(MagicMock(ok=True))

        assert store.path_of(store.public_url("posters", "x/y.webp")) == StoragePath("posters", "x/y.webp")


class TestLocalStorage:
    """Tests for the directory-backed store"""

    def test_store_and_remove(self, tmp_path):
        from storage import LocalStorage

        store = LocalStorage(str(tmp_path), "http://localhost:8466/")

        url = store.store(image_file(), "posters")
        path = store.path_of(url)

        assert url.startswith("http://localhost:8466/storage/v1/object/public/posters/")
        assert os.path.exists(tmp_path / "posters" / path.path)

        store.remove([path])
        assert not os.path.exists(tmp_path / "posters" / path.path)

    def test_remove_missing_file_is_ignored(self, tmp_path):
        from storage import LocalStorage, StoragePath

        LocalStorage(str(tmp_path), "http://localhost").remove([StoragePath("posters", "gone.jpg")])

    def test_path_escape_is_rejected(self, tmp_path):
        from exceptions import StorageException
        from storage import LocalStorage, StoragePath

        with pytest.raises(StorageException):
            LocalStorage(str(tmp_path), "http://localhost").remove([StoragePath("posters", "../../etc/passwd")])


class TestBuildObjectStore:
    """Tests for picking the backend from settings"""

    def test_local(self, tmp_path):
        from storage import LocalStorage, build_object_store

        store = build_object_store({"backend": "local", "local_root": str(tmp_path), "public_base_url": "http://x"})

        assert isinstance(store, LocalStorage)

    def test_supabase_requires_credentials(self):
        from exceptions import ValidationException
        from storage import build_object_store

        with pytest.raises(ValidationException):
            build_object_store({"backend": "supabase", "supabase_url": "", "service_key": ""})

    def test_supabase(self):
        from storage import SupabaseStorage, build_object_store

        store = build_object_store({"backend": "supabase", "supabase_url": "https://abc.supabase.co",
                                    "service_key": "k"})

        assert isinstance(store, SupabaseStorage)

    def test_unknown_backend(self):
        from exceptions import ValidationException
        from storage import build_object_store

        with pytest.raises(ValidationException):
            build_object_store({"backend": "s3"})
