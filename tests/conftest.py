"""
Pytest fixtures and configuration for Nexiplay Admin tests
"""
import os
import sys
import tempfile
import pytest
from unittest.mock import MagicMock

# Settings and the secret key are written under CONFIG_DIR, keep them out of the tree
os.environ['NEXIPLAY_CONFIG_DIR'] = tempfile.mkdtemp(prefix='nexiplay-test-')
os.environ['NEXIPLAY_DB'] = 'sqlite://'
for name in ('SUPABASE_URL', 'SUPABASE_SERVICE_KEY', 'NEXIPLAY_STORAGE_BACKEND', 'NEXIPLAY_ADMIN_TOKEN'):
    os.environ.pop(name, None)

# Add app directory to path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'app'))

from exceptions import StorageException  # noqa: E402
from storage import ObjectStore, generate_object_name  # noqa: E402

STORE_BASE = 'https://host.test'


class FakeStore(ObjectStore):
    """Records every call instead of talking to a storage service"""

    def __init__(self, fail_remove=False, fail_names=()):
        self.fail_remove = fail_remove
        self.fail_names = set(fail_names)
        self.remove_calls = []
        self.stored = []

    def public_url(self, bucket, path):
        return f"{STORE_BASE}/storage/v1/object/public/{bucket}/{path}"

    def store(self, file, bucket):
        if file.filename in self.fail_names:
            raise StorageException(f"Upload of {file.filename} failed (500)")
        name = generate_object_name(file.filename)
        self.stored.append((bucket, name))
        return self.public_url(bucket, name)

    def remove(self, paths):
        self.remove_calls.append(list(paths))
        if self.fail_remove:
            raise StorageException("Bulk delete in bucket posters failed (503)")


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def app_config():
    """Flask config overrides for an isolated in-memory app"""
    return {
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'RATELIMIT_ENABLED': False,
        'ADMIN_API_TOKEN': None,
    }


@pytest.fixture
def app(app_config, store):
    from app import create_app
    from db import db

    _app = create_app(app_config, object_store=store)
    with _app.app_context():
        yield _app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def mock_logger():
    """Create a mock logger for testing"""
    logger = MagicMock()
    logger.info = MagicMock()
    logger.error = MagicMock()
    logger.warning = MagicMock()
    logger.debug = MagicMock()
    return logger


def public(bucket, path):
    return f"{STORE_BASE}/storage/v1/object/public/{bucket}/{path}"


@pytest.fixture
def make_content(app):
    """Factory for content rows with optional images and dependents"""
    from db import db
    from models import Content, Screenshot

    def _make(title="Test Movie", type="movie", screenshots=(), **fields):
        content = Content(title=title, slug=fields.pop("slug", None) or f"{title.lower().replace(' ', '-')}", type=type,
                          **fields)
        content.screenshots = [Screenshot(image_url=url, position=i) for i, url in enumerate(screenshots)]
        db.session.add(content)
        db.session.commit()
        return content

    return _make


@pytest.fixture
def sample_content(make_content):
    """A movie with a poster, a foreign banner and two screenshots in one bucket"""
    from db import db
    from models import Category, Comment, DownloadLink

    content = make_content(
        title="Sample Movie",
        slug="sample-movie-2024",
        release_year=2024,
        poster_url=public("posters", "c1/a.jpg"),
        banner_url_desktop=None,
        banner_url_mobile="https://cdn.example.com/banners/mobile.jpg",
        screenshots=[public("posters", "c1/s1.jpg"), public("posters", "c1/s2.jpg")],
    )
    content.categories = [Category(name="Action", slug="action")]
    content.download_links = [
        DownloadLink(resolution="720p", mega_link="https://mega.nz/file/x", link_status={"mega_link": "EXPIRED"}),
    ]
    content.comments = [Comment(name="Ana", message="Great!")]
    db.session.commit()
    return content
