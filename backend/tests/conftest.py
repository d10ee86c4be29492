# tests/conftest.py
import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from flipbook.config import settings
from flipbook.database import Store
from flipbook.main import create_app
from flipbook.models import Block, Page
from flipbook.services.schema import SchemaService

# Create test database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture
def engine():
    """Fresh in-memory database per test"""
    engine = create_engine(
        SQLALCHEMY_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool  # Needed for SQLite in-memory database
    )
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    """Store over the test engine, created before any connection is opened"""
    return Store(engine=engine)


@pytest.fixture
def app(store):
    return create_app(store)


@pytest.fixture(autouse=True)
def override_settings():
    """Keep environment configuration out of the tests"""
    original_public_base_url = settings.PUBLIC_BASE_URL
    original_max_upload_size = settings.MAX_UPLOAD_SIZE

    settings.PUBLIC_BASE_URL = None
    settings.MAX_UPLOAD_SIZE = 8 * 1024 * 1024

    yield

    settings.PUBLIC_BASE_URL = original_public_base_url
    settings.MAX_UPLOAD_SIZE = original_max_upload_size


@pytest.fixture
def client(app):
    """Test client; entering it runs schema initialization"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def initialized_store(store):
    SchemaService(store).initialize()
    return store


@pytest.fixture
def db_session(store):
    session = store.session()
    yield session
    session.close()


@pytest.fixture
def sample_page(client, db_session):
    """Create a sample page after the default pages"""
    page = Page(title="Sample Page", sort_order=10)
    db_session.add(page)
    db_session.commit()
    db_session.refresh(page)
    return page


@pytest.fixture
def sample_blocks(sample_page, db_session):
    """Three blocks on the sample page, sort orders 1..3"""
    blocks = [
        Block(page_id=sample_page.id, block_type="text", content="First", sort_order=1),
        Block(page_id=sample_page.id, block_type="image", content="http://testserver/api/uploads/1", sort_order=2),
        Block(page_id=sample_page.id, block_type="text", content="Third", sort_order=3),
    ]
    db_session.add_all(blocks)
    db_session.commit()
    for block in blocks:
        db_session.refresh(block)
    return blocks


def make_png(color: str = "white", size=(32, 24)) -> bytes:
    img = Image.new("RGB", size, color=color)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def png_factory():
    return make_png


@pytest.fixture
def png_bytes():
    return make_png()
