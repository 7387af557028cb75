import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from app.api.deps import get_media_client
from app.database import Base, get_db
from app.main import app
from app.models.category import Category
from tests.fakes import FakeMediaClient

TEST_DB_URL = "sqlite:///./test_catalog.db"

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def media_client():
    fake = FakeMediaClient()
    app.dependency_overrides[get_media_client] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_media_client, None)


@pytest.fixture
def client(media_client):
    return TestClient(app)


@pytest.fixture
def seed_category(db):
    category = Category(name="Weapons", description="Firearms and melee")
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def image_part(filename: str, size: int = 1024, content_type: str = "image/jpeg"):
    return ("images", (filename, b"\xff" * size, content_type))


def product_form(category_id, **overrides) -> dict:
    form = {
        "name": "AKM",
        "description": "Assault rifle",
        "price": "129.99",
        "stockQuantity": "5",
        "categoryId": str(category_id),
    }
    form.update(overrides)
    return form
