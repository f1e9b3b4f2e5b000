# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from nursery.database import get_session
from nursery.main import app
from nursery.models.category import Category
from nursery.models.product import Product
from nursery.repositories.cart_repo import CartRepository
from nursery.repositories.order_repo import OrderRepository
from nursery.repositories.product_repo import ProductRepository
from nursery.services.inventory_service import InventoryService


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def inventory() -> InventoryService:
    return InventoryService(ProductRepository(), CartRepository(), OrderRepository())


@pytest.fixture
def make_product(session: Session):
    def _make(name: str = "Monstera", quantity: int = 10, **fields) -> Product:
        product = Product(name=name, quantity=quantity, **fields)
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    return _make


@pytest.fixture
def make_category(session: Session):
    def _make(name: str = "Indoor", **fields) -> Category:
        category = Category(name=name, **fields)
        session.add(category)
        session.commit()
        session.refresh(category)
        return category

    return _make
