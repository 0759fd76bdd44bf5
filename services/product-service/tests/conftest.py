"""
Test configuration and fixtures
"""

import uuid
from decimal import Decimal
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from app.app import app
from app.domain.entities import Product
from app.repositories.redis_product_repository import RedisProductRepository
from fakes import FakeRedis


@pytest.fixture
def fake_redis():
    """Empty in-memory Redis for each test"""
    return FakeRedis()


@pytest.fixture
def repository(fake_redis):
    """Repository backed by the in-memory Redis"""
    return RedisProductRepository(fake_redis)


@pytest.fixture
def sample_product():
    """Sample product for testing"""
    return Product(
        product_id=uuid.UUID("3fa85f64-5717-4562-b3fc-2c963f66afa6"),
        name="Mug",
        description="Ceramic mug, 350ml",
        price=Decimal("9.99"),
        stock_quantity=100,
    )


@pytest.fixture
def client(fake_redis):
    """Create a test client whose lifespan connects to the in-memory Redis"""
    with patch("app.app.create_redis_client", return_value=fake_redis):
        with TestClient(app) as test_client:
            yield test_client
