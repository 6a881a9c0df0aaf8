"""
Pytest configuration and shared fixtures.
"""

import pytest
import structlog

from reldoc.core.config import CodecConfig, reset_config
from reldoc.models.enums import RelationPolicy


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep RELDOC_* variables and earlier CLI runs from leaking into a test."""
    for name in ("RELDOC_RELATION_POLICY", "RELDOC_NULL_LITERAL", "RELDOC_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
    structlog.reset_defaults()


@pytest.fixture
def config():
    """Default codec configuration."""
    return CodecConfig()


@pytest.fixture
def strict_config():
    """Configuration that fails on unresolvable relations."""
    return CodecConfig(relation_policy=RelationPolicy.STRICT)


@pytest.fixture
def customers():
    """Root records with a nested scalar group and two child collections."""
    return [
        {
            "id": 1,
            "name": "Alice",
            "address": {"city": "NYC", "zip": "10001"},
            "orders": [
                {"id": 10, "item": "Book"},
                {"id": 11, "item": "Pen"},
            ],
            "tags": [{"label": "vip"}],
        },
        {
            "id": 2,
            "name": "Bob",
            "address": {"city": "LA", "zip": "90001"},
            "orders": [],
            "tags": [{"label": "new"}],
        },
    ]


@pytest.fixture
def customers_document():
    """Encoded form of ``customers`` under the root name 'clientes'."""
    return (
        "clientes[2]{id,name,address.city,address.zip}:\n"
        "1,Alice,NYC,10001.\n"
        "2,Bob,LA,90001.\n"
        "\n"
        "orders(cliente_id:1)[2]{id,item}:\n"
        "10,Book.\n"
        "11,Pen.\n"
        "\n"
        "tags(cliente_id:1)[1]{label}:\n"
        "vip.\n"
        "\n"
        "tags(cliente_id:2)[1]{label}:\n"
        "new."
    )
