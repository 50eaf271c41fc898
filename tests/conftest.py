import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from northwind_ai.database import init_database, get_connection
from northwind_ai.main import app, get_llm
from northwind_ai.models.result import AICallResult
from northwind_ai.services.llm_service import OpenRouterService


OPENROUTER_ENV = {
    "OPENROUTER_URL": "https://openrouter.test/api/v1/chat/completions",
    "OPENROUTER_API_KEY": "test-key",
    "OPENROUTER_MODEL": "test/model",
}


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture(autouse=True)
def northwind_db(tmp_path, monkeypatch):
    """Fresh, seeded Northwind database for every test."""
    monkeypatch.setenv("NORTHWIND_DB_PATH", str(tmp_path / "northwind.db"))
    monkeypatch.setenv("AUTH_SECRET", "test-secret")
    init_database()

    with get_connection() as conn:
        cursor = conn.cursor()
        cursor.executemany(
            "INSERT INTO Categories (CategoryID, CategoryName) VALUES (?, ?)",
            [(1, "Beverages"), (2, "Condiments")],
        )
        cursor.executemany(
            "INSERT INTO Products (ProductID, ProductName, CategoryID, UnitPrice) VALUES (?, ?, ?, ?)",
            [
                (1, "Chai", 1, 18),
                (2, "Chang", 1, 19),
                (3, "Aniseed Syrup", 2, 10),
                (4, "Mystery Box", None, 5),
            ],
        )
        cursor.executemany(
            "INSERT INTO Customers (CustomerID, CompanyName, ContactName, City, Country) VALUES (?, ?, ?, ?, ?)",
            [
                ("ALFKI", "Alfreds Futterkiste", "Maria Anders", "Berlin", "Germany"),
                ("ANATR", "Ana Trujillo Emparedados y helados", "Ana Trujillo", "México D.F.", "Mexico"),
                ("AROUT", "Around the Horn", "Thomas Hardy", "London", "UK"),
            ],
        )
        cursor.executemany(
            "INSERT INTO Orders (OrderID, CustomerID) VALUES (?, ?)",
            [(10643, "ALFKI"), (10308, "ANATR"), (10309, "ANATR")],
        )
        cursor.executemany(
            'INSERT INTO "Order Details" (OrderID, ProductID, UnitPrice, Quantity, Discount) VALUES (?, ?, ?, ?, ?)',
            [
                (10643, 1, 18, 2, 0),
                (10643, 2, 19, 1, 0.5),
                (10308, 3, 10, 3, 0),
            ],
        )
        conn.commit()
    yield


@pytest.fixture
def openrouter_env(monkeypatch):
    """Complete OpenRouter configuration."""
    for key, value in OPENROUTER_ENV.items():
        monkeypatch.setenv(key, value)
    return OPENROUTER_ENV


@pytest.fixture
def fake_llm():
    """OpenRouter service double that answers with a fixed recipe."""
    llm = MagicMock(spec=OpenRouterService)
    llm.call.return_value = AICallResult.ok("<div><h2>Chai Surprise</h2></div>")
    return llm


@pytest.fixture
def client(fake_llm):
    """Test client with the OpenRouter service replaced."""
    app.dependency_overrides[get_llm] = lambda: fake_llm
    yield TestClient(app)
    app.dependency_overrides.clear()
