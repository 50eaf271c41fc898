"""
Database Access

SQLite access to the Northwind sample dataset plus the users table.
The Northwind tables are read-only from this application's point of view:
every read path opens its connection with query_only enabled.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Optional, List, Dict, Any, Sequence

from .config import get_db_path
from .models.northwind import Product, Customer, CustomerWithRevenue


logger = logging.getLogger(__name__)


NORTHWIND_SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS Categories (
        CategoryID INTEGER PRIMARY KEY AUTOINCREMENT,
        CategoryName TEXT NOT NULL,
        Description TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS Products (
        ProductID INTEGER PRIMARY KEY AUTOINCREMENT,
        ProductName TEXT NOT NULL,
        SupplierID INTEGER,
        CategoryID INTEGER,
        QuantityPerUnit TEXT,
        UnitPrice NUMERIC DEFAULT 0,
        UnitsInStock INTEGER DEFAULT 0,
        UnitsOnOrder INTEGER DEFAULT 0,
        ReorderLevel INTEGER DEFAULT 0,
        Discontinued TEXT NOT NULL DEFAULT '0',
        FOREIGN KEY (CategoryID) REFERENCES Categories(CategoryID)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS Customers (
        CustomerID TEXT PRIMARY KEY,
        CompanyName TEXT NOT NULL,
        ContactName TEXT,
        ContactTitle TEXT,
        Address TEXT,
        City TEXT,
        Region TEXT,
        PostalCode TEXT,
        Country TEXT,
        Phone TEXT,
        Fax TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS Orders (
        OrderID INTEGER PRIMARY KEY AUTOINCREMENT,
        CustomerID TEXT,
        EmployeeID INTEGER,
        OrderDate DATETIME,
        RequiredDate DATETIME,
        ShippedDate DATETIME,
        ShipVia INTEGER,
        Freight NUMERIC DEFAULT 0,
        FOREIGN KEY (CustomerID) REFERENCES Customers(CustomerID)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS "Order Details" (
        OrderID INTEGER NOT NULL,
        ProductID INTEGER NOT NULL,
        UnitPrice NUMERIC NOT NULL DEFAULT 0,
        Quantity INTEGER NOT NULL DEFAULT 1,
        Discount REAL NOT NULL DEFAULT 0,
        PRIMARY KEY (OrderID, ProductID),
        FOREIGN KEY (OrderID) REFERENCES Orders(OrderID),
        FOREIGN KEY (ProductID) REFERENCES Products(ProductID)
    )
    """,
]

USERS_SCHEMA = """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        email TEXT UNIQUE NOT NULL,
        password_hash TEXT NOT NULL,
        name TEXT NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
"""


def init_database():
    """
    Create any missing tables.

    An existing Northwind database file is left untouched apart from
    the users table being added.
    """
    db_path = get_db_path()
    db_dir = os.path.dirname(db_path)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)

    with get_connection() as conn:
        cursor = conn.cursor()
        for statement in NORTHWIND_SCHEMA:
            cursor.execute(statement)
        cursor.execute(USERS_SCHEMA)
        conn.commit()

    logger.info(f"Database ready at {db_path}")


@contextmanager
def get_connection(read_only: bool = False):
    """Get database connection with context manager."""
    conn = sqlite3.connect(get_db_path())
    conn.row_factory = sqlite3.Row
    try:
        if read_only:
            conn.execute("PRAGMA query_only = ON")
        yield conn
    finally:
        conn.close()


class ProductRepository:
    """Read-only product queries."""

    @staticmethod
    def get_with_categories(product_ids: Sequence[int]) -> List[Product]:
        """
        Fetch the products with the given ids, joined with their category.

        Rows come back in storage order, not in the order of `product_ids`.
        """
        if not product_ids:
            return []

        placeholders = ", ".join("?" for _ in product_ids)
        with get_connection(read_only=True) as conn:
            cursor = conn.cursor()
            cursor.execute(f"""
                SELECT p.ProductID, p.ProductName, c.CategoryID, c.CategoryName
                FROM Products p
                LEFT JOIN Categories c ON c.CategoryID = p.CategoryID
                WHERE p.ProductID IN ({placeholders})
            """, list(product_ids))
            return [Product.from_row(dict(row)) for row in cursor.fetchall()]


class CustomerRepository:
    """Read-only customer queries."""

    @staticmethod
    def get_all() -> List[Customer]:
        """Get every customer row."""
        with get_connection(read_only=True) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM Customers")
            return [Customer.from_row(dict(row)) for row in cursor.fetchall()]

    @staticmethod
    def get_all_with_revenue() -> List[CustomerWithRevenue]:
        """Get every customer with order count and revenue, highest revenue first."""
        with get_connection(read_only=True) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT c.*,
                       COUNT(DISTINCT o.OrderID) AS TotalOrderCount,
                       COALESCE(SUM(od.UnitPrice * od.Quantity * (1 - od.Discount)), 0)
                           AS TotalRevenue
                FROM Customers c
                LEFT JOIN Orders o ON o.CustomerID = c.CustomerID
                LEFT JOIN "Order Details" od ON od.OrderID = o.OrderID
                GROUP BY c.CustomerID
                ORDER BY TotalRevenue DESC, c.CustomerID
            """)
            results = []
            for row in cursor.fetchall():
                data = dict(row)
                results.append(CustomerWithRevenue(
                    customer=Customer.from_row(data),
                    total_order_count=data["TotalOrderCount"],
                    total_revenue=round(float(data["TotalRevenue"]), 2),
                ))
            return results


class UserRepository:
    """Repository for user operations."""

    @staticmethod
    def create(user_id: str, email: str, password_hash: str, name: str) -> bool:
        """Create a new user."""
        try:
            with get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    "INSERT INTO users (id, email, password_hash, name) VALUES (?, ?, ?, ?)",
                    (user_id, email.lower(), password_hash, name)
                )
                conn.commit()
                return True
        except sqlite3.IntegrityError:
            return False  # Email already exists

    @staticmethod
    def get_by_email(email: str) -> Optional[Dict[str, Any]]:
        """Get user by email."""
        with get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM users WHERE email = ?", (email.lower(),))
            row = cursor.fetchone()
            if row:
                return dict(row)
            return None

    @staticmethod
    def get_by_id(user_id: str) -> Optional[Dict[str, Any]]:
        """Get user by ID."""
        with get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM users WHERE id = ?", (user_id,))
            row = cursor.fetchone()
            if row:
                return dict(row)
            return None
