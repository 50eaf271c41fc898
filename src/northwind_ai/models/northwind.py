"""
Northwind Data Models

Read-only views of the Northwind tables used by the API.
The data store owns these rows; nothing here writes them back.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass
class Category:
    """Product category."""
    category_id: int
    category_name: str


@dataclass
class Product:
    """A product, optionally joined with its category."""
    product_id: int
    product_name: str
    category: Optional[Category] = None

    @property
    def category_name(self) -> Optional[str]:
        return self.category.category_name if self.category else None

    def describe(self) -> str:
        """Short description used in prompts: "Name" or "Name (Category)"."""
        if self.category_name:
            return f"{self.product_name} ({self.category_name})"
        return self.product_name

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Product":
        category = None
        if row.get("CategoryID") is not None and row.get("CategoryName") is not None:
            category = Category(
                category_id=row["CategoryID"],
                category_name=row["CategoryName"],
            )
        return cls(
            product_id=row["ProductID"],
            product_name=row["ProductName"],
            category=category,
        )


@dataclass
class Customer:
    """Northwind customer row."""
    customer_id: str
    company_name: str
    contact_name: Optional[str] = None
    contact_title: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    fax: Optional[str] = None

    # Column name -> attribute name
    COLUMNS = {
        "CustomerID": "customer_id",
        "CompanyName": "company_name",
        "ContactName": "contact_name",
        "ContactTitle": "contact_title",
        "Address": "address",
        "City": "city",
        "Region": "region",
        "PostalCode": "postal_code",
        "Country": "country",
        "Phone": "phone",
        "Fax": "fax",
    }

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Customer":
        return cls(**{attr: row.get(col) for col, attr in cls.COLUMNS.items()})

    def to_dict(self) -> dict:
        return {
            "customerId": self.customer_id,
            "companyName": self.company_name,
            "contactName": self.contact_name,
            "contactTitle": self.contact_title,
            "address": self.address,
            "city": self.city,
            "region": self.region,
            "postalCode": self.postal_code,
            "country": self.country,
            "phone": self.phone,
            "fax": self.fax,
        }


@dataclass
class CustomerWithRevenue:
    """Customer together with order count and total revenue."""
    customer: Customer
    total_order_count: int = 0
    total_revenue: float = 0.0

    def to_dict(self) -> dict:
        return {
            "customer": self.customer.to_dict(),
            "totalOrderCount": self.total_order_count,
            "totalRevenue": self.total_revenue,
        }
