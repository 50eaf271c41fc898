# Models Package
from .result import AICallResult
from .northwind import Category, Product, Customer, CustomerWithRevenue

__all__ = [
    "AICallResult",
    "Category", "Product", "Customer", "CustomerWithRevenue",
]
