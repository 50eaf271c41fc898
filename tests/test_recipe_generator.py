from northwind_ai.intelligence.recipe_generator import (
    build_recipe_prompt,
    describe_products,
)
from northwind_ai.models.northwind import Category, Product


def _products():
    return [
        Product(product_id=3, product_name="Aniseed Syrup", category=Category(2, "Condiments")),
        Product(product_id=4, product_name="Mystery Box"),
        Product(product_id=1, product_name="Chai", category=Category(1, "Beverages")),
    ]


def test_describe_products_keeps_order_and_categories():
    assert describe_products(_products()) == (
        "Aniseed Syrup (Condiments), Mystery Box, Chai (Beverages)"
    )


def test_prompt_contains_every_product():
    prompt = build_recipe_prompt(_products())

    for product in _products():
        assert product.product_name in prompt


def test_prompt_structure():
    prompt = build_recipe_prompt(_products())

    assert "på dansk" in prompt
    assert "<div>" in prompt
    assert "<h2>" in prompt
    assert "<h3> til sektioner (Ingredienser, Fremgangsmåde)" in prompt
    assert "<ul> og <li>" in prompt
    assert "<ol> og <li>" in prompt
    assert "Ingen emojis" in prompt
    assert prompt.endswith("Returner KUN HTML - ingen forklaringer eller markdown.")


def test_braces_in_product_names_are_kept():
    prompt = build_recipe_prompt([Product(product_id=9, product_name="Odd {name}")])

    assert "Odd {name}" in prompt
