"""
Recipe Prompt Generator

Turns a list of Northwind products into the instruction sent to the LLM.
The model is asked for a Danish recipe as a fixed HTML structure.
"""

from typing import Sequence

from ..models.northwind import Product


RECIPE_PROMPT_TEMPLATE = """Du er en kreativ kok. Lav en munter og frisk opskrift på dansk der indeholder ALLE følgende ingredienser: {product_list}

Opskriften skal være i HTML format med følgende struktur:
- Hele opskriften skal være indpakket i en <div>
- <h2> til titlen (en sjov og kreativ titel)
- <h3> til sektioner (Ingredienser, Fremgangsmåde)
- <ul> og <li> til ingredienslisten - inkluder ALLE produkter fra listen ovenfor
- <ol> og <li> til fremgangsmåden
- Ingen emojis

VIGTIGT: Alle produkter fra listen skal fremgå tydeligt i ingredienslisten.

Vær kreativ og munter i din tilgang! Returner KUN HTML - ingen forklaringer eller markdown."""


def describe_products(products: Sequence[Product]) -> str:
    """Join products as "Name" or "Name (Category)", in the given order."""
    return ", ".join(product.describe() for product in products)


def build_recipe_prompt(products: Sequence[Product]) -> str:
    """Build the recipe instruction for the given products."""
    return RECIPE_PROMPT_TEMPLATE.format(product_list=describe_products(products))
