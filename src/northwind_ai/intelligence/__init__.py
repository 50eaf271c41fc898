"""
Prompt building for AI features.
"""

from .recipe_generator import build_recipe_prompt, describe_products, RECIPE_PROMPT_TEMPLATE

__all__ = [
    "build_recipe_prompt",
    "describe_products",
    "RECIPE_PROMPT_TEMPLATE",
]
