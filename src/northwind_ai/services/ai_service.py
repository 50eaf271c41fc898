"""
AI Service

Validation and orchestration behind the OpenRouter endpoints.
Every expected failure is returned as AICallResult(success=False);
unexpected exceptions propagate to the route, which maps them.
"""

import logging
from typing import Optional, Sequence, List

from ..config import OpenRouterSettings
from ..database import ProductRepository
from ..intelligence.recipe_generator import build_recipe_prompt
from ..models.result import AICallResult
from .llm_service import OpenRouterService


logger = logging.getLogger(__name__)


def run_prompt_test(
    prompt: Optional[str],
    settings: OpenRouterSettings,
    llm: OpenRouterService,
) -> AICallResult:
    """Send an arbitrary prompt to OpenRouter."""
    if not prompt or not prompt.strip():
        logger.warning("Test called with empty prompt")
        return AICallResult.fail("Prompt is required")

    if not settings.url:
        logger.error("OPENROUTER_URL is not configured")
        return AICallResult.fail("OpenRouter URL is not configured")

    if not settings.api_key:
        logger.error("OPENROUTER_API_KEY is not configured")
        return AICallResult.fail("OpenRouter API key is not configured")

    if not settings.model:
        logger.error("OPENROUTER_MODEL is not configured")
        return AICallResult.fail("OpenRouter model is not configured")

    logger.info(f"Processing OpenRouter test request with prompt: {prompt}")
    return llm.call(settings.url, settings.api_key, settings.model, prompt)


def find_recipe(
    product_ids: Optional[Sequence[int]],
    settings: OpenRouterSettings,
    llm: OpenRouterService,
    products: ProductRepository,
) -> AICallResult:
    """
    Generate an HTML recipe containing every requested product.

    Flow:
    1. Validate ids
    2. Fetch all products with their categories in one query
    3. Fail with the missing ids unless every product was found
    4. Build the prompt and call OpenRouter
    """
    if not product_ids:
        logger.warning("FindRecipe called with no product IDs")
        return AICallResult.fail("At least one product ID is required")

    requested = list(product_ids)
    logger.info(
        f"Finding recipe for {len(requested)} products: {_join(requested)}"
    )

    found = products.get_with_categories(requested)

    # Exact count: repeated ids can never be matched by distinct rows
    if len(found) != len(requested):
        found_ids = {product.product_id for product in found}
        missing_ids = [pid for pid in _unique(requested) if pid not in found_ids]
        logger.warning(f"Some product IDs not found: {_join(missing_ids)}")
        return AICallResult.fail(
            f"Following product IDs were not found: {_join(missing_ids)}"
        )

    prompt = build_recipe_prompt(found)
    logger.info(f"Generated prompt for {len(found)} products")
    logger.debug(prompt)

    if not settings.is_complete:
        logger.error("OpenRouter configuration is incomplete")
        return AICallResult.fail("OpenRouter is not properly configured")

    result = llm.call(settings.url, settings.api_key, settings.model, prompt)
    if result.success:
        logger.info(f"Successfully generated recipe for products: {_join(requested)}")
    return result


def _unique(values: Sequence[int]) -> List[int]:
    """Drop duplicates, keeping first-seen order (set difference semantics)."""
    return list(dict.fromkeys(values))


def _join(values: Sequence[int]) -> str:
    return ", ".join(str(v) for v in values)
