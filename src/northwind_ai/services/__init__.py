# Services Package
from .llm_service import OpenRouterService, get_llm_service
from .ai_service import run_prompt_test, find_recipe

__all__ = [
    "OpenRouterService", "get_llm_service",
    "run_prompt_test", "find_recipe",
]
