"""
FastAPI Application for Northwind AI

Provides REST API endpoints for:
- OpenRouter prompt testing
- AI recipes built from Northwind products
- Customers (authenticated)
- Authentication (register, login)
"""

# Load environment variables FIRST (before other imports that may need them)
from dotenv import load_dotenv
load_dotenv()

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional, List

from fastapi import FastAPI, HTTPException, Header, Depends, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .auth.auth_service import auth_service
from .config import configure_logging, get_openrouter_settings, OpenRouterSettings
from .database import init_database, ProductRepository, CustomerRepository
from .models.result import AICallResult
from .services.ai_service import run_prompt_test, find_recipe
from .services.llm_service import get_llm_service, OpenRouterService


configure_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# APP SETUP
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_database()
    yield


app = FastAPI(
    title="Northwind AI API",
    description="Northwind data with OpenRouter-generated recipes",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# REQUEST/RESPONSE MODELS
# =============================================================================

class AIResponse(BaseModel):
    success: bool
    message: str


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_settings() -> OpenRouterSettings:
    """OpenRouter configuration, read fresh for every request."""
    return get_openrouter_settings()


def get_llm() -> OpenRouterService:
    return get_llm_service()


def get_product_repository() -> ProductRepository:
    return ProductRepository()


def get_customer_repository() -> CustomerRepository:
    return CustomerRepository()


async def get_current_user(authorization: Optional[str] = Header(None)):
    """Dependency to get current authenticated user."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Not authenticated")

    token = authorization[len("Bearer "):]
    payload = auth_service.verify_token(token)

    if not payload:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    return payload


# =============================================================================
# ROUTES: HEALTH
# =============================================================================

@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {
        "status": "healthy",
        "service": "northwind-ai",
        "timestamp": datetime.now().isoformat(),
    }


# =============================================================================
# ROUTES: OPENROUTER
# =============================================================================

@app.get("/api/openrouter/test", response_model=AIResponse, tags=["OpenRouter"])
def openrouter_test(
    prompt: Optional[str] = None,
    settings: OpenRouterSettings = Depends(get_settings),
    llm: OpenRouterService = Depends(get_llm),
):
    """Send a prompt to OpenRouter and return the AI response."""
    try:
        result = run_prompt_test(prompt, settings, llm)
    except Exception as e:
        logger.exception(f"Unexpected error in OpenRouter test: {e}")
        result = AICallResult.fail(f"Unexpected error: {e}")
    return result.to_dict()


@app.get("/api/openrouter/FindRecipe", response_model=AIResponse, tags=["OpenRouter"])
def openrouter_find_recipe(
    product_ids: Optional[List[int]] = Query(None, alias="productIds"),
    settings: OpenRouterSettings = Depends(get_settings),
    llm: OpenRouterService = Depends(get_llm),
    products: ProductRepository = Depends(get_product_repository),
):
    """Generate an HTML recipe from the selected products."""
    try:
        result = find_recipe(product_ids, settings, llm, products)
    except Exception as e:
        logger.exception(f"Unexpected error in FindRecipe: {e}")
        result = AICallResult.fail(f"Unexpected error: {e}")
    return result.to_dict()


# =============================================================================
# ROUTES: CUSTOMERS (Authenticated)
# =============================================================================

@app.get("/api/customers", tags=["Customers (Authenticated)"])
def get_all_customers(
    user: dict = Depends(get_current_user),
    customers: CustomerRepository = Depends(get_customer_repository),
):
    """Get all customers."""
    username = user.get("name") or "unknown"
    logger.info(f"User {username} getting all customers")

    return [customer.to_dict() for customer in customers.get_all()]


@app.get("/api/customers/revenue", tags=["Customers (Authenticated)"])
def get_customers_with_revenue(
    user: dict = Depends(get_current_user),
    customers: CustomerRepository = Depends(get_customer_repository),
):
    """Get all customers with their order count and total revenue."""
    username = user.get("name") or "unknown"
    logger.info(f"User {username} getting customers with revenue")

    return [entry.to_dict() for entry in customers.get_all_with_revenue()]


# =============================================================================
# ROUTES: AUTHENTICATION
# =============================================================================

@app.post("/auth/register", tags=["Auth"])
def register(request: RegisterRequest):
    """Register a new user."""
    result = auth_service.register(request.email, request.password, request.name)

    if not result.success:
        raise HTTPException(status_code=400, detail=result.error)

    return {
        "user_id": result.user_id,
        "token": result.token,
        "name": result.name,
    }


@app.post("/auth/login", tags=["Auth"])
def login(request: LoginRequest):
    """Login and get a bearer token."""
    result = auth_service.login(request.email, request.password)

    if not result.success:
        raise HTTPException(status_code=401, detail=result.error)

    return {
        "user_id": result.user_id,
        "token": result.token,
        "name": result.name,
    }


@app.get("/auth/me", tags=["Auth"])
def get_current_user_info(user: dict = Depends(get_current_user)):
    """Get current user info."""
    user_data = auth_service.get_user(user["sub"])
    if not user_data:
        raise HTTPException(status_code=404, detail="User not found")
    return user_data


# =============================================================================
# RUN
# =============================================================================

def run():
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))


if __name__ == "__main__":
    run()
