"""FastAPI dependencies for authentication, database and services."""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from kitchenwise.config import get_settings
from kitchenwise.database import get_db
from kitchenwise.models.user import User
from kitchenwise.services.auth import decode_access_token
from kitchenwise.services.consumption import ConsumptionEngine
from kitchenwise.services.events import LoggingEventSink
from kitchenwise.services.ingredient_matcher import IngredientMatcher
from kitchenwise.services.llm import LLMService
from kitchenwise.services.pantry_store import PantryStore
from kitchenwise.services.recipe_generator import RecipeGenerator
from kitchenwise.services.recipe_service import RecipeService

security = HTTPBearer()

pantry_events = LoggingEventSink(logging.getLogger("kitchenwise.pantry"))


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    token = credentials.credentials
    payload = decode_access_token(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = db.query(User).filter(User.id == int(user_id)).first()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


def get_pantry_store(
    db: Annotated[Session, Depends(get_db)],
) -> PantryStore:
    """Get pantry store bound to the request session."""
    return PantryStore(db, events=pantry_events)


def get_consumption_engine(
    store: Annotated[PantryStore, Depends(get_pantry_store)],
) -> ConsumptionEngine:
    """Get consumption engine over the request's pantry store."""
    return ConsumptionEngine(
        store, events=pantry_events, max_attempts=get_settings().consume_max_attempts
    )


def get_ingredient_matcher(
    store: Annotated[PantryStore, Depends(get_pantry_store)],
    engine: Annotated[ConsumptionEngine, Depends(get_consumption_engine)],
) -> IngredientMatcher:
    """Get ingredient matcher with dependencies."""
    return IngredientMatcher(store, engine, events=pantry_events)


def get_llm_service() -> LLMService:
    """Get LLM service instance."""
    return LLMService()


def get_recipe_generator(
    llm_service: Annotated[LLMService, Depends(get_llm_service)],
) -> RecipeGenerator:
    """Get recipe generator with dependencies."""
    return RecipeGenerator(llm_service)


def get_recipe_service(
    db: Annotated[Session, Depends(get_db)],
    matcher: Annotated[IngredientMatcher, Depends(get_ingredient_matcher)],
) -> RecipeService:
    """Get recipe service with dependencies."""
    return RecipeService(db, matcher)
