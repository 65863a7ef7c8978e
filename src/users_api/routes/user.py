"""User API routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from users_api.models.user import User, UserCreate, UserUpdate
from users_api.services import get_user_store
from users_api.services.user_store import NotFound, UserStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"], redirect_slashes=False)


@router.get("", response_model=list[User])
@router.get("/", response_model=list[User], include_in_schema=False)
async def list_users(store: UserStore = Depends(get_user_store)) -> list[User]:
    logger.info("Getting all users")
    return store.list_users()


@router.get("/{user_id}", response_model=User, name="get_user")
async def get_user(user_id: int, store: UserStore = Depends(get_user_store)) -> User:
    logger.info("Getting user by id: %s", user_id)
    user = store.get_user(user_id)
    if user is None:
        logger.warning("User with id %s not found", user_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
    return user


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=User, status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def add_user(
    user: UserCreate,
    request: Request,
    response: Response,
    store: UserStore = Depends(get_user_store),
) -> User:
    """Create a user. The response carries a Location header for the new resource."""
    logger.info("Adding a new user")
    created = store.add_user(user)
    response.headers["Location"] = str(request.url_for("get_user", user_id=created.id))
    return created


@router.put("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_user(user_id: int, changes: UserUpdate, store: UserStore = Depends(get_user_store)) -> None:
    """Update a user. Empty strings and an age of 0 leave fields unchanged."""
    logger.info("Updating user with id: %s", user_id)
    match store.update_user(user_id, changes):
        case NotFound() as missing:
            logger.error("Error updating user: %s", missing.message)
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
        case User() as updated:
            logger.debug("User %s is now %s", user_id, updated.model_dump())
    return None


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, store: UserStore = Depends(get_user_store)) -> None:
    logger.info("Deleting user with id: %s", user_id)
    match store.delete_user(user_id):
        case NotFound() as missing:
            logger.error("Error deleting user: %s", missing.message)
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
    return None
