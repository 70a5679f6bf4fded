"""User CRUD routes.

Endpoints:
- GET /users?page=&limit=: Paginated user list
- GET /users/{id}: Get a single user
- POST /users: Create a user
- PUT /users/{id}: Update name and/or email
- DELETE /users/{id}: Delete a user

Handlers are sync so the blocking store calls run in FastAPI's threadpool.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.dependencies import get_user_repo
from api.models import (
    ErrorResponse,
    PaginationMeta,
    UserCreateRequest,
    UserListResponse,
    UserResponse,
    UserUpdateRequest,
)
from domain.model.errors import ConflictError, NotFoundError, StoreError, ValidationError
from domain.model.user import UserChanges
from port.user_repository import UserRepository
from services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

USER_NOT_FOUND = "User not found"

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.get("", response_model=UserListResponse, responses={500: {"model": ErrorResponse}})
def list_users(
    page: str | None = None,
    limit: str | None = None,
    repo: UserRepository = Depends(get_user_repo),
):
    """List users ordered by id, with pagination metadata."""
    try:
        result = user_service.list_users(repo, page, limit)
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to list users")

    return UserListResponse(
        data=[UserResponse.model_validate(u) for u in result.data],
        meta=PaginationMeta(
            total=result.total,
            page=result.page,
            limit=result.limit,
            total_pages=result.total_pages,
        ),
    )


@router.get("/{user_id}", response_model=UserResponse, responses=_ERROR_RESPONSES)
def get_user(user_id: int, repo: UserRepository = Depends(get_user_repo)):
    """Get a single user by id."""
    try:
        user = user_service.get_user(repo, user_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail=USER_NOT_FOUND)
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to get user")
    return UserResponse.model_validate(user)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
def create_user(request: UserCreateRequest, repo: UserRepository = Depends(get_user_repo)):
    """Create a user.

    Raises:
        HTTPException: 400 if name or email is missing, 409 if email already exists
    """
    try:
        user = user_service.create_user(repo, request.name, request.email)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to create user")

    logger.info("User created", extra={"userId": user.id})
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse, responses=_ERROR_RESPONSES)
def update_user(
    user_id: int,
    request: UserUpdateRequest,
    repo: UserRepository = Depends(get_user_repo),
):
    """Update a user's name and/or email. Omitted fields are left unchanged."""
    changes = UserChanges(name=request.name, email=request.email)
    try:
        user = user_service.update_user(repo, user_id, changes)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError:
        raise HTTPException(status_code=404, detail=USER_NOT_FOUND)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to update user")

    logger.info("User updated", extra={
        "userId": user_id,
        "fields": sorted(request.model_fields_set),
    })
    return UserResponse.model_validate(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERROR_RESPONSES,
)
def delete_user(user_id: int, repo: UserRepository = Depends(get_user_repo)):
    """Delete a user."""
    try:
        user_service.delete_user(repo, user_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail=USER_NOT_FOUND)
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to delete user")

    logger.info("User deleted", extra={"userId": user_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
