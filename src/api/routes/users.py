"""User CRUD routes."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.dependencies import get_user_service
from api.envelope import envelope
from api.models import CreateUserRequest, Envelope, UpdateUserRequest, UserResponse
from port.user_directory import UserDirectory

router = APIRouter(prefix="/users", tags=["users"])

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Plain def handlers run in the threadpool, keeping bcrypt and pymongo off the event loop


def _user_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")


@router.get("", response_model=Envelope[list[UserResponse]])
def list_users(
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Page size"),
    offset: int = Query(default=0, ge=0, description="Number of users to skip"),
    users: UserDirectory = Depends(get_user_service),
):
    """Get a page of users, newest first. meta.total counts every user."""
    result = [UserResponse.from_domain(u) for u in users.find_all(limit, offset)]
    return envelope(result, meta={"total": users.count(), "limit": limit, "offset": offset})


@router.get("/{user_id}", response_model=Envelope[UserResponse])
def get_user(user_id: str, users: UserDirectory = Depends(get_user_service)):
    """Get user by id."""
    user = users.find_one(user_id)
    if user is None:
        raise _user_not_found()
    return envelope(UserResponse.from_domain(user))


@router.post("", response_model=Envelope[UserResponse], status_code=status.HTTP_201_CREATED)
def create_user(request: CreateUserRequest, users: UserDirectory = Depends(get_user_service)):
    """Create user."""
    user = users.create(request.to_domain())
    return envelope(UserResponse.from_domain(user), "User created", status.HTTP_201_CREATED)


@router.put("/{user_id}", response_model=Envelope[UserResponse])
def update_user(
    user_id: str,
    request: UpdateUserRequest,
    users: UserDirectory = Depends(get_user_service),
):
    """Update user. Only the fields present in the body are changed."""
    user = users.update(user_id, request.to_domain())
    if user is None:
        raise _user_not_found()
    return envelope(UserResponse.from_domain(user), "User updated")


@router.delete("/{user_id}", response_model=Envelope)
def delete_user(user_id: str, users: UserDirectory = Depends(get_user_service)):
    """Delete user. Deleting an unknown id succeeds."""
    users.remove(user_id)
    return envelope(None, "User deleted")
