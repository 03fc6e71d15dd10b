from fastapi import Depends, HTTPException

from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.user_repository import MongoUserRepository
from adapter.security.password_hasher import BcryptPasswordHasher
from port.password_hasher import PasswordHasher
from port.user_directory import UserDirectory
from port.user_repository import UserRepository
from services.auth_service import AuthService
from services.user_service import UserService


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher()


def get_user_service(
    repo: UserRepository = Depends(get_user_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserDirectory:
    return UserService(repo, hasher)


def get_auth_service(
    directory: UserDirectory = Depends(get_user_service),
    repo: UserRepository = Depends(get_user_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AuthService:
    return AuthService(directory, repo, hasher)
