from textstore.domains.identity.entities import User
from textstore.domains.identity.schemas import (
    UserBase, UserCreate, UserLogin, UserResponse, Token
)

__all__ = [
    "User",
    "UserBase", "UserCreate", "UserLogin", "UserResponse", "Token",
]
