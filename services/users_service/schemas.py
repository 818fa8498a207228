from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    """Body of POST /users; the dashboard sends the name and role fields in camelCase."""

    first_name: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("firstName", "first_name")
    )
    last_name: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("lastName", "last_name")
    )
    username: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role_id: int = Field(..., validation_alias=AliasChoices("roleId", "role_id"))
    department_id: Optional[int] = Field(
        None, validation_alias=AliasChoices("departmentId", "department_id")
    )


class UserUpdate(BaseModel):
    first_name: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("firstName", "first_name")
    )
    last_name: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("lastName", "last_name")
    )
    username: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    role_id: Optional[int] = Field(
        None, validation_alias=AliasChoices("roleId", "role_id")
    )
    department_id: Optional[int] = Field(
        None, validation_alias=AliasChoices("departmentId", "department_id")
    )


class UserCreatedResponse(BaseModel):
    id: str
    email: Optional[str] = None
    username: str
    first_name: str
    last_name: str
    role_id: int
    department_id: Optional[int] = None


class UserResponse(BaseModel):
    """A user with metadata flattened onto the top level."""

    model_config = ConfigDict(extra="allow")

    id: str
    email: Optional[str] = None


class UserListItem(BaseModel):
    id: str
    email: Optional[str] = None
    user_metadata: Dict[str, Any]
    created_at: Optional[datetime] = None


class RoleResponse(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class DepartmentResponse(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str
