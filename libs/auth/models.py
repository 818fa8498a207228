from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator


class AuthUser(BaseModel):
    """
    Represents an authenticated caller from a Supabase access token.

    ``role_id`` and ``department_id`` are read from ``user_metadata`` (where the
    users service writes them) with ``app_metadata`` as a fallback.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="sub")
    email: Optional[EmailStr] = None
    role: str = "authenticated"
    role_id: Optional[int] = None
    department_id: Optional[int] = None
    full_name: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def extract_metadata(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        user_metadata: Dict[str, Any] = data.get("user_metadata") or {}
        app_metadata: Dict[str, Any] = data.get("app_metadata") or {}
        merged = dict(data)
        for key in ("role_id", "department_id", "full_name"):
            if merged.get(key) is not None:
                continue
            value = user_metadata.get(key, app_metadata.get(key))
            if value not in (None, ""):
                merged[key] = value
        return merged
