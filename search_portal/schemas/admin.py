from typing import Literal

from pydantic import BaseModel, EmailStr, Field, field_validator

Role = Literal["viewer", "analyst", "admin"]
RiskLevel = Literal["low", "medium", "high"]


def _split_keywords(value):
    """Accept "a, b ,c" or ["a", "b"]; blanks dropped."""
    if value is None:
        return value
    if isinstance(value, str):
        value = value.split(",")
    return [str(k).strip() for k in value if str(k).strip()]


class SearchStringCreate(BaseModel):
    string_value: str = Field(min_length=1, max_length=2000)


class SearchStringUpdate(BaseModel):
    string_value: str | None = Field(default=None, min_length=1, max_length=2000)
    is_active: bool | None = None


class TranslationCreate(BaseModel):
    language: str
    text: str = Field(max_length=2000)


class TranslationPreviewRequest(BaseModel):
    text: str = Field(max_length=2000)


class BrandCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    industry: str | None = None
    keywords: list[str] = Field(default_factory=list)
    risk_level: RiskLevel = "medium"

    @field_validator("keywords", mode="before")
    @classmethod
    def split_keywords(cls, v):
        return _split_keywords(v) or []

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Brand name is required")
        return v


class BrandUpdate(BaseModel):
    name: str | None = None
    industry: str | None = None
    keywords: list[str] | None = None
    risk_level: RiskLevel | None = None
    is_active: bool | None = None

    @field_validator("keywords", mode="before")
    @classmethod
    def split_keywords(cls, v):
        return _split_keywords(v)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("Brand name is required")
        return v.strip() if v is not None else v


class AdminUserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1)
    email: EmailStr | None = None
    role: Role = "viewer"

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username is required")
        return v


class AdminUserUpdate(BaseModel):
    email: EmailStr | None = None
    password: str | None = None
    role: Role | None = None
    is_active: bool | None = None
