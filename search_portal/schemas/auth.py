from pydantic import BaseModel, field_validator, model_validator


class UserLogin(BaseModel):
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return v.strip()


class UserResponse(BaseModel):
    id: str
    username: str
    email: str | None = None
    role: str = "viewer"
    is_admin: bool = False

    class Config:
        from_attributes = True


class PasswordChange(BaseModel):
    current_password: str
    new_password: str
    confirm_new_password: str

    @field_validator("new_password")
    @classmethod
    def password_min_length(cls, v: str) -> str:
        if len(v) < 8:
            raise ValueError("New password must be at least 8 characters")
        return v

    @model_validator(mode="after")
    def passwords_match(self):
        if self.new_password != self.confirm_new_password:
            raise ValueError("New password and confirmation do not match")
        return self


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
