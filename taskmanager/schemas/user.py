from pydantic import BaseModel, Field, field_validator


class AuthRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def password_has_no_nul(cls, value: str) -> str:
        # bcrypt cannot hash NUL bytes
        if "\x00" in value:
            raise ValueError("Password must not contain NUL characters")
        return value


class AuthResponse(BaseModel):
    token: str
