from pydantic import BaseModel, EmailStr, Field


class User(BaseModel):
    id: str
    name: str
    email: str
    password: str = Field(..., repr=False, description="argon2 hash")


class LoginForm(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, repr=False)
