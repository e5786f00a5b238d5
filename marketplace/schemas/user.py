# marketplace/schemas/user.py
from pydantic import BaseModel, EmailStr, Field
from typing import List, Literal, Optional, Union

USERNAME_MIN = 3
PASSWORD_MIN = 6
FULL_NAME_MIN = 2
COMPANY_NAME_MIN = 2


class RegisterBase(BaseModel):
    username: str = Field(..., min_length=USERNAME_MIN, max_length=50)
    password: str = Field(..., min_length=PASSWORD_MIN)
    email: EmailStr
    full_name: str = Field(..., min_length=FULL_NAME_MIN)
    phone: Optional[str] = None


class CustomerRegister(RegisterBase):
    role: Literal["customer"]


class ProviderRegister(RegisterBase):
    role: Literal["provider"]
    company_name: str = Field(..., min_length=COMPANY_NAME_MIN)
    category_id: int = Field(..., gt=0)
    description: Optional[str] = None
    location: Optional[str] = None
    experience: Optional[int] = Field(None, gt=0, description="Years of experience")
    contact_info: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None


# tagged on "role"; routes pass Body(discriminator="role")
UserRegister = Union[CustomerRegister, ProviderRegister]


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    id: int
    username: str
    email: EmailStr
    full_name: str
    role: str
    phone: Optional[str] = None
    bio: Optional[str] = None
    profile_picture: Optional[str] = None

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    token: str
    user: UserResponse
