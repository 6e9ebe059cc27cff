from __future__ import annotations

from pydantic import BaseModel, Field

from resumatch_auth.domain.users.entities import User


class SigninRequestDTO(BaseModel):
    email: str = Field(max_length=320)
    password: str = Field(max_length=1024)


class SignupRequestDTO(BaseModel):
    # Email syntax and password equality are checked by the core, in that order.
    email: str = Field(max_length=320)
    password: str = Field(max_length=1024)
    repeat_password: str = Field(max_length=1024)
    first_name: str = Field("", max_length=128)
    last_name: str = Field("", max_length=128)
    company_name: str = Field("", max_length=256)
    company_address: str = Field("", max_length=512)


class CheckEmailRequestDTO(BaseModel):
    email: str = Field(max_length=320)


class SessionResponseDTO(BaseModel):
    session_id: str


class MessageDTO(BaseModel):
    message: str


class UserProfileDTO(BaseModel):
    id: int
    email: str
    first_name: str
    last_name: str
    company_name: str
    company_address: str
    created_at: str

    @classmethod
    def from_domain(cls, user: User) -> UserProfileDTO:
        return cls.model_validate(user.to_public_dict())
