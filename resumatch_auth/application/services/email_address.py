"""Email address syntax checks."""

from __future__ import annotations

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from resumatch_auth.domain.users.repositories import EmailValidator

_EMAIL_ADAPTER: TypeAdapter[str] = TypeAdapter(EmailStr)


class PydanticEmailValidator(EmailValidator):
    """Syntax-only validation; no DNS or deliverability lookups."""

    def is_valid(self, email: str) -> bool:
        try:
            _EMAIL_ADAPTER.validate_python(email)
        except PydanticValidationError:
            return False
        return True
