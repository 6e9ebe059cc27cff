# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError


class InvalidRequestBodyError(ValidationError):
    def __init__(self, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            code="invalid_request_body",
            message="Invalid request body",
            context=context,
        )

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message}


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    errors_list = []
    fields_set = set()

    for error in exc.errors():
        loc = error.get("loc", ())
        field_path = ".".join(str(part) for part in loc if part is not None)

        if field_path:
            fields_set.add(field_path)

        errors_list.append(
            {
                "field": field_path or "unknown",
                "type": error.get("type", "value_error"),
            }
        )

    return {
        "fields": sorted(fields_set),
        "errors": errors_list,
    }


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    context = format_pydantic_errors(exc)
    raise InvalidRequestBodyError(context=context) from exc


__all__ = [
    "InvalidRequestBodyError",
    "format_pydantic_errors",
    "raise_validation_error",
]
