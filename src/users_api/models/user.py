"""User models for the User API."""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from pydantic.networks import validate_email

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
AGE_MIN = 18
AGE_MAX = 120


def check_email_syntax(value: str) -> str:
    """Reject malformed addresses, returning the address exactly as given."""
    validate_email(value)
    return value


EmailAddress = Annotated[str, AfterValidator(check_email_syntax)]


class User(BaseModel):
    """Stored user record, also the response body."""

    id: int = Field(..., description="Server-assigned identifier")
    name: str = Field(..., description="Full name of the user")
    email: EmailAddress = Field(..., description="Email address of the user")
    age: int = Field(..., description="Age of the user in years")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "John Doe",
                "email": "john.doe@example.com",
                "age": 30,
            }
        }
    )


class UserCreate(BaseModel):
    """Request body for creating a user. Any ``id`` sent by the client is ignored."""

    id: int | None = Field(None, description="Ignored, the server assigns identifiers")
    name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH, description="Full name")
    email: EmailAddress = Field(..., description="Email address")
    age: int = Field(..., ge=AGE_MIN, le=AGE_MAX, description="Age in years")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Al Li",
                "email": "al@example.com",
                "age": 40,
            }
        }
    )


class UserUpdate(BaseModel):
    """Request body for updating a user.

    Empty strings and an age of 0 mean "leave the field unchanged", the same
    as omitting the field. Any other value has to satisfy the rules that
    apply on create.
    """

    id: int | None = Field(None, description="Ignored, identifiers never change")
    name: str | None = Field(None, description="New name, empty to keep the current one")
    email: str | None = Field(None, description="New email, empty to keep the current one")
    age: int | None = Field(None, description="New age, 0 to keep the current one")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Jane Doe",
                "email": "",
                "age": 0,
            }
        }
    )

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str | None) -> str | None:
        if value and not NAME_MIN_LENGTH <= len(value) <= NAME_MAX_LENGTH:
            raise ValueError(f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters")
        return value

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str | None) -> str | None:
        if not value:
            return value
        return check_email_syntax(value)

    @field_validator("age")
    @classmethod
    def check_age(cls, value: int | None) -> int | None:
        if value and not AGE_MIN <= value <= AGE_MAX:
            raise ValueError(f"Age must be between {AGE_MIN} and {AGE_MAX}")
        return value
