"""Account schemas for request/response models."""

from pydantic import BaseModel, ConfigDict, Field

from users_identity.domain.account import AccountView


class AccountResponse(BaseModel):
    """Safe projection of an account; never includes secrets."""

    id: int
    full_name: str
    email: str
    is_activated: bool
    role: str

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_view(cls, view: AccountView) -> "AccountResponse":
        return cls(
            id=view.id,
            full_name=view.full_name,
            email=view.email,
            is_activated=view.is_activated,
            role=view.role.value,
        )


class UpdateAccountRequest(BaseModel):
    """Request schema for profile updates.

    ``id`` defaults to the caller's own account; only admins may name
    another one. Omitted fields are left unchanged.
    """

    id: int | None = Field(default=None, description="Target account id")
    full_name: str | None = None
    email: str | None = None
    password: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"full_name": "Alice Updated"},
        },
    )


class DeleteAccountRequest(BaseModel):
    """Request schema for deleting an account by email."""

    email: str
