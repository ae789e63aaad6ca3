"""Request and response models for the login endpoint."""

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Body of ``POST login``.

    Attributes:
        login: Account login.
        password: Account password.
    """

    login: str = Field(..., description="Account login")
    password: str = Field(..., repr=False, description="Account password")


class LoginResponse(BaseModel):
    """Successful login payload.

    The server may send more fields; only the token and the user id are
    required and kept as typed attributes.

    Attributes:
        auth_token: Bearer token sent as the Authorization header.
        user_uuid: Opaque identifier of the logged-in user.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    auth_token: str = Field(..., alias="authToken", min_length=1, repr=False)
    user_uuid: str = Field(..., alias="userUuid", min_length=1)
