"""Transport shapes exchanged over the HTTP boundary."""

from pydantic import BaseModel, ConfigDict, Field

from src.user_api.entities.user.entity import User


class UserDTO(BaseModel):
    """User as serialized in request and response bodies."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "Ann",
                "email": "a@x.com",
                "phone": "555",
                "address": "1 Rd",
            }
        }
    )

    id: int | None = Field(default=None, description="Store-assigned identifier")
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None


def to_dto(user: User | None) -> UserDTO | None:
    if user is None:
        return None
    return UserDTO(
        id=user.id,
        name=user.name,
        email=user.email,
        phone=user.phone,
        address=user.address,
    )


def from_dto(dto: UserDTO | None) -> User | None:
    if dto is None:
        return None
    return User(
        id=dto.id,
        name=dto.name,
        email=dto.email,
        phone=dto.phone,
        address=dto.address,
    )
