from dataclasses import dataclass, field
from typing import List

from .models import Address, User


@dataclass
class AddressDTO:
    id: int
    description: str
    street: str
    city: str
    zip_code: str


@dataclass
class UserDTO:
    id: int
    login_name: str
    first_name: str
    last_name: str
    addresses: List[AddressDTO] = field(default_factory=list)


@dataclass
class UserRequest:
    """Validated input for creating or replacing a user."""

    login_name: str
    last_name: str
    first_name: str = ""


@dataclass
class AddressRequest:
    """Validated input for creating or replacing an address."""

    description: str
    street: str
    city: str = ""
    zip_code: str = ""

    def as_fields(self) -> dict:
        return {
            "description": self.description,
            "street": self.street,
            "city": self.city,
            "zip_code": self.zip_code,
        }


def address_to_dto(a: Address) -> AddressDTO:
    return AddressDTO(
        id=a.id,
        description=a.description,
        street=a.street,
        city=a.city or "",
        zip_code=a.zip_code or "",
    )


def user_to_dto(u: User) -> UserDTO:
    return UserDTO(
        id=u.id,
        login_name=u.login_name,
        first_name=u.first_name or "",
        last_name=u.last_name,
        addresses=[address_to_dto(a) for a in u.addresses.all()],
    )
