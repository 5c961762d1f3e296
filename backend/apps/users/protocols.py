from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Optional, Protocol

if TYPE_CHECKING:
    from apps.users.dtos import AddressDTO, AddressRequest, UserDTO, UserRequest
    from apps.users.models import Address, User


class UserRepositoryProtocol(Protocol):
    def list(self, **filters) -> Iterable["User"]: ...

    def get(self, **filters) -> Optional["User"]: ...

    def exists(self, *, exclude_id: Optional[int] = None, **filters) -> bool: ...

    def create(self, **data) -> "User": ...

    def update(self, user: "User", **data) -> "User": ...

    def delete(self, user: "User") -> None: ...


class AddressRepositoryProtocol(Protocol):
    def list(self, **filters) -> Iterable["Address"]: ...

    def get(self, **filters) -> Optional["Address"]: ...

    def exists(self, *, exclude_id: Optional[int] = None, **filters) -> bool: ...

    def create(self, **data) -> "Address": ...

    def update(self, address: "Address", **data) -> "Address": ...


class UserServiceProtocol(Protocol):
    """Operations the users API delegates to.

    Lookups of a missing user or address raise ``NotFoundError``; writes that
    would duplicate a login name or an address description raise
    ``ConflictError``.
    """

    def list_users(self) -> List["UserDTO"]: ...

    def create_user(self, request: "UserRequest") -> "UserDTO": ...

    def get_user(self, user_id: int) -> "UserDTO": ...

    def update_user(self, user_id: int, request: "UserRequest") -> None: ...

    def update_user_last_name(self, user_id: int, last_name: str) -> None: ...

    def delete_user(self, user_id: int) -> None: ...

    def list_user_addresses(self, user_id: int) -> List["AddressDTO"]: ...

    def get_user_address(self, user_id: int, address_id: int) -> "AddressDTO": ...

    def add_address(self, user_id: int, request: "AddressRequest") -> "AddressDTO": ...

    def update_user_address(
        self, user_id: int, address_id: int, request: "AddressRequest"
    ) -> None: ...
