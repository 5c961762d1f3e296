from __future__ import annotations

from typing import List

from django.db import IntegrityError, transaction

from apps.api.exceptions import ConflictError, NotFoundError
from apps.common import get_logger
from .dtos import (
    AddressDTO,
    AddressRequest,
    UserDTO,
    UserRequest,
    address_to_dto,
    user_to_dto,
)
from .models import Address, User
from .protocols import AddressRepositoryProtocol, UserRepositoryProtocol

logger = get_logger(__name__).bind(component="users", layer="service")


class UserService:
    def __init__(
        self, users: UserRepositoryProtocol, addresses: AddressRepositoryProtocol
    ):
        self.users = users
        self.addresses = addresses
        self.logger = logger.bind(service="UserService")

    # Users
    def list_users(self) -> List[UserDTO]:
        self.logger.debug("Listing users")
        return [user_to_dto(u) for u in self.users.list()]

    def get_user(self, user_id: int) -> UserDTO:
        self.logger.debug("Fetching user", user_id=user_id)
        return user_to_dto(self._require_user(user_id))

    def create_user(self, request: UserRequest) -> UserDTO:
        self.logger.info("Creating user", login_name=request.login_name)
        self._ensure_login_name_free(request.login_name)
        try:
            with transaction.atomic():
                user = self.users.create(
                    login_name=request.login_name,
                    first_name=request.first_name,
                    last_name=request.last_name,
                )
        except IntegrityError as exc:
            raise self._login_name_conflict(request.login_name, exc) from exc
        self.logger.info("User created", user_id=user.id, login_name=user.login_name)
        refreshed = self.users.get(id=user.id)
        return user_to_dto(refreshed if refreshed else user)

    def update_user(self, user_id: int, request: UserRequest) -> None:
        self.logger.info("Updating user", user_id=user_id)
        user = self._require_user(user_id)
        self._ensure_login_name_free(request.login_name, exclude_id=user.id)
        try:
            with transaction.atomic():
                self.users.update(
                    user,
                    login_name=request.login_name,
                    first_name=request.first_name,
                    last_name=request.last_name,
                )
        except IntegrityError as exc:
            raise self._login_name_conflict(request.login_name, exc) from exc
        self.logger.info("User updated", user_id=user_id)

    def update_user_last_name(self, user_id: int, last_name: str) -> None:
        self.logger.info("Updating user last name", user_id=user_id)
        user = self._require_user(user_id)
        with transaction.atomic():
            self.users.update(user, last_name=last_name)
        self.logger.info("User last name updated", user_id=user_id)

    def delete_user(self, user_id: int) -> None:
        self.logger.info("Deleting user", user_id=user_id)
        user = self._require_user(user_id)
        with transaction.atomic():
            self.users.delete(user)
        self.logger.info("User deleted", user_id=user_id)

    # Address operations (nested under user)
    def list_user_addresses(self, user_id: int) -> List[AddressDTO]:
        self.logger.debug("Listing user addresses", user_id=user_id)
        user = self._require_user(user_id)
        return [address_to_dto(a) for a in self.addresses.list(user_id=user.id)]

    def get_user_address(self, user_id: int, address_id: int) -> AddressDTO:
        self.logger.debug(
            "Fetching user address", user_id=user_id, address_id=address_id
        )
        user = self._require_user(user_id)
        return address_to_dto(self._require_address(user, address_id))

    def add_address(self, user_id: int, request: AddressRequest) -> AddressDTO:
        self.logger.info("Creating address", user_id=user_id)
        user = self._require_user(user_id)
        self._ensure_description_free(user, request.description)
        try:
            with transaction.atomic():
                addr = self.addresses.create(user=user, **request.as_fields())
        except IntegrityError as exc:
            raise self._description_conflict(user.id, request.description, exc) from exc
        self.logger.info("Address created", user_id=user_id, address_id=addr.id)
        return address_to_dto(addr)

    def update_user_address(
        self, user_id: int, address_id: int, request: AddressRequest
    ) -> None:
        self.logger.info("Updating address", user_id=user_id, address_id=address_id)
        user = self._require_user(user_id)
        addr = self._require_address(user, address_id)
        self._ensure_description_free(user, request.description, exclude_id=addr.id)
        try:
            with transaction.atomic():
                self.addresses.update(addr, **request.as_fields())
        except IntegrityError as exc:
            raise self._description_conflict(user.id, request.description, exc) from exc
        self.logger.info("Address updated", user_id=user_id, address_id=address_id)

    # Lookups and invariants
    def _require_user(self, user_id: int) -> User:
        user = self.users.get(id=user_id)
        if not user:
            self.logger.info("User not found", user_id=user_id)
            raise NotFoundError("User not found", {"userId": str(user_id)})
        return user

    def _require_address(self, user: User, address_id: int) -> Address:
        addr = self.addresses.get(id=address_id, user_id=user.id)
        if not addr:
            self.logger.info(
                "Address not found", user_id=user.id, address_id=address_id
            )
            raise NotFoundError(
                "Address not found",
                {"userId": str(user.id), "addressId": str(address_id)},
            )
        return addr

    def _ensure_login_name_free(self, login_name: str, *, exclude_id=None) -> None:
        if self.users.exists(login_name=login_name, exclude_id=exclude_id):
            raise self._login_name_conflict(login_name)

    def _ensure_description_free(
        self, user: User, description: str, *, exclude_id=None
    ) -> None:
        if self.addresses.exists(
            user_id=user.id, description=description, exclude_id=exclude_id
        ):
            raise self._description_conflict(user.id, description)

    def _login_name_conflict(self, login_name: str, exc: Exception = None) -> ConflictError:
        self.logger.warning(
            "Login name already in use",
            login_name=login_name,
            error=str(exc) if exc else None,
        )
        return ConflictError(
            "User with same loginName already exists",
            {"loginName": login_name},
        )

    def _description_conflict(
        self, user_id: int, description: str, exc: Exception = None
    ) -> ConflictError:
        self.logger.warning(
            "Address description already in use",
            user_id=user_id,
            description=description,
            error=str(exc) if exc else None,
        )
        return ConflictError(
            "Address with same description already exists",
            {"userId": str(user_id), "description": description},
        )
