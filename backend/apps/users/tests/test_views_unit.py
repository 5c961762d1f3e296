import unittest

from rest_framework import status

from apps.api.exceptions import ConflictError, NotFoundError
from apps.users.dtos import AddressDTO, AddressRequest, UserDTO, UserRequest
from apps.users.views import (
    UserAddressDetailView,
    UserAddressListView,
    UserDetailView,
    UserLastNameView,
    UserListView,
)


class DummyRequest:
    def __init__(self, data=None, *, method="GET"):
        self.data = data
        self.method = method
        self.query_params = {}
        self.META = {}


def _user(user_id=1, login_name="bob", last_name="Smith", addresses=None):
    return UserDTO(
        id=user_id,
        login_name=login_name,
        first_name="",
        last_name=last_name,
        addresses=addresses or [],
    )


def _address(address_id=1, description="home"):
    return AddressDTO(
        id=address_id,
        description=description,
        street="1 Main St",
        city="",
        zip_code="",
    )


class StubUserService:
    """Records every call; ``errors`` maps a method name to the exception it raises."""

    def __init__(self):
        self.calls = []
        self.errors = {}
        self.users = [_user()]
        self.created_user = _user(user_id=7)
        self.created_address = _address(address_id=3)

    def _record(self, name, *args):
        self.calls.append((name, args))
        if name in self.errors:
            raise self.errors[name]

    def list_users(self):
        self._record("list_users")
        return self.users

    def create_user(self, request):
        self._record("create_user", request)
        return self.created_user

    def get_user(self, user_id):
        self._record("get_user", user_id)
        return _user(user_id=user_id)

    def update_user(self, user_id, request):
        self._record("update_user", user_id, request)

    def update_user_last_name(self, user_id, last_name):
        self._record("update_user_last_name", user_id, last_name)

    def delete_user(self, user_id):
        self._record("delete_user", user_id)

    def list_user_addresses(self, user_id):
        self._record("list_user_addresses", user_id)
        return [_address()]

    def get_user_address(self, user_id, address_id):
        self._record("get_user_address", user_id, address_id)
        return _address(address_id=address_id)

    def add_address(self, user_id, request):
        self._record("add_address", user_id, request)
        return self.created_address

    def update_user_address(self, user_id, address_id, request):
        self._record("update_user_address", user_id, address_id, request)

    @property
    def called(self):
        return [name for name, _ in self.calls]


class UserViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.service = StubUserService()

    def dispatch(self, view_cls, method, data=None, **kwargs):
        view = view_cls(service=self.service)
        handler = getattr(view, method)
        return handler(DummyRequest(data, method=method.upper()), **kwargs)

    def test_list_users_returns_service_data(self):
        response = self.dispatch(UserListView, "get")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]["loginName"], "bob")
        self.assertEqual(response.data[0]["lastName"], "Smith")
        self.assertEqual(response.data[0]["addresses"], [])

    def test_create_user_returns_201_with_location(self):
        response = self.dispatch(
            UserListView, "post", {"loginName": "bob", "lastName": "Smith"}
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response["Location"], "api/users/7")
        self.assertEqual(response.data["id"], 7)
        name, args = self.service.calls[0]
        self.assertEqual(name, "create_user")
        self.assertEqual(args[0], UserRequest(login_name="bob", last_name="Smith"))

    def test_create_user_invalid_body_skips_service(self):
        response = self.dispatch(UserListView, "post", {"lastName": "Smith"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "VALIDATION_ERROR")
        self.assertIn("loginName", response.data["error"]["details"])
        self.assertEqual(self.service.calls, [])

    def test_create_user_null_body_is_rejected(self):
        response = self.dispatch(UserListView, "post", None)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.service.calls, [])

    def test_create_user_conflict_propagates(self):
        self.service.errors["create_user"] = ConflictError("duplicate")
        with self.assertRaises(ConflictError):
            self.dispatch(UserListView, "post", {"loginName": "bob", "lastName": "S"})

    def test_get_user_returns_user(self):
        response = self.dispatch(UserDetailView, "get", user_id=4)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["id"], 4)

    def test_get_user_not_found_propagates(self):
        self.service.errors["get_user"] = NotFoundError("User not found")
        with self.assertRaises(NotFoundError):
            self.dispatch(UserDetailView, "get", user_id=999999)

    def test_put_user_returns_204(self):
        response = self.dispatch(
            UserDetailView,
            "put",
            {"loginName": "bobby", "firstName": "Bob", "lastName": "Smith"},
            user_id=2,
        )
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertIsNone(response.data)
        self.assertEqual(
            self.service.calls,
            [
                (
                    "update_user",
                    (2, UserRequest(login_name="bobby", first_name="Bob", last_name="Smith")),
                )
            ],
        )

    def test_put_user_missing_field_returns_field_errors(self):
        response = self.dispatch(UserDetailView, "put", {"loginName": "bob"}, user_id=2)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data["error"]["details"], {"lastName": ["This field is required."]}
        )
        self.assertEqual(self.service.calls, [])

    def test_delete_user_returns_204(self):
        response = self.dispatch(UserDetailView, "delete", user_id=5)
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(self.service.calls, [("delete_user", (5,))])

    def test_patch_last_name_passes_raw_string(self):
        response = self.dispatch(UserLastNameView, "patch", "Jones", user_id=3)
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(self.service.calls, [("update_user_last_name", (3, "Jones"))])

    def test_patch_last_name_rejects_empty_null_and_non_strings(self):
        for body in ("", None, {}, 42, ["Jones"]):
            with self.subTest(body=body):
                response = self.dispatch(UserLastNameView, "patch", body, user_id=3)
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
                self.assertEqual(
                    response.data["error"]["message"],
                    "lastName must not be null or empty.",
                )
        self.assertEqual(self.service.calls, [])

    def test_patch_last_name_too_long(self):
        response = self.dispatch(UserLastNameView, "patch", "x" * 101, user_id=3)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.service.calls, [])

    def test_list_addresses(self):
        response = self.dispatch(UserAddressListView, "get", user_id=1)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]["description"], "home")
        self.assertEqual(response.data[0]["zipCode"], "")

    def test_add_address_returns_201_with_location(self):
        response = self.dispatch(
            UserAddressListView,
            "post",
            {"description": "home", "street": "1 Main St"},
            user_id=1,
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response["Location"], "api/users/1/addresses/3")
        self.assertEqual(
            self.service.calls,
            [("add_address", (1, AddressRequest(description="home", street="1 Main St")))],
        )

    def test_add_address_invalid_body(self):
        response = self.dispatch(
            UserAddressListView, "post", {"street": "1 Main St"}, user_id=1
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("description", response.data["error"]["details"])
        self.assertEqual(self.service.calls, [])

    def test_get_address(self):
        response = self.dispatch(UserAddressDetailView, "get", user_id=1, address_id=9)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["id"], 9)

    def test_patch_address_returns_204(self):
        response = self.dispatch(
            UserAddressDetailView,
            "patch",
            {"description": "work", "street": "2 High St", "zipCode": "12345"},
            user_id=1,
            address_id=3,
        )
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        name, args = self.service.calls[0]
        self.assertEqual(name, "update_user_address")
        self.assertEqual(args[:2], (1, 3))
        self.assertEqual(args[2].zip_code, "12345")

    def test_patch_address_conflict_propagates(self):
        self.service.errors["update_user_address"] = ConflictError("duplicate")
        with self.assertRaises(ConflictError):
            self.dispatch(
                UserAddressDetailView,
                "patch",
                {"description": "home", "street": "1 Main St"},
                user_id=1,
                address_id=3,
            )
