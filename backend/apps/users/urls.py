from django.urls import path, register_converter

from .views import (
    UserAddressDetailView,
    UserAddressListView,
    UserDetailView,
    UserLastNameView,
    UserListView,
)


class PositiveIntConverter:
    """Path converter that only matches integers >= 1."""

    regex = "[1-9][0-9]*"

    def to_python(self, value: str) -> int:
        return int(value)

    def to_url(self, value) -> str:
        return str(int(value))


register_converter(PositiveIntConverter, "posint")

urlpatterns = [
    path("users", UserListView.as_view(), name="users-list"),
    path("users/<posint:user_id>", UserDetailView.as_view(), name="users-detail"),
    path(
        "users/<posint:user_id>/lastName",
        UserLastNameView.as_view(),
        name="users-last-name",
    ),
    path(
        "users/<posint:user_id>/addresses",
        UserAddressListView.as_view(),
        name="users-addresses-list",
    ),
    path(
        "users/<posint:user_id>/addresses/<posint:address_id>",
        UserAddressDetailView.as_view(),
        name="users-addresses-detail",
    ),
]
