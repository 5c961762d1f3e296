from typing import Optional, Tuple

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import (
    OpenApiExample,
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
)
from rest_framework import serializers, status
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer
from apps.api.utils import error_response
from apps.common import get_logger
from .container import build_user_service
from .serializers import (
    AddressRequestSerializer,
    AddressSerializer,
    UserRequestSerializer,
    UserSerializer,
)
from .validators import validate_last_name

logger = get_logger(__name__).bind(component="users", layer="view")

ROUTE_PREFIX = "api/users"

USER_ID_PARAMETER = OpenApiParameter("user_id", int, OpenApiParameter.PATH)
ADDRESS_ID_PARAMETER = OpenApiParameter("address_id", int, OpenApiParameter.PATH)
ERROR = OpenApiResponse(response=ErrorResponseSerializer)


def user_location(user_id: int) -> str:
    return f"{ROUTE_PREFIX}/{user_id}"


def address_location(user_id: int, address_id: int) -> str:
    return f"{user_location(user_id)}/addresses/{address_id}"


class UserResourceView(APIView):
    """Base for the users resource: holds the injected service and bound logger.

    Domain errors raised by the service are left to the global exception
    handler; views only answer the 400s they detect themselves.
    """

    service = build_user_service()
    log = logger

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.log = logger.bind(view=type(self).__name__)

    def validate_body(
        self, serializer_class, data
    ) -> Tuple[Optional[serializers.Serializer], Optional[Response]]:
        serializer = serializer_class(data=data)
        try:
            serializer.is_valid(raise_exception=True)
        except DRFValidationError as exc:
            self.log.warning("Request body validation failed", errors=exc.detail)
            return None, error_response("VALIDATION_ERROR", "Invalid input", exc.detail)
        return serializer, None


@extend_schema(tags=["Users"])
class UserListView(UserResourceView):
    @extend_schema(
        summary="List users",
        responses={200: UserSerializer(many=True)},
    )
    def get(self, request):
        self.log.debug("Listing users via API")
        users = self.service.list_users()
        return Response(UserSerializer(users, many=True).data)

    @extend_schema(
        summary="Create user",
        request=UserRequestSerializer,
        responses={
            201: UserSerializer,
            400: ERROR,
            409: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="User with same loginName already exists.",
            ),
        },
    )
    def post(self, request):
        serializer, invalid = self.validate_body(UserRequestSerializer, request.data)
        if invalid:
            return invalid
        payload = serializer.to_request()
        self.log.info("Creating user via API", login_name=payload.login_name)
        dto = self.service.create_user(payload)
        self.log.info("User created via API", user_id=dto.id)
        return Response(
            UserSerializer(dto).data,
            status=status.HTTP_201_CREATED,
            headers={"Location": user_location(dto.id)},
        )


@extend_schema(tags=["Users"], parameters=[USER_ID_PARAMETER])
class UserDetailView(UserResourceView):
    @extend_schema(
        summary="Get user by ID",
        responses={200: UserSerializer, 404: ERROR},
    )
    def get(self, request, user_id: int):
        self.log.debug("Fetching user detail", user_id=user_id)
        dto = self.service.get_user(user_id)
        return Response(UserSerializer(dto).data)

    @extend_schema(
        summary="Replace user",
        request=UserRequestSerializer,
        responses={204: None, 400: ERROR, 404: ERROR, 409: ERROR},
    )
    def put(self, request, user_id: int):
        serializer, invalid = self.validate_body(UserRequestSerializer, request.data)
        if invalid:
            return invalid
        self.log.info("Replacing user via API", user_id=user_id)
        self.service.update_user(user_id, serializer.to_request())
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        summary="Delete user",
        responses={204: None, 404: ERROR},
    )
    def delete(self, request, user_id: int):
        self.log.info("Deleting user via API", user_id=user_id)
        self.service.delete_user(user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(tags=["Users"], parameters=[USER_ID_PARAMETER])
class UserLastNameView(UserResourceView):
    @extend_schema(
        summary="Update user last name",
        description="Body is a bare JSON string holding the new last name.",
        request=OpenApiTypes.STR,
        examples=[OpenApiExample("lastName", value="new last name", request_only=True)],
        responses={204: None, 400: ERROR, 404: ERROR},
    )
    def patch(self, request, user_id: int):
        try:
            last_name = validate_last_name(request.data)
        except DRFValidationError as exc:
            self.log.warning("Last name rejected", user_id=user_id)
            return error_response("VALIDATION_ERROR", str(exc.detail[0]))
        self.log.info("Updating last name via API", user_id=user_id)
        self.service.update_user_last_name(user_id, last_name)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(tags=["Users", "Addresses"], parameters=[USER_ID_PARAMETER])
class UserAddressListView(UserResourceView):
    @extend_schema(
        summary="List addresses for a user",
        responses={200: AddressSerializer(many=True), 404: ERROR},
    )
    def get(self, request, user_id: int):
        self.log.debug("Listing addresses for user", user_id=user_id)
        addresses = self.service.list_user_addresses(user_id)
        return Response(AddressSerializer(addresses, many=True).data)

    @extend_schema(
        summary="Create address for a user",
        request=AddressRequestSerializer,
        responses={
            201: AddressSerializer,
            400: ERROR,
            404: ERROR,
            409: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="Address with same description already exists.",
            ),
        },
    )
    def post(self, request, user_id: int):
        serializer, invalid = self.validate_body(AddressRequestSerializer, request.data)
        if invalid:
            return invalid
        self.log.info("Creating address via API", user_id=user_id)
        dto = self.service.add_address(user_id, serializer.to_request())
        return Response(
            AddressSerializer(dto).data,
            status=status.HTTP_201_CREATED,
            headers={"Location": address_location(user_id, dto.id)},
        )


@extend_schema(
    tags=["Users", "Addresses"],
    parameters=[USER_ID_PARAMETER, ADDRESS_ID_PARAMETER],
)
class UserAddressDetailView(UserResourceView):
    @extend_schema(
        summary="Get address by ID",
        responses={200: AddressSerializer, 404: ERROR},
    )
    def get(self, request, user_id: int, address_id: int):
        self.log.debug("Fetching address", user_id=user_id, address_id=address_id)
        dto = self.service.get_user_address(user_id, address_id)
        return Response(AddressSerializer(dto).data)

    @extend_schema(
        summary="Update address by ID",
        request=AddressRequestSerializer,
        responses={204: None, 400: ERROR, 404: ERROR, 409: ERROR},
    )
    def patch(self, request, user_id: int, address_id: int):
        serializer, invalid = self.validate_body(AddressRequestSerializer, request.data)
        if invalid:
            return invalid
        self.log.info("Updating address via API", user_id=user_id, address_id=address_id)
        self.service.update_user_address(user_id, address_id, serializer.to_request())
        return Response(status=status.HTTP_204_NO_CONTENT)
