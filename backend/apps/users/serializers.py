from rest_framework import serializers

from .dtos import AddressRequest, UserRequest
from .validators import LAST_NAME_MAX_LENGTH, LOGIN_NAME_MAX_LENGTH, validate_login_name


class AddressSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    description = serializers.CharField()
    street = serializers.CharField()
    city = serializers.CharField()
    zipCode = serializers.CharField(source="zip_code")


class UserSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    loginName = serializers.CharField(source="login_name")
    firstName = serializers.CharField(source="first_name")
    lastName = serializers.CharField(source="last_name")
    addresses = AddressSerializer(many=True, read_only=True)


class UserRequestSerializer(serializers.Serializer):
    loginName = serializers.CharField(
        source="login_name",
        max_length=LOGIN_NAME_MAX_LENGTH,
        validators=[validate_login_name],
    )
    firstName = serializers.CharField(
        source="first_name", max_length=100, required=False, allow_blank=True
    )
    lastName = serializers.CharField(source="last_name", max_length=LAST_NAME_MAX_LENGTH)

    def to_request(self) -> UserRequest:
        return UserRequest(**self.validated_data)


class AddressRequestSerializer(serializers.Serializer):
    description = serializers.CharField(max_length=100)
    street = serializers.CharField(max_length=150)
    city = serializers.CharField(max_length=100, required=False, allow_blank=True)
    zipCode = serializers.CharField(
        source="zip_code", max_length=20, required=False, allow_blank=True
    )

    def to_request(self) -> AddressRequest:
        return AddressRequest(**self.validated_data)
