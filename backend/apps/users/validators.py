import re

from rest_framework import serializers

LOGIN_NAME_MAX_LENGTH = 100
LAST_NAME_MAX_LENGTH = 100

_LOGIN_NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")


def validate_login_name(value: str) -> str:
    """
    Login names are used as stable identifiers, so they may only contain
    letters, digits, dots, underscores and hyphens.
    """
    if not _LOGIN_NAME_PATTERN.match(value):
        raise serializers.ValidationError(
            "Login name may contain only letters, numbers, '.', '_' and '-'."
        )
    return value


def validate_last_name(value) -> str:
    """Validate the raw JSON string sent to the last-name endpoint."""
    if not isinstance(value, str) or value == "":
        raise serializers.ValidationError("lastName must not be null or empty.")
    if len(value) > LAST_NAME_MAX_LENGTH:
        raise serializers.ValidationError(
            f"lastName must be at most {LAST_NAME_MAX_LENGTH} characters."
        )
    return value
