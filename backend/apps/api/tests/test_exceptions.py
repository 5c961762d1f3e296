import json

from django.test import RequestFactory
from rest_framework import status
from rest_framework.exceptions import NotFound, ParseError, ValidationError
from rest_framework.test import APIRequestFactory

from apps.api.exceptions import (
    ApplicationError,
    ConflictError,
    NotFoundError,
    global_exception_handler,
    not_found_handler,
    server_error_handler,
)

factory = APIRequestFactory()


class DummyView:
    pass


def _context(request):
    return {"request": request, "view": DummyView()}


def test_application_error_returns_structured_response():
    request = factory.get("/api/example")
    exc = ApplicationError(
        "CONFLICT",
        "Already exists",
        status_code=status.HTTP_409_CONFLICT,
        details={"loginName": "bob"},
    )
    response = global_exception_handler(exc, _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_409_CONFLICT
    assert payload["code"] == "CONFLICT"
    assert payload["message"] == "Already exists"
    assert payload["details"] == {"loginName": "bob"}


def test_not_found_error_maps_to_404():
    request = factory.get("/api/users/999999")
    exc = NotFoundError("User not found", {"userId": "999999"})
    response = global_exception_handler(exc, _context(request))
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.data["error"]["code"] == "NOT_FOUND"
    assert response.data["error"]["details"] == {"userId": "999999"}


def test_conflict_error_maps_to_409_without_details():
    request = factory.post("/api/users", data={})
    response = global_exception_handler(ConflictError("Duplicate"), _context(request))
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.data["error"]["code"] == "CONFLICT"
    assert "details" not in response.data["error"]


def test_validation_error_preserves_details():
    request = factory.post("/api/users", data={})
    exc = ValidationError({"loginName": ["This field is required."]})
    response = global_exception_handler(exc, _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert payload["code"] == "VALIDATION_ERROR"
    assert payload["message"] == "Validation failed"
    assert payload["details"] == {"loginName": ["This field is required."]}


def test_parse_error_is_reported_as_validation_error():
    request = factory.post("/api/users", data={})
    response = global_exception_handler(ParseError("JSON parse error"), _context(request))
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.data["error"]["code"] == "VALIDATION_ERROR"
    assert response.data["error"]["message"] == "JSON parse error"


def test_drf_not_found_uses_detail_message():
    request = factory.get("/api/users/1")
    response = global_exception_handler(NotFound("Gone"), _context(request))
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.data["error"]["message"] == "Gone"
    assert "details" not in response.data["error"]


def test_unhandled_exception_returns_generic_message():
    request = factory.get("/api/users")
    response = global_exception_handler(RuntimeError("boom"), _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert payload["code"] == "SERVER_ERROR"
    assert payload["message"] == "Something went wrong"
    assert "details" not in payload


def test_django_level_handlers_return_json_envelope():
    request = RequestFactory().get("/api/users/0")
    missing = not_found_handler(request, None)
    assert missing.status_code == 404
    assert json.loads(missing.content)["error"]["code"] == "NOT_FOUND"

    crashed = server_error_handler(request)
    assert crashed.status_code == 500
    assert json.loads(crashed.content)["error"]["message"] == "Something went wrong"
