"""This module defines the request and response models exchanged by the session loop.

The wire-level HTTP parsing and serialization happen elsewhere; the handlers
only ever see a `LedgerRequest` and produce a `LedgerResponse`.
"""

from http import HTTPStatus
from typing import TypeVar

from pocket_ledger.exceptions.ledger import BadRequestError
from pydantic import BaseModel, ValidationError

BodyModel = TypeVar("BodyModel", bound=BaseModel)

TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"
JSON_CONTENT_TYPE = "application/json"


def describe_validation_error(error: ValidationError) -> str:
    """Condenses a Pydantic validation error into a single reason string.

    Args:
        error: The error raised while decoding a request body.

    Returns:
        The first reported problem, prefixed with the offending field when
        there is one, e.g. ``"name: Field required"``.
    """
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


class LedgerRequest(BaseModel):
    """A decoded request as handed over by the session loop.

    Attributes:
        method: The HTTP verb, upper-cased (e.g. ``"POST"``).
        target: The request target, including any query string.
        headers: Header pairs with lower-cased names.
        body: The raw request body.
        http_version: The HTTP version of the request, e.g. ``"1.1"``.
    """

    method: str
    target: str
    headers: list[tuple[str, str]] = []
    body: bytes = b""
    http_version: str = "1.1"

    def parse_body(self, model: type[BodyModel]) -> BodyModel:
        """Decodes the JSON body into the given model.

        Args:
            model: The Pydantic model describing the expected fields.

        Returns:
            The validated model instance.

        Raises:
            BadRequestError: If the body is empty, is not valid JSON or
                misses a required field.
        """
        if not self.body.strip():
            raise BadRequestError("Request's body is empty")
        try:
            return model.model_validate_json(self.body)
        except ValidationError as e:
            raise BadRequestError(describe_validation_error(e)) from e


class LedgerResponse(BaseModel):
    """The outcome of a single ledger operation.

    Attributes:
        status: The HTTP status to send.
        body: The response body; a plain-text reason for errors.
        content_type: The media type of `body`.
    """

    status: HTTPStatus
    body: str = ""
    content_type: str = TEXT_CONTENT_TYPE

    @classmethod
    def created(cls) -> "LedgerResponse":
        """Builds the outcome of a successful create operation.

        Returns:
            A 201 response with an empty body.
        """
        return cls(status=HTTPStatus.CREATED)

    @classmethod
    def ok(cls, body: str = "", content_type: str = TEXT_CONTENT_TYPE) -> "LedgerResponse":
        """Builds the outcome of a successful modify, delete or read operation.

        Args:
            body: An optional body chosen by the handler.
            content_type: The media type of `body`.

        Returns:
            A 200 response.
        """
        return cls(status=HTTPStatus.OK, body=body, content_type=content_type)

    @classmethod
    def json(cls, payload: str) -> "LedgerResponse":
        """Builds a 200 response carrying a JSON document.

        Args:
            payload: The already serialized JSON text.

        Returns:
            A 200 response with an ``application/json`` body.
        """
        return cls.ok(payload, JSON_CONTENT_TYPE)

    @classmethod
    def bad_request(cls, reason: str) -> "LedgerResponse":
        """Builds the outcome of a rejected request.

        Args:
            reason: Why the request was rejected.

        Returns:
            A 400 response whose body is the reason.
        """
        return cls(status=HTTPStatus.BAD_REQUEST, body=reason)

    @classmethod
    def server_error(cls, reason: str) -> "LedgerResponse":
        """Builds the outcome of an unexpected failure.

        Args:
            reason: A description of the failure.

        Returns:
            A 500 response.
        """
        return cls(status=HTTPStatus.INTERNAL_SERVER_ERROR, body=f"An error occurred: '{reason}'")

    @classmethod
    def not_implemented(cls, reason: str) -> "LedgerResponse":
        """Builds the outcome of a routed but unsupported operation.

        Args:
            reason: What is not supported.

        Returns:
            A 501 response.
        """
        return cls(status=HTTPStatus.NOT_IMPLEMENTED, body=reason)
