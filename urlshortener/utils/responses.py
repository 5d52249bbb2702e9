"""API Gateway (Lambda Proxy) response builders shared by all lambda handlers.

Error bodies have the shape {"message": ..., "errorCode": ...}; the error code
is omitted when not given.
"""

import json
from typing import Any

from urlshortener.types import LambdaResponse


def _error_body(base: str, message: str | None, error_code: str | None) -> str:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return json.dumps(body)


def response_200(body: dict[str, Any]) -> LambdaResponse:
    return {
        'statusCode': 200,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps(body),
    }


def response_302(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 302,
        'headers': {'Location': location},
        'body': json.dumps({}),  # no body needed for redirects
    }


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return {
        'statusCode': 400,
        'body': _error_body('Bad Request', message, error_code),
    }


def response_401(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return {
        'statusCode': 401,
        'headers': {'WWW-Authenticate': 'Bearer'},
        'body': _error_body('Unauthorized', message, error_code),
    }


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return {
        'statusCode': 404,
        'body': _error_body('Not Found', message, error_code),
    }


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return {
        'statusCode': 500,
        'body': _error_body('Internal Server Error', message, error_code),
    }
