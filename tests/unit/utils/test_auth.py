import json

import pytest
from pytest import MonkeyPatch

from urlshortener.constants import ENV
from urlshortener.utils.auth import bearer_token, require_bearer_token


@pytest.fixture
def handler():
    @require_bearer_token
    def _handler(event, context):
        return {'statusCode': 200, 'body': json.dumps({'ok': True})}

    return _handler


@pytest.fixture(autouse=True)
def auth_token(monkeypatch: MonkeyPatch) -> str:
    monkeypatch.setenv(ENV.App.AUTH_TOKEN, 's3cret')
    return 's3cret'


@pytest.mark.parametrize(
    'headers, expected',
    [
        ({'Authorization': 'Bearer s3cret'}, 's3cret'),
        ({'authorization': 'Bearer  s3cret '}, 's3cret'),
        ({'Authorization': 'Basic dXNlcjpwYXNz'}, None),
        ({'Authorization': 'Bearer '}, None),
        ({}, None),
        (None, None),
    ],
)
def test_bearer_token(headers, expected):
    assert bearer_token({'headers': headers}) == expected


def test_valid_token_reaches_handler(handler):
    response = handler({'headers': {'Authorization': 'Bearer s3cret'}}, None)

    assert response['statusCode'] == 200


def test_missing_token_is_rejected(handler):
    response = handler({'headers': {}}, None)
    body = json.loads(response['body'])

    assert response['statusCode'] == 401
    assert response['headers']['WWW-Authenticate'] == 'Bearer'
    assert body['errorCode'] == 'MISSING_TOKEN'


def test_invalid_token_is_rejected(handler):
    response = handler({'headers': {'Authorization': 'Bearer wrong'}}, None)
    body = json.loads(response['body'])

    assert response['statusCode'] == 401
    assert body == {'message': 'Unauthorized (invalid bearer token)', 'errorCode': 'INVALID_TOKEN'}


def test_unconfigured_token_rejects_everything(handler, monkeypatch: MonkeyPatch):
    monkeypatch.delenv(ENV.App.AUTH_TOKEN)

    response = handler({'headers': {'Authorization': 'Bearer '}}, None)
    assert json.loads(response['body'])['errorCode'] == 'MISSING_TOKEN'

    response = handler({'headers': {'Authorization': 'Bearer anything'}}, None)
    assert response['statusCode'] == 401
    assert json.loads(response['body'])['errorCode'] == 'INVALID_TOKEN'
