import json
from datetime import datetime, UTC
from typing import cast

import pytest
from pytest import MonkeyPatch

from urlshortener.constants import ENV
from urlshortener.types import LambdaEvent, LambdaContext, LambdaConfiguration
from urlshortener.engine import ShortenerEngine
from urlshortener.models import URLMapping
from urlshortener.lambdas.delete_url import app


def delete_event(path_parameters: dict | None, token: str | None = 's3cret') -> LambdaEvent:
    headers = {'authorization': f'Bearer {token}'} if token is not None else None
    return cast(LambdaEvent, {
        'resource': '/short/{short_id}',
        'httpMethod': 'DELETE',
        'headers': headers,
        'pathParameters': path_parameters,
        'requestContext': {'domainName': 'sho.rt', 'stage': 'Prod'},
    })


class TestDeleteUrlHandler:

    @pytest.fixture
    def context(self) -> LambdaContext:
        return cast(LambdaContext, {'function_name': 'delete_url'})

    @pytest.fixture
    def config(self) -> LambdaConfiguration:
        return cast(LambdaConfiguration, {'active_backend': 'redis', 'redis': {}, 'cache': {}, 'engine': {}})

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, context, config, store, cache, executor) -> None:
        monkeypatch.setenv(ENV.App.AUTH_TOKEN, 's3cret')
        monkeypatch.setattr(app, 'load_config', lambda *a, **kw: config)
        monkeypatch.setattr(
            app, 'build_engine', lambda cfg, base_url=None: ShortenerEngine(store, cache, base_url=base_url, executor=executor)
        )
        store.mappings['abc12345'] = URLMapping(
            short_id='abc12345',
            long_url='https://example.com/page',
            created_at=datetime(2025, 10, 15, tzinfo=UTC),
        )
        cache.entries['abc12345'] = 'https://example.com/page'

        self.context = context
        self.store = store
        self.cache = cache

    def test_lambda_handler(self) -> None:
        response = app.lambda_handler(delete_event({'short_id': 'abc12345'}), self.context)

        assert response['statusCode'] == 200
        assert json.loads(response['body']) == {'message': 'short URL deleted successfully'}
        assert self.store.mappings == {}
        assert self.cache.entries == {}

    def test_lambda_handler_with_cache_unavailable(self) -> None:
        self.cache.available = False

        response = app.lambda_handler(delete_event({'short_id': 'abc12345'}), self.context)

        assert response['statusCode'] == 200
        assert self.store.mappings == {}

    def test_lambda_handler_with_unknown_short_id(self) -> None:
        response = app.lambda_handler(delete_event({'short_id': 'xyz98765'}), self.context)

        assert response['statusCode'] == 404
        assert json.loads(response['body'])['errorCode'] == 'SHORT_URL_NOT_FOUND'
        assert 'abc12345' in self.store.mappings

    def test_lambda_handler_deleting_twice(self) -> None:
        first = app.lambda_handler(delete_event({'short_id': 'abc12345'}), self.context)
        second = app.lambda_handler(delete_event({'short_id': 'abc12345'}), self.context)

        assert first['statusCode'] == 200
        assert second['statusCode'] == 404
        assert json.loads(second['body'])['errorCode'] == 'SHORT_URL_NOT_FOUND'
        assert self.store.mappings == {}
        assert self.cache.entries == {}

    @pytest.mark.parametrize('path_parameters, error_code', [(None, 'MISSING_SHORT_ID'), ({'short_id': 'a/b'}, 'INVALID_SHORT_ID')])
    def test_lambda_handler_with_bad_request(self, path_parameters, error_code) -> None:
        response = app.lambda_handler(delete_event(path_parameters), self.context)

        assert response['statusCode'] == 400
        assert json.loads(response['body'])['errorCode'] == error_code

    @pytest.mark.parametrize('token, error_code', [(None, 'MISSING_TOKEN'), ('wrong', 'INVALID_TOKEN')])
    def test_lambda_handler_unauthorized(self, token, error_code) -> None:
        response = app.lambda_handler(delete_event({'short_id': 'abc12345'}, token=token), self.context)

        assert response['statusCode'] == 401
        assert json.loads(response['body'])['errorCode'] == error_code
        assert 'abc12345' in self.store.mappings

    def test_lambda_handler_with_store_unavailable(self) -> None:
        self.store.available = False

        response = app.lambda_handler(delete_event({'short_id': 'abc12345'}), self.context)

        assert response['statusCode'] == 500
        assert json.loads(response['body'])['errorCode'] == 'STORE_UNAVAILABLE'
