import functools
from typing import Any
from collections.abc import Callable

from botocore.exceptions import BotoCoreError, ClientError

from urlshortener.dao.exceptions import DataStoreError


__all__ = []


def is_conditional_check_failure(error: ClientError) -> bool:
    return error.response.get('Error', {}).get('Code') == 'ConditionalCheckFailedException'


def handle_dynamodb_error[F: Callable[..., Any]](method: F) -> F:
    """Wrap DynamoDB-interacting DAO methods to handle service and transport errors

    Conditional check failures are expected to be handled inside the wrapped
    method; any ClientError or BotoCoreError that escapes it (throttling,
    timeouts, missing table, credentials, ...) becomes a DataStoreError.

    Example:
        >>> @handle_dynamodb_error
        ... def delete(self, short_id):
        ...     return self.table.delete_item(Key={'short_id': short_id})
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except ClientError as e:
            code = e.response.get('Error', {}).get('Code', 'Unknown')
            raise DataStoreError(f"DynamoDB table '{self.table_name}' request failed ({code}).") from e
        except BotoCoreError as e:
            raise DataStoreError(f"Can't reach DynamoDB table '{self.table_name}'.") from e

    return wrapper
