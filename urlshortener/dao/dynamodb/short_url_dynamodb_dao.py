"""Data Access Object (DAO) implementation for storing URL mappings in DynamoDB

Each URLMapping is a single item in a table whose partition key is `short_id`:

    {short_id: S, long_url: S, created_at: S (ISO-8601), access_count: N}

Uniqueness and atomic increments are delegated to DynamoDB condition
expressions:
    - insert(): PutItem with `attribute_not_exists(short_id)`
    - find_and_increment() / increment_access_count(): UpdateItem `ADD access_count :one`
      with `attribute_exists(short_id)`, so deleted items are never recreated.

Example:
    >>> dao = ShortURLDynamoDBDAO(table_name="urlshortener-dev-links", region_name="eu-central-1")
    >>> dao.insert(URLMapping(short_id="abc12345", long_url="https://example.com", created_at=datetime.now(UTC)))
    <ShortURLDynamoDBDAO>
    >>> dao.find_and_increment("abc12345").access_count
    1
"""

from datetime import datetime
from typing import Any, Optional

import boto3
from beartype import beartype
from botocore.config import Config
from botocore.exceptions import ClientError

from urlshortener.models import URLMapping
from urlshortener.types import DynamoDBTable
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.dynamodb.helpers import handle_dynamodb_error, is_conditional_check_failure
from urlshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError


class ShortURLDynamoDBDAO(ShortURLBaseDAO):
    """DynamoDB-based Data Access Object (DAO) for managing URL mappings

    Attributes:
        table (DynamoDBTable):
            boto3 DynamoDB Table resource holding the mappings.
        table_name (str):
            Name of the table (used in error messages).

    All methods raise DataStoreError on DynamoDB service or transport errors.
    """

    def __init__(
        self,
        table_name: str,
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        timeout: Optional[float] = None,
        table: Optional[DynamoDBTable] = None,
    ):
        """Initialize a DynamoDB-based DAO

        Args:
            table_name (str):
                Name of the DynamoDB table.
            region_name (Optional[str]):
                AWS region. Defaults to the boto3 session default.
            endpoint_url (Optional[str]):
                Custom endpoint (e.g. LocalStack or DynamoDB Local).
            timeout (Optional[float]):
                Connect/read timeout in seconds for every request.
            table (Optional[DynamoDBTable]):
                Pre-initialized Table resource. If None, a new one is created.
        """
        if table is None:
            # botocore retries are disabled: failures surface once to the caller
            config_kwargs: dict[str, Any] = {'retries': {'total_max_attempts': 1, 'mode': 'standard'}}
            if timeout is not None:
                config_kwargs.update(connect_timeout=float(timeout), read_timeout=float(timeout))
            dynamodb = boto3.resource(
                'dynamodb',
                region_name=region_name,
                endpoint_url=endpoint_url,
                config=Config(**config_kwargs),
            )
            table = dynamodb.Table(table_name)

        self.table = table
        self.table_name = table_name

    @handle_dynamodb_error
    @beartype
    def insert(self, mapping: URLMapping, **kwargs) -> 'ShortURLDynamoDBDAO':
        """Insert a URL mapping, failing if its short ID is already taken

        Raises:
            ShortURLAlreadyExistsError:
                If an item with the same short ID already exists.
            DataStoreError:
                On DynamoDB errors.
        """
        try:
            self.table.put_item(
                Item={
                    'short_id': mapping.short_id,
                    'long_url': mapping.long_url,
                    'created_at': mapping.created_at.isoformat(),
                    'access_count': mapping.access_count,
                },
                ConditionExpression='attribute_not_exists(short_id)',
            )
        except ClientError as e:
            if is_conditional_check_failure(e):
                raise ShortURLAlreadyExistsError(f"Short URL with ID '{mapping.short_id}' already exists.") from e
            raise
        return self

    @handle_dynamodb_error
    @beartype
    def get(self, short_id: str, **kwargs) -> URLMapping:
        """Retrieve a URL mapping with a strongly consistent read

        Raises:
            ShortURLNotFoundError:
                If no item exists for the short ID.
            DataStoreError:
                On DynamoDB errors.
        """
        response = self.table.get_item(Key={'short_id': short_id}, ConsistentRead=True)
        item = response.get('Item')
        if item is None:
            raise ShortURLNotFoundError(f"Short URL with ID '{short_id}' not found.")
        return self._to_mapping(item)

    @handle_dynamodb_error
    @beartype
    def find_and_increment(self, short_id: str, **kwargs) -> URLMapping:
        """Increment the access count and return the updated mapping

        Raises:
            ShortURLNotFoundError:
                If no item exists for the short ID.
            DataStoreError:
                On DynamoDB errors.
        """
        response = self._increment(short_id, return_values='ALL_NEW')
        return self._to_mapping(response['Attributes'])

    @handle_dynamodb_error
    @beartype
    def increment_access_count(self, short_id: str, **kwargs) -> None:
        """Increment the access count without reading the item back

        Raises:
            ShortURLNotFoundError:
                If no item exists for the short ID.
            DataStoreError:
                On DynamoDB errors.
        """
        self._increment(short_id, return_values='NONE')

    @handle_dynamodb_error
    @beartype
    def delete(self, short_id: str, **kwargs) -> int:
        """Delete a URL mapping

        Returns:
            int: 1 if an item was removed, 0 otherwise.

        Raises:
            DataStoreError:
                On DynamoDB errors.
        """
        response = self.table.delete_item(Key={'short_id': short_id}, ReturnValues='ALL_OLD')
        return 1 if response.get('Attributes') else 0

    def _increment(self, short_id: str, return_values: str) -> dict[str, Any]:
        try:
            return self.table.update_item(
                Key={'short_id': short_id},
                UpdateExpression='ADD access_count :one',
                ConditionExpression='attribute_exists(short_id)',
                ExpressionAttributeValues={':one': 1},
                ReturnValues=return_values,
            )
        except ClientError as e:
            if is_conditional_check_failure(e):
                raise ShortURLNotFoundError(f"Short URL with ID '{short_id}' not found.") from e
            raise

    @staticmethod
    def _to_mapping(item: dict[str, Any]) -> URLMapping:
        # boto3 deserializes DynamoDB numbers as decimal.Decimal
        return URLMapping(
            short_id=item['short_id'],
            long_url=item['long_url'],
            created_at=datetime.fromisoformat(item['created_at']),
            access_count=int(item.get('access_count', 0)),
        )
