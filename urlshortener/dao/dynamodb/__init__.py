from urlshortener.dao.dynamodb.short_url_dynamodb_dao import ShortURLDynamoDBDAO


__all__ = [
    'ShortURLDynamoDBDAO',
]
