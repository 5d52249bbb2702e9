from urlshortener.dao.cache.cache_key_schema import CacheKeySchema
from urlshortener.dao.cache.short_url_cache_dao import ShortURLCacheDAO

__all__ = [
    'CacheKeySchema',
    'ShortURLCacheDAO',
]
