"""
Per-user response caching for read endpoints.

Cached GET responses are keyed by resource, user and full URL. Every key
embeds a per-user, per-resource version number; bumping the version
invalidates all of that user's entries for the resource at once, which
works on any cache backend (no key scanning needed).
"""

from django.conf import settings
from django.core.cache import cache
from rest_framework.response import Response
import hashlib
import logging

logger = logging.getLogger(__name__)

CACHE_PREFIX = 'respcache'


def _version_key(resource, user_id):
    return f"{CACHE_PREFIX}:{resource}:{user_id}:version"


def get_cache_version(resource, user_id):
    """Current version number for a user's resource (1 when never bumped)."""
    version = cache.get(_version_key(resource, user_id))
    if version is None:
        cache.add(_version_key(resource, user_id), 1, None)
        return 1
    return version


def make_response_cache_key(resource, user_id, full_path):
    """Generate the cache key for one URL of one user's resource."""
    version = get_cache_version(resource, user_id)
    path_hash = hashlib.md5(full_path.encode()).hexdigest()
    return f"{CACHE_PREFIX}:{resource}:{user_id}:v{version}:{path_hash}"


def invalidate_user_cache(user_id, *resources):
    """Drop every cached response of `user_id` for the given resources."""
    for resource in resources:
        key = _version_key(resource, user_id)
        try:
            cache.incr(key)
        except ValueError:
            # Key expired or was never set
            cache.set(key, 2, None)
        logger.debug("Invalidated %s cache for user %s", resource, user_id)


class CachedResponseMixin:
    """
    ViewSet mixin caching successful `list` and `retrieve` responses.

    Set `cache_resource` to the resource name. Successful non-GET requests
    invalidate `cache_resource` plus any names in `cache_invalidates` for
    the requesting user only.
    """

    cache_resource = None
    cache_invalidates = ()
    cached_actions = ('list', 'retrieve')

    def list(self, request, *args, **kwargs):
        handler = super().list
        return self.cached_response(request, lambda: handler(request, *args, **kwargs))

    def retrieve(self, request, *args, **kwargs):
        handler = super().retrieve
        return self.cached_response(request, lambda: handler(request, *args, **kwargs))

    def cached_response(self, request, build_response):
        if self.action not in self.cached_actions or not self.cache_resource:
            return build_response()

        cache_key = make_response_cache_key(
            self.cache_resource, request.user.pk, request.get_full_path()
        )
        cached = cache.get(cache_key)
        if cached is not None:
            logger.debug("Cache HIT for %s: %s", self.cache_resource, cache_key)
            return Response(cached)

        logger.debug("Cache MISS for %s: %s", self.cache_resource, cache_key)
        response = build_response()
        if response.status_code == 200:
            cache.set(cache_key, response.data, settings.RESPONSE_CACHE_TTL)
        return response

    def finalize_response(self, request, response, *args, **kwargs):
        response = super().finalize_response(request, response, *args, **kwargs)
        is_mutation = request.method not in ('GET', 'HEAD', 'OPTIONS')
        if (
            is_mutation
            and 200 <= response.status_code < 300
            and self.cache_resource
            and request.user.is_authenticated
        ):
            invalidate_user_cache(request.user.pk, self.cache_resource, *self.cache_invalidates)
        return response
