"""선택적 Redis 응답 캐시.

앱 시작 시 ResponseCache.connect() 로 한 번 생성해 app.extensions 에 등록하고,
종료 시 close() 한다. REDIS_URL 이 없거나 연결에 실패하면 모든 연산이
no-op 이 되어 요청은 캐시 없이 그대로 처리된다.
"""
import json
import logging
from functools import wraps

import redis
from flask import current_app, jsonify, make_response, request

logger = logging.getLogger(__name__)

KEY_PREFIX = "cache:"
EXTENSION_KEY = "response_cache"


class ResponseCache:
    def __init__(self, client=None, default_ttl=300):
        self.client = client
        self.default_ttl = default_ttl

    @classmethod
    def connect(cls, url, default_ttl=300):
        if not url:
            logger.info("REDIS_URL not set; response cache disabled")
            return cls(None, default_ttl)
        try:
            client = redis.Redis.from_url(url, decode_responses=True, socket_connect_timeout=2)
            client.ping()
        except redis.exceptions.RedisError as exc:
            logger.warning("Redis unavailable (%s); response cache disabled", exc)
            return cls(None, default_ttl)
        logger.info("Redis response cache connected")
        return cls(client, default_ttl)

    @property
    def enabled(self):
        return self.client is not None

    def get(self, key):
        if not self.enabled:
            return None
        try:
            raw = self.client.get(KEY_PREFIX + key)
            return json.loads(raw) if raw else None
        except (redis.exceptions.RedisError, ValueError) as exc:
            logger.error("缓存读取失败 %s: %s", key, exc)
            return None

    def set(self, key, value, ttl=None):
        if not self.enabled:
            return False
        try:
            self.client.setex(KEY_PREFIX + key, ttl or self.default_ttl,
                              json.dumps(value, ensure_ascii=False))
            return True
        except (redis.exceptions.RedisError, TypeError, ValueError) as exc:
            logger.error("缓存设置失败 %s: %s", key, exc)
            return False

    def clear(self, pattern="*"):
        """패턴에 맞는 캐시 키 삭제, 삭제 건수 반환"""
        if not self.enabled:
            return 0
        try:
            keys = self.client.keys(KEY_PREFIX + pattern)
            if not keys:
                return 0
            return self.client.delete(*keys)
        except redis.exceptions.RedisError as exc:
            logger.error("清除缓存失败 %s: %s", pattern, exc)
            return 0

    def close(self):
        if self.client is None:
            return
        try:
            self.client.close()
        except redis.exceptions.RedisError as exc:
            logger.warning("Redis close error: %s", exc)
        self.client = None


def get_cache():
    return current_app.extensions[EXTENSION_KEY]


def cached(ttl=None):
    """GET JSON 뷰 응답 캐시. success 가 False 가 아닌 200 응답만 저장한다."""

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            cache = get_cache()
            key = request.full_path.rstrip("?")
            hit = cache.get(key)
            if hit is not None:
                return jsonify(hit)

            response = make_response(f(*args, **kwargs))
            if response.status_code == 200 and response.is_json:
                payload = response.get_json()
                if isinstance(payload, dict) and payload.get("success") is not False:
                    cache.set(key, payload, ttl)
            return response

        return decorated_function

    return decorator
