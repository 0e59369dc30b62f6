import os

class BaseConfig:
    JSON_SORT_KEYS = False
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ALLOWED_ORIGINS = os.getenv("CORS_ALLOWED_ORIGINS", "*")
    RATELIMIT_STORAGE_URL = os.getenv("RATELIMIT_STORAGE_URL", "memory://")
    RATELIMIT_DEFAULT = os.getenv("RATELIMIT_DEFAULT", "200 per hour")
    AUTH_LIMIT_PER_IP = os.getenv("AUTH_LIMIT_PER_IP", "10 per 30 minutes")
    CHECKOUT_LIMIT_PER_IP = os.getenv("CHECKOUT_LIMIT_PER_IP", "20 per hour")
    JWT_SECRET = os.getenv("JWT_SECRET", "dev-insecure-jwt-key")
    ACCESS_TOKEN_LIFETIME_MIN = int(os.getenv("ACCESS_TOKEN_LIFETIME_MIN", 15))
    REFRESH_TOKEN_LIFETIME_DAYS = int(os.getenv("REFRESH_TOKEN_LIFETIME_DAYS", 30))

    # Customer device state
    KV_BACKEND = os.getenv("KV_BACKEND", "sql")  # sql, memory, redis
    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    KV_REDIS_PREFIX = os.getenv("KV_REDIS_PREFIX", "kv")
    DELIVERY_FEE = os.getenv("DELIVERY_FEE", "50.00")
    ORDER_HISTORY_LIMIT = int(os.getenv("ORDER_HISTORY_LIMIT", 100))
    SEARCH_HISTORY_LIMIT = int(os.getenv("SEARCH_HISTORY_LIMIT", 10))

    # OAuth profile lookup
    GOOGLE_USERINFO_URL = os.getenv("GOOGLE_USERINFO_URL", "https://www.googleapis.com/oauth2/v3/userinfo")
    FACEBOOK_GRAPH_URL = os.getenv("FACEBOOK_GRAPH_URL", "https://graph.facebook.com/me")
    OAUTH_HTTP_TIMEOUT = int(os.getenv("OAUTH_HTTP_TIMEOUT", 5))

    OTEL_SERVICE_NAME = os.getenv("OTEL_SERVICE_NAME", "foodapp-backend")
    OTEL_EXPORTER_OTLP_ENDPOINT = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318/v1/traces")

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-insecure-key")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///dev.db")

class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-key"
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    KV_BACKEND = os.getenv("KV_BACKEND", "memory")
    RATELIMIT_ENABLED = os.getenv("RATELIMIT_ENABLED", "1") == "1"

class ProductionConfig(BaseConfig):
    DEBUG = False
    TESTING = False
    SECRET_KEY = os.getenv("SECRET_KEY")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL")
    JWT_SECRET = os.getenv("JWT_SECRET")

    @staticmethod
    def validate():
        missing = []
        for name in ("SECRET_KEY", "DATABASE_URL", "JWT_SECRET"):
            if not os.getenv(name):
                missing.append(name)
        if missing:
            raise RuntimeError(
                f"Missing required env vars in production: {', '.join(missing)}"
            )

def get_config_class():
    env = os.getenv("APP_ENV", "development").lower()
    if env == "production":
        ProductionConfig.validate()
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
