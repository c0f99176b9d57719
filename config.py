import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./entities.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", ["*"])
    CORS_ALLOW_METHODS = data.get(
        "CORS_ALLOW_METHODS", ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    CORS_ALLOW_HEADERS = data.get("CORS_ALLOW_HEADERS", ["Content-Type", "Authorization"])
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", 1))
    SESSION_TTL_DAYS = int(data.get("SESSION_TTL_DAYS", 7))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    PASSWORD_MIN_LENGTH = int(data.get("PASSWORD_MIN_LENGTH", 8))
    LIST_DEFAULT_LIMIT = int(data.get("LIST_DEFAULT_LIMIT", 100))
    LIST_MAX_LIMIT = int(data.get("LIST_MAX_LIMIT", 1000))
    LIST_DEFAULT_SORT = data.get("LIST_DEFAULT_SORT", "-created_at")
    ENFORCE_REGISTERED_ENTITIES = bool(data.get("ENFORCE_REGISTERED_ENTITIES", 0))
    JOIN_CODE_LENGTH = int(data.get("JOIN_CODE_LENGTH", 6))
    ADMIN_USERNAME = data.get("ADMIN_USERNAME", "admin")
    ADMIN_EMAIL = data.get("ADMIN_EMAIL", "admin@example.com")
    ADMIN_PASSWORD = data.get("ADMIN_PASSWORD", "12345678")
