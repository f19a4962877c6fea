from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    APP_NAME: str = "Team Drive"
    APP_ENV: Literal["dev", "prod"] = "dev"
    APP_DEBUG: bool = False

    model_config = SettingsConfigDict(env_file=".env", env_prefix="APP_")


class CORSSettings(BaseSettings):
    CORS_ORIGINS: list[str] = ["http://127.0.0.1:5173", "http://localhost:5173"]
    CORS_CREDENTIALS: bool = True
    CORS_METHODS: list[str] = ["*"]
    CORS_HEADERS: list[str] = ["*"]
    CORS_EXPOSE_HEADERS: list[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", env_prefix="CORS_")


class MongoSettings(BaseSettings):
    MONGO_HOST: str = ""
    MONGO_PORT: int = 27017
    MONGO_DB: str = "teamdrive"
    MONGO_USER: str = ""
    MONGO_PWD: str = ""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="MONGO_")

    @property
    def MONGO_URL(self) -> str:
        host = self.MONGO_HOST or "localhost"
        port = self.MONGO_PORT or 27017
        if self.MONGO_USER and self.MONGO_PWD:
            return f"mongodb://{self.MONGO_USER}:{self.MONGO_PWD}@{host}:{port}"
        return f"mongodb://{host}:{port}"


class SentrySettings(BaseSettings):
    SENTRY_DSN: str | None = None
    SENTRY_TRACES_SAMPLE_RATE: float = 0.2
    SENTRY_PROFILES_SAMPLE_RATE: float = 0.0
    SENTRY_SEND_DEFAULT_PII: bool = False

    model_config = SettingsConfigDict(env_file=".env", env_prefix="SENTRY_")


class AuthSettings(BaseSettings):
    AUTH_ISSUER: str = ""
    AUTH_JWKS_URL: str = ""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="AUTH_")


class MinioSettings(BaseSettings):
    MINIO_URL: str = "http://localhost:9000"
    MINIO_ACCESS_KEY: str = ""
    MINIO_SECRET_KEY: str = ""

    @property
    def MINIO_SSL(self) -> bool:
        return self.MINIO_URL.startswith("https://")

    @property
    def MINIO_ENDPOINT(self) -> str:
        """Host[:port] without scheme, as the MinIO client and public URLs expect"""
        return self.MINIO_URL.replace("http://", "").replace("https://", "").rstrip("/")

    model_config = SettingsConfigDict(env_file=".env", env_prefix="MINIO_")


class StorageSettings(BaseSettings):
    STORAGE_DOCUMENTS_BUCKET: str = "documents"
    STORAGE_IMAGES_BUCKET: str = "images"
    STORAGE_PRESIGNED_URL_TTL: int = 60 * 60 * 24
    STORAGE_MAX_UPLOAD_SIZE: int = 2 << 30

    model_config = SettingsConfigDict(env_file=".env", env_prefix="STORAGE_")


class TimeoutSettings(BaseSettings):
    """Per-call deadlines in seconds"""
    TIMEOUT_METADATA: float = 5
    TIMEOUT_METADATA_LOOKUP: float = 10
    TIMEOUT_METADATA_DELETE: float = 50
    TIMEOUT_PRESIGN: float = 10
    TIMEOUT_TRANSFER: float = 70
    TIMEOUT_OBJECT_DELETE: float = 50

    model_config = SettingsConfigDict(env_file=".env", env_prefix="TIMEOUT_")


class Settings(AppSettings, CORSSettings, MongoSettings, SentrySettings, AuthSettings, MinioSettings, StorageSettings, TimeoutSettings):
    RELEASE: str | None = None
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    model_config = SettingsConfigDict(env_file=".env", env_prefix="")


settings = Settings()
