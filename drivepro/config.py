from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "DrivePro Backend"
    HOST: str = "0.0.0.0"
    PORT: int = 4000
    LOG_LEVEL: str = "INFO"
    SECRET_KEY: str = "dev-secret-drivepro"
    JWT_ALGORITHM: str = "HS256"
    # False issues the legacy unsigned tokens (alg "none", empty signature)
    TOKEN_SIGNING_ENABLED: bool = True
    CORS_ORIGINS: list[str] = ["*"]
    SEED_DEMO_DATA: bool = True
    DEFAULT_USER_PASSWORD: str = "password123"
    LOGIN_RATE_LIMIT: str = "10/minute"
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    STATIC_DIR: str = "public"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
