from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./textstore.db"
    database_echo: bool = False
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # Клиентская часть
    api_url: str = "http://localhost:8000"
    session_file: str = "~/.textstore/session.json"
    auth_path: str = "/auth"

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_prefix": "TEXTSTORE_", "extra": "ignore"}

settings = Settings()
