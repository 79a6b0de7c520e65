from pydantic_settings import BaseSettings
from pydantic import Field


class AuthSettings(BaseSettings):
    """
    Bearer token verification settings.
    Tokens are issued elsewhere; this service only verifies them.
    """

    jwt_secret: str = Field(default="change-me-in-production", alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }
