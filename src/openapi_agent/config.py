from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_OUTPUT = "openapi.yaml"
DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_TARGET = "."

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    # OpenAI 호환 엔드포인트(Azure /openai/v1, 로컬 게이트웨이 등)
    openai_base_url: str | None = Field(default=None, alias="OPENAI_BASE_URL")
    openai_model: str = Field(default=DEFAULT_MODEL, alias="OPENAI_MODEL")


def load_settings() -> Settings:
    """실행 시작 시 한 번만 읽는다. 이후에는 값으로 전달."""
    return Settings()
