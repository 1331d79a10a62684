from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "genbackend"
    api_host: str = "0.0.0.0"
    api_port: int = 4000

    openai_api_key: str | None = None
    llm_api_base: str = "https://api.openai.com/v1"
    llm_model: str = "gpt-4o"
    llm_temperature: float = 0.2
    llm_max_tokens: int = 2500
    llm_timeout: float = 120.0

    output_dir: str = "./generated"
    templates_dir: str = "./templates"
    state_file: str | None = "./generated/backend.json"
    max_generations: int = 1000

settings = Settings()
