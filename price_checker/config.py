from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    sites_file: str = "sites.json"
    newbook_api_url: str = "https://api.newbook.cloud/rest/"
    newbook_region: str = "eu"
    request_timeout: float = 30.0
    rate_limit: int = 15
    rate_window: float = 60.0
    log_level: str = "INFO"
