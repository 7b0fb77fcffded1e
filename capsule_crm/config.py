from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    # Account
    capsule_account: str = ""
    capsule_api_token: str = ""

    # Overrides https://{account}.capsulecrm.com, e.g. for a proxy
    capsule_base_url: Optional[str] = None

    # HTTP
    request_timeout: float = 30.0
    user_agent: str = "capsule-crm-python/0.1.0"

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def base_url(self) -> str:
        if self.capsule_base_url:
            return self.capsule_base_url.rstrip("/")
        if not self.capsule_account:
            raise ValueError("CAPSULE_ACCOUNT not configured")
        return f"https://{self.capsule_account}.capsulecrm.com"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
