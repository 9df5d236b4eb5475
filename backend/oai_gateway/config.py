import os
from functools import lru_cache
from typing import List
from pydantic import BaseModel

DEFAULT_API_HOST = "https://api.openai.com"


class EnvDefaults(BaseModel):
    """
    Server-side fallbacks for the caller's Access fields, plus transport settings.
    """
    api_key: str = ""
    organization_id: str = ""
    api_host: str = ""
    proxy_auth_key: str = ""
    timeout: float = 60.0

    @classmethod
    def from_env(cls) -> "EnvDefaults":
        return cls(
            api_key=os.getenv("OPENAI_API_KEY", "").strip(),
            organization_id=os.getenv("OPENAI_API_ORG_ID", "").strip(),
            api_host=os.getenv("OPENAI_API_HOST", "").strip(),
            proxy_auth_key=os.getenv("HELICONE_API_KEY", "").strip(),
            timeout=float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "60").strip() or 60),
        )


@lru_cache
def get_env_defaults() -> EnvDefaults:
    return EnvDefaults.from_env()


def cors_allow_origins() -> List[str]:
    raw = os.getenv("CORS_ALLOW_ORIGINS", "")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["http://localhost:5173"]
