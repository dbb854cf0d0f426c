import sys

from pydantic_settings import BaseSettings

_ENV_FILE = None if "pytest" in sys.modules else ".env"


class Settings(BaseSettings):
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    BAMBOO_API_KEY: str = ""
    BAMBOO_COMPANY_DOMAIN: str = ""
    BAMBOO_API_BASE_URL: str = "https://api.bamboohr.com/api/gateway.php"
    BAMBOO_REQUEST_TIMEOUT: int = 30

    OUTPUT_DIR: str = "./finalData"

    model_config = {
        "env_file": _ENV_FILE,
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    def missing_credentials(self) -> list[str]:
        missing: list[str] = []
        if not self.BAMBOO_API_KEY:
            missing.append("BAMBOO_API_KEY")
        if not self.BAMBOO_COMPANY_DOMAIN:
            missing.append("BAMBOO_COMPANY_DOMAIN")
        return missing


settings = Settings()
