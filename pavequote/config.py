from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./pavequote.db"
    COMPANY_NAME: str = "PaveQuote"

    # Job scoping
    ASPHALT_DENSITY: float = 2.4
    DEFAULT_WASTE_FACTOR_PCT: float = 5.0
    MAX_WASTE_FACTOR_PCT: float = 20.0  # form-level limit; the calculator itself accepts up to 100
    QUOTE_VALID_DAYS: int = 30

    # Tenant registration
    TRIAL_DAYS: int = 14

    class Config:
        env_file = ".env"


settings = Settings()
