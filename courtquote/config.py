from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./quotations.db"
    DB_TIMEOUT_SECONDS: float = 10.0
    LOG_LEVEL: str = "INFO"

    # Pricing / numbering
    PRICING_CATEGORY: str = "default"
    QUOTATION_PREFIX: str = "NXR"
    NUMBERING_MAX_ATTEMPTS: int = 5

    # Document identity
    COMPANY_NAME: str = "NEXORA GROUP"
    COMPANY_TAGLINE: str = "Sports Infrastructure Solutions"
    COMPANY_ADDRESS: str = "Jalahalli West, Bangalore-560015"
    COMPANY_PHONE: str = "+91 8431322728"
    COMPANY_EMAIL: str = "info.nexoragroup@gmail.com"
    COMPANY_WEBSITE: str = "www.nexoragroup.com"
    GST_RATE: float = 0.18
    QUOTE_VALID_DAYS: int = 10

    class Config:
        env_file = ".env"


settings = Settings()
