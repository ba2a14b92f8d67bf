from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Runtime ---
    ENV: str = "dev"  # dev|prod
    LOG_LEVEL: str = "INFO"

    # --- Rent cap (AB 1482): 5% + CPI ---
    # Latest known annual CPI figure; update when new data is published.
    RENT_CAP_INFLATION_RATE: float = 3.4
    RENT_CAP_INFLATION_YEAR: int = 2024
    RENT_CAP_INFLATION_SOURCE: str = "CPI-U annual average"

    # --- Evaluation clock ---
    # Pin this to get reproducible scores; None => calendar year at call time.
    EVALUATION_YEAR: int | None = None


settings = Settings()
