from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATA_ROOT: str = "./data"
    OUTPUT_ROOT: str = "./outputs"
    SAINT_COLLECTION: str = "saint"
    EVENT_COLLECTION: str = "events"
    DISPLAY_TIMEZONE: str = "UTC"
    DEFAULT_MAX_DISTANCE_KM: float = float("inf")
    EVENT_DURATION_MINUTES: int = 60

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
