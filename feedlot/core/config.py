from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    PROJECT_NAME: str = "API feedlot"
    DATABASE_URL: str = "sqlite:///./feedlot.db"

    # Logs
    LOG_DIR: str = "/logs"
    LOG_JSON: bool = False
    LOG_TO_FILE: bool = True

    # Días de cebo estimados cuando el corral no tiene ningún plan de alimentación
    DEFAULT_DAYS_ON_FEED: int = 180

    # Proyección de peso: ventanas sintéticas por horario
    PROJECTION_WINDOW_DAYS: int = 30
    DEFAULT_AVG_DAILY_GAIN: float = 2.5  # lbs/día

    UPCOMING_CHANGES_HORIZON_DAYS: int = 5
    VARIANCE_TOLERANCE_PCT: float = 5.0

    # Carga los datos de ejemplo al arrancar
    SEED_SAMPLE_DATA: bool = False


settings = Settings()
