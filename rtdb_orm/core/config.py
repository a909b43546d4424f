from pydantic_settings import BaseSettings, SettingsConfigDict
from rtdb_orm.core.write_mode import WriteMode

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="RTDB_", extra="ignore")

    database_url: str | None = None
    request_timeout: float = 60.0
    write_mode: WriteMode = WriteMode.CONFIRM

    id_pool_path: str = "uuid"

    log_level: str = "INFO"

settings = Settings()
