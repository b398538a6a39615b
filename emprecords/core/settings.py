from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    URL_DATABASE_SQL: str = "sqlite:///./record_maintenance.db"
    URL_DATABASE_REDIS: str = "redis://localhost:6379/0"
    DB_OPERATION_TIMEOUT: int = 15
    KEY_SECRET: str
    ALGORITHM: str = "HS256"
    BCRYPT_ROUNDS: int = 10
    RESET_TOKEN_DELIVERY: str = "response"  # "response" | "sms"
    BREVO_API_KEY: str = ""
    BREVO_SMS_SENDER: str = "EmpRecords"
    DISCORD_WEBHOOK_URL: str = ""
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = ""  # vacío = logs/ en la raíz del proyecto
    CORS_ORIGINS: list[str] = ["*"]


    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
