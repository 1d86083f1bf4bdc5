# assignment_eval/core/config.py
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "Assignment Evaluation Service"

    # Database
    # Use PostgreSQL for production
    DATABASE_URL: str = "sqlite:///./assignment_eval.db"

    # Redis (for evaluation queue)
    REDIS_URL: str = "redis://localhost:6379/0"
    EVALUATION_QUEUE_NAME: str = "evaluation"
    EVALUATION_JOB_TIMEOUT: int = 300

    # Gemini evaluator, falls back to the rule-based scorer when no key is set
    GEMINI_API_KEY: str | None = None
    GEMINI_MODEL_NAME: str = "gemini-2.5-flash"
    GEMINI_TIMEOUT_SECONDS: float = 60.0

    # Recovery of submissions left pending by a crashed worker
    PENDING_REQUEUE_AFTER_SECONDS: int = 600
    REQUEUE_PENDING_ON_STARTUP: bool = True

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
