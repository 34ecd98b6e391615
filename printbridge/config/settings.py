from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    upload_dir: str = "uploads"

    pdf_engine: str = "pdfplumber"
    image_page_size: str = "A4"

    soffice_path: str = ""
    conversion_timeout_seconds: int = 120
    conversion_output_wait_seconds: float = 2.0

    print_backend: str = "auto"
    sumatra_path: str = "SumatraPDF.exe"
    print_timeout_seconds: int = 120

    spool_poll_interval_ms: int = 1000
    spool_query_command: str = ""
    spool_query_timeout_seconds: int = 10
    spool_event_queue_size: int = 1000
    spool_event_put_timeout_seconds: float = 1.0

    webhook_timeout_seconds: int = 10
    webhook_max_workers: int = 4

    batch_max_workers: int = 4
