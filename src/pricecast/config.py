from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PC_",
    )

    # Monte Carlo simulation
    simulation_default_count: int = 10000
    simulation_batch_size: int = 100  # paths per progress/cancellation checkpoint
    simulation_seed: int | None = None  # None = fresh entropy per run

    # Parallelization
    simulation_max_workers: int = 4

    # API Server
    api_title: str = "Pricecast API"
    api_version: str = "0.1.0"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Logging
    log_dir: str = "logs"
    log_file: str = "pricecast.log"
