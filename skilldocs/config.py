from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Corpus
    skills_dirs: list[str] = ["./skills"]

    # Lint
    strict: bool = False  # Warnings fail the run too
    links_enabled: bool = True
    check_all_links: bool = False  # Default: only links under "References"
    link_timeout_seconds: float = 10.0
    link_concurrency: int = 8
    user_agent: str = "skilldocs-linkcheck/0.1"

    # Output
    output_dir: str = "./output"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    model_config = SettingsConfigDict(
        env_prefix="SKILLDOCS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
