from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_INCLUDE_PATTERNS: list[str] = ["*.js", "*.ts", "*.jsx", "*.tsx", "*.vue"]
DEFAULT_EXCLUDE_PATTERNS: list[str] = ["node_modules/", "dist/", "build/", ".git/"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # GitHub - Personal Access Token used for every API call
    # Empty string = the service starts, but every tool call will fail with 401
    github_token: str = ""
    github_api_url: str = "https://api.github.com"

    # Application
    debug: bool = False
    cors_origins: list[str] = ["*"]

    # Content fetch - files above this size (bytes) are skipped
    max_file_size: int = 100_000

    # Repository scan - files fetched concurrently per batch
    scan_batch_size: int = 10

    # Organization search
    # Smaller batches and a delay between them to stay under GitHub's secondary rate limits
    org_search_batch_size: int = 5
    org_search_max_files: int = 50
    org_search_batch_delay_seconds: float = 0.5
    # Stop scanning a repository after the first batch that yields a match
    org_search_stop_on_first_match: bool = True
    default_max_repos: int = 50

    # File patterns applied when a request omits them
    default_include_patterns: list[str] = DEFAULT_INCLUDE_PATTERNS
    default_exclude_patterns: list[str] = DEFAULT_EXCLUDE_PATTERNS

    @property
    def github_enabled(self) -> bool:
        """Check if a GitHub token is configured."""
        return bool(self.github_token)


settings = Settings()
