from pydantic_settings import BaseSettings

from .matcher import MatcherConfig


class Settings(BaseSettings):
    # Server
    host: str = "127.0.0.1"
    port: int = 8001
    reload: bool = False

    database_url: str = "sqlite:///./boardmatch.db"

    # Matching policy
    match_length_tolerance_inches: float = 1.0
    match_require_brand_match: bool = False
    match_model_similarity_threshold: float = 0.8
    match_min_confidence_to_auto_link: float = 0.7

    # Duplicate scan
    duplicate_threshold: float = 0.85      # minimum score reported as a candidate
    duplicate_cross_source_only: bool = True

    @property
    def matcher_config(self) -> MatcherConfig:
        return MatcherConfig(
            length_tolerance_inches=self.match_length_tolerance_inches,
            require_brand_match=self.match_require_brand_match,
            model_similarity_threshold=self.match_model_similarity_threshold,
            min_confidence_to_auto_link=self.match_min_confidence_to_auto_link,
        )

    # Auth
    api_key: str = ""  # Set to enable API key auth; empty = no auth

    # Log
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
