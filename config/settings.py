"""
Application settings using Pydantic for validation
"""
from typing import List, Optional, Dict
from pydantic_settings import BaseSettings
from functools import lru_cache
from pathlib import Path

# Get the base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings with environment variable validation"""

    # Application
    app_env: str = "development"
    app_name: str = "Domain Finder"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    log_to_file: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # Supabase
    supabase_url: str
    supabase_key: Optional[str] = None
    supabase_service_key: str

    # Domain Checking APIs (authoritative lookup, optional)
    # API 1
    domain_api_1_provider: Optional[str] = None
    domain_api_1_key: Optional[str] = None
    domain_api_1_url: Optional[str] = None

    # API 2
    domain_api_2_provider: Optional[str] = None
    domain_api_2_key: Optional[str] = None
    domain_api_2_url: Optional[str] = None

    # Registrar affiliate identifiers (absent = untracked links)
    godaddy_affiliate_id: Optional[str] = None
    godaddy_plid: Optional[str] = None
    namecheap_affiliate_id: Optional[str] = None
    hover_affiliate_id: Optional[str] = None
    porkbun_affiliate_id: Optional[str] = None
    squarespace_affiliate_id: Optional[str] = None

    # Candidate selection
    default_target_count: int = 60
    available_only_target_count: int = 100
    max_target_count: int = 200
    max_pairs_per_request: int = 400

    # Availability resolution
    availability_batch_size: int = 3
    availability_batch_delay: float = 0.5
    availability_timeout: float = 5.0
    enable_presence_probe: bool = True
    heuristic_seed: int = 0

    # Rate Limiting (inbound)
    rate_limit_requests_per_minute: int = 60
    rate_limit_generations_per_minute: int = 10

    # Frontend
    frontend_url: str = "http://localhost:5173"
    allowed_origins: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Middleware feature flags
    enable_rate_limiting: bool = False  # Disabled by default in dev
    enable_request_logging: bool = True

    @property
    def log_dir(self) -> Path:
        return BASE_DIR / "logs"

    class Config:
        env_file = ".env"
        case_sensitive = False

    def is_development(self) -> bool:
        return self.app_env == "development"

    def is_production(self) -> bool:
        return self.app_env == "production"

    def get_domain_apis(self) -> List[Dict]:
        """Get all configured domain checking APIs"""
        apis = []
        for i in range(1, 3):
            provider = getattr(self, f"domain_api_{i}_provider", None)
            key = getattr(self, f"domain_api_{i}_key", None)
            if provider and key:
                apis.append({
                    "provider": provider,
                    "key": key,
                    "url": getattr(self, f"domain_api_{i}_url")
                })
        return apis

    def get_affiliate_ids(self) -> Dict[str, Optional[str]]:
        """Get affiliate identifiers keyed by registrar name"""
        return {
            "GoDaddy": self.godaddy_affiliate_id,
            "Namecheap": self.namecheap_affiliate_id,
            "Hover": self.hover_affiliate_id,
            "Porkbun": self.porkbun_affiliate_id,
            "Squarespace": self.squarespace_affiliate_id
        }

    def has_domain_api(self) -> bool:
        """Check if an authoritative domain API is configured"""
        return bool(self.get_domain_apis())

    def target_count_for(self, available_only: bool) -> int:
        """Default result budget for a generation call"""
        if available_only:
            return self.available_only_target_count
        return self.default_target_count


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Create a global settings instance
settings = get_settings()
