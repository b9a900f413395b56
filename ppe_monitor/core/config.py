# Standard library imports
import os
from typing import Final, Optional, Tuple


DEFAULT_DETECTION_PROMPT = (
    "Analiza esta imagen y devuelve SOLO JSON con esta forma exacta: "
    '{"persona_detectada": true/false, "epp_detectado": ["casco","chaleco","botas",'
    '"orejeras","mascarilla","gafas","guantes"], "confianza": 0.0-1.0, '
    '"descripcion": "breve descripción"}. Devuelve solo EPP claramente visibles. '
    "Sin texto adicional."
)


def _split_csv(value: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


class Settings:
    """
    Application settings loaded from environment variables.

    This class centralizes all configuration settings for the application.
    All settings are loaded from environment variables with sensible defaults.
    """

    def __init__(self) -> None:
        # Database Configuration
        self.mongo_uri: Final[str] = os.getenv("MONGO_URI", "mongodb://localhost:27017")
        self.mongo_database_name: Final[str] = os.getenv("MONGO_DB_NAME", "ppe_monitor")
        self.captures_collection_name: Final[str] = os.getenv("CAPTURES_COLLECTION", "captured_images")
        self.images_bucket_name: Final[str] = os.getenv("IMAGES_BUCKET", "epp_images")

        # Public address used to build object URLs
        self.public_base_url: Final[str] = os.getenv("PUBLIC_BASE_URL", "http://localhost:8000").rstrip("/")

        # JWT Configuration
        self.jwt_secret_key: Final[str] = os.getenv("JWT_SECRET_KEY", "change_this_secret_in_production")
        self.jwt_algorithm: Final[str] = os.getenv("JWT_ALGORITHM", "HS256")
        self.access_token_expire_minutes: Final[int] = int(
            os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60")
        )
        # bcrypt hash of the gallery password; empty disables gallery login
        self.gallery_password_hash: Final[str] = os.getenv("GALLERY_PASSWORD_HASH", "")

        # Vision gateway Configuration
        self.vision_api_url: Final[str] = os.getenv(
            "VISION_API_URL",
            "https://ai.gateway.lovable.dev/v1/chat/completions"
        )
        self.vision_api_key: Final[str] = os.getenv("VISION_API_KEY", "")
        self.vision_model: Final[str] = os.getenv("VISION_MODEL", "google/gemini-2.5-flash")
        self.vision_timeout_seconds: Final[float] = float(os.getenv("VISION_TIMEOUT_SECONDS", "30"))
        self.detection_prompt: Final[str] = os.getenv("DETECTION_PROMPT", DEFAULT_DETECTION_PROMPT)

        # Detection scoring
        self.required_equipment: Final[Tuple[str, ...]] = _split_csv(
            os.getenv("REQUIRED_EQUIPMENT", "helmet,vest,goggles,gloves,mask,boots")
        )
        self.confidence_floor: Final[float] = float(os.getenv("CONFIDENCE_FLOOR", "0.3"))

        # Capture loop and persistence
        self.analysis_interval_seconds: Final[float] = float(os.getenv("ANALYSIS_INTERVAL_SECONDS", "3"))
        self.camera_source: Final[str] = os.getenv("CAMERA_SOURCE", "")
        self.max_upload_mb: Final[int] = int(os.getenv("MAX_UPLOAD_MB", "10"))
        self.local_store_path: Final[str] = os.getenv("LOCAL_STORE_PATH", ".ppe_monitor/local_store.json")
        self.persist_queue_size: Final[int] = int(os.getenv("PERSIST_QUEUE_SIZE", "100"))

        # HTTP
        self.http_max_connections: Final[int] = int(os.getenv("HTTP_MAX_CONNECTIONS", "20"))
        self.http_max_keepalive: Final[int] = int(os.getenv("HTTP_MAX_KEEPALIVE", "10"))
        self.cors_origins: Final[Tuple[str, ...]] = _split_csv(
            os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000,http://localhost:8080")
        )

        # Logging
        self.log_level: Final[str] = os.getenv("LOG_LEVEL", "INFO")


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
