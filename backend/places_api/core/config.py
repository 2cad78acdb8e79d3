from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # MongoDB Configuration (transactions need a replica set)
    MONGO_URI: str = "mongodb://localhost:27017/?replicaSet=rs0"
    MONGO_DB_NAME: str = "places_db"
    
    LOGGER: int = 20
    
    # JWT Configuration
    JWT_KEY: str = "supersecret_dont_share_places_signing_key"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60
    
    # Image Uploads
    UPLOAD_DIR: str = "uploads/images"
    MAX_UPLOAD_BYTES: int = 500000
    
    # Geocoder Selection
    GEOCODER: str = "static"  # Options: static, nominatim
    STATIC_LAT: float = 35.6365636
    STATIC_LNG: float = 139.7401022
    NOMINATIM_URL: str = "https://nominatim.openstreetmap.org/search"
    
    CORS_ORIGINS: list[str] = ["*"]

    model_config = SettingsConfigDict(
        # Look for .env in the current folder OR the parent folder
        env_file=(".env", "../.env"), 
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
