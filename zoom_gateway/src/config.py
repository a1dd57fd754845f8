import os
from dotenv import load_dotenv


class Config:
    load_dotenv()

    DEBUG = os.getenv("DEBUG", "false").lower() == "true"
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "8080"))
    # Segundos que el apagado espera a los requests en curso
    SHUTDOWN_DRAIN_TIMEOUT = float(os.getenv("SHUTDOWN_DRAIN_TIMEOUT", "30"))

    # Store compartido del token (un solo key para todo el proceso)
    REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
    REDIS_SOCKET_TIMEOUT = float(os.getenv("REDIS_SOCKET_TIMEOUT", "5"))
    CREDENTIAL_KEY = os.getenv("CREDENTIAL_KEY", "access_token")
    # Segundos antes de la expiración real en que el token deja de servirse
    CREDENTIAL_REFRESH_MARGIN = int(os.getenv("CREDENTIAL_REFRESH_MARGIN", "60"))
    CREDENTIAL_WAIT_TIMEOUT = float(os.getenv("CREDENTIAL_WAIT_TIMEOUT", "30"))

    # Zoom Server-to-Server OAuth (account credentials)
    ZOOM_ACCOUNT_ID = os.getenv("ZOOM_ACCOUNT_ID")
    ZOOM_CLIENT_ID = os.getenv("ZOOM_CLIENT_ID")
    ZOOM_CLIENT_SECRET = os.getenv("ZOOM_CLIENT_SECRET")
    ZOOM_TOKEN_URL = os.getenv("ZOOM_TOKEN_URL", "https://zoom.us/oauth/token")
    ZOOM_TOKEN_TIMEOUT = float(os.getenv("ZOOM_TOKEN_TIMEOUT", "10"))

    ZOOM_API_BASE_URL = os.getenv("ZOOM_API_BASE_URL", "https://api.zoom.us/v2")
    ZOOM_API_TIMEOUT = float(os.getenv("ZOOM_API_TIMEOUT", "20"))
