"""
Upload Settings

Environment-driven configuration for the upload facade.

Guidelines:
- Secrets (credentials) live in files referenced from .env, NOT here
- Import these settings in modules: from youtube_uploader import settings
"""

import os

from dotenv import load_dotenv

from youtube_uploader.constants import (
    DEFAULT_LANGUAGE,
    DEFAULT_REGION_CODE,
    UPLOAD_CHUNK_SIZE,
)

# Load environment variables from .env file
load_dotenv()

# =============================================================================
# YOUTUBE OAUTH CONFIGURATION
# =============================================================================

# These point to credential files, not inline secrets
YOUTUBE_CLIENT_SECRET_PATH = os.getenv(
    "YOUTUBE_CLIENT_SECRET_PATH",
    "credentials/client_secret.json",
)
YOUTUBE_TOKEN_PATH = os.getenv("YOUTUBE_TOKEN_PATH", "credentials/token.json")

# =============================================================================
# UPLOAD CONFIGURATION
# =============================================================================

# Language used for both defaultLanguage and defaultAudioLanguage
YOUTUBE_DEFAULT_LANGUAGE = os.getenv("YOUTUBE_DEFAULT_LANGUAGE", DEFAULT_LANGUAGE)

# Region used when listing video categories
YOUTUBE_DEFAULT_REGION = os.getenv("YOUTUBE_DEFAULT_REGION", DEFAULT_REGION_CODE)

YOUTUBE_UPLOAD_CHUNK_SIZE = int(
    os.getenv("YOUTUBE_UPLOAD_CHUNK_SIZE", str(UPLOAD_CHUNK_SIZE)),
)

# "youtube", "mock" or "auto" (mock fallback only when asked for)
YOUTUBE_UPLOADER_MODE = os.getenv("YOUTUBE_UPLOADER_MODE", "youtube")
