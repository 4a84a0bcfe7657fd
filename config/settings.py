"""
Central Configuration File

ALL configuration values live here. This is the single source of truth.

Guidelines:
- Secrets (tokens, credential paths) should be in .env, NOT here
- Import these settings in modules: from config.settings import UPLOAD_CHUNK_SIZE
- Keep values generic and domain-agnostic
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# =============================================================================
# UPLOAD CONFIGURATION
# =============================================================================

# Only assets whose MIME type starts with this prefix can be uploaded
VIDEO_MIME_PREFIX = "video/"

# Remote namespace for uploaded objects: videos/{derived_id}
REMOTE_VIDEO_PREFIX = "videos"

# Transfer Settings
UPLOAD_CHUNK_SIZE = 1 * 1024 * 1024  # 1 MB per progress step
UPLOAD_TIMEOUT = 600  # 10 minutes
HTTP_TIMEOUT = 30  # seconds

# Length of the hash component in derived identifiers (hex digits)
VIDEO_ID_DIGEST_LENGTH = 16

# =============================================================================
# REMOTE STORAGE (object transfer endpoint)
# =============================================================================

# Bucket name, e.g. "my-project.appspot.com". Empty = no remote storage.
STORAGE_BUCKET = os.getenv("STORAGE_BUCKET", "")
STORAGE_BASE_URL = os.getenv(
    "STORAGE_BASE_URL",
    "https://firebasestorage.googleapis.com/v0/b",
)

# =============================================================================
# PROCESSING SERVICE
# =============================================================================

# Fire-and-forget job endpoint. Empty = processing requests disabled.
PROCESSING_ENDPOINT_URL = os.getenv("PROCESSING_ENDPOINT_URL", "")
PROCESSING_TIMEOUT = int(os.getenv("PROCESSING_TIMEOUT", "15"))  # seconds

# =============================================================================
# CATALOG (metadata store)
# =============================================================================

STORAGE_BASE_PATH = Path(os.getenv("STORAGE_BASE_PATH", "./app_data"))
METADATA_DB_NAME = "video_catalog.db"
CATALOG_CONFIG_PATH = Path("config/catalog.yaml")
FEED_PAGE_LIMIT = 50  # Maximum records loaded per feed refresh

# =============================================================================
# PLAYBACK CONFIGURATION
# =============================================================================

# Minimum on-screen fraction before a feed entry may play
VISIBILITY_THRESHOLD = float(os.getenv("VISIBILITY_THRESHOLD", "0.5"))

# Feed items loop forever while they own the decoder
PLAYER_LOOP = True

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOG_DIR = os.getenv("LOG_DIR", "/var/log/videofeed")
LOG_SERVICE_FILE = "videofeed.log"
LOG_BACKUP_DAYS = 7
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s | %(name)s"

# =============================================================================
# SECRETS (loaded from .env)
# =============================================================================
# IMPORTANT: These should NEVER be committed to version control!
# Create a .env file in the project root with these values

# Static bearer token (takes precedence over the token file when set)
UPLOAD_AUTH_TOKEN = os.getenv("UPLOAD_AUTH_TOKEN", "")

# Authorized-user token file refreshed with google-auth
GOOGLE_TOKEN_PATH = os.getenv("GOOGLE_TOKEN_PATH", "credentials/token.json")

# Owner used by command-line tools when --owner is not given
DEFAULT_OWNER_ID = os.getenv("DEFAULT_OWNER_ID", "")
