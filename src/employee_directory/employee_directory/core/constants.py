"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_TTL_SECONDS = 60 * 60
TOKEN_ALGORITHM = "HS256"

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

IMAGE_FIELD_NAME = "image"
MAX_IMAGE_BYTES = 5 * 1024 * 1024
ALLOWED_IMAGE_EXTENSIONS = ("jpg", "jpeg", "png")
ALLOWED_IMAGE_MIMETYPES = ("image/jpeg", "image/png")
UPLOAD_URL_PREFIX = "/uploads"

DEFAULT_PORT = 5000
DEFAULT_MAX_CONTENT_LENGTH = 10 * 1024 * 1024
