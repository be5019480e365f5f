"""Constants used throughout Commet."""

# Directory names
COMMET_DIR = ".commet"
COMMITS_DIR = "commits"

# File names
STAGED_FILE = "staged.json"
STAGED_LOCK_FILE = "staged.lock"

# Prefix for in-flight atomic writes; never a valid commit hash
TMP_PREFIX = ".tmp_"

# Hash algorithm
HASH_ALGORITHM = "sha256"
HASH_LENGTH = 64  # SHA-256 produces 64 hex characters
READ_CHUNK_SIZE = 64 * 1024

# Exit codes
EXIT_USER_ERROR = 1
EXIT_SYSTEM_ERROR = 2
EXIT_DATA_ERROR = 3

# Logging
LOG_LEVEL_ENV = "COMMET_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
