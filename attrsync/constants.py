# Entrius 2025
# =============================================================================
# Run defaults
# =============================================================================
DEFAULT_TEMPLATE_PATH = "./.gitattributes"
DEFAULT_WORKDIR = "temp-repos"
DEFAULT_MARKER_NAME = ".gitattributes"
DEFAULT_COMMIT_MESSAGE = "Add .gitattributes for language classification"
DEFAULT_REPO_LIMIT = 1000
DEFAULT_DELAY_SECONDS = 1.0  # pause between repositories

# =============================================================================
# Repository listing sources
# =============================================================================
SOURCE_GH = "gh"
SOURCE_API = "api"
LISTING_SOURCES = [SOURCE_GH, SOURCE_API]
DEFAULT_SOURCE = SOURCE_GH

# =============================================================================
# GitHub API
# =============================================================================
BASE_GITHUB_API_URL = "https://api.github.com"
GITHUB_API_PAGE_SIZE = 100
GITHUB_API_TIMEOUT = 30

# =============================================================================
# Outcome messages
# =============================================================================
MSG_APPLIED = "applied"
MSG_WOULD_APPLY = "would apply"
MSG_CLONE_FAILED = "clone failed"
MSG_ALREADY_PRESENT = "already present"
MSG_NO_CHANGES = "no changes"
MSG_COPY_FAILED = "copy failed"
MSG_STATUS_FAILED = "status failed"
MSG_COMMIT_FAILED = "commit failed"
MSG_PUSH_FAILED = "push failed"

# =============================================================================
# Environment variables
# =============================================================================
ENV_ACCOUNT = "ATTRSYNC_ACCOUNT"
ENV_TEMPLATE = "ATTRSYNC_TEMPLATE"
ENV_WORKDIR = "ATTRSYNC_WORKDIR"
ENV_SOURCE = "ATTRSYNC_SOURCE"
ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
