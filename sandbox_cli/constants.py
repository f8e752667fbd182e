"""Shared constants for the sandbox commands."""

# ---------------------------------------------------------------------------
# Branding
# ---------------------------------------------------------------------------

CLI_PREFIX = "doctl sandbox"
CLI_SHORT_PREFIX = "doctl sbx"
APP_NAME = "doctl-sandbox"
DOCTL_APP_NAME = "doctl"

# ---------------------------------------------------------------------------
# Sandbox tool layout
# ---------------------------------------------------------------------------

SANDBOX_DIR_NAME = "sandbox"
SANDBOX_ENTRY_SCRIPT = "sandbox.js"
BUNDLED_NODE_NAME = "node"
DEFAULT_NODE_BINARY = "node"

# ---------------------------------------------------------------------------
# Sandbox tool commands
# ---------------------------------------------------------------------------

PROJECT_CREATE = "project/create"
PROJECT_DEPLOY = "project/deploy"
PROJECT_GET_METADATA = "project/get-metadata"
PROJECT_WATCH = "project/watch"

# ---------------------------------------------------------------------------
# Flag names (as forwarded to the sandbox tool)
# ---------------------------------------------------------------------------

FLAG_LANGUAGE = "language"
FLAG_OVERWRITE = "overwrite"
FLAG_ENV = "env"
FLAG_BUILD_ENV = "build-env"
FLAG_APIHOST = "apihost"
FLAG_AUTH = "auth"
FLAG_INSECURE = "insecure"
FLAG_VERBOSE_BUILD = "verbose-build"
FLAG_VERBOSE_ZIP = "verbose-zip"
FLAG_YARN = "yarn"
FLAG_INCLUDE = "include"
FLAG_EXCLUDE = "exclude"
FLAG_REMOTE_BUILD = "remote-build"
FLAG_INCREMENTAL = "incremental"

DEFAULT_LANGUAGE = "javascript"

# 'web' names the web content folder to the sandbox tool, 'web/' a package
KEYWORD_WEB = "web"
KEYWORD_WEB_PACKAGE = "web/"

# ---------------------------------------------------------------------------
# Output phrases rewritten for doctl
# ---------------------------------------------------------------------------

DEPLOYING_PROJECT_PHRASE = "Deploying project"
DEPLOYED_PHRASE = "Deployed"
DEPLOYED_ACTIONS_PHRASE = "Deployed actions"
DEPLOYED_FUNCTIONS_LINE = (
    f"Deployed functions ('{CLI_SHORT_PREFIX} fn get <funcName> --url' for URL):"
)
ALREADY_EXISTS_PHRASE = "already exists"
SHORT_OVERWRITE_FLAG = "-o"
LONG_OVERWRITE_FLAG = "--overwrite"
