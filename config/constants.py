"""Application constants.

Centralized location for all magic numbers and strings used across
the managers, the session and the UI shell.
"""

# ============================================================================
# Table Configuration
# ============================================================================

# Pagination
DEFAULT_PAGE_SIZE = 5
PAGE_SIZE_OPTIONS = (5, 10, 25)

# Sort directions
SORT_ASC = "asc"
SORT_DESC = "desc"

# ============================================================================
# Notifications
# ============================================================================

SEVERITY_SUCCESS = "success"
SEVERITY_INFO = "info"
SEVERITY_WARNING = "warning"
SEVERITY_ERROR = "error"
SEVERITIES = (SEVERITY_SUCCESS, SEVERITY_INFO, SEVERITY_WARNING, SEVERITY_ERROR)

# Milliseconds
NOTIFICATION_DURATION_MS = 4000
NOTIFICATION_SETTLE_MS = 200

# ============================================================================
# Session
# ============================================================================

# Durable key-value storage keys
ROLE_KEY = "rol"
USER_KEY = "user"

ROLE_ADMIN = "admin"
ROLE_OPERATOR = "operario"
ROLES = (ROLE_ADMIN, ROLE_OPERATOR)

# ============================================================================
# Screens
# ============================================================================

SCREEN_INPUTS = "insumos"
SCREEN_PURCHASES = "compras"
SCREEN_SALES = "ventas"
SCREEN_INVENTORY = "inventario"
SCREEN_FORMULA_CATALOG = "formulas"
SCREEN_FORMULA_MANAGER = "Gformulas"
SCREEN_ANALYTICS = "analisis"

OPERATOR_SCREENS = (
    SCREEN_INPUTS,
    SCREEN_PURCHASES,
    SCREEN_SALES,
    SCREEN_INVENTORY,
    SCREEN_FORMULA_CATALOG,
)
ADMIN_SCREENS = (SCREEN_ANALYTICS, SCREEN_FORMULA_MANAGER) + OPERATOR_SCREENS

SCREENS_BY_ROLE = {
    ROLE_ADMIN: ADMIN_SCREENS,
    ROLE_OPERATOR: OPERATOR_SCREENS,
}

# ============================================================================
# File Paths
# ============================================================================

FIXTURES_DIRECTORY = "data/fixtures"
SESSION_FILE = "session.json"
LOG_FILE = "paint_track.log"

# Fixture file per entity kind
FIXTURE_FILES = {
    "input": "inputs.json",
    "product": "inventory.json",
    "purchase": "purchases.json",
    "sale": "sales.json",
    "formula": "formulas.json",
    "user": "users.json",
}

# Environment overrides (read through python-dotenv)
ENV_FIXTURES_DIR = "PAINT_TRACK_FIXTURES_DIR"
ENV_SESSION_FILE = "PAINT_TRACK_SESSION_FILE"

# ============================================================================
# Application Metadata
# ============================================================================

APP_WINDOW_TITLE = "Paint Track - Back office"

# Default window size
DEFAULT_WINDOW_WIDTH = 1100
DEFAULT_WINDOW_HEIGHT = 700

# ============================================================================
# Formulas
# ============================================================================

MIX_TYPE_LABELS = {
    "base": "Base",
    "finish": "Acabado",
    "special": "Especial",
}
