import os

# In a real deployment, load these from the environment or a .env file
DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://./quickcart.sqlite3")

STORE_NAME: str = os.getenv("STORE_NAME", "Quick Cart Grocery Store")

# Report rendering
REPORT_CURRENCY_PREFIX: str = os.getenv("REPORT_CURRENCY_PREFIX", "Rs.")
REPORT_DATE_FORMAT: str = os.getenv("REPORT_DATE_FORMAT", "%m/%d/%Y")
REPORT_FONT_NAME: str = os.getenv("REPORT_FONT_NAME", "Helvetica")

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
# Comma separated list, e.g. "quickcart.features.reports,quickcart.main"
LOG_NAMESPACES: list[str] = [
    ns.strip() for ns in os.getenv("LOG_NAMESPACES", "").split(",") if ns.strip()
]
