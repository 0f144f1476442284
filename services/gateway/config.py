"""
GLPI Bridge configuration, read from the environment
"""

import os


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() not in ("0", "false", "no", "off")


GLPI_URL = os.getenv("GLPI_URL", "http://localhost/apirest.php")
USER_TOKEN = os.getenv("USER_TOKEN", "")

# INSECURE when false: skips TLS certificate verification towards GLPI
GLPI_VERIFY_TLS = _env_flag("GLPI_VERIFY_TLS", "true")

GLPI_TIMEOUT = float(os.getenv("GLPI_TIMEOUT", "30.0"))
GLPI_MAX_PAGES = int(os.getenv("GLPI_MAX_PAGES", "10000"))
GLPI_AUTHOR_CONCURRENCY = int(os.getenv("GLPI_AUTHOR_CONCURRENCY", "1"))

PORT = int(os.getenv("PORT", "3000"))
