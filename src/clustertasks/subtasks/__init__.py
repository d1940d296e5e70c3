from .catalog_upgrade import CATALOG_UPGRADE_COMMAND, TIMEOUT_MS, YsqlMajorVersionCatalogUpgrade
from .registry import SubtaskRegistry

__all__ = [
    "CATALOG_UPGRADE_COMMAND",
    "TIMEOUT_MS",
    "SubtaskRegistry",
    "YsqlMajorVersionCatalogUpgrade",
]
