from .annotations import (
    ExtensionInfo,
    ProviderData,
    group_provider,
    plugin_info,
    string_provider,
    tab,
    table_provider,
)
from .base import DataExtension
from .icon import Color, Family, Icon
from .service import ExtensionService, ProviderResult
from .table import Table, TableColumn, TableFactory

__all__ = [
    "Color",
    "DataExtension",
    "ExtensionInfo",
    "ExtensionService",
    "Family",
    "Icon",
    "ProviderData",
    "ProviderResult",
    "Table",
    "TableColumn",
    "TableFactory",
    "group_provider",
    "plugin_info",
    "string_provider",
    "tab",
    "table_provider",
]
