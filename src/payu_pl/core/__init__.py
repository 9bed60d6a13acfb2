from payu_pl.core.config import (
    PayuSettings,
    clear_config,
    configure,
    get_config,
    load_config_from_file,
)
from payu_pl.core.i18n import available_locales, translate

__all__ = [
    "PayuSettings",
    "get_config",
    "configure",
    "clear_config",
    "load_config_from_file",
    "available_locales",
    "translate",
]
