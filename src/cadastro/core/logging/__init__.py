# src/cadastro/core/logging/
# ├─ __init__.py            # public API: setup_logging, acting_as, set_actor
# ├─ builder.py             # make_dict_config(settings) + setup_logging(settings)
# ├─ formatters.py          # JsonFormatter, ColorFormatter
# ├─ filters.py             # ActorFilter, RedactFilter (+ contextvar helpers)
# └─ handlers.py            # console/file handler factories


from .builder import setup_logging, make_dict_config
from .filters import acting_as, set_actor, reset_actor, get_actor, ActorFilter, RedactFilter

__all__ = [
    "setup_logging",
    "make_dict_config",
    "acting_as",
    "set_actor",
    "reset_actor",
    "get_actor",
    "ActorFilter",
    "RedactFilter",
]
