"""Variable expansion: ${VAR} from the process environment, {VAR} from [env]."""

from ._expander import MAX_EXPANSION_DEPTH, Expander, expand_config

__all__ = [
    "MAX_EXPANSION_DEPTH",
    "Expander",
    "expand_config",
]
