from .config import load_and_expand_config, load_config, parse_config, read_config_text

__all__ = [
    "load_and_expand_config",
    "load_config",
    "parse_config",
    "read_config_text",
]
