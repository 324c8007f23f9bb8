from .model import AffectedOptions, DEFAULT_PATTERN, DEFAULT_MERGE_BASE, OptionsInput, normalize_options
from .load import read_config_file, resolve_options
from .paths import CONFIG_FILE, config_path

__all__ = [
    "AffectedOptions",
    "DEFAULT_PATTERN",
    "DEFAULT_MERGE_BASE",
    "OptionsInput",
    "normalize_options",
    "read_config_file",
    "resolve_options",
    "CONFIG_FILE",
    "config_path",
]
