from .loader import load_config_file, load_configs

__all__ = ["load_config_file", "load_configs"]
