from config.config import Config, load_config  # noqa: F401

__all__ = ["Config", "load_config"]
