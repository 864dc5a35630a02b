from simpletons.utils.logger_setup import setup_logger, setup_logger_from_settings
from simpletons.utils.rng import make_rng

__all__ = ["make_rng", "setup_logger", "setup_logger_from_settings"]
