from simpletons.config.settings import LoggingSettings, SimulationSettings, load_settings

__all__ = ["LoggingSettings", "SimulationSettings", "load_settings"]
