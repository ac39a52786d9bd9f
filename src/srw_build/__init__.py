from ._version import __version__
from .config import ConfigFacade, load_config

__all__ = ["__version__", "ConfigFacade", "load_config"]
