import logging
import os
from functools import lru_cache
import inspect
import yaml


@lru_cache(maxsize=8)
def get_config(filename=None):
    """Loads a YAML configuration file, defaulting to the config.yml at the repository root."""
    if filename is None:
        filename = os.path.join(os.path.dirname(inspect.stack()[0][1]), "..", "config.yml")
    config_path = os.path.abspath(filename)
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"File {config_path} cannot be found.")
    with open(config_path, "r") as f:
        config = yaml.safe_load(f)
    logging.getLogger("baocorr").debug(f"Loaded config from {config_path}")
    return config


def setup_logging(level=logging.DEBUG):
    logging.basicConfig(level=level, format="[%(levelname)7s |%(funcName)23s]   %(message)s")
    logging.getLogger("matplotlib").setLevel(logging.ERROR)
