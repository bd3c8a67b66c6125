# Common utilities
from octrakit.common.crypto import CryptoUtils as CryptoUtils
from octrakit.common.logging_utils import setup_logger as setup_logger
from octrakit.common.mixins import Configurable as Configurable

__all__ = ["Configurable", "CryptoUtils", "setup_logger"]
