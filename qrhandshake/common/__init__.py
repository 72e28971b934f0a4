# Common utilities
from qrhandshake.common.crypto import CryptoUtils as CryptoUtils
from qrhandshake.common.logging_utils import setup_logger as setup_logger
from qrhandshake.common.mixins import Configurable as Configurable

__all__ = ["Configurable", "CryptoUtils", "setup_logger"]
