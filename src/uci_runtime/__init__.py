"""UCI protocol runtime for chess engines."""

__version__ = "0.1.0"
__engine_name__ = "UciRuntime"
__author__ = "The uci-runtime Authors."
