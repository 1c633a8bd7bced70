"""coffeebrew — package-manager bootstrap and tap item listing."""

__version__ = "0.1.0"
