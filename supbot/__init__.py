"""Chat bot plugin toolkit: plugin SDK, bundled plugins, key-value store and plugin registry."""

__version__ = "0.6.0"