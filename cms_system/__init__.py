"""CMS system core: extension boot and script asset ordering."""

__version__ = "1.0.0"
