"""gnomex: search, install and manage GNOME Shell extensions."""

__version__ = "0.1.0"
