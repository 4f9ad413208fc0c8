"""Local documentation viewer for the packages in the Elm package cache."""

__version__ = "0.1.0"
