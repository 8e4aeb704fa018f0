"""CUBE Terminal - token lookup gateway and interactive command shell."""

__version__ = "0.1.0"
