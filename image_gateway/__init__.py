"""HTTP gateway for images kept in a cloud blob container."""

__version__ = "0.1.0"
