"""SecureZone community incident-reporting API."""

__version__ = "0.1.0"
