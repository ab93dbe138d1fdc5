"""VegeFood storefront: catalog, cart pricing and session state."""

__version__ = "0.1.0"
