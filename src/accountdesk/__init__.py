"""accountdesk: account registration and login client."""

__version__ = "0.1.0"
