"""Service layer: submission lifecycle, notifications, navigation, theme.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
