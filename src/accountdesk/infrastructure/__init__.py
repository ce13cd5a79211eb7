"""Infrastructure layer: backend HTTP client and on-disk preferences.

This layer depends on stdlib and third-party libs (httpx, pydantic).
It may import domain models; it must never import services or commands.
"""
