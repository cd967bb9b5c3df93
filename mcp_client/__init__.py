"""Chat client that relays conversation turns to an OpenAI chat model with local memory tools."""

from .config import DEFAULT_APP_VERSION as __version__

__all__ = ["__version__"]
