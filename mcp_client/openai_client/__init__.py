from .client import MISSING_KEY_MESSAGE, post_chat_completion

__all__ = ["MISSING_KEY_MESSAGE", "post_chat_completion"]
