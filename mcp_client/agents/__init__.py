"""Agent assets package.

Contains the chat agent prompt, tool registry and turn runtime that are wired
into OpenAI chat completion requests.
"""

__all__ = ["chat_agent"]
