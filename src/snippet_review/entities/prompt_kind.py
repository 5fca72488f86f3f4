"""Prompt classification result."""

from enum import Enum


class PromptKind(str, Enum):
    """Whether a prompt looks like source code or plain conversation."""

    CODE = "code"
    CONVERSATION = "conversation"
