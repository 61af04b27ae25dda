"""
Conversation state for the branding assistant.

This module provides:
- ConversationTurn: one immutable user/assistant message
- ConversationLog: the ordered transcript
- AssistantContext: credential, account and provider selection
"""

from gitbrand.context.assistant import AssistantContext, LLMProvider, account_from_url
from gitbrand.context.conversation import ConversationLog, ConversationTurn, Role

__all__ = [
    "AssistantContext",
    "LLMProvider",
    "account_from_url",
    "ConversationLog",
    "ConversationTurn",
    "Role",
]
