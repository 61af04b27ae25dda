"""
GitBrand actions - parse, stage, confirm and execute account mutations.
"""

from gitbrand.actions.base import ActionResult, ActionStatus, Command
from gitbrand.actions.executor import ActionExecutor
from gitbrand.actions.parser import CommandParser, ParsedReply, parse_reply
from gitbrand.actions.pending import PendingAction, PendingActionStore

__all__ = [
    "ActionResult",
    "ActionStatus",
    "Command",
    "ActionExecutor",
    "CommandParser",
    "ParsedReply",
    "parse_reply",
    "PendingAction",
    "PendingActionStore",
]
