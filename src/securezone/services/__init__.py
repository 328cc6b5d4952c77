"""Business logic services for the SecureZone application."""

from .locks import ReportLockRegistry
from .tags import TagSynchronizer, parse_tags
from .visibility import display_name, is_privileged
from .votes import VoteEffect, VoteLedger, VoteResult

__all__ = [
    "ReportLockRegistry",
    "TagSynchronizer",
    "VoteEffect",
    "VoteLedger",
    "VoteResult",
    "display_name",
    "is_privileged",
    "parse_tags",
]
