"""Adapter between the hosting judge's JSON messages and the field engine."""

from .messages import (
    JudgeInput,
    JudgeMessage,
    JudgeProtocolError,
    JudgeResponse,
    SetupRequest,
    parse_message,
)
from .session import BotSession, joint_action

KEEP_RUNNING_MARKER = ">>>BOTZONE_REQUEST_KEEP_RUNNING<<<"

__all__ = [
    "BotSession",
    "JudgeInput",
    "JudgeMessage",
    "JudgeProtocolError",
    "JudgeResponse",
    "KEEP_RUNNING_MARKER",
    "SetupRequest",
    "joint_action",
    "parse_message",
]
