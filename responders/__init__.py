"""Interaction collaborators that answer for Palace players."""

from responders.base import Responder
from responders.scripted import ScriptedResponder, ScriptExhausted
from responders.terminal import TerminalResponder

__all__ = [
    "Responder",
    "ScriptedResponder",
    "ScriptExhausted",
    "TerminalResponder",
]
