"""Event routing for DanuuBot."""

from danuubot.routing.router import EventRouter

__all__ = ["EventRouter"]
