"""Terminal host for the navigation router.

Provides a screen-based shell that drives a Router through a StackHost.
"""
from .host import StackHost
from .shell import SCREENS, Shell, register_screen

__all__ = ["SCREENS", "Shell", "StackHost", "register_screen"]
