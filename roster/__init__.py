"""Roster module for loading schedule snapshots from JSON files."""

from .loader import RosterError, RosterLoader, parse_roster
from .models import Roster

__all__ = ["Roster", "RosterError", "RosterLoader", "parse_roster"]
