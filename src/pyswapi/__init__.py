"""pyswapi - Async Python client for browsing the Star Wars API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyswapi")
except PackageNotFoundError:
    __version__ = "0+local"
from pyswapi.client import DEFAULT_CHARACTERS, SwapiClient, default_characters
from pyswapi.commands import ResourceCommands
from pyswapi.config import PyswapiConfig
from pyswapi.exceptions import SwapiConfigError, SwapiError, SwapiTransportError
from pyswapi.selectors import CharacterOption, EmptyViewModel, PersonViewModel, ViewModel, view_model
from pyswapi.state.models import NO_SELECTION, PENDING, AppState, Character, ResourceEntry
from pyswapi.state.store import Action, Async, Store, Sync

__all__ = [
    "__version__",
    "Action",
    "AppState",
    "Async",
    "Character",
    "CharacterOption",
    "DEFAULT_CHARACTERS",
    "EmptyViewModel",
    "NO_SELECTION",
    "PENDING",
    "PersonViewModel",
    "PyswapiConfig",
    "ResourceCommands",
    "ResourceEntry",
    "Store",
    "SwapiClient",
    "SwapiConfigError",
    "SwapiError",
    "SwapiTransportError",
    "Sync",
    "ViewModel",
    "default_characters",
    "view_model",
]
