"""Internal constants shared across the library."""

BASE_URL = "http://swapi.dev/api"
USER_AGENT = "pyswapi/1.0"

#: Canonical scheme used for cache keys.
KEY_SCHEME = "http"
#: Scheme every outgoing request is rewritten to.
SECURE_SCHEME = "https"

#: Person fields holding lists of sub-resource URLs resolved during page assembly.
PAGE_LINK_FIELDS: tuple[str, ...] = ("films", "starships", "vehicles")

# (name, path) pairs for the initial character menu, relative to the API root.
# Obi-wan points at a missing person on purpose so the error path is reachable.
DEFAULT_CHARACTER_SEED: tuple[tuple[str, str], ...] = (
    ("Luke Skywalker", "/people/1/"),
    ("Darth Vader", "/people/4/"),
    ("Obi-wan Kenobi", "/people/unknown/"),
    ("R2-D2", "/people/2/"),
)
