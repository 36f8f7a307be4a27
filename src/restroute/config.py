"""Application configuration.

RestConfig is a frozen dataclass: immutable after creation, no string-key
dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RestConfig:
    """Routing configuration. Immutable after creation.

    ``base_route`` defaults to empty, which leaves routing disabled: every
    request is ``NotApplicable`` and falls through to the host::

        config = RestConfig(base_route="api")
    """

    # Routing
    base_route: str = ""
    validate_query_params: bool = False  # Type-check query values for constrained params too

    # Development
    debug: bool = False

    # JSON payloads
    json_ensure_ascii: bool = False
    not_found_message: str = "Not found!"

    @property
    def normalized_base_route(self) -> str:
        """``base_route`` with surrounding slashes removed."""
        return self.base_route.strip("/")
