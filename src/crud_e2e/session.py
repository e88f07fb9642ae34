"""Session context shared by the scenarios of one run."""

from dataclasses import dataclass


@dataclass
class SessionContext:
    """Values captured by earlier scenarios and consumed by later ones.

    One instance lives for a whole run and is passed explicitly to every
    scenario. Nothing here is persisted.
    """

    token1: str | None = None
    token2: str | None = None
    user_id: int | None = None
    room_id: int | None = None

    def missing(self, fields: tuple[str, ...]) -> list[str]:
        """Return the names of required fields that are still unset."""
        return [name for name in fields if getattr(self, name) is None]
