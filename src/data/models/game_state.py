"""Player progression models for Voidspinner."""

from datetime import datetime, timezone
from enum import StrEnum

from pydantic import BaseModel, Field


class UpgradeType(StrEnum):
    """Independent device upgrade tracks."""
    SPIN_SPEED = "spin_speed"
    RARITY_ODDS = "rarity_odds"
    FLUX_COST = "flux_cost"
    MUTATION_SLOTS = "mutation_slots"

    @property
    def level_field(self) -> str:
        """Name of the GameState field holding this track's level."""
        return f"{self.value}_level"

    @property
    def camel_name(self) -> str:
        """Legacy client id, e.g. ``spinSpeed``."""
        head, *rest = self.value.split("_")
        return head + "".join(part.title() for part in rest)

    @classmethod
    def _missing_(cls, value):
        # Accept the camelCase ids older clients send
        for member in cls:
            if member.camel_name == value:
                return member
        return None


class User(BaseModel):
    """Session-identified actor owning exactly one game state."""
    id: str
    username: str


class GameState(BaseModel):
    """Per-player mutable progression record."""
    id: str = ""
    user_id: str = ""
    flux: int = Field(default=1000, ge=0, description="Currency balance")
    total_spins: int = Field(default=0, ge=0)
    device_level: int = Field(default=1, ge=1)
    spin_speed_level: int = Field(default=1, ge=1)
    rarity_odds_level: int = Field(default=1, ge=1)
    flux_cost_level: int = Field(default=1, ge=1)
    mutation_slots_level: int = Field(default=1, ge=1)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def level_for(self, upgrade_type: UpgradeType) -> int:
        """Current level of an upgrade track."""
        return getattr(self, UpgradeType(upgrade_type).level_field)
