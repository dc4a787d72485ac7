"""Fragment data model for Voidspinner."""

from datetime import datetime, timezone
from enum import StrEnum
from typing import Union

from pydantic import BaseModel, Field


class FragmentType(StrEnum):
    """Fragment classification."""
    BASE_ITEM = "base_item"
    COMPONENT = "component"
    MODIFIER = "modifier"
    BLUEPRINT = "blueprint"


class Rarity(StrEnum):
    """Rarity tiers, declared in ascending order."""
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"
    MYTHIC = "mythic"
    VOID_TOUCHED = "void_touched"


StatValue = Union[int, float]


class ImplicitMod(BaseModel):
    """Modifier rolled when the fragment is created."""
    name: str
    value: int


class Affix(BaseModel):
    """Modifier appended by a mutation."""
    name: str
    value: int
    source: str = Field(default="mutation", description="What produced this affix")


class FragmentDraft(BaseModel):
    """A generated fragment that has not been persisted yet."""
    name: str = Field(..., description="Display name")
    type: FragmentType
    rarity: Rarity
    base_stats: dict[str, StatValue] = Field(default_factory=dict, description="Stat keys depend on type")
    implicit_mods: list[ImplicitMod] = Field(default_factory=list)
    affixes: list[Affix] = Field(default_factory=list)
    is_corrupted: bool = Field(default=False, description="Reserved, never set by current logic")
    quantity: int = Field(default=1, ge=1)

    model_config = {"use_enum_values": True}

    @property
    def is_base_item(self) -> bool:
        return self.type == FragmentType.BASE_ITEM

    @property
    def is_craft_input(self) -> bool:
        """Whether this fragment may be fed into a mutation as a component."""
        return self.type in (FragmentType.COMPONENT, FragmentType.MODIFIER)


class Fragment(FragmentDraft):
    """A persisted fragment owned by one game state."""
    id: str = Field(..., description="Unique identifier")
    game_state_id: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
