"""
Game-related API schemas.
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict

from src.data.models import Fragment


# === Request Schemas ===


class SellRequest(BaseModel):
    """Fragment sale request."""

    fragment_id: str


class MutationRequest(BaseModel):
    """Mutation request."""

    base_fragment_id: str
    component_fragment_ids: List[str] = Field(default_factory=list)


# === Response Schemas ===


class SpinResponse(BaseModel):
    """Spin result."""

    fragment: Fragment
    flux_spent: int


class FluxGainedResponse(BaseModel):
    """Flux credited by shattering or selling."""

    flux_gained: int


class DeviceStatsSchema(BaseModel):
    """Derived device stats."""

    spin_speed: float
    rarity_bonus: float
    flux_cost_reduction: int
    flux_cost: int
    mutation_slots: int

    class Config:
        from_attributes = True


class DeviceResponse(BaseModel):
    """Device overview."""

    stats: DeviceStatsSchema
    upgrade_costs: Dict[str, int]
    levels: Dict[str, int]
    spin_cost: int
    affordable_spins: int


class MutationPreviewResponse(BaseModel):
    """Mutation price and odds, without side effects."""

    flux_cost: int
    success_rate: int  # whole percent
    max_components: int
    can_afford: bool


class MutationResponse(BaseModel):
    """Mutation attempt result."""

    success: bool
    result_fragment: Optional[Fragment] = None
    consumed_fragments: List[str]
    flux_cost: int
    success_rate: int  # whole percent
