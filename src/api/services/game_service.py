"""
Game logic service.

Every mutating operation runs under one service lock, so the
read -> validate -> compute -> persist sequence of a request is never
interleaved with another request. Each session owns its own VoidRNG.
"""

import threading
from typing import Dict, List, Optional, Tuple

from src.core.economy import EconomyCalculator
from src.core.exceptions import (
    InsufficientFluxError,
    InvalidInputError,
    NotFoundError,
)
from src.core.fragment_generator import FragmentGenerator
from src.core.marketplace import apply_sale, calculate_sale_price, round_half_up
from src.core.mutation import MutationEngine
from src.core.rng import VoidRNG
from src.data.models import Fragment, GameState, MarketplaceListing, UpgradeType
from src.utils import transaction_logger
from src.utils.logger import get_logger

from ..config import settings
from ..schemas.game import (
    DeviceResponse,
    DeviceStatsSchema,
    MutationPreviewResponse,
    MutationResponse,
)
from .storage import MemoryStorage

logger = get_logger(__name__)


class GameService:
    """Game management service."""

    def __init__(
        self,
        storage: Optional[MemoryStorage] = None,
        mutation_engine: Optional[MutationEngine] = None,
        starting_flux: Optional[int] = None,
        rng_seed: Optional[int] = None,
    ):
        self.storage = storage or MemoryStorage()
        self.economy = EconomyCalculator()
        self.mutation_engine = mutation_engine or MutationEngine()
        self.starting_flux = settings.STARTING_FLUX if starting_flux is None else starting_flux
        self.rng_seed = settings.RNG_SEED if rng_seed is None else rng_seed
        self._generators: Dict[str, VoidRNG] = {}
        self._lock = threading.RLock()

    # === Sessions ===

    def get_or_create_session(self, session_id: Optional[str]) -> Tuple[str, GameState]:
        """
        Resolve a session to its game state, creating both lazily.

        Returns:
            (session id, game state). The session id is the owning user's id.
        """
        with self._lock:
            user = self.storage.get_user(session_id) if session_id else None
            if user is None:
                user = self.storage.create_user()
                logger.info(f"Created anonymous user {user.username}")

            game_state = self.storage.get_game_state(user.id)
            if game_state is None:
                game_state = self.storage.create_game_state(
                    user.id, flux=self.starting_flux
                )
                logger.info(f"Created game state {game_state.id} for {user.id}")

            return user.id, game_state

    def get_game_state(self, session_id: str) -> GameState:
        game_state = self.storage.get_game_state(session_id)
        if game_state is None:
            raise NotFoundError("Game state not found")
        return game_state

    def _generator_for(self, session_id: str) -> VoidRNG:
        """
        Session generator, created on the first spin.

        Entries live as long as the in-memory store's sessions do, so the map
        grows with the number of sessions that have spun; both are dropped
        only when the process restarts.
        """
        if session_id not in self._generators:
            self._generators[session_id] = VoidRNG(self.rng_seed)
        return self._generators[session_id]

    def _require_flux(self, game_state: GameState, cost: int) -> None:
        if game_state.flux < cost:
            raise InsufficientFluxError(cost, game_state.flux)

    def _find_fragment(self, game_state: GameState, fragment_id: str) -> Optional[Fragment]:
        fragment = self.storage.get_fragment(fragment_id)
        if fragment is None or fragment.game_state_id != game_state.id:
            return None
        return fragment

    # === Spinning ===

    def spin(self, session_id: str) -> Tuple[Fragment, int]:
        """
        Pay the spin cost and roll one fragment.

        Returns:
            (persisted fragment, flux spent).
        """
        with self._lock:
            game_state = self.get_game_state(session_id)
            cost = self.economy.calculate_spin_cost(game_state)
            self._require_flux(game_state, cost)

            draft = FragmentGenerator(self._generator_for(session_id)).generate(game_state)
            fragment = self.storage.create_fragment(game_state.id, draft)

            game_state = self.storage.update_game_state(
                session_id,
                flux=game_state.flux - cost,
                total_spins=game_state.total_spins + 1,
            )
            transaction_logger.log_spin(game_state, cost, fragment)
            return fragment, cost

    def list_fragments(self, session_id: str) -> List[Fragment]:
        game_state = self.get_game_state(session_id)
        return self.storage.get_fragments(game_state.id)

    # === Liquidation ===

    def shatter(self, session_id: str, fragment_id: str) -> int:
        """Destroy a fragment for flux. Returns flux gained."""
        with self._lock:
            game_state = self.get_game_state(session_id)
            fragment = self._find_fragment(game_state, fragment_id)
            if fragment is None:
                raise NotFoundError("Fragment not found")

            gained = self.economy.calculate_shatter_value(fragment)
            game_state = self.storage.update_game_state(
                session_id, flux=game_state.flux + gained
            )
            self.storage.delete_fragment(fragment.id)

            transaction_logger.log_shatter(game_state, gained, fragment)
            return gained

    def sell(self, session_id: str, fragment_id: str) -> int:
        """
        Sell a fragment at its marketplace price. Returns flux gained.

        The listing is repriced afterwards; a failure there is logged and
        does not undo the sale.
        """
        with self._lock:
            game_state = self.get_game_state(session_id)
            fragment = self._find_fragment(game_state, fragment_id)
            if fragment is None:
                raise NotFoundError("Fragment not found")

            listing = self.storage.get_marketplace_listing(fragment.type, fragment.rarity)
            price = calculate_sale_price(fragment, listing)

            game_state = self.storage.update_game_state(
                session_id, flux=game_state.flux + price
            )
            self.storage.delete_fragment(fragment.id)
            transaction_logger.log_sale(game_state, price, fragment)

            if listing is not None:
                try:
                    repriced = apply_sale(listing)
                    self.storage.update_marketplace_listing(
                        listing.fragment_type,
                        listing.rarity,
                        supply=repriced.supply,
                        demand=repriced.demand,
                        current_price=repriced.current_price,
                        price_history=repriced.price_history,
                    )
                except (NotFoundError, ValueError) as e:
                    logger.warning(f"Failed to update marketplace listing after sell: {e}")

            return price

    def get_marketplace(self) -> List[MarketplaceListing]:
        return self.storage.get_marketplace_listings()

    # === Device ===

    def upgrade_device(self, session_id: str, upgrade_type: str) -> GameState:
        """Buy one level of an upgrade track."""
        with self._lock:
            game_state = self.get_game_state(session_id)
            cost = self.economy.calculate_device_upgrade_cost(game_state, upgrade_type)
            self._require_flux(game_state, cost)

            track = UpgradeType(upgrade_type)
            new_level = game_state.level_for(track) + 1
            game_state = self.storage.update_game_state(
                session_id,
                flux=game_state.flux - cost,
                **{track.level_field: new_level},
            )

            logger.info(f"Session {session_id} upgraded {track.value} to level {new_level}")
            transaction_logger.log_upgrade(game_state, cost, track.value, new_level)
            return game_state

    def get_device(self, session_id: str) -> DeviceResponse:
        game_state = self.get_game_state(session_id)
        stats = self.economy.get_device_stats(game_state)

        return DeviceResponse(
            stats=DeviceStatsSchema.model_validate(stats),
            upgrade_costs=self.economy.get_upgrade_costs(game_state),
            levels={track.value: game_state.level_for(track) for track in UpgradeType},
            spin_cost=self.economy.calculate_spin_cost(game_state),
            affordable_spins=self.economy.affordable_spins(game_state),
        )

    # === Mutation ===

    def _resolve_mutation_inputs(
        self, game_state: GameState, base_id: str, component_ids: List[str]
    ) -> Tuple[Fragment, List[Fragment]]:
        if not base_id or not component_ids:
            raise InvalidInputError("Invalid mutation request")

        if base_id in component_ids or len(set(component_ids)) != len(component_ids):
            raise InvalidInputError("A fragment can only be used once per mutation")

        base = self._find_fragment(game_state, base_id)
        if base is None:
            raise NotFoundError("Base fragment not found")

        components = [self._find_fragment(game_state, cid) for cid in component_ids]
        if any(c is None for c in components):
            raise NotFoundError("One or more component fragments not found")

        return base, components

    def preview_mutation(
        self, session_id: str, base_id: str, component_ids: List[str]
    ) -> MutationPreviewResponse:
        """Price a mutation without spending anything."""
        game_state = self.get_game_state(session_id)
        base, components = self._resolve_mutation_inputs(game_state, base_id, component_ids)
        self.mutation_engine.validate(base, components, game_state)

        cost = self.mutation_engine.calculate_cost(base, components)
        rate = self.mutation_engine.calculate_success_rate(base, components, game_state)

        return MutationPreviewResponse(
            flux_cost=cost,
            success_rate=round_half_up(rate * 100),
            max_components=self.mutation_engine.max_components(game_state),
            can_afford=game_state.flux >= cost,
        )

    def mutate(
        self, session_id: str, base_id: str, component_ids: List[str]
    ) -> MutationResponse:
        """
        Attempt a mutation.

        Flux is debited and every input consumed whether or not it succeeds.
        Nothing changes if validation or the flux check fails.
        """
        with self._lock:
            game_state = self.get_game_state(session_id)
            base, components = self._resolve_mutation_inputs(game_state, base_id, component_ids)

            outcome = self.mutation_engine.attempt(base, components, game_state)

            game_state = self.storage.update_game_state(
                session_id, flux=game_state.flux - outcome.flux_cost
            )
            consumed_ids = [base.id, *(c.id for c in components)]
            for fragment_id in consumed_ids:
                self.storage.delete_fragment(fragment_id)

            result_fragment = None
            if outcome.success:
                result_fragment = self.storage.create_fragment(game_state.id, outcome.result)

            logger.info(
                f"Mutation for {session_id}: success={outcome.success} "
                f"cost={outcome.flux_cost} rate={outcome.success_percent}%"
            )
            transaction_logger.log_mutation(
                game_state,
                outcome.flux_cost,
                outcome.success,
                [base, *components],
                result_fragment,
            )

            return MutationResponse(
                success=outcome.success,
                result_fragment=result_fragment,
                consumed_fragments=consumed_ids,
                flux_cost=outcome.flux_cost,
                success_rate=outcome.success_percent,
            )
