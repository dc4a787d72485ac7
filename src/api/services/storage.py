"""
In-memory storage for users, game states, fragments and marketplace listings.

Only simple CRUD lives here. Callers are responsible for serializing the
read -> validate -> compute -> persist sequence of a request; the store
itself provides no locking or optimistic concurrency.
"""

import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from src.core.exceptions import NotFoundError
from src.core.marketplace import listing_id, seed_listings
from src.data.models import (
    Fragment,
    FragmentDraft,
    GameState,
    MarketplaceListing,
    User,
)


class MemoryStorage:
    """Dictionary-backed store."""

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._game_states: Dict[str, GameState] = {}
        self._fragments: Dict[str, Fragment] = {}
        self._listings: Dict[str, MarketplaceListing] = {}
        self._initialize_marketplace()

    def _initialize_marketplace(self):
        """Seed listings once."""
        for listing in seed_listings():
            self._listings[listing.id] = listing

    # === Users ===

    def get_user(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def create_user(self, username: Optional[str] = None) -> User:
        """Create a user, anonymous unless a username is given."""
        user = User(
            id=str(uuid.uuid4()),
            username=username or f"anon_{int(time.time() * 1000)}",
        )
        self._users[user.id] = user
        return user

    # === Game states ===

    def get_game_state(self, user_id: str) -> Optional[GameState]:
        return next(
            (gs for gs in self._game_states.values() if gs.user_id == user_id), None
        )

    def create_game_state(self, user_id: str, **fields: Any) -> GameState:
        game_state = GameState(id=str(uuid.uuid4()), user_id=user_id, **fields)
        self._game_states[game_state.id] = game_state
        return game_state

    def update_game_state(self, user_id: str, **updates: Any) -> GameState:
        """
        Apply a partial update. Field constraints are re-validated, so a
        negative flux balance is rejected.
        """
        game_state = self.get_game_state(user_id)
        if game_state is None:
            raise NotFoundError("Game state not found")

        updated = GameState.model_validate(
            {
                **game_state.model_dump(),
                **updates,
                "updated_at": datetime.now(timezone.utc),
            }
        )
        self._game_states[updated.id] = updated
        return updated

    # === Fragments ===

    def get_fragments(self, game_state_id: str) -> List[Fragment]:
        return [f for f in self._fragments.values() if f.game_state_id == game_state_id]

    def get_fragment(self, fragment_id: str) -> Optional[Fragment]:
        return self._fragments.get(fragment_id)

    def create_fragment(self, game_state_id: str, draft: FragmentDraft) -> Fragment:
        fragment = Fragment(
            id=str(uuid.uuid4()),
            game_state_id=game_state_id,
            **draft.model_dump(include=set(FragmentDraft.model_fields)),
        )
        self._fragments[fragment.id] = fragment
        return fragment

    def update_fragment(self, fragment_id: str, **updates: Any) -> Fragment:
        fragment = self._fragments.get(fragment_id)
        if fragment is None:
            raise NotFoundError("Fragment not found")

        updated = fragment.model_copy(update=updates)
        self._fragments[fragment_id] = updated
        return updated

    def delete_fragment(self, fragment_id: str) -> None:
        self._fragments.pop(fragment_id, None)

    # === Marketplace ===

    def get_marketplace_listings(self) -> List[MarketplaceListing]:
        return list(self._listings.values())

    def get_marketplace_listing(
        self, fragment_type: str, rarity: str
    ) -> Optional[MarketplaceListing]:
        return self._listings.get(listing_id(fragment_type, rarity))

    def update_marketplace_listing(
        self, fragment_type: str, rarity: str, **updates: Any
    ) -> MarketplaceListing:
        key = listing_id(fragment_type, rarity)
        listing = self._listings.get(key)
        if listing is None:
            raise NotFoundError("Marketplace listing not found")

        updated = listing.model_copy(
            update={**updates, "updated_at": datetime.now(timezone.utc)}
        )
        self._listings[key] = updated
        return updated
