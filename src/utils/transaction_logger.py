"""JSON audit trail of every flux-moving event."""

import json
from datetime import datetime, timezone
from typing import Any, Optional

from src.data.models import FragmentDraft, GameState
from src.utils.logger import get_transaction_logger

tx_logger = get_transaction_logger()


def _fragment_summary(fragment: FragmentDraft) -> dict[str, Any]:
    return {
        "id": getattr(fragment, "id", None),
        "name": fragment.name,
        "type": fragment.type,
        "rarity": fragment.rarity,
    }


def log_transaction(
    event_type: str,
    game_state: GameState,
    flux_delta: int,
    details: Optional[dict[str, Any]] = None,
) -> None:
    """Logs one transaction as a JSON object."""
    log_data = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "event_type": event_type,
        "user_id": game_state.user_id,
        "game_state_id": game_state.id,
        "flux_delta": flux_delta,
        "flux_after": game_state.flux,
        "details": details or {},
    }
    tx_logger.info(json.dumps(log_data))


def log_spin(game_state: GameState, cost: int, fragment: FragmentDraft) -> None:
    log_transaction("spin", game_state, -cost, {"fragment": _fragment_summary(fragment)})


def log_shatter(game_state: GameState, gained: int, fragment: FragmentDraft) -> None:
    log_transaction("shatter", game_state, gained, {"fragment": _fragment_summary(fragment)})


def log_sale(game_state: GameState, gained: int, fragment: FragmentDraft) -> None:
    log_transaction("sell", game_state, gained, {"fragment": _fragment_summary(fragment)})


def log_upgrade(game_state: GameState, cost: int, upgrade_type: str, new_level: int) -> None:
    log_transaction(
        "upgrade",
        game_state,
        -cost,
        {"upgrade_type": upgrade_type, "new_level": new_level},
    )


def log_mutation(
    game_state: GameState,
    cost: int,
    success: bool,
    consumed: list[FragmentDraft],
    result: Optional[FragmentDraft] = None,
) -> None:
    log_transaction(
        "mutation",
        game_state,
        -cost,
        {
            "success": success,
            "consumed": [_fragment_summary(f) for f in consumed],
            "result": _fragment_summary(result) if result else None,
        },
    )
