"""Tests for game API routes."""

import pytest
from fastapi.testclient import TestClient

from src.api.config import settings
from src.api.dependencies import get_game_service
from src.api.main import app
from src.api.services import GameService, MemoryStorage
from src.core.mutation import MutationEngine
from src.data.models import FragmentDraft, ImplicitMod

client = TestClient(app)


@pytest.fixture
def make_client(fixed_random):
    """Client bound to its own service, with a fresh cookie jar."""
    def _make(starting_flux=1000, success=0.0):
        service = GameService(
            storage=MemoryStorage(),
            mutation_engine=MutationEngine(
                success_rng=fixed_random(success),
                evolution_rng=fixed_random(0.99),
            ),
            starting_flux=starting_flux,
            rng_seed=99,
        )
        app.dependency_overrides[get_game_service] = lambda: service
        return TestClient(app), service

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def player(make_client):
    """Client with an established session."""
    test_client, service = make_client()
    response = test_client.get("/api/gamestate")
    session_id = response.cookies[settings.SESSION_COOKIE]
    return test_client, service, session_id


def give(service, session_id, **fields):
    game_state = service.get_game_state(session_id)
    fields.setdefault("name", "Sword")
    fields.setdefault("type", "base_item")
    fields.setdefault("rarity", "common")
    return service.storage.create_fragment(game_state.id, FragmentDraft(**fields))


class TestRootEndpoints:
    """Tests for root endpoints."""

    def test_root(self):
        """Test root endpoint."""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["name"] == "Voidspinner API"

    def test_health(self):
        """Test health check endpoint."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestSessionRoutes:
    """Tests for session handling."""

    def test_gamestate_creates_session(self, make_client):
        test_client, _ = make_client()

        response = test_client.get("/api/gamestate")

        assert response.status_code == 200
        assert settings.SESSION_COOKIE in response.cookies
        data = response.json()
        assert data["flux"] == 1000
        assert data["total_spins"] == 0
        assert data["device_level"] == 1

    def test_gamestate_is_stable(self, player):
        test_client, _, session_id = player

        data = test_client.get("/api/gamestate").json()

        assert data["user_id"] == session_id

    @pytest.mark.parametrize(
        "method,path",
        [
            ("post", "/api/spin"),
            ("get", "/api/fragments"),
            ("get", "/api/device"),
            ("post", "/api/upgrade/spin_speed"),
            ("post", "/api/fragments/abc/shatter"),
        ],
    )
    def test_requires_session(self, make_client, method, path):
        test_client, _ = make_client()
        response = getattr(test_client, method)(path)
        assert response.status_code == 401


class TestSpinRoutes:
    """Tests for spinning."""

    def test_spin(self, player):
        test_client, _, _ = player

        response = test_client.post("/api/spin")

        assert response.status_code == 200
        data = response.json()
        assert data["flux_spent"] == 25
        assert data["fragment"]["type"] in ("base_item", "component", "modifier", "blueprint")
        assert data["fragment"]["affixes"] == []

        assert test_client.get("/api/gamestate").json()["flux"] == 975
        fragments = test_client.get("/api/fragments").json()
        assert [f["id"] for f in fragments] == [data["fragment"]["id"]]

    def test_spin_insufficient_flux(self, make_client):
        test_client, _ = make_client(starting_flux=10)
        test_client.get("/api/gamestate")

        response = test_client.post("/api/spin")

        assert response.status_code == 400
        assert "Insufficient flux" in response.json()["detail"]


class TestLiquidationRoutes:
    """Tests for shatter and sell."""

    def test_shatter(self, player):
        test_client, service, session_id = player
        fragment = give(service, session_id, rarity="epic")

        response = test_client.post(f"/api/fragments/{fragment.id}/shatter")

        assert response.status_code == 200
        assert response.json()["flux_gained"] == 100
        assert test_client.get("/api/fragments").json() == []

    def test_shatter_missing(self, player):
        test_client, _, _ = player
        assert test_client.post("/api/fragments/missing/shatter").status_code == 404

    def test_sell(self, player):
        test_client, service, session_id = player
        fragment = give(service, session_id, type="modifier", rarity="rare")

        response = test_client.post("/api/sell", json={"fragment_id": fragment.id})

        assert response.status_code == 200
        assert response.json()["flux_gained"] == 300
        assert test_client.get("/api/gamestate").json()["flux"] == 1300

    def test_sell_missing(self, player):
        test_client, _, _ = player
        response = test_client.post("/api/sell", json={"fragment_id": "missing"})
        assert response.status_code == 404

    def test_sell_requires_body(self, player):
        test_client, _, _ = player
        assert test_client.post("/api/sell", json={}).status_code == 422

    def test_marketplace(self, make_client):
        test_client, _ = make_client()

        response = test_client.get("/api/marketplace")

        assert response.status_code == 200
        listings = response.json()
        assert len(listings) == 11
        assert {"component-common", "base_item-epic"} <= {item["id"] for item in listings}


class TestDeviceRoutes:
    """Tests for device upgrades."""

    def test_upgrade(self, player):
        test_client, _, _ = player

        response = test_client.post("/api/upgrade/spin_speed")

        assert response.status_code == 200
        data = response.json()
        assert data["spin_speed_level"] == 2
        assert data["flux"] == 500

    def test_upgrade_camel_case_id(self, player):
        test_client, _, _ = player

        response = test_client.post("/api/upgrade/spinSpeed")

        assert response.status_code == 200
        assert response.json()["spin_speed_level"] == 2

    def test_invalid_upgrade(self, player):
        test_client, _, _ = player
        response = test_client.post("/api/upgrade/warp_drive")
        assert response.status_code == 400

    def test_upgrade_insufficient_flux(self, player):
        test_client, _, _ = player
        response = test_client.post("/api/upgrade/mutation_slots")
        assert response.status_code == 400

    def test_device(self, player):
        test_client, _, _ = player

        response = test_client.get("/api/device")

        assert response.status_code == 200
        data = response.json()
        assert data["spin_cost"] == 25
        assert data["stats"]["mutation_slots"] == 3
        assert data["upgrade_costs"]["spin_speed"] == 500


class TestMutationRoutes:
    """Tests for mutation routes."""

    @pytest.fixture
    def inputs(self, player):
        test_client, service, session_id = player
        base = give(service, session_id, base_stats={"power": 10})
        component = give(
            service,
            session_id,
            name="Crystal Shard",
            type="component",
            base_stats={"enhancement": 8},
            implicit_mods=[ImplicitMod(name="Increased Speed", value=10)],
        )
        return test_client, base, component

    def test_preview(self, inputs):
        test_client, base, component = inputs

        response = test_client.post(
            "/api/mutate/preview",
            json={"base_fragment_id": base.id, "component_fragment_ids": [component.id]},
        )

        assert response.status_code == 200
        assert response.json() == {
            "flux_cost": 250,
            "success_rate": 85,
            "max_components": 3,
            "can_afford": True,
        }

    def test_mutate(self, inputs):
        test_client, base, component = inputs

        response = test_client.post(
            "/api/mutate",
            json={"base_fragment_id": base.id, "component_fragment_ids": [component.id]},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["consumed_fragments"] == [base.id, component.id]
        assert data["result_fragment"]["name"] == "Mutated Sword"
        assert data["result_fragment"]["affixes"][0]["name"] == "Crystal Shard - Increased Speed"
        assert data["result_fragment"]["affixes"][0]["value"] == 7
        assert test_client.get("/api/gamestate").json()["flux"] == 750

    def test_mutate_without_components(self, inputs):
        test_client, base, _ = inputs

        response = test_client.post("/api/mutate", json={"base_fragment_id": base.id})

        assert response.status_code == 400
        assert len(test_client.get("/api/fragments").json()) == 2

    def test_mutate_missing_component(self, inputs):
        test_client, _, component = inputs

        response = test_client.post(
            "/api/mutate",
            json={"base_fragment_id": component.id, "component_fragment_ids": ["other"]},
        )

        assert response.status_code == 404

    def test_mutate_requires_session(self, make_client):
        test_client, _ = make_client()
        response = test_client.post(
            "/api/mutate", json={"base_fragment_id": "a", "component_fragment_ids": ["b"]}
        )
        assert response.status_code == 401

    def test_mutate_wrong_base_type(self, inputs):
        test_client, base, component = inputs

        response = test_client.post(
            "/api/mutate",
            json={"base_fragment_id": component.id, "component_fragment_ids": [base.id]},
        )

        assert response.status_code == 400
        assert "base item" in response.json()["detail"]
        assert len(test_client.get("/api/fragments").json()) == 2
