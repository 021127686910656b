"""
Tests for PersistenceGateway

Round trips run against a real SQLite store; failure modes use stub
repositories.
"""
import asyncio
import time
from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError

from domain.errors import StoreTimeout, StoreUnavailable, Unauthenticated
from domain.models import Configuration, Principal
from services.configuration_service import create_default, select_color, select_model, select_trim
from services.persistence_gateway import PersistenceGateway


class _SlowRepo:
    def __init__(self, delay):
        self.delay = delay

    def create_build(self, config, owner_id):
        time.sleep(self.delay)
        return "late"

    def find_by_owner(self, owner_id):
        time.sleep(self.delay)
        return []


class TestSave:
    def test_save_without_principal_writes_nothing(self, gateway, store):
        with pytest.raises(Unauthenticated):
            asyncio.run(gateway.save(create_default(), None))
        assert store.query("builds", {}) == []

    def test_save_returns_record_id(self, gateway, alice):
        record_id = asyncio.run(gateway.save(create_default(), alice))
        assert isinstance(record_id, str) and record_id

    def test_identical_saves_create_two_records(self, gateway, alice):
        config = select_color(create_default(), "#32D74B")

        async def scenario():
            first = await gateway.save(config, alice)
            second = await gateway.save(config, alice)
            return first, second, await gateway.list_for_owner(alice.principal_id)

        first, second, builds = asyncio.run(scenario())

        assert first != second
        assert len(builds) == 2
        assert {b.record_id for b in builds} == {first, second}

    def test_round_trip_preserves_fields(self, gateway, alice):
        config = select_trim(select_model(create_default(), "supercar"), "interior", "Tan")

        async def scenario():
            record_id = await gateway.save(config, alice)
            return record_id, await gateway.list_for_owner(alice.principal_id)

        record_id, builds = asyncio.run(scenario())
        (build,) = builds

        assert build.record_id == record_id
        assert build.owner_id == alice.principal_id
        assert build.model_key == config.model_key
        assert build.color_value == config.color_value
        assert dict(build.trim_slots) == {"interior": "Tan"}

    def test_owner_id_comes_from_principal(self, gateway, alice):
        # An owner id already on the configuration is ignored
        config = create_default()
        config = type(config)(config.model_key, config.color_value, {}, owner_id="someone-else")

        asyncio.run(gateway.save(config, alice))
        builds = asyncio.run(gateway.list_for_owner(alice.principal_id))

        assert len(builds) == 1
        assert asyncio.run(gateway.list_for_owner("someone-else")) == []

    def test_store_failure_maps_to_store_unavailable(self, alice):
        repo = Mock()
        repo.create_build.side_effect = OperationalError("INSERT", {}, Exception("disk I/O error"))
        gateway = PersistenceGateway(repo)

        with pytest.raises(StoreUnavailable):
            asyncio.run(gateway.save(create_default(), alice))
        repo.create_build.assert_called_once()

    def test_slow_store_maps_to_store_timeout(self, alice):
        gateway = PersistenceGateway(_SlowRepo(0.3), timeout=0.05)
        with pytest.raises(StoreTimeout):
            asyncio.run(gateway.save(create_default(), alice))

    def test_timeout_bounds_total_wait(self, alice):
        # The hung store thread must not hold up the caller once the timeout fires
        gateway = PersistenceGateway(_SlowRepo(2.0), timeout=0.05)

        start = time.perf_counter()
        with pytest.raises(StoreTimeout):
            asyncio.run(gateway.save(create_default(), alice))
        elapsed = time.perf_counter() - start

        assert elapsed < 1.0

    def test_caller_errors_are_not_store_errors(self, alice):
        repo = Mock()
        repo.create_build.side_effect = TypeError("bad argument")
        gateway = PersistenceGateway(repo)

        with pytest.raises(TypeError):
            asyncio.run(gateway.save(create_default(), alice))

    def test_string_keyed_configuration_saves(self, gateway, alice):
        asyncio.run(gateway.save(Configuration("muscle", "#1a1a1a"), alice))
        (build,) = asyncio.run(gateway.list_for_owner(alice.principal_id))
        assert build.model_key.value == "muscle"


class TestListForOwner:
    def test_empty_list_for_new_owner(self, gateway):
        assert asyncio.run(gateway.list_for_owner("new-user")) == []

    def test_owner_scoping(self, gateway, alice, bob):
        async def scenario():
            await gateway.save(create_default(), alice)
            await gateway.save(select_color(create_default(), "#007AFF"), bob)
            return (
                await gateway.list_for_owner(alice.principal_id),
                await gateway.list_for_owner(bob.principal_id),
            )

        mine, theirs = asyncio.run(scenario())

        assert [b.owner_id for b in mine] == [alice.principal_id]
        assert [b.color_value for b in theirs] == ["#007AFF"]

    def test_empty_principal_id_rejected(self, gateway):
        with pytest.raises(ValueError):
            asyncio.run(gateway.list_for_owner(""))

    def test_slow_list_times_out(self):
        gateway = PersistenceGateway(_SlowRepo(0.3), timeout=0.05)
        with pytest.raises(StoreTimeout):
            asyncio.run(gateway.list_for_owner("p"))

    def test_list_timeout_bounds_total_wait(self):
        gateway = PersistenceGateway(_SlowRepo(2.0), timeout=0.05)

        start = time.perf_counter()
        with pytest.raises(StoreTimeout):
            asyncio.run(gateway.list_for_owner("p"))

        assert time.perf_counter() - start < 1.0

    def test_list_failure_maps_to_store_unavailable(self):
        repo = Mock()
        repo.find_by_owner.side_effect = ConnectionError("offline")
        with pytest.raises(StoreUnavailable):
            asyncio.run(PersistenceGateway(repo).list_for_owner("p"))

    def test_concurrent_save_and_list(self, gateway, alice):
        async def scenario():
            return await asyncio.gather(
                gateway.save(create_default(), alice),
                gateway.list_for_owner(alice.principal_id),
            )

        record_id, builds = asyncio.run(scenario())
        # The list may or may not include the concurrent save, but never anything else
        assert [b.record_id for b in builds] in ([], [record_id])


class TestConstruction:
    def test_timeout_must_be_positive(self):
        with pytest.raises(ValueError):
            PersistenceGateway(Mock(), timeout=0)

    def test_principal_only_needs_an_id(self, gateway):
        record_id = asyncio.run(gateway.save(create_default(), Principal("bare")))
        assert record_id
