import asyncio

from relay.messaging.types import RelayMessageType
from relay.tests.mocks import MockConnection
from relay.tests.unit.session.helpers import assert_room_invariants, join_pair


class TestConcurrentEvents:
    async def test_concurrent_joins_admit_exactly_two(self, manager, registry):
        conns = [MockConnection() for _ in range(3)]
        for conn in conns:
            manager.register_connection(conn)

        results = await asyncio.gather(*(manager.join_room(c, "r1", f"P{i}") for i, c in enumerate(conns)))

        assert sum(r is not None for r in results) == 2
        assert sum(r is not None and r.is_host for r in results) == 1
        errors = [m for c in conns for m in c.messages_of_type(RelayMessageType.ERROR)]
        assert errors == [{"type": "ERROR", "message": "Room is full"}]
        assert_room_invariants(registry)

    async def test_join_waits_for_room_lock(self, manager, registry):
        alice, bob = await join_pair(manager)
        await manager.unregister_connection(bob)
        room = registry.get("r1")
        carol = MockConnection()
        manager.register_connection(carol)

        async with room.lock:
            task = asyncio.create_task(manager.join_room(carol, "r1", "Carol"))
            await asyncio.sleep(0)
            assert not task.done()
            assert room.member_count == 1

        result = await task
        assert result is not None
        assert result.users == ["Alice", "Carol"]
        assert alice.messages_of_type(RelayMessageType.USER_JOINED)[-1]["nickname"] == "Carol"

    async def test_join_retries_when_room_removed_while_waiting(self, manager, registry):
        stale = registry.get_or_create("r1")
        conn = MockConnection()
        manager.register_connection(conn)

        async with stale.lock:
            task = asyncio.create_task(manager.join_room(conn, "r1", "Alice"))
            await asyncio.sleep(0)
            registry.remove("r1")

        result = await task
        fresh = registry.get("r1")
        assert fresh is not stale
        assert stale.is_empty
        assert result is not None
        assert result.is_host is True
        assert conn.connection_id in fresh.participants

    async def test_leave_and_join_interleave_consistently(self, manager, registry):
        alice, bob = await join_pair(manager)
        carol = MockConnection()
        manager.register_connection(carol)

        await asyncio.gather(
            manager.unregister_connection(alice),
            manager.join_room(carol, "r1", "Carol"),
        )

        room = registry.get("r1")
        assert room is not None
        assert_room_invariants(registry)
        assert alice.connection_id not in room.participants
        assert bob.connection_id in room.participants
