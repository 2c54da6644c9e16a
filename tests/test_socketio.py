import pytest

from wordcraft import main


@pytest.fixture
def emitted(monkeypatch):
    sent = []

    async def fake_emit(event, data=None, to=None, **kwargs):
        sent.append((to, event, data))

    monkeypatch.setattr(main.sio, 'emit', fake_emit)
    return sent


async def test_socketio_room_flow(emitted):
    await main.connect('sid-a', {})
    await main.connect('sid-b', {})
    try:
        await main._typed_alias('create_room')('sid-a', {'name': 'Ann'})
        to, event, created = emitted[0]
        assert (to, event, created['type']) == ('sid-a', 'message', 'room_created')

        await main.on_message('sid-b', {'type': 'join_room', 'code': created['code']})
        to_b = [data['type'] for to, _, data in emitted if to == 'sid-b']
        assert to_b == ['room_joined', 'game_state', 'game_started']

        await main.disconnect('sid-b')
        assert emitted[-1] == ('sid-a', 'message', {'type': 'opponent_disconnected'})
        assert 'sid-b' not in main.sio_connections
    finally:
        await main.disconnect('sid-a')
        await main.janitor.stop()


async def test_messages_from_unknown_sid_are_dropped(emitted):
    await main.on_message('ghost', {'type': 'create_room'})
    assert emitted == []


async def test_app_shares_one_registry(emitted):
    assert main.coordinator.registry is main.registry
    assert main.coordinator.janitor is main.janitor
    assert main.janitor.registry is main.registry

    await main.connect('sid-c', {})
    try:
        await main.on_message('sid-c', {'type': 'create_room'})
        code = emitted[0][2]['code']
        room = main.registry.get(code)
        assert room is not None
        assert code in main.janitor.sweep(now=room.created_at + main.janitor.ttl + 1)
        assert main.registry.get(code) is None
    finally:
        await main.disconnect('sid-c')
        await main.janitor.stop()
