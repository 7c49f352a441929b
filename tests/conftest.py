"""
Pytest fixtures for whatsbot tests
"""
import pytest

from whatsbot.core.emitter import EventEmitter


class FakeContext:
    """Recording stand-in for the browser page.

    `results` maps a script to the value `evaluate` returns for it. A
    callable value is called with the evaluation argument; an exception
    value is raised.
    """

    def __init__(self, results=None):
        self.results = dict(results or {})
        self.calls = []
        self.exposed = {}
        self.waited_functions = []
        self.waited_selectors = []
        self.closed = False

    async def evaluate(self, script, arg=None):
        self.calls.append((script, arg))
        result = self.results.get(script)
        if isinstance(result, Exception):
            raise result
        if callable(result):
            return result(arg)
        return result

    async def wait_for_function(self, predicate):
        self.waited_functions.append(predicate)
        self.calls.append(("wait_for_function", predicate))

    async def wait_for_selector(self, selector):
        self.waited_selectors.append(selector)
        self.calls.append(("wait_for_selector", selector))

    async def expose(self, name, callback):
        self.exposed[name] = callback

    async def close(self):
        self.closed = True

    def fire(self, name, *args):
        """Simulate the page calling an exposed host function."""
        return self.exposed[name](*args)

    def scripts(self):
        return [script for script, _ in self.calls]


class Recorder:
    """Collects (event, args) pairs emitted on an emitter."""

    def __init__(self, emitter, *events):
        self.events = []
        for event in events:
            emitter.on(event, self._make_handler(event))

    def _make_handler(self, event):
        def handler(*args):
            self.events.append((event.value, args))
        return handler

    def names(self):
        return [name for name, _ in self.events]


@pytest.fixture
def fake_context():
    return FakeContext()


@pytest.fixture
def emitter():
    return EventEmitter()


@pytest.fixture
def raw_message():
    """Factory for serialized message records as the page sends them."""
    def make(msg_id="ABC123", body="hello", type="chat", is_new=True, from_me=False, **extra):
        remote = "5511999999999@c.us"
        record = {
            "id": {
                "fromMe": from_me,
                "remote": remote,
                "id": msg_id,
                "_serialized": f"{str(from_me).lower()}_{remote}_{msg_id}",
            },
            "body": body,
            "type": type,
            "t": 1600000000,
            "from": remote,
            "to": "5511888888888@c.us",
            "ack": 1,
            "isNewMsg": is_new,
        }
        record.update(extra)
        return record

    return make
