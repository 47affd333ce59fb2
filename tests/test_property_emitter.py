"""Property-based tests for the emitter using Hypothesis."""
from hypothesis import given, strategies as st

from emitter.events import Emitter, InvalidKeyType, NullSink, Symbol

keys = st.one_of(
    st.text(max_size=20),
    st.integers(),
    st.builds(Symbol, st.none() | st.text(max_size=5)),
)
non_keys = st.one_of(
    st.none(),
    st.booleans(),
    st.floats(),
    st.binary(),
    st.lists(st.integers()),
    st.dictionaries(st.text(), st.integers()),
)


@given(keys, st.integers(min_value=0, max_value=20))
def test_each_listener_called_once_in_order(key, count):
    """Property: N listeners are each called exactly once, in order."""
    emitter = Emitter(sink=NullSink())
    calls = []
    for index in range(count):
        emitter.subscribe(key, lambda payload, index=index: calls.append(index))

    emitter.publish(key, None)
    assert calls == list(range(count))


@given(keys)
def test_subscribe_then_has_listener(key):
    """Property: a subscribed listener is always reported, and removal is final."""
    emitter = Emitter(sink=NullSink())

    def listener(payload):
        return None

    token = emitter.subscribe(key, listener)
    assert emitter.has_listener(key, listener)
    assert token.unsubscribe() is True
    assert token.unsubscribe() is False
    assert not emitter.has_listener(key, listener)


@given(non_keys)
def test_invalid_keys_always_rejected(key):
    """Property: non str/int/Symbol keys never reach dispatch."""
    emitter = Emitter(sink=NullSink())
    for call in (emitter.publish, lambda k: emitter.has_listener(k, print)):
        try:
            call(key)
        except InvalidKeyType:
            pass
        else:
            raise AssertionError(f"{key!r} was accepted")
