import threading

import pytest

from estate_admin.api import BackendAPIError
from estate_admin.utils import fan_out


def test_outcomes_keep_call_order():
    outcomes = fan_out(lambda: 'a', lambda: 'b', lambda: 'c')
    assert [o.value for o in outcomes] == ['a', 'b', 'c']
    assert all(o.ok for o in outcomes)


def test_backend_errors_are_captured_per_call():
    def failing():
        raise BackendAPIError('denied')

    ok, failed = fan_out(lambda: 1, failing)
    assert ok.value == 1
    assert not failed.ok
    assert failed.error.message == 'denied'


def test_calls_run_concurrently():
    barrier = threading.Barrier(2, timeout=5)

    def wait():
        barrier.wait()
        return True

    assert [o.value for o in fan_out(wait, wait)] == [True, True]


def test_other_exceptions_propagate():
    def broken():
        raise KeyError('x')

    with pytest.raises(KeyError):
        fan_out(broken)


def test_no_calls():
    assert fan_out() == []
