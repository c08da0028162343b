import pytest

from piloom.config import Settings, available_cpus, resolve_digits, resolve_workers
from piloom.errors import InvalidInputError


def test_defaults():
    s = Settings()
    assert s.default_digits == 1000
    assert s.max_workers == 32
    assert resolve_digits(None) == 1000
    assert resolve_digits(None, Settings(default_digits=7)) == 7


def test_default_workers_capped():
    assert 1 <= resolve_workers(None) <= 32
    assert resolve_workers(None, Settings(max_workers=1)) == 1
    assert resolve_workers(None, Settings(max_workers=2)) == min(2, available_cpus())


def test_explicit_values_pass_through():
    assert resolve_digits(5) == 5
    assert resolve_workers(3) == 3


@pytest.mark.parametrize("bad", [0, -4, 1.0, True])
def test_explicit_values_must_be_positive_integers(bad):
    with pytest.raises(InvalidInputError):
        resolve_workers(bad)
    with pytest.raises(InvalidInputError):
        resolve_digits(bad)


def test_settings_are_frozen():
    with pytest.raises(Exception):
        Settings().max_workers = 4
