from __future__ import annotations

import dataclasses

import pytest

from timeconductor.domain.modes import FIXED_MODE, LAD_MODE, REALTIME_MODE
from timeconductor.domain.types import Bounds, Deltas, ModeKey
from timeconductor.infra.exceptions import TimeConductorError, ValidationError


@pytest.mark.parametrize("start, end", [(-1, 0), (0, -1)])
def test_negative_deltas_are_rejected(start, end):
    with pytest.raises(ValidationError):
        Deltas(start, end)


def test_validation_error_is_a_conductor_error():
    assert issubclass(ValidationError, TimeConductorError)


def test_bounds_are_immutable():
    bounds = Bounds(0, 10)

    with pytest.raises(dataclasses.FrozenInstanceError):
        bounds.end = 20  # type: ignore[misc]


def test_mode_metadata_keys_match_mode_keys():
    assert [FIXED_MODE.key, REALTIME_MODE.key, LAD_MODE.key] == [key.value for key in ModeKey]
    assert ModeKey.LAD == "LAD"
