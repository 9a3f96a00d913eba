import numpy as np
import pytest

from lazycomb import EnumerationConfig, InvalidArgumentError


def test_config_defaults():
    cfg = EnumerationConfig().normalized()
    assert cfg.output == "list"
    assert cfg.dtype is None
    assert cfg.replay_one_shot_lanes is True


def test_config_normalizes_case_and_dtype():
    cfg = EnumerationConfig(output="ARRAY", dtype="float64").normalized()
    assert cfg.output == "array"
    assert cfg.dtype == np.dtype("float64")


def test_config_rejects_unknown_output():
    with pytest.raises(InvalidArgumentError):
        EnumerationConfig(output="set").normalized()


def test_config_rejects_dtype_without_array_output():
    with pytest.raises(ValueError):
        EnumerationConfig(output="list", dtype="int32").normalized()


def test_config_rejects_bad_dtype():
    with pytest.raises(InvalidArgumentError):
        EnumerationConfig(output="array", dtype="not-a-dtype").normalized()
