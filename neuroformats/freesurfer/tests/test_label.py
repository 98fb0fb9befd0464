import numpy as np
import pytest
from numpy.testing import assert_array_equal

from ...errors import ValidationError
from ..label import LabelSet


def test_defaults():
    label = LabelSet.from_indices([4, 2, 7])
    assert label.size() == len(label) == 3
    assert label.index.dtype == np.int64
    for field in (label.x, label.y, label.z, label.value):
        assert_array_equal(field, np.zeros(3))
    label.validate()
    assert LabelSet().size() == 0


def test_validate():
    label = LabelSet([1, 2], x=[0.0, 1.0, 2.0])
    with pytest.raises(ValidationError):
        label.validate()


def test_membership():
    label = LabelSet.from_indices([4, 2, 7])
    mask = label.membership(8)
    assert mask.dtype == bool
    assert_array_equal(np.flatnonzero(mask), [2, 4, 7])
    with pytest.raises(ValidationError):
        # fewer elements than label members
        label.membership(2)
    with pytest.raises(ValidationError):
        label.membership(7)
    with pytest.raises(ValidationError):
        LabelSet.from_indices([-1]).membership(3)
    assert not LabelSet().membership(5).any()


def test_to_csv():
    label = LabelSet([3], [0.5], [1], [-2], [0.25])
    assert label.to_csv() == 'index,x,y,z,value\n3,0.5,1.0,-2.0,0.25\n'
    assert label.to_csv(with_header=False) == '3,0.5,1.0,-2.0,0.25\n'
