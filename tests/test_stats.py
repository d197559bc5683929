import itertools
import random

import pytest

from vcf_grpaf.core.stats import aggregate_calls
from vcf_grpaf.exceptions import FormatError

CALLS = [None, (0,), (1,), (0, 0), (0, 1), (1, 0), (1, 1), (0, None), (None, 1), (None, None)]


def category_total(st):
    return st.n_hemi + st.n_homref + st.n_het + st.n_homalt + st.n_miss


def test_two_sample_scenario():
    st = aggregate_calls([(0, 1), (1, 1)])
    assert st.ac == [1, 3]
    assert st.an == 4
    assert st.n_het == 1
    assert st.n_homalt == 1
    assert st.af == 0.75
    assert st.mac == 1
    assert st.maf == 0.25


def test_fully_missing_call_only_counts_missing():
    st = aggregate_calls([(None, None)])
    assert st.n_miss == 1
    assert st.an == 0
    assert st.ac == [0, 0]


def test_hemizygous_ref():
    st = aggregate_calls([(0,)])
    assert (st.an, st.ac, st.n_hemi) == (1, [1, 0], 1)


def test_half_call_counts_as_hemizygous():
    st = aggregate_calls([(0, None), (None, 1)])
    assert st.n_hemi == 2
    assert st.an == 2
    assert st.ac == [1, 1]


def test_empty_group():
    st = aggregate_calls([])
    assert st.an == 0 and st.ac == [0, 0]
    assert (st.af, st.maf, st.mac) == (0, 0, 0)
    assert category_total(st) == 0
    assert st.exc_het is None and st.hwe is None


def test_all_missing_has_zero_frequencies():
    st = aggregate_calls([None, (None, None), None])
    assert st.an == 0
    assert (st.af, st.maf, st.mac) == (0, 0, 0)
    assert st.n_miss == 3


@pytest.mark.parametrize("size", [1, 3, 7])
def test_every_call_lands_in_one_category(size):
    for combo in itertools.product(CALLS, repeat=min(size, 3)):
        calls = list(combo) * (size // len(combo) + 1)
        calls = calls[:size]
        st = aggregate_calls(calls)
        assert category_total(st) == size
        assert st.n_samples == size
        assert st.an == st.ac[0] + st.ac[1]


def test_order_independent():
    rng = random.Random(7)
    calls = [rng.choice(CALLS) for _ in range(200)]
    ref = aggregate_calls(calls)
    for _ in range(5):
        rng.shuffle(calls)
        st = aggregate_calls(calls)
        assert st == ref


def test_homref_and_maf_minor_is_ref():
    st = aggregate_calls([(0, 0), (1, 1), (1, 1)])
    assert st.n_homref == 1
    assert st.n_homalt == 2
    assert st.mac == 2
    assert st.maf == pytest.approx(2 / 6)
    assert st.af == pytest.approx(4 / 6)


@pytest.mark.parametrize("call", [(0, 2), (2,), (2, 2), (None, 3)])
def test_multiallelic_index_rejected(call):
    with pytest.raises(FormatError, match="outside the REF/ALT model"):
        aggregate_calls([(0, 1), call])
