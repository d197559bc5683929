import pytest

from vcf_grpaf.core.stats import aggregate_calls
from vcf_grpaf.core.hwe import apply_hwe
from vcf_grpaf.core.tags import (
    HeaderBuilder,
    StatTag,
    build_descriptors,
    parse_tag_selection,
    requires_hwe,
    tag_values,
)
from vcf_grpaf.exceptions import ConfigError


def test_all_selection_in_canonical_order():
    tags = parse_tag_selection("all")
    assert [t.label for t in tags] == [
        "AF", "MAF", "MAC", "AC", "AN", "N_HEMI", "N_MISS",
        "N_HOMREF", "N_HET", "N_HOMALT", "ExcHet", "HWE",
    ]


def test_selection_is_deduplicated_and_ordered():
    tags = parse_tag_selection("AN, AF,AN")
    assert tags == (StatTag.AF, StatTag.AN)


@pytest.mark.parametrize("sel", ["AF,BOGUS", "", " , "])
def test_bad_selection(sel):
    with pytest.raises(ConfigError):
        parse_tag_selection(sel)


def test_requires_hwe():
    assert requires_hwe([StatTag.AF, StatTag.HWE])
    assert requires_hwe([StatTag.ExcHet])
    assert not requires_hwe([StatTag.AF, StatTag.AC])


def test_types_and_numbers():
    assert (StatTag.AC.number, StatTag.AC.vcf_type) == ("A", "Integer")
    assert (StatTag.MAC.number, StatTag.MAC.vcf_type) == ("A", "Integer")
    assert (StatTag.AF.number, StatTag.AF.vcf_type) == ("1", "Float")
    assert (StatTag.HWE.number, StatTag.HWE.vcf_type) == ("1", "Float")
    assert StatTag.ExcHet.vcf_type == "Integer"
    assert StatTag.N_MISS.number == "1"


def test_descriptors_per_group_and_tag():
    descs = build_descriptors([StatTag.AF, StatTag.AC], {"EUR": ["a", "b", "c"], "AFR": ["d"]})
    assert [d.id for d in descs] == ["AF_AFR", "AC_AFR", "AF_EUR", "AC_EUR"]
    assert descs[3].header_line() == (
        '##INFO=<ID=AC_EUR,Number=A,Type=Integer,Description="Allele Count on 3 EUR samples">'
    )
    assert "1 AFR samples" in descs[0].description


def test_builder_is_frozen_after_finalize():
    b = HeaderBuilder()
    b.add(StatTag.AF, "G", 2)
    final = b.finalize()
    assert b.finalize() is final
    with pytest.raises(RuntimeError):
        b.add(StatTag.AN, "G", 2)


def test_tag_values_are_typed():
    st = apply_hwe(aggregate_calls([(0, 1), (1, 1)]))
    values = tag_values(st, "G1", parse_tag_selection("all"))
    assert values["AC_G1"] == 3 and isinstance(values["AC_G1"], int)
    assert values["AN_G1"] == 4
    assert values["AF_G1"] == 0.75 and isinstance(values["AF_G1"], float)
    assert values["MAF_G1"] == 0.25
    assert values["MAC_G1"] == 1
    assert values["N_HET_G1"] == 1
    assert values["N_HOMALT_G1"] == 1
    assert values["N_HOMREF_G1"] == 0
    assert isinstance(values["ExcHet_G1"], int)
    assert isinstance(values["HWE_G1"], float)
    assert list(values)[0] == "AF_G1"


def test_hwe_tag_without_hwe_step_errors():
    st = aggregate_calls([(0, 1)])
    with pytest.raises(ValueError):
        tag_values(st, "G1", [StatTag.HWE])
