import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

SAMPLES = ["A", "B", "C", "D"]

META = [
    "##fileformat=VCFv4.2",
    "##contig=<ID=chr1>",
    '##INFO=<ID=DP,Number=1,Type=Integer,Description="Total depth">',
    '##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">',
]


def vcf_text(records, samples=SAMPLES, meta=META):
    header = "\t".join(["#CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO", "FORMAT"] + list(samples))
    lines = list(meta) + [header]
    for chrom, pos, info, gts in records:
        lines.append("\t".join([chrom, str(pos), ".", "A", "T", "50", "PASS", info, "GT"] + list(gts)))
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_vcf(tmp_path):
    def _write(records, name="in.vcf", **kwargs):
        path = tmp_path / name
        path.write_text(vcf_text(records, **kwargs))
        return str(path)
    return _write


@pytest.fixture
def labels_file(tmp_path):
    def _write(rows, name="labels.tsv"):
        path = tmp_path / name
        path.write_text("".join(f"{s}\t{g}\n" for s, g in rows))
        return str(path)
    return _write
