import pytest

from vcf_grpaf import cli

RECORDS = [
    ("chr1", 100, "DP=10", ["0/1", "1/1", "0/0", "./."]),
    ("chr1", 200, ".", ["0/0", "0", "0/1", "1/1"]),
]


@pytest.fixture(autouse=True)
def no_global_logging(monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda debug=False: None)


def read_body(path):
    with open(path) as fh:
        lines = fh.read().splitlines()
    meta = [ln for ln in lines if ln.startswith("##")]
    body = [ln.split("\t") for ln in lines if not ln.startswith("#")]
    return meta, body


def test_annotate_end_to_end(tmp_path, write_vcf, labels_file):
    vcf = write_vcf(RECORDS)
    labels = labels_file([("A", "G1"), ("B", "G1"), ("C", "G2"), ("D", "G2")])
    out = tmp_path / "out.vcf"
    rc = cli.main(["annotate", "-i", vcf, "-o", str(out), "-l", labels, "-t", "AF,AC,AN,N_HEMI"])
    assert rc == 0
    meta, body = read_body(out)
    ids = [ln.split(",")[0] for ln in meta if ln.startswith("##INFO=<ID=") and "_G" in ln]
    assert ids == [
        "##INFO=<ID=AF_G1", "##INFO=<ID=AC_G1", "##INFO=<ID=AN_G1", "##INFO=<ID=N_HEMI_G1",
        "##INFO=<ID=AF_G2", "##INFO=<ID=AC_G2", "##INFO=<ID=AN_G2", "##INFO=<ID=N_HEMI_G2",
    ]
    assert body[0][7] == "DP=10;AF_G1=0.75;AC_G1=3;AN_G1=4;N_HEMI_G1=0;AF_G2=0;AC_G2=0;AN_G2=2;N_HEMI_G2=0"
    assert body[1][7] == "AF_G1=0;AC_G1=0;AN_G1=3;N_HEMI_G1=1;AF_G2=0.75;AC_G2=3;AN_G2=4;N_HEMI_G2=0"


def test_annotate_all_tags_count(tmp_path, write_vcf, labels_file):
    vcf = write_vcf(RECORDS)
    labels = labels_file([("A", "G1"), ("C", "G1")])
    out = tmp_path / "out.vcf"
    assert cli.main(["annotate", "-i", vcf, "-o", str(out), "-l", labels]) == 0
    _, body = read_body(out)
    info = dict(kv.split("=") for kv in body[1][7].split(";"))
    assert len(info) == 12
    assert info["N_HET_G1"] == "1"
    assert info["ExcHet_G1"] in ("0", "1")


def test_strict_mode_aborts_before_output(tmp_path, write_vcf, labels_file):
    vcf = write_vcf(RECORDS)
    labels = labels_file([("A", "G1"), ("NOPE", "G1")])
    out = tmp_path / "out.vcf"
    rc = cli.main(["annotate", "-i", vcf, "-o", str(out), "-l", labels, "--strict"])
    assert rc == 1
    assert not out.exists()


def test_lenient_mode_ignores_unknown_samples(tmp_path, write_vcf, labels_file):
    vcf = write_vcf(RECORDS)
    labels = labels_file([("A", "G1"), ("NOPE", "G1")])
    out = tmp_path / "out.vcf"
    assert cli.main(["annotate", "-i", vcf, "-o", str(out), "-l", labels, "-t", "AN"]) == 0
    meta, body = read_body(out)
    assert any('Description="Total number of alleles in called genotypes on 2 G1 samples"' in ln for ln in meta)
    assert body[0][7] == "DP=10;AN_G1=2"


def test_unknown_tag_fails(tmp_path, write_vcf, labels_file):
    vcf = write_vcf(RECORDS)
    labels = labels_file([("A", "G1")])
    assert cli.main(["annotate", "-i", vcf, "-o", str(tmp_path / "o.vcf"), "-l", labels, "-t", "AF,XX"]) == 1


def test_multiallelic_call_fails(tmp_path, write_vcf, labels_file):
    vcf = write_vcf([("chr1", 100, ".", ["0/2", "0/0", "0/0", "0/0"])])
    labels = labels_file([("A", "G1")])
    assert cli.main(["annotate", "-i", vcf, "-o", str(tmp_path / "o.vcf"), "-l", labels]) == 1


def test_stdout_output(capsys, write_vcf, labels_file):
    vcf = write_vcf(RECORDS[:1])
    labels = labels_file([("A", "G1")])
    assert cli.main(["annotate", "-i", vcf, "-l", labels, "-t", "AN"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[-1].split("\t")[7] == "DP=10;AN_G1=2"


def test_no_command_prints_help(capsys):
    assert cli.main([]) == 1
    assert "annotate" in capsys.readouterr().out


def test_report(tmp_path, write_vcf, labels_file):
    vcf = write_vcf(RECORDS)
    labels = labels_file([("A", "G1"), ("B", "G1"), ("C", "G2"), ("D", "G2")])
    annotated = tmp_path / "ann.vcf"
    assert cli.main(["annotate", "-i", vcf, "-o", str(annotated), "-l", labels]) == 0
    outdir = tmp_path / "report"
    assert cli.main(["report", "--vcf", str(annotated), "-l", labels, "--out", str(outdir)]) == 0
    for name in ("group_site_metrics.tsv", "group_summary.tsv", "group_af_distribution.png",
                 "group_maf_distribution.png", "group_genotype_composition.png"):
        assert (outdir / name).exists(), name


def test_undecodable_input_fails(tmp_path, write_vcf, labels_file):
    vcf = write_vcf([("chr1", 100, "NOTE=x", ["0/1", "0/0", "0/0", "0/0"])])
    with open(vcf, "rb") as fh:
        raw = fh.read().replace(b"NOTE=x", b"NOTE=\xff\xfe")
    with open(vcf, "wb") as fh:
        fh.write(raw)
    labels = labels_file([("A", "G1")])
    assert cli.main(["annotate", "-i", vcf, "-o", str(tmp_path / "o.vcf"), "-l", labels]) == 1


def test_multi_alt_record_fails(tmp_path, labels_file):
    vcf = tmp_path / "multi.vcf"
    vcf.write_text(
        "##fileformat=VCFv4.2\n"
        "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tA\n"
        "chr1\t5\t.\tA\tT,C\t.\t.\t.\tGT\t0/1\n"
    )
    labels = labels_file([("A", "G1")])
    assert cli.main(["annotate", "-i", str(vcf), "-o", str(tmp_path / "o.vcf"), "-l", labels]) == 1
