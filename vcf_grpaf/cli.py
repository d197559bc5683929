"""Command line interface for vcf_grpaf.

Current subcommands:
	annotate – add per-group AF / MAF / AC / AN / genotype counts / HWE INFO fields
	report   – summarise and plot the group annotations of an annotated VCF

Example:
	vcf_grpaf annotate -i input.vcf.gz -o annotated.vcf -l labels.tsv -t AF,MAF,AN
	vcf_grpaf report --vcf annotated.vcf -l labels.tsv --out report_dir
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import ALL_TAGS_SENTINEL, LOG_DATEFMT, LOG_FORMAT, STDIO_PATH, AnnotateConfig
from .core import GroupAnnotator, StatTag, annotate_header, annotate_records, check_label_consistency
from .exceptions import GrpafError
from .io import SimpleVCFReader, VCFWriter, load_labels

logger = logging.getLogger("vcf_grpaf")


def setup_logging(debug: bool = False) -> None:
	"""Configure root logging on stderr (stdout may carry the VCF)."""
	logging.basicConfig(
		stream=sys.stderr,
		level=logging.DEBUG if debug else logging.INFO,
		format=LOG_FORMAT,
		datefmt=LOG_DATEFMT,
		force=True,
	)


def cmd_annotate(args: argparse.Namespace) -> int:
	cfg = AnnotateConfig.from_args(args)
	membership = load_labels(cfg.labels)

	with SimpleVCFReader(cfg.input) as reader:
		check_label_consistency(reader.samples, membership, strict=cfg.strict, log=logger)
		annotator = GroupAnnotator(reader.samples, membership, cfg.tags, logger=logger)
		logger.info(
			"Annotating %d tag(s) for %d group(s) over %d samples",
			len(cfg.tags), len(annotator.groups), len(reader.samples),
		)
		meta_lines = annotate_header(reader.meta_lines, annotator.descriptors, log=logger)
		with VCFWriter(cfg.output) as writer:
			writer.write_header(meta_lines, reader.header_line)
			for rec in annotate_records(reader, annotator, log=logger):
				writer.write(rec)
	logger.info("Finished vcf_grpaf: %s variants annotated", f"{writer.records_written:,}")
	return 0


def cmd_report(args: argparse.Namespace) -> int:
	from .metrics import group_site_table, summarize_groups
	from .plot import (
		plot_af_distribution_by_group,
		plot_maf_distribution_by_group,
		plot_genotype_composition,
	)

	outdir = Path(args.out)
	outdir.mkdir(parents=True, exist_ok=True)
	groups = sorted(load_labels(args.labels))

	with SimpleVCFReader(args.vcf, max_records=args.max_site) as reader:
		site_df = group_site_table(reader, groups)
	summary_df = summarize_groups(site_df)

	site_df.to_csv(outdir / 'group_site_metrics.tsv', sep='\t', index=False)
	summary_df.to_csv(outdir / 'group_summary.tsv', sep='\t', index=False)
	logger.info("Group tables written to %s", outdir)

	if site_df.empty:
		logger.warning("No site records found; skipping plots")
		return 0
	if 'AF' in site_df.columns:
		plot_af_distribution_by_group(site_df, output_path=str(outdir / 'group_af_distribution.png'))
	if 'MAF' in site_df.columns:
		plot_maf_distribution_by_group(
			site_df, output_path=str(outdir / 'group_maf_distribution.png'), min_value=args.maf_plot_min,
		)
	if any(c.startswith('N_') for c in summary_df.columns):
		plot_genotype_composition(summary_df, output_path=str(outdir / 'group_genotype_composition.png'))
	logger.info("Group-level plots written to %s", outdir)
	return 0


def build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(prog="vcf_grpaf", description="Per-group allele frequency annotation for VCFs")
	p.add_argument("--debug", action="store_true", help="Verbose logging")
	sub = p.add_subparsers(dest="command")

	tag_labels = ",".join(t.label for t in StatTag)
	sp = sub.add_parser("annotate", help="Add per-group statistics to each VCF record")
	sp.add_argument("-i", "--input", default=STDIO_PATH, help="Input VCF or VCF.GZ file ('-' for stdin)")
	sp.add_argument("-o", "--output", default=STDIO_PATH, help="Output VCF ('-' for stdout; .gz is gzip-compressed)")
	sp.add_argument("-l", "--labels", required=True, help="Tab-delimited file of sample and group, no header")
	sp.add_argument("-t", "--tags", default=ALL_TAGS_SENTINEL,
		help=f"Comma-separated list of tags from {tag_labels} or '{ALL_TAGS_SENTINEL}' (default: %(default)s)")
	sp.add_argument("--strict", action="store_true", help="Exit if a sample listed in labels is not in the VCF")
	sp.add_argument("--debug", action="store_true", default=argparse.SUPPRESS, help="Verbose logging")
	sp.set_defaults(func=cmd_annotate)

	sp2 = sub.add_parser("report", help="Per-group summary tables and plots from an annotated VCF")
	sp2.add_argument("--vcf", required=True, help="Annotated VCF or VCF.GZ file")
	sp2.add_argument("-l", "--labels", required=True, help="Label file used for annotation (defines the groups)")
	sp2.add_argument("--out", required=True, help="Output directory for tables and plots")
	sp2.add_argument("--max-site", type=int, default=None, help="Limit number of variant sites parsed (debug)")
	sp2.add_argument("--maf-plot-min", type=float, default=0.0, help="Minimum MAF value to include in MAF plots (default: 0.0)")
	sp2.set_defaults(func=cmd_report)
	return p


def main(argv=None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)
	if not hasattr(args, 'func'):
		parser.print_help()
		return 1
	setup_logging(getattr(args, 'debug', False))
	try:
		return args.func(args)
	except GrpafError as exc:
		logger.error("%s", exc)
		return 1


if __name__ == "__main__":  # pragma: no cover
	sys.exit(main())
