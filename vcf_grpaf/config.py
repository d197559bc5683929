"""Run configuration and package-wide constants."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, TYPE_CHECKING
import argparse

if TYPE_CHECKING:  # pragma: no cover
    from .core.tags import StatTag

# Tag selection value meaning "every statistic".
ALL_TAGS_SENTINEL = "all"

# ExcHet flag is raised (0) when the approximate p-value drops below this.
EXC_HET_P_THRESHOLD = 1e-6

# Variants between two progress log lines.
PROGRESS_INTERVAL = 10000

# Path standing for stdin / stdout.
STDIO_PATH = "-"

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
LOG_DATEFMT = "%H:%M:%S"


@dataclass(frozen=True)
class AnnotateConfig:
    """Settings of one ``annotate`` run.

    Attributes
    ----------
    input, output : str
        VCF paths; ``-`` means stdin / stdout.
    labels : str
        Two-column ``sample<TAB>group`` file.
    tags : tuple of StatTag
        Statistics to write, in canonical order.
    strict : bool
        Abort when a labelled sample is absent from the VCF.
    debug : bool
        Verbose logging.
    """

    input: str
    output: str
    labels: str
    tags: Tuple["StatTag", ...]
    strict: bool = False
    debug: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "AnnotateConfig":
        """Build from the ``annotate`` subcommand namespace.

        Raises ``ConfigError`` for an unknown tag selection.
        """
        from .core.tags import parse_tag_selection

        return cls(
            input=args.input,
            output=args.output,
            labels=args.labels,
            tags=parse_tag_selection(args.tags),
            strict=bool(args.strict),
            debug=bool(args.debug),
        )


__all__ = [
    "ALL_TAGS_SENTINEL",
    "EXC_HET_P_THRESHOLD",
    "PROGRESS_INTERVAL",
    "STDIO_PATH",
    "LOG_FORMAT",
    "LOG_DATEFMT",
    "AnnotateConfig",
]
