"""
Proof reports.

``prove_touch`` is the convenience entry point used by the command line: it
picks a prover, proves a touch and wraps the outcome in a ProofReport.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from bellproof.config import Config
from bellproof.logging import performance_monitor, track_proof
from bellproof.proving.canon import CANONS, Canon
from bellproof.proving.provers import FullProvingContext, prover_for_stage
from bellproof.touch.iterators import TouchIterator


def _canon_name(canon: Canon) -> str:
    for name, registered in CANONS.items():
        if registered is canon:
            return name
    return getattr(canon, "__name__", repr(canon))


@dataclass
class ProofReport:
    """Outcome of proving one touch."""

    length: int
    stage: int
    is_true: bool
    prover: str
    canon: str
    comes_round: bool
    full: bool = True
    falseness_groups: List[List[int]] = field(default_factory=list)

    @property
    def false_rows(self) -> int:
        """Number of rows that belong to some falseness group."""
        return sum(len(group) for group in self.falseness_groups)

    def summary(self) -> str:
        """One-line summary, e.g. ``"5040 changes, true."``."""
        text = f"{self.length} changes, {'true' if self.is_true else 'false'}"
        if not self.is_true and self.full:
            text += (
                f" ({self.false_rows} rows in "
                f"{len(self.falseness_groups)} falseness groups)"
            )
        if not self.comes_round:
            text += ", doesn't come round"
        return text + "."

    def format(self) -> str:
        """Format full report for display."""
        lines = ["=" * 60, "Proof Report", "=" * 60, ""]
        lines.append(self.summary())
        lines.append(f"Stage: {self.stage}  Prover: {self.prover}  Canon: {self.canon}")
        lines.append("")

        if self.falseness_groups:
            lines.append("Falseness groups:")
            lines.append("-" * 60)
            for group in self.falseness_groups:
                lines.append("  rows " + ", ".join(str(i) for i in group))
            lines.append("")

        lines.append("=" * 60)
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "length": self.length,
            "stage": self.stage,
            "is_true": self.is_true,
            "prover": self.prover,
            "canon": self.canon,
            "comes_round": self.comes_round,
            "full": self.full,
            "falseness_groups": [list(group) for group in self.falseness_groups],
        }


@track_proof("prove_touch")
@performance_monitor(threshold_ms=5000.0)
def prove_touch(
    touch: TouchIterator,
    canon: Optional[Canon] = None,
    prover: Optional[Union[str, FullProvingContext]] = None,
    full: bool = True,
    config: Optional[Config] = None,
) -> ProofReport:
    """
    Prove a touch and report the result.

    Args:
        touch: Row source to prove
        canon: Canonicalization policy; the prover's default if omitted
        prover: A prover instance, or a prover name for ``prover_for_stage``
        full: Find every falseness group rather than stopping at the first
        config: Configuration used when choosing a prover
    """
    if isinstance(prover, FullProvingContext):
        context = prover
    else:
        context = prover_for_stage(touch.stage(), canon, prover, config)
    canon = canon or context.canon

    if full:
        groups = context.full_prove(touch, canon)
        is_true = not groups
    else:
        groups = []
        is_true = context.is_true(touch, canon)

    return ProofReport(
        length=touch.length(),
        stage=touch.stage(),
        is_true=is_true,
        prover=type(context).__name__,
        canon=_canon_name(canon),
        comes_round=touch.leftover_change().is_rounds(),
        full=full,
        falseness_groups=groups,
    )
