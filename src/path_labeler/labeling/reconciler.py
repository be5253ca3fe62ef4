"""
Label Reconciler

Compares the labels a policy asks for against the labels a pull request
currently carries.
"""

import logging
from typing import Iterable, Sequence

from ..matching.evaluator import all_files_match, compile_patterns
from ..models.policy import Policy, ReconciliationResult


logger = logging.getLogger(__name__)


def reconcile(
    policy: Policy,
    changed_files: Sequence[str],
    current_labels: Iterable[str]
) -> ReconciliationResult:
    """
    Compute labels to add and labels to remove.

    A label whose patterns cover every changed file is always added, even if
    the pull request already has it. A label that does not match is removed
    only if it is currently present.

    Args:
        policy: Label -> patterns mapping
        changed_files: Paths modified by the pull request
        current_labels: Label names on the pull request now

    Returns:
        ReconciliationResult with labels in policy order
    """
    present = set(current_labels)
    to_add = []
    to_remove = []

    for label, patterns in policy.items():
        logger.debug(f"processing {label}")
        if all_files_match(changed_files, compile_patterns(patterns)):
            to_add.append(label)
        elif label in present:
            to_remove.append(label)

    logger.info(f"Reconciled {len(policy)} labels: add={to_add}, remove={to_remove}")
    return ReconciliationResult(to_add=tuple(to_add), to_remove=tuple(to_remove))
