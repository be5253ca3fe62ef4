"""
Path Labeler API

Main interface that runs one labeling pass for a pull request: collect
changed files and the labeler policy, reconcile, and apply label changes.
"""

import logging
from typing import List, Optional
from datetime import datetime
from dataclasses import dataclass, field

from .config import AppConfig
from .github.client import GitHubClient
from .github.context import LabelerContext
from .labeling.loader import load_policy
from .labeling.reconciler import reconcile
from .models.policy import Policy, ReconciliationResult
from .models.pull_request import PullRequestInfo, PullRequestFile


logger = logging.getLogger(__name__)


@dataclass
class LabelingResult:
    """Result of one labeling run."""
    repository: str
    pr_number: int
    changed_files: List[str]
    reconciliation: ReconciliationResult
    labels_added: List[str] = field(default_factory=list)
    labels_removed: List[str] = field(default_factory=list)
    removal_skipped: bool = False
    dry_run: bool = False
    processing_time: float = 0.0


class PathLabeler:
    """
    Labels pull requests from the paths they change.

    Orchestrates one run:
    1. Fetch the pull request, its changed files and the labeler policy
    2. Reconcile the policy against the current labels
    3. Add matching labels, and remove stale ones when sync-labels is on
    """

    def __init__(self, config: AppConfig, client: Optional[GitHubClient] = None):
        """
        Initialize path labeler.

        Args:
            config: Application configuration
            client: Optional preconfigured GitHub client
        """
        self.config = config
        self.client = client or GitHubClient(
            config.github.token,
            base_url=config.github.api_base_url,
            timeout=config.github.timeout_seconds,
        )

    def run(self, context: LabelerContext) -> Optional[LabelingResult]:
        """
        Run the labeler for the pull request in ``context``.

        Returns:
            LabelingResult, or None when the context has no pull request

        Raises:
            ConfigurationError: If the policy document is invalid; no label is changed
            GitHubAPIError: If a GitHub call fails
        """
        if not context.pr_number:
            logger.info("Could not get pull request number from context, exiting")
            return None

        start_time = datetime.now()
        pr_number = context.pr_number

        pull_request = PullRequestInfo.from_api(
            self.client.get_pull_request(context.owner, context.repo, pr_number)
        )
        changed_files = self.get_changed_files(context, pr_number)
        policy = self.get_policy(context)

        reconciliation = reconcile(policy, changed_files, pull_request.label_names)
        result = LabelingResult(
            repository=context.repository,
            pr_number=pr_number,
            changed_files=changed_files,
            reconciliation=reconciliation,
            dry_run=self.config.labeler.dry_run,
        )

        self.apply(context, result)

        result.processing_time = (datetime.now() - start_time).total_seconds()
        logger.info(
            f"Labeling of {context.repository}#{pr_number} finished in {result.processing_time:.2f}s "
            f"(added={result.labels_added}, removed={result.labels_removed})"
        )
        return result

    def get_changed_files(self, context: LabelerContext, pr_number: int) -> List[str]:
        """List the paths changed by a pull request."""
        files = [
            PullRequestFile(**f) for f in
            self.client.get_pull_request_files(context.owner, context.repo, pr_number)
        ]
        changed_files = [f.filename for f in files]

        logger.debug("found changed files:")
        for changed_file in changed_files:
            logger.debug(f"  {changed_file}")

        return changed_files

    def get_policy(self, context: LabelerContext) -> Policy:
        """Fetch and parse the labeler policy at the commit under test."""
        content = self.client.get_file_content(
            context.owner,
            context.repo,
            self.config.labeler.configuration_path,
            ref=context.sha,
        )
        return load_policy(content)

    def apply(self, context: LabelerContext, result: LabelingResult) -> None:
        """
        Apply a reconciliation to the pull request.

        Add and remove are independent calls; if one fails the error
        propagates and the label state is left for the next run to fix.
        """
        reconciliation = result.reconciliation
        removals = list(reconciliation.removals_to_apply(self.config.labeler.sync_labels))
        result.removal_skipped = bool(reconciliation.to_remove) and not removals

        if result.removal_skipped:
            logger.info(f"sync-labels is off, keeping labels: {list(reconciliation.to_remove)}")

        if result.dry_run:
            logger.info(f"Dry run: would add {list(reconciliation.to_add)}, would remove {removals}")
            return

        if reconciliation.to_add:
            self.client.add_labels(context.owner, context.repo, result.pr_number, list(reconciliation.to_add))
            result.labels_added = list(reconciliation.to_add)

        for label in removals:
            self.client.remove_label(context.owner, context.repo, result.pr_number, label)
            result.labels_removed.append(label)
