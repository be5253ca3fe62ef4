"""
Command line entrypoint for the path labeler (GitHub Action or local run).
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from .api import PathLabeler
from .config import AppConfig, ConfigManager
from .errors import LabelerError
from .github.context import LabelerContext


logger = logging.getLogger(__name__)


class ExitCode:
    ok = 0
    failed = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="path-labeler",
        description="Label a pull request from the paths it changes.",
    )
    parser.add_argument("--config-file", help="YAML application config (defaults to environment)")
    parser.add_argument("--configuration-path", help="Path of the labeler policy inside the repository")
    parser.add_argument("--sync-labels", action="store_true", default=None,
                        help="Remove labels whose globs no longer match")
    parser.add_argument("--repo", help="owner/name (defaults to GITHUB_REPOSITORY)")
    parser.add_argument("--pr", type=int, help="Pull request number (defaults to the event payload)")
    parser.add_argument("--sha", help="Commit to read the policy from (defaults to GITHUB_SHA)")
    parser.add_argument("--dry-run", action="store_true", default=None,
                        help="Compute labels without changing the pull request")
    return parser


def resolve_config(args: argparse.Namespace) -> AppConfig:
    """Load the app config and apply command line overrides."""
    config = AppConfig.from_yaml(args.config_file) if args.config_file else AppConfig.from_env()

    labeler = config.labeler
    if args.configuration_path:
        labeler = replace(labeler, configuration_path=args.configuration_path)
    if args.sync_labels:
        labeler = replace(labeler, sync_labels=True)
    if args.dry_run:
        labeler = replace(labeler, dry_run=True)
    return replace(config, labeler=labeler)


def resolve_context(args: argparse.Namespace) -> LabelerContext:
    """Build the run context from the environment and command line overrides."""
    if args.repo:
        owner, repo = LabelerContext.split_repository(args.repo)
        return LabelerContext(owner=owner, repo=repo, sha=args.sha, pr_number=args.pr)

    context = LabelerContext.from_env()
    if args.pr or args.sha:
        context = replace(
            context,
            pr_number=args.pr or context.pr_number,
            sha=args.sha or context.sha,
        )
    return context


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = resolve_config(args)
        ConfigManager(config)
        context = resolve_context(args)
        result = PathLabeler(config).run(context)
    except (LabelerError, ValueError, FileNotFoundError) as e:
        logger.error(f"Labeling failed: {e}")
        # Actions error annotation
        print(f"::error::{e}")
        return ExitCode.failed

    if result is None:
        return ExitCode.ok

    print(f"added: {', '.join(result.labels_added) or 'none'}")
    print(f"removed: {', '.join(result.labels_removed) or 'none'}")
    return ExitCode.ok


if __name__ == "__main__":
    sys.exit(main())
