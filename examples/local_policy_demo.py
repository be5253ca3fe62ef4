#!/usr/bin/env python3
"""
Local Policy Demo

Evaluates a labeler policy file against a list of changed paths without
touching GitHub.

Usage:
    python examples/local_policy_demo.py <labeler.yml> <path> [<path> ...]

Example:
    git diff --name-only main | xargs python examples/local_policy_demo.py .github/labeler.yml
"""

import sys
import logging

from path_labeler.errors import ConfigurationError
from path_labeler.labeling.loader import load_policy_file
from path_labeler.labeling.reconciler import reconcile


def setup_logging():
    """Set up logging configuration."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def main():
    """Main demo function."""
    setup_logging()

    if len(sys.argv) < 2:
        print("Usage: python local_policy_demo.py <labeler.yml> <path> [<path> ...]")
        sys.exit(1)

    try:
        policy = load_policy_file(sys.argv[1])
    except (ConfigurationError, FileNotFoundError) as e:
        print(f"❌ {e}")
        sys.exit(1)

    changed_files = sys.argv[2:]
    result = reconcile(policy, changed_files, current_labels=[])

    print(f"📋 Policy labels: {', '.join(policy.labels) or 'none'}")
    print(f"📁 Changed files: {len(changed_files)}")
    for label in policy.labels:
        mark = "✅" if label in result.to_add else "  "
        print(f"   {mark} {label}: {', '.join(g.raw for g in policy[label])}")


if __name__ == "__main__":
    main()
