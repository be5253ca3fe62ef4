"""
Unit tests for label reconciliation.
"""

import pytest

from path_labeler.errors import ConfigurationError
from path_labeler.labeling.loader import load_policy, parse_policy
from path_labeler.labeling.reconciler import reconcile
from path_labeler.models.policy import Policy


class TestReconcile:
    """Scenario tests for reconcile."""

    def test_scenario_all_docs(self):
        result = reconcile(Policy({"docs": ["**/*.md"]}), ["README.md", "docs/guide.md"], [])
        assert result.to_add == ("docs",)
        assert result.to_remove == ()

    def test_scenario_mixed_change_removes_label(self):
        result = reconcile(Policy({"docs": ["**/*.md"]}), ["README.md", "src/index.js"], ["docs"])
        assert result.to_add == ()
        assert result.to_remove == ("docs",)

    def test_scenario_frontend_not_excluded(self):
        policy = Policy({"frontend": ["src/**", "!src/server/**"]})
        result = reconcile(policy, ["src/ui/App.tsx"], [])
        assert result.to_add == ("frontend",)
        assert result.to_remove == ()

    def test_scenario_frontend_excluded(self):
        policy = Policy({"frontend": ["src/**", "!src/server/**"]})
        result = reconcile(policy, ["src/server/api.ts"], ["frontend"])
        assert result.to_add == ()
        assert result.to_remove == ("frontend",)

    def test_scenario_malformed_policy(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_policy({"broken": 42})
        assert "broken" in str(exc_info.value)

    def test_non_matching_absent_label_is_ignored(self):
        result = reconcile(Policy({"docs": ["**/*.md"]}), ["src/index.js"], ["bug"])
        assert result.is_empty

    def test_present_matching_label_is_re_added(self):
        result = reconcile(Policy({"docs": ["**/*.md"]}), ["README.md"], ["docs"])
        assert result.to_add == ("docs",)
        assert result.to_remove == ()

    def test_empty_change_set_adds_every_label(self):
        policy = Policy({"docs": ["**/*.md"], "frontend": ["src/**"]})
        result = reconcile(policy, [], ["frontend"])
        assert result.to_add == ("docs", "frontend")
        assert result.to_remove == ()

    def test_results_follow_policy_order(self):
        policy = Policy({"b": ["**"], "a": ["**"], "c": ["x/**"], "d": ["y/**"]})
        result = reconcile(policy, ["z.txt"], ["d", "c"])
        assert result.to_add == ("b", "a")
        assert result.to_remove == ("c", "d")

    def test_removals_gated_by_sync_labels(self):
        result = reconcile(Policy({"docs": ["**/*.md"]}), ["src/index.js"], ["docs"])
        assert result.removals_to_apply(sync_labels=True) == ("docs",)
        assert result.removals_to_apply(sync_labels=False) == ()

    def test_oversized_brace_range_never_matches(self):
        policy = load_policy("docs: 'v{1..3000000}/*.md'\n")
        result = reconcile(policy, ["README.md", "v7/guide.md"], ["docs"])
        assert result.to_add == ()
        assert result.to_remove == ("docs",)
