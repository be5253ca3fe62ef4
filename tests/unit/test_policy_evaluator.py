"""
Unit tests for the policy evaluator.
"""

from path_labeler.matching.evaluator import all_files_match, compile_patterns, get_matcher, is_match
from path_labeler.matching.glob import GlobMatcher


class TestPolicyEvaluator:
    """Unit tests for all_files_match / is_match."""

    def test_every_file_must_match(self):
        assert all_files_match(["README.md", "docs/guide.md"], ["**/*.md"]) is True
        assert all_files_match(["README.md", "src/index.js"], ["**/*.md"]) is False

    def test_any_pattern_may_match(self):
        assert all_files_match(["README.md", "src/index.js"], ["**/*.md", "src/**"]) is True

    def test_no_files_is_vacuously_true(self):
        assert all_files_match([], ["**/*.md"]) is True
        assert all_files_match([], []) is True

    def test_no_patterns_never_matches_a_file(self):
        assert all_files_match(["README.md"], []) is False

    def test_negated_pattern_excludes(self):
        patterns = ["src/**", "!src/server/**"]
        assert all_files_match(["src/ui/App.tsx"], patterns) is True
        assert all_files_match(["src/server/api.ts"], patterns) is False
        assert all_files_match(["src/ui/App.tsx", "src/server/api.ts"], patterns) is False

    def test_only_negated_patterns(self):
        assert all_files_match(["src/index.js"], ["!docs/**"]) is True
        assert all_files_match(["docs/guide.md"], ["!docs/**"]) is False

    def test_stops_at_first_failing_file(self):
        calls = []

        class Recording(GlobMatcher):
            def matches(self, path):
                calls.append(path)
                return super().matches(path)

        assert all_files_match(["a.py", "b.md", "c.py"], [Recording("*.py")]) is False
        assert calls == ["a.py", "b.md"]

    def test_stops_at_first_matching_pattern(self):
        calls = []

        class Recording(GlobMatcher):
            def matches(self, path):
                calls.append(self.pattern)
                return super().matches(path)

        assert is_match("a.py", [Recording("*.py"), Recording("*.md")]) is True
        assert calls == ["*.py"]


    def test_matchers_are_reused(self):
        first = compile_patterns(["docs/**", "!docs/drafts/**"])
        second = compile_patterns(["docs/**", "!docs/drafts/**"])
        assert [a is b for a, b in zip(first, second)] == [True, True]
        assert get_matcher("docs/**") is first[0]

    def test_passes_matchers_through(self):
        matcher = GlobMatcher("src/**")
        assert compile_patterns([matcher]) == [matcher]
