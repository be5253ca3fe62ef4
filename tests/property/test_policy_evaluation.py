"""
Property-based tests for glob matching and policy evaluation.

Property: a label's glob set matches a change set iff every changed file
is covered by at least one of its patterns.
"""

from hypothesis import given, strategies as st

from path_labeler.matching.evaluator import all_files_match
from path_labeler.matching.glob import GlobMatcher


segment = st.text(alphabet="abcdxyz019_-", min_size=1, max_size=6)
extension = st.sampled_from(["", ".md", ".py", ".js", ".ts", ".yml"])
file_path = st.builds(
    lambda dirs, name, ext: "/".join(dirs + [name + ext]),
    st.lists(st.sampled_from(["src", "docs", "lib", "src/server", "test"]) | segment, max_size=3),
    segment,
    extension,
)
positive_pattern = st.sampled_from([
    "**",
    "**/*.md",
    "src/**",
    "docs/*",
    "*.py",
    "src/server/**",
    "{src,lib}/**/*.{js,ts}",
    "[abc]*/**",
    "test/?/**",
])


class TestGlobMatcherProperties:
    """Property tests for single-pattern matching."""

    @given(pattern=positive_pattern, path=file_path)
    def test_negation_inverts_match(self, pattern, path):
        """matches('!p', x) is always the opposite of matches('p', x)."""
        assert GlobMatcher("!" + pattern).matches(path) == (not GlobMatcher(pattern).matches(path))

    @given(path=file_path)
    def test_globstar_matches_every_visible_path(self, path):
        assert GlobMatcher("**").matches(path)

    @given(path=file_path)
    def test_literal_pattern_matches_itself(self, path):
        assert GlobMatcher(path).matches(path)

    @given(pattern=positive_pattern, path=file_path)
    def test_matching_is_deterministic(self, pattern, path):
        matcher = GlobMatcher(pattern)
        assert matcher.matches(path) == matcher.matches(path)


class TestAllFilesMatchProperties:
    """Property tests for the all-files-must-match rule."""

    @given(
        files=st.lists(file_path, max_size=10),
        patterns=st.lists(positive_pattern, min_size=1, max_size=4),
    )
    def test_every_file_matches_some_pattern(self, files, patterns):
        matchers = [GlobMatcher(p) for p in patterns]
        expected = all(any(m.matches(f) for m in matchers) for f in files)
        assert all_files_match(files, patterns) == expected

    @given(patterns=st.lists(positive_pattern | positive_pattern.map(lambda p: "!" + p), max_size=4))
    def test_empty_change_set_is_vacuously_true(self, patterns):
        assert all_files_match([], patterns) is True

    @given(
        files=st.lists(file_path, min_size=1, max_size=10),
        patterns=st.lists(positive_pattern, min_size=1, max_size=4),
        excluded=positive_pattern,
    )
    def test_exclusion_never_widens_coverage(self, files, patterns, excluded):
        with_exclusion = all_files_match(files, patterns + ["!" + excluded])
        if with_exclusion:
            assert all_files_match(files, patterns)

    @given(
        files=st.lists(file_path, min_size=1, max_size=10),
        patterns=st.lists(positive_pattern, min_size=1, max_size=4),
        extra=st.lists(file_path, max_size=5),
    )
    def test_adding_files_never_turns_a_miss_into_a_match(self, files, patterns, extra):
        if not all_files_match(files, patterns):
            assert not all_files_match(files + extra, patterns)
