"""Tests for building dependency requests from tokens."""

import pytest

from depadd.errors import AmbiguityError, GatingError, SequencingError
from depadd.models import DepOp
from depadd.parse_add import collect_features, parse_dependencies, parse_feature

GIT_URL = "https://github.com/serde-rs/serde"


class TestParseFeature:
    """Test splitting of feature lists."""

    def test_whitespace_and_commas(self):
        """Should split on whitespace runs and commas."""
        assert list(parse_feature("a,b c")) == ["a", "b", "c"]
        assert list(parse_feature("  derive ,, rc\tstd  ")) == ["derive", "rc", "std"]

    def test_empty_input(self):
        """Should yield nothing for empty or separator-only input."""
        assert list(parse_feature("")) == []
        assert list(parse_feature(" , ,")) == []

    def test_keeps_order_and_duplicates(self):
        """Should not reorder; de-duplication happens when merging."""
        assert list(parse_feature("zeta alpha zeta")) == ["zeta", "alpha", "zeta"]

    def test_idempotent_on_split_input(self):
        """Should give the same names when re-splitting joined output."""
        names = list(parse_feature("a,b c"))
        assert list(parse_feature(" ".join(names))) == names

    def test_collect_features(self):
        """Should flatten every occurrence into one de-duplicated list."""
        assert collect_features(None) is None
        assert collect_features(["derive rc", "rc,std"]) == ["derive", "rc", "std"]
        assert collect_features([""]) == []


class TestParseDependencies:
    """Test the request builder."""

    def test_shared_features(self):
        """Should attach the shared feature list to a single crate."""
        deps = parse_dependencies(["serde"], features=["derive"])

        assert len(deps) == 1
        assert deps[0].crate_spec == "serde"
        assert deps[0].features == ["derive"]
        assert deps[0].default_features is None
        assert deps[0].optional is None

    def test_feature_token_attaches_to_previous(self, unstable):
        """Should merge +feature into the preceding request only."""
        deps = parse_dependencies(["serde", "+derive", "serde_json"], **unstable)

        assert [dep.crate_spec for dep in deps] == ["serde", "serde_json"]
        assert deps[0].features == ["derive"]
        assert deps[1].features is None

    def test_order_preserved(self, unstable):
        """Should keep input order for requests and their features."""
        deps = parse_dependencies(["x", "+f1", "+f2", "y", "+g1"], **unstable)

        assert [dep.crate_spec for dep in deps] == ["x", "y"]
        assert deps[0].features == ["f1", "f2"]
        assert deps[1].features == ["g1"]

    def test_feature_token_deduplicates(self, unstable):
        """Should drop repeated names and keep first-seen order."""
        deps = parse_dependencies(["serde", "+derive,rc", "+std derive", "+"], features=["rc"], **unstable)

        assert deps[0].features == ["rc", "derive", "std"]

    def test_shared_modifiers_copied(self):
        """Should give each request its own copy of the shared modifiers."""
        deps = parse_dependencies(
            ["regex", "log@0.4", "./crates/parser"],
            registry="alt",
            default_features=False,
            optional=True,
        )

        assert len(deps) == 3
        for dep in deps:
            assert dep.registry == "alt"
            assert dep.default_features is False
            assert dep.optional is True
            assert dep.rename is None
        assert deps[1].crate_spec == "log@0.4"

    def test_features_not_shared_between_requests(self, unstable):
        """Should not leak attached features into the shared list."""
        shared = ["derive"]
        deps = parse_dependencies(["serde", "+rc"], features=shared, **unstable)

        assert deps[0].features == ["derive", "rc"]
        assert shared == ["derive"]

    def test_git_source(self, unstable):
        """Should carry the git descriptor on a single crate."""
        deps = parse_dependencies(["serde"], git=GIT_URL, tag="v1.0.0", **unstable)

        assert deps[0].git == GIT_URL
        assert deps[0].tag == "v1.0.0"
        assert deps[0].branch is None
        assert deps[0].rev is None

    def test_single_crate_modifiers_allowed(self, unstable):
        """Should accept git, rename and features with one crate token."""
        deps = parse_dependencies(
            ["serde", "+rc"], git=GIT_URL, rename="serde1", features=["derive"], **unstable
        )

        assert deps[0].rename == "serde1"
        assert deps[0].features == ["derive", "rc"]

    def test_no_crates(self):
        """Should return an empty list for empty input."""
        assert parse_dependencies([], git=GIT_URL, unstable_options=True) == []


class TestParseDependenciesErrors:
    """Test validation failures of the request builder."""

    def test_multiple_crates_with_git(self, unstable):
        """Should reject git with more than one crate."""
        with pytest.raises(AmbiguityError, match="multiple crates with path or git"):
            parse_dependencies(["a", "b"], git=GIT_URL, **unstable)

    def test_multiple_crates_with_git_checked_before_gate(self):
        """Should report the ambiguity even without unstable options."""
        with pytest.raises(AmbiguityError):
            parse_dependencies(["a", "b"], git=GIT_URL)

    def test_multiple_crates_with_rename(self):
        """Should reject rename with more than one crate."""
        with pytest.raises(AmbiguityError, match="multiple crates with rename"):
            parse_dependencies(["a", "b"], rename="c")

    def test_multiple_crates_with_features(self):
        """Should reject a shared feature list with more than one crate."""
        with pytest.raises(AmbiguityError, match="multiple crates with features"):
            parse_dependencies(["a", "b"], features=["derive"])

    def test_multiple_crates_with_empty_feature_list(self):
        """Should treat a supplied but empty feature list as supplied."""
        with pytest.raises(AmbiguityError):
            parse_dependencies(["a", "b"], features=[])

    def test_feature_tokens_do_not_count_as_crates(self, unstable):
        """Should count only crate tokens for the ambiguity checks."""
        deps = parse_dependencies(["a", "+x", "+y"], rename="b", **unstable)
        assert len(deps) == 1

    def test_git_requires_unstable(self):
        """Should gate git sources behind unstable options."""
        with pytest.raises(GatingError, match="`--git` is unstable"):
            parse_dependencies(["serde"], git=GIT_URL)

    def test_feature_token_requires_unstable(self):
        """Should gate +feature syntax behind unstable options."""
        with pytest.raises(GatingError, match=r"`\+<feature>` is unstable"):
            parse_dependencies(["serde", "+derive"])

    @pytest.mark.parametrize("tokens", [["+derive"], ["+derive", "serde"], ["+", "a", "b"]])
    def test_leading_feature_token(self, unstable, tokens):
        """Should fail when a +feature token has no preceding crate."""
        with pytest.raises(SequencingError, match="must be preceded by a pkgid"):
            parse_dependencies(tokens, registry="alt", optional=True, **unstable)


class TestAddFeatures:
    """Test merging feature names into a request."""

    def test_accepts_any_iterable(self):
        """Should merge names from a generator, skipping empties and repeats."""
        dep = DepOp(crate_spec="serde")
        dep.add_features(name for name in ["derive", "", "rc", "derive"])

        assert dep.features == ["derive", "rc"]
