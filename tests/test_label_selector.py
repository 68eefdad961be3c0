"""Unit tests for label selector encoding."""

import itertools

from workload_scaler.kubernetes.common import build_label_selector


class TestBuildLabelSelector:
    """Tests for build_label_selector."""

    def test_joins_pairs_in_key_order(self):
        assert build_label_selector({"app": "foo", "tier": "web"}) == "app=foo,tier=web"

    def test_empty_map_matches_everything(self):
        assert build_label_selector({}) == ""
        assert build_label_selector(None) == ""

    def test_single_label(self):
        assert build_label_selector({"app": "db"}) == "app=db"

    def test_independent_of_insertion_order(self):
        """Every insertion order of the same map yields the same selector."""
        pairs = [("tier", "web"), ("app", "foo"), ("release", "stable"), ("zone", "a")]
        selectors = {
            build_label_selector(dict(order))
            for order in itertools.permutations(pairs)
        }

        assert selectors == {"app=foo,release=stable,tier=web,zone=a"}

    def test_deterministic(self):
        labels = {"b": "2", "a": "1"}
        assert build_label_selector(labels) == build_label_selector(labels)

    def test_prefixed_keys_sort_as_strings(self):
        labels = {"app.kubernetes.io/name": "api", "app": "api"}
        assert build_label_selector(labels) == "app=api,app.kubernetes.io/name=api"
