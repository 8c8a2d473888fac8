"""Tests for score distribution analysis."""

import pytest

from veda.search.distribution import (
    DistributionAnalyzer,
    DistributionShape,
    FilterDecision,
    describe,
)


@pytest.fixture
def analyzer():
    return DistributionAnalyzer()


def gap_then_tail():
    """Three strong scores, then a long tail starting at 0.3."""
    return [0.9, 0.88, 0.86] + [round(0.3 - 0.0075 * i, 4) for i in range(27)]


def uniform_spread():
    """40 scores evenly spaced from 0.9 down to 0.1."""
    return [0.9 - i * 0.8 / 39 for i in range(40)]


class TestDescribe:
    """Tests for distribution statistics."""

    def test_empty_returns_none(self):
        assert describe([]) is None

    def test_quartiles_use_descending_index_lookup(self):
        """Q1 is read from the high side, Q3 from the low side."""
        stats = describe([0.1, 0.5, 0.3, 0.9, 0.7, 0.2, 0.8, 0.4])

        # Descending: 0.9 0.8 0.7 0.5 0.4 0.3 0.2 0.1
        assert stats.q1 == 0.7
        assert stats.q2 == 0.4
        assert stats.q3 == 0.2
        assert stats.q1 >= stats.q2 >= stats.q3

    def test_top_score_and_range(self):
        stats = describe([0.25, 0.75, 0.5])

        assert stats.top_score == 0.75
        assert stats.score_range == 0.5

    def test_gaps_ranked_largest_first(self):
        stats = describe([0.9, 0.85, 0.4, 0.35])

        assert stats.best_gap.position == 1
        assert stats.best_gap.score_after_gap == 0.4
        sizes = [gap.gap_size for gap in stats.gaps]
        assert sizes == sorted(sizes, reverse=True)

    def test_equal_gaps_prefer_earliest_position(self):
        stats = describe([1.0, 0.75, 0.5, 0.25])

        assert [gap.position for gap in stats.gaps] == [0, 1, 2]

    def test_gap_scan_limited_to_first_twenty_pairs(self):
        """A drop deep in the list is never considered."""
        scores = [1.0 - 0.01 * i for i in range(25)] + [0.3 - 0.01 * i for i in range(5)]

        stats = describe(scores)

        assert len(stats.gaps) == 20
        assert all(gap.position < 20 for gap in stats.gaps)

    def test_single_score_has_no_gaps(self):
        stats = describe([0.4])

        assert stats.gaps == []
        assert stats.best_gap is None
        assert stats.q1 == stats.q2 == stats.q3 == 0.4

    def test_does_not_modify_input(self):
        scores = [0.2, 0.9, 0.5]

        describe(scores)

        assert scores == [0.2, 0.9, 0.5]


class TestDistributionAnalyzer:
    """Tests for the threshold decision cascade."""

    def test_empty_returns_default(self, analyzer):
        decision = analyzer.analyze([])

        assert decision == FilterDecision(
            threshold=0.65, max_results=15, shape=DistributionShape.EMPTY
        )

    def test_sharp_cutoff_after_high_scores(self, analyzer):
        """A big drop after confident matches cuts right at the drop."""
        decision = analyzer.analyze(gap_then_tail())

        assert decision.shape == DistributionShape.SHARP_CUTOFF
        assert decision.threshold == pytest.approx(0.3)
        assert decision.max_results == 7

    def test_sharp_cutoff_threshold_has_floor(self, analyzer):
        decision = analyzer.analyze([0.8, 0.1, 0.09, 0.08])

        assert decision.shape == DistributionShape.SHARP_CUTOFF
        assert decision.threshold == 0.2
        assert decision.max_results == 5

    def test_moderate_gap_with_low_top_score(self, analyzer):
        decision = analyzer.analyze([0.45, 0.38, 0.37, 0.36, 0.35])

        assert decision.shape == DistributionShape.EARLY_GAP
        assert decision.threshold == 0.38
        assert decision.max_results == 8

    def test_moderate_gap_below_sharp_cutoff(self, analyzer):
        """A high top score with a gap under 0.05 falls through to the early-gap branch."""
        decision = analyzer.analyze([0.8, 0.755, 0.74, 0.73])

        assert decision.shape == DistributionShape.EARLY_GAP
        assert decision.threshold == 0.755
        assert decision.max_results == 8

    def test_dense_upper_cluster(self, analyzer):
        scores = [0.6, 0.58, 0.56, 0.54, 0.52, 0.5, 0.48, 0.46]

        decision = analyzer.analyze(scores)

        assert decision.shape == DistributionShape.DENSE_CLUSTER
        assert decision.threshold == pytest.approx(0.46)
        assert decision.max_results == 11

    def test_wide_spread_uses_median(self, analyzer):
        scores = uniform_spread()

        decision = analyzer.analyze(scores)

        assert decision.shape == DistributionShape.WIDE_SPREAD
        assert decision.threshold == pytest.approx(scores[20])
        assert decision.max_results == 25

    def test_flat_distribution(self, analyzer):
        decision = analyzer.analyze([0.3, 0.29, 0.28, 0.27, 0.26])

        assert decision.shape == DistributionShape.FLAT
        assert decision.threshold == 0.27
        assert decision.max_results == 5

    def test_flat_threshold_has_floor(self, analyzer):
        decision = analyzer.analyze([0.05, 0.05, 0.05])

        assert decision.shape == DistributionShape.FLAT
        assert decision.threshold == 0.1
        assert decision.max_results == 3

    def test_single_score_is_well_formed(self, analyzer):
        decision = analyzer.analyze([0.4])

        assert decision.shape == DistributionShape.DENSE_CLUSTER
        assert decision.threshold == pytest.approx(0.38)
        assert decision.max_results == 5

    def test_single_low_score_is_well_formed(self, analyzer):
        decision = analyzer.analyze([0.2])

        assert decision.shape == DistributionShape.FLAT
        assert decision.threshold == 0.2
        assert decision.max_results == 1

    def test_order_of_input_does_not_matter(self, analyzer):
        scores = gap_then_tail()

        assert analyzer.analyze(scores) == analyzer.analyze(list(reversed(scores)))

    def test_out_of_range_scores_are_accepted(self, analyzer):
        decision = analyzer.analyze([1.5, -0.2, 0.4])

        assert decision.max_results >= 1

    @pytest.mark.parametrize(
        "scores",
        [
            [0.5],
            [0.9, 0.1],
            [0.3] * 12,
            [i / 100 for i in range(100)],
            [0.99, 0.98, 0.97, 0.2, 0.19],
        ],
    )
    def test_decision_within_bounds(self, analyzer, scores):
        decision = analyzer.analyze(scores)

        assert 0.0 <= decision.threshold <= 1.0
        assert decision.max_results >= 1
