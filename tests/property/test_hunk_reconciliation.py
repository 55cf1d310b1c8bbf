"""
Property-based tests for hunk overlap, reconciliation and patch round-trips.
"""

from hypothesis import given, strategies as st

from review_scope.diff.overlap import hunks_overlap
from review_scope.diff.parser import parse_patch
from review_scope.diff.reconciler import reconcile
from review_scope.diff.reconstructor import reconstruct_patch
from review_scope.models.patch import Hunk, FilePatch, ReconcileStatus


TEXT = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789 _.,()=:#'\"{}[]", max_size=30)

BODY_LINE = st.tuples(st.sampled_from(["+", "-", " "]), TEXT).map(lambda t: t[0] + t[1])


@st.composite
def ranges(draw, min_lines=0):
    """Hunks that only carry a new-file range."""
    return Hunk(
        old_start=0,
        old_lines=0,
        new_start=draw(st.integers(min_value=1, max_value=500)),
        new_lines=draw(st.integers(min_value=min_lines, max_value=60)),
    )


@st.composite
def well_formed_hunks(draw):
    """Hunks whose header counts agree with their body."""
    body = draw(st.lists(BODY_LINE, max_size=12))
    if body and draw(st.booleans()):
        body.append("\\ No newline at end of file")
    return Hunk(
        old_start=draw(st.integers(min_value=0, max_value=5000)),
        old_lines=sum(1 for line in body if line[:1] in (" ", "-")),
        new_start=draw(st.integers(min_value=0, max_value=5000)),
        new_lines=sum(1 for line in body if line[:1] in (" ", "+")),
        lines=tuple(body),
    )


class TestOverlapProperties:
    """Property tests for hunks_overlap."""

    @given(first=ranges(), second=ranges())
    def test_overlap_is_symmetric(self, first, second):
        """
        Property: overlap does not depend on argument order.
        """
        assert hunks_overlap(first, second) == hunks_overlap(second, first)

    @given(hunk=ranges(min_lines=1))
    def test_non_empty_hunk_overlaps_itself(self, hunk):
        assert hunks_overlap(hunk, hunk)

    @given(point=st.integers(min_value=0, max_value=500), other=ranges(min_lines=1))
    def test_zero_length_hunk_overlaps_only_spanning_ranges(self, point, other):
        """
        Property: a pure deletion after new line ``point`` overlaps exactly
        the ranges that contain both ``point`` and ``point + 1``.
        """
        deletion = Hunk(old_start=point + 1, old_lines=1, new_start=point, new_lines=0, lines=("-gone",))

        other_lines = set(range(other.new_start, other.new_end + 1))
        expected = point in other_lines and point + 1 in other_lines
        assert hunks_overlap(deletion, other) == expected
        assert hunks_overlap(other, deletion) == expected

    @given(first=ranges(), second=ranges())
    def test_zero_length_hunks_never_overlap_each_other(self, first, second):
        if first.new_lines == 0 and second.new_lines == 0:
            assert not hunks_overlap(first, second)

    @given(first=ranges(min_lines=1), second=ranges(min_lines=1))
    def test_overlap_matches_shared_lines(self, first, second):
        """
        Property: non-empty ranges overlap iff they share a line number.
        """
        first_lines = set(range(first.new_start, first.new_end + 1))
        second_lines = set(range(second.new_start, second.new_end + 1))

        assert hunks_overlap(first, second) == bool(first_lines & second_lines)


class TestReconcileProperties:
    """Property tests for reconcile."""

    @given(
        incremental=st.lists(ranges(), max_size=10),
        reference=st.lists(ranges(), max_size=10),
    )
    def test_reconciliation_is_monotonic_stable_filter(self, incremental, reference):
        """
        Property: survivors are an ordered subset of the incremental hunks,
        each overlapping some reference hunk, and nothing overlapping is lost.
        """
        result = reconcile(FilePatch("f.py", incremental), FilePatch("f.py", reference))

        if not incremental:
            assert result.status == ReconcileStatus.UNCHANGED
            return
        if not reference:
            assert result.status == ReconcileStatus.NOT_IN_REFERENCE
            return

        expected = [h for h in incremental if any(hunks_overlap(h, r) for r in reference)]
        survivors = list(result.patch.hunks) if result.patch else []

        assert len(survivors) <= len(incremental)
        assert survivors == expected
        if expected:
            assert result.status == ReconcileStatus.PARTIAL
        else:
            assert result.status == ReconcileStatus.FULLY_EXCLUDED

    @given(hunks=st.lists(ranges(), min_size=1, max_size=10))
    def test_reconcile_against_itself_keeps_non_empty_hunks(self, hunks):
        patch = FilePatch("f.py", hunks)
        result = reconcile(patch, patch)

        kept = list(result.patch.hunks) if result.patch else []
        assert all(h in kept for h in hunks if h.new_lines > 0)


class TestPatchRoundTrip:
    """Property tests for parse/reconstruct round-trips."""

    @given(hunks=st.lists(well_formed_hunks(), max_size=6))
    def test_reconstruct_then_parse(self, hunks):
        """
        Property: serialized hunks parse back to the same hunks.
        """
        text = reconstruct_patch(hunks)
        assert parse_patch(text, "f.py").hunks == tuple(hunks)

    @given(hunks=st.lists(well_formed_hunks(), min_size=1, max_size=6))
    def test_round_trip_is_stable(self, hunks):
        """
        Property: parse(reconstruct(parse(x))) == parse(x).
        """
        original = parse_patch(reconstruct_patch(hunks), "f.py")
        again = parse_patch(reconstruct_patch(original.hunks), "f.py")

        assert again == original
