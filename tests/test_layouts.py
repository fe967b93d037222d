"""Tests for layout candidate definitions."""
import pytest

from connsettings.codec.layouts import (
    CANONICAL_12,
    CANONICAL_LAYOUT,
    DECODE_PRIORITY,
    LEGACY_16,
    LEGACY_28,
    FieldSlot,
    LayoutCandidate,
    validate_layouts,
)
from connsettings.exceptions import InvariantViolation


def test_known_header_sizes():
    assert CANONICAL_12.fixed_header_size == 12
    assert LEGACY_16.fixed_header_size == 16
    assert LEGACY_28.fixed_header_size == 28


def test_priority_is_most_specific_first():
    assert [layout.name for layout in DECODE_PRIORITY] == ["legacy_28", "legacy_16", "canonical_12"]


def test_encoder_layout_is_canonical():
    assert CANONICAL_LAYOUT is CANONICAL_12
    assert not CANONICAL_LAYOUT.has_unknown_field
    assert not CANONICAL_LAYOUT.lengths_up_front


def test_legacy_28_reads_lengths_up_front():
    assert LEGACY_28.lengths_up_front
    assert LEGACY_28.length_slots == (
        FieldSlot.PROXY_SERVER_LEN,
        FieldSlot.PROXY_BYPASS_LEN,
        FieldSlot.AUTO_CONFIG_URL_LEN,
    )
    assert LEGACY_16.length_slots == ()


def test_shipped_layouts_validate():
    validate_layouts()


def test_header_size_mismatch_is_invariant_violation():
    broken = LayoutCandidate(
        name="broken",
        fixed_header_size=20,
        has_unknown_field=False,
        lengths_up_front=False,
        field_order=CANONICAL_12.field_order,
    )
    with pytest.raises(InvariantViolation, match="does not match"):
        broken.validate()


def test_unknown_flag_mismatch_is_invariant_violation():
    broken = LayoutCandidate(
        name="broken",
        fixed_header_size=12,
        has_unknown_field=True,
        lengths_up_front=False,
        field_order=CANONICAL_12.field_order,
    )
    with pytest.raises(InvariantViolation, match="unknown-field"):
        broken.validate()


def test_header_must_start_with_common_prefix():
    broken = LayoutCandidate(
        name="broken",
        fixed_header_size=12,
        has_unknown_field=False,
        lengths_up_front=False,
        field_order=(FieldSlot.RAW_FLAGS, FieldSlot.CHANGE_COUNTER, FieldSlot.VERSION_SIGNATURE),
    )
    with pytest.raises(InvariantViolation, match="must start with"):
        broken.validate()


def test_duplicate_names_rejected():
    with pytest.raises(InvariantViolation, match="Duplicate"):
        validate_layouts((CANONICAL_12, CANONICAL_12))
