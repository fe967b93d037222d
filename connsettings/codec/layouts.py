"""
Known header shapes of the connection settings blob.

The producer never published the format, and captured samples disagree on
how many DWORDs precede the first string. Each observed shape is described
here as a LayoutCandidate. The decoder tries them in DECODE_PRIORITY order;
the encoder always writes CANONICAL_LAYOUT.

Adding a variant means appending a new candidate (and a test fixture built
from a real sample), never editing the offsets of an existing one.

Shapes:

    canonical_12   version | counter | flags
                   then [len][data] x3, then 32 zero bytes

    legacy_16      version | counter | flags | unknown
                   then [len][data] x3, then padding

    legacy_28      version | counter | flags | unknown | len1 | len2 | len3
                   then data1 data2 data3 contiguously, then padding
"""
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from connsettings.codec.primitives import DWORD_SIZE
from connsettings.exceptions import InvariantViolation

PADDING_SIZE = 32

STRING_FIELDS = ("proxy_server", "proxy_bypass", "auto_config_url")


class FieldSlot(str, Enum):
    """A fixed-width DWORD slot in a layout header. Values name the record field."""

    VERSION_SIGNATURE = "version_signature"
    CHANGE_COUNTER = "change_counter"
    RAW_FLAGS = "raw_flags"
    UNKNOWN = "unknown_field"
    PROXY_SERVER_LEN = "proxy_server_len"
    PROXY_BYPASS_LEN = "proxy_bypass_len"
    AUTO_CONFIG_URL_LEN = "auto_config_url_len"


_COMMON_PREFIX = (FieldSlot.VERSION_SIGNATURE, FieldSlot.CHANGE_COUNTER, FieldSlot.RAW_FLAGS)
_LENGTH_SLOTS = (
    FieldSlot.PROXY_SERVER_LEN,
    FieldSlot.PROXY_BYPASS_LEN,
    FieldSlot.AUTO_CONFIG_URL_LEN,
)


@dataclass(frozen=True)
class LayoutCandidate:
    """Static description of one header shape."""

    name: str
    fixed_header_size: int
    has_unknown_field: bool
    lengths_up_front: bool
    field_order: Tuple[FieldSlot, ...]

    @property
    def length_slots(self) -> Tuple[FieldSlot, ...]:
        return tuple(slot for slot in self.field_order if slot in _LENGTH_SLOTS)

    def validate(self) -> None:
        """Check the definition is internally consistent."""
        if self.fixed_header_size != DWORD_SIZE * len(self.field_order):
            raise InvariantViolation(
                f"Layout '{self.name}' header size {self.fixed_header_size} "
                f"does not match {len(self.field_order)} DWORD slots",
                {"layout": self.name},
            )
        if self.field_order[:len(_COMMON_PREFIX)] != _COMMON_PREFIX:
            raise InvariantViolation(
                f"Layout '{self.name}' must start with version, counter and flags",
                {"layout": self.name},
            )
        if self.has_unknown_field != (FieldSlot.UNKNOWN in self.field_order):
            raise InvariantViolation(
                f"Layout '{self.name}' unknown-field flag disagrees with its field order",
                {"layout": self.name},
            )
        expected_lengths = _LENGTH_SLOTS if self.lengths_up_front else ()
        if self.length_slots != expected_lengths:
            raise InvariantViolation(
                f"Layout '{self.name}' length slots disagree with lengths_up_front",
                {"layout": self.name},
            )
        if len(set(self.field_order)) != len(self.field_order):
            raise InvariantViolation(
                f"Layout '{self.name}' repeats a field slot",
                {"layout": self.name},
            )


CANONICAL_12 = LayoutCandidate(
    name="canonical_12",
    fixed_header_size=12,
    has_unknown_field=False,
    lengths_up_front=False,
    field_order=_COMMON_PREFIX,
)

LEGACY_16 = LayoutCandidate(
    name="legacy_16",
    fixed_header_size=16,
    has_unknown_field=True,
    lengths_up_front=False,
    field_order=_COMMON_PREFIX + (FieldSlot.UNKNOWN,),
)

LEGACY_28 = LayoutCandidate(
    name="legacy_28",
    fixed_header_size=28,
    has_unknown_field=True,
    lengths_up_front=True,
    field_order=_COMMON_PREFIX + (FieldSlot.UNKNOWN,) + _LENGTH_SLOTS,
)

# Most specific first
DECODE_PRIORITY: Tuple[LayoutCandidate, ...] = (LEGACY_28, LEGACY_16, CANONICAL_12)

CANONICAL_LAYOUT = CANONICAL_12


def validate_layouts(layouts: Tuple[LayoutCandidate, ...] = DECODE_PRIORITY) -> None:
    """Validate every candidate and require unique names."""
    names = [layout.name for layout in layouts]
    if len(set(names)) != len(names):
        raise InvariantViolation("Duplicate layout names", {"names": names})
    for layout in layouts:
        layout.validate()


validate_layouts()
