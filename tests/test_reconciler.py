"""Tests for effective flag reconciliation."""
import pytest

from connsettings.codec import reconcile
from connsettings.models import ConnectionSettingsRecord, ProxyFlags


def _record(flags: int, proxy: str = "", pac: str = "") -> ConnectionSettingsRecord:
    return ConnectionSettingsRecord(
        version_signature=0x46, raw_flags=flags, proxy_server=proxy, auto_config_url=pac
    )


@pytest.mark.parametrize(
    "flags, proxy, expected",
    [
        (0x00, "p:8080", True),
        (ProxyFlags.PROXY, "", True),
        (ProxyFlags.PROXY, "p:8080", True),
        (0x00, "", False),
        (ProxyFlags.DIRECT | ProxyFlags.AUTO_CONFIG, "", False),
    ],
)
def test_effective_proxy_enabled(flags, proxy, expected):
    assert reconcile(_record(int(flags), proxy=proxy)).effective_proxy_enabled is expected


@pytest.mark.parametrize(
    "flags, pac, expected",
    [
        (0x00, "http://wpad/wpad.dat", True),
        (ProxyFlags.AUTO_CONFIG, "", True),
        (0x00, "", False),
        (ProxyFlags.PROXY | ProxyFlags.AUTO_DETECT, "", False),
    ],
)
def test_effective_auto_config_enabled(flags, pac, expected):
    assert reconcile(_record(int(flags), pac=pac)).effective_auto_config_enabled is expected


def test_reconcile_does_not_touch_raw_flags():
    record = _record(0xF0, proxy="p:8080", pac="http://wpad/wpad.dat")
    reconciled = reconcile(record)

    assert reconciled.raw_flags == 0xF0
    assert reconciled.proxy_server == record.proxy_server
    assert record.effective_proxy_enabled is False


def test_reconcile_clears_stale_effective_state():
    stale = _record(0x00).with_changes(effective_proxy_enabled=True)
    assert reconcile(stale).effective_proxy_enabled is False
