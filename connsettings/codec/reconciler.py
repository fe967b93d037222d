"""
Flag reconciliation.

The raw flag bits alone are an unreliable indicator of whether a proxy or a
PAC script is in use: captured blobs routinely carry a server string with
the proxy bit clear. The effective state is the bit OR the presence of the
matching string. This only happens on the read path; the encoder writes
raw_flags exactly as given.
"""
from connsettings.models import ConnectionSettingsRecord, ProxyFlags


def reconcile(record: ConnectionSettingsRecord) -> ConnectionSettingsRecord:
    """Return a copy with effective_proxy_enabled / effective_auto_config_enabled computed."""
    return record.model_copy(
        update={
            "effective_proxy_enabled": bool(record.raw_flags & ProxyFlags.PROXY)
            or record.proxy_server != "",
            "effective_auto_config_enabled": bool(record.raw_flags & ProxyFlags.AUTO_CONFIG)
            or record.auto_config_url != "",
        }
    )
