# ==============================================
# STORAGE: talking to HBase
# ==============================================
#
# This package handles every call into HBase: row writes,
# deletes, lookups, scans and table create / drop.
#
# Modules:
# --------
# - codec.py         → value <-> bytes (canonical string text)
# - hbase_client.py  → HBaseClient, CRUD against a happybase pool
#
# ==============================================

from .codec import decode_value, encode_value
from .hbase_client import HBaseClient

__all__ = [
    "HBaseClient",
    "decode_value",
    "encode_value",
]
