"""
Per-vendor OEM subtrees.

Only vendor backends import from here; cross-vendor operations return the
vendor-neutral types from ``bmc_redfish.model``.
"""
