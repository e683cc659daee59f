"""
Exchange driver packages.
Each implements gdaxlink.core.kernel.syscalls.TradingSyscalls.
"""
