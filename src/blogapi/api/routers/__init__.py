"""
blogapi.api.routers

Router modules: `blogs` (the RPC surface) and `health` (probes).
"""
