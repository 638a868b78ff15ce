"""Runtime: rendering, program-exit reporting and observability.

Import from the submodules; this package stays import-free so that
foundation.errors can load the logger without a cycle.
"""
