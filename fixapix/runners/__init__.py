"""
Runners: end-to-end solve entrypoints, diagnostics and the CLI.
"""
