"""Browser integration (Playwright).

Provides ``PlaywrightHostBridge`` so discovery can run against a widget frame
inside a live page, and ``inspect_live_page`` for the CLI.
"""
