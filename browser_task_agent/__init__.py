"""
Browser Task Agent - run natural-language tasks in a headless browser.

Drives a single Chromium page via Playwright through a bounded sequence of
LLM-directed tool calls until the task is completed or the iteration
budget runs out.
"""

__version__ = "0.1.0"
__author__ = "Browser Task Agent Contributors"
