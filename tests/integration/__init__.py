"""Integration tests for the HTML to markdown pipeline.

These tests run real parsing and conversion end to end. HTTP access is
mocked at the requests.Session level, so no network is needed.
"""
