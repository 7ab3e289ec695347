"""Test suite for the casemark package.

This package contains unit and integration tests validating token
validation, test case parsing, error reporting, and the CLI.
"""
