# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Subprocess-backed checkers and verifiers for documentation examples."""

from docval.checkers.typescript import TypeScriptChecker, VerifyCliVerifier

__all__ = ["TypeScriptChecker", "VerifyCliVerifier"]
