# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""HTTP server for the reprofund record store."""

from .app import create_app, run

__all__ = ["create_app", "run"]
