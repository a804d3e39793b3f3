# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""reprofund - record-keeping backend for reproducible-research funding.

Researchers submit proposals; proposals accrue reviews and funding and are
broken into milestones; milestones collect proofs of reproduction.

Architecture:
  Store (ID counter + five entity tables, transactional)
    → Validation (payload checks before any mutation)
    → Linkage (parent-held child ID lists, stage/status transitions)
    → Queries (by ID, by parent, by owner, full scans)
    → FundingService (the operation surface, returns FundingResponse)

Entry points: ``reprofund`` (CLI) and ``reprofund-server`` (HTTP API).
"""

__version__ = "0.1.0"

from . import (
    core as core,
)
