"""Shared type aliases."""

from __future__ import annotations

from typing import Hashable

#: Opaque node identifier (a single uppercase letter in the edge-list notation).
NodeKey = Hashable

#: Route cost; sums of strictly positive integer trace costs.
Cost = int
