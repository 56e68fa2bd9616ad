# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol definitions for stream event interpreter components.

Available protocols:
- JSONRepresentable: Interface for objects convertible to a JSONValue
- StreamEventHandler: Interface for consumers of decoded events and errors
"""

from .handler import StreamEventHandler
from .representable import JSONRepresentable

__all__ = [
    "JSONRepresentable",
    "StreamEventHandler",
]
