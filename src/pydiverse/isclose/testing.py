# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

from ._internal.assertions import assert_is_close, assert_is_not_close

__all__ = ["assert_is_close", "assert_is_not_close"]
