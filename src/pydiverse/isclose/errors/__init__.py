# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

from pydiverse.isclose._internal.errors import NotSupportedError, ToleranceWarning

__all__ = ["NotSupportedError", "ToleranceWarning"]
