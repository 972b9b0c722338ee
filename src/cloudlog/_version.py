# SPDX-FileCopyrightText: 2026 The Cloudlog Authors
# SPDX-License-Identifier: Apache-2.0

"""Version from installed package metadata."""

from __future__ import annotations

try:
    from importlib.metadata import version

    __version__: str = version("cloudlog")
except Exception:
    __version__ = "0.0.0.dev0"
