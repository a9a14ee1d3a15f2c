# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Core package for h5p-essay.

This package contains shared infrastructure:
- config: Application settings and task file loading
"""
