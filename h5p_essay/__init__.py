"""h5p-essay.

Keyword-based scoring of free-text answers for H5P Essay tasks: exact,
wildcard, regular expression and typo-tolerant keyword matching with
H5P-compatible score, explanation and feedback computation.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
