# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe execution exports."""

from .executor import HttpEndpointProbe
from .reducer import baseline_verdict, failure_verdict, reduce_response

__all__ = ["HttpEndpointProbe", "baseline_verdict", "failure_verdict", "reduce_response"]
