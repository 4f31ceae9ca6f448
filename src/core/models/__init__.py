#!/usr/bin/env python3
"""
Core data models for the upgrade demo.

Contains all data structures used throughout the application.
"""

from .metrics import MetricsKey, MetricsRecord, Baseline, MetricsSnapshot
from .plan import LaunchMode, UpgradeStep

__all__ = ['MetricsKey', 'MetricsRecord', 'Baseline', 'MetricsSnapshot', 'LaunchMode', 'UpgradeStep']
