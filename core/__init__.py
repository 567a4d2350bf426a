"""
Core Workflow Components.

Building blocks shared by the workflow and the infrastructure layer,
with no Azure SDK dependencies.

Structure:
    models/: Pure data structures (enums, resource snapshots, outcomes)
    naming.py: Unique resource name generation
    formatting.py: Human-readable resource summaries
"""

from . import models
