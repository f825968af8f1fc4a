"""
Content Catalog Engine

Validates a versioned language-learning content tree (workspaces, sections,
paginated indexes, packs) and resolves deterministic curriculum bundles
from it.
"""

__version__ = "1.0.0"
