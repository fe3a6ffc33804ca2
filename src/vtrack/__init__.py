"""vtrack - content-addressed version tracking.

Hashes file contents, deduplicates identical content by digest and keeps a
per-file history of versions in two human-readable JSON records.
"""

__version__ = "1.0.0"
__author__ = "vtrack Team"
__email__ = "dev@vtrack.dev"

__all__ = []
