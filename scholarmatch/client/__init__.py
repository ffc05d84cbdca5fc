"""Data access for advisor snapshots."""

from .base import AdvisorRepository
from .snapshot import SnapshotRepository
from .supabase import SupabaseRepository

__all__ = ["AdvisorRepository", "SnapshotRepository", "SupabaseRepository"]
