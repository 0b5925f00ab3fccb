"""
Record store: repositories over patients, beds and interests.
"""

from placement.repositories.base import BaseRepository
from placement.repositories.bed_repository import BedRepository
from placement.repositories.interest_repository import InterestRepository
from placement.repositories.patient_repository import PatientRepository
from placement.repositories.record_store import RecordStore

__all__ = [
    "BaseRepository",
    "BedRepository",
    "InterestRepository",
    "PatientRepository",
    "RecordStore",
]
