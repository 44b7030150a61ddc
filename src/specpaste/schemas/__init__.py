"""
Pydantic schemas for API validation and data contracts.
"""

from .requests import (
    SpecFieldSchema,
    CrowdAliasSchema,
    ParseRequest,
    BatchRequest,
    ApplyRequest,
    DiffRequest,
    BoundariesRequest,
    FetchRequest,
    RecordAliasRequest,
)

__all__ = [
    'SpecFieldSchema',
    'CrowdAliasSchema',
    'ParseRequest',
    'BatchRequest',
    'ApplyRequest',
    'DiffRequest',
    'BoundariesRequest',
    'FetchRequest',
    'RecordAliasRequest',
]
