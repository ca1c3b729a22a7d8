"""
Executor modules for reading and applying grants through a SQL connection.
"""

from .base import BaseExecutor, ExecutionPlan, ExecutionResult, OperationType
from .connection import DbApiConnection, SqlConnection
from .grant_executor import GrantExecutor
from .grant_reader import GrantReader

__all__ = [
    # Base classes
    'BaseExecutor',
    'ExecutionResult',
    'ExecutionPlan',
    'OperationType',

    # Connections
    'SqlConnection',
    'DbApiConnection',

    # Grant executor and reader
    'GrantExecutor',
    'GrantReader',
]
