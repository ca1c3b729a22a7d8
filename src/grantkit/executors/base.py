"""
Base executor class for grant statements.

Provides common functionality for executors including timing, dry-run
support, result tracking and fail-fast error handling.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .connection import SqlConnection

logger = logging.getLogger(__name__)


class OperationType(str, Enum):
    """Types of operations that can be performed."""
    GRANT = "GRANT"
    REVOKE = "REVOKE"


@dataclass
class ExecutionResult:
    """Result of running one statement."""

    success: bool
    operation: OperationType
    grantee: str
    statement: str
    message: str = ""
    error: Optional[Exception] = None
    duration_seconds: float = 0.0

    def __str__(self) -> str:
        """String representation of the result."""
        status = "✅" if self.success else "❌"
        return f"{status} {self.operation.value} {self.grantee}: {self.statement} ({self.message})"


@dataclass
class ExecutionPlan:
    """Statements that would run, in order."""

    statements: List[str] = field(default_factory=list)

    def extend(self, statements: List[str]):
        self.statements.extend(statements)

    def __len__(self) -> int:
        return len(self.statements)

    def __str__(self) -> str:
        """String representation of the plan."""
        if not self.statements:
            return "No operations planned"

        lines = ["Execution Plan:"]
        for i, statement in enumerate(self.statements, 1):
            lines.append(f"  {i}. {statement}")
        lines.append(f"\nTotal statements: {len(self.statements)}")
        return "\n".join(lines)


class BaseExecutor:
    """
    Base class for statement executors.

    Statements run one at a time in the order given. The first failure is
    logged, recorded and re-raised unchanged; statements already run stay
    applied. There is no retry and no rollback: the next reconciliation pass
    observes the database again and re-attempts what is still missing.
    """

    def __init__(self, connection: SqlConnection, dry_run: bool = False):
        """
        Initialize the executor.

        Args:
            connection: SQL capability used to run statements
            dry_run: If True, only log and record what would be done
        """
        self.connection = connection
        self.dry_run = dry_run
        self.results: List[ExecutionResult] = []

    def run_statement(self, operation: OperationType, grantee: str, statement: str) -> ExecutionResult:
        """
        Run a single statement.

        Args:
            operation: GRANT or REVOKE
            grantee: Principal the statement applies to
            statement: SQL text

        Returns:
            ExecutionResult for the statement

        Raises:
            Exception: Whatever the connection raised
        """
        if self.dry_run:
            logger.info(f"[DRY RUN] Would execute: {statement}")
            result = ExecutionResult(
                success=True,
                operation=operation,
                grantee=grantee,
                statement=statement,
                message="Would be executed (dry run)",
            )
            self.results.append(result)
            return result

        start_time = time.time()
        logger.info(f"Executing: {statement}")
        try:
            self.connection.execute(statement)
        except Exception as e:
            self._handle_error(operation, grantee, statement, e, time.time() - start_time)
            raise

        result = ExecutionResult(
            success=True,
            operation=operation,
            grantee=grantee,
            statement=statement,
            message="Executed successfully",
            duration_seconds=time.time() - start_time,
        )
        self.results.append(result)
        return result

    def run_statements(self, operation: OperationType, grantee: str, statements: List[str]) -> List[ExecutionResult]:
        """Run statements in order, stopping at the first failure."""
        return [self.run_statement(operation, grantee, statement) for statement in statements]

    def _handle_error(
        self,
        operation: OperationType,
        grantee: str,
        statement: str,
        error: Exception,
        duration: float,
    ):
        """
        Record a failed statement.

        Args:
            operation: The operation that failed
            grantee: Principal the statement applied to
            statement: SQL text that failed
            error: The exception that occurred
            duration: Seconds spent before the failure
        """
        result = ExecutionResult(
            success=False,
            operation=operation,
            grantee=grantee,
            statement=statement,
            message=str(error),
            error=error,
            duration_seconds=duration,
        )
        self.results.append(result)
        logger.error(f"Operation failed: {result}")

    def get_summary(self) -> str:
        """Summarize statements run so far, by operation, with any failure."""
        if not self.results:
            return "No operations performed"

        grants = [r for r in self.results if r.operation is OperationType.GRANT]
        revokes = [r for r in self.results if r.operation is OperationType.REVOKE]
        failures = [r for r in self.results if not r.success]

        lines = [
            "Execution Summary:",
            f"  Statements: {len(self.results)} ({len(grants)} grant, {len(revokes)} revoke)",
            f"  Failed: {len(failures)}",
        ]
        lines.extend(f"  - {r}" for r in failures)
        return "\n".join(lines)
